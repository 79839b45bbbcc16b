"""Process bootstrap shared by the server, ``init_db`` and the seed script."""

from __future__ import annotations

import logging

from prompt_curator.core.config import get_config
from prompt_curator.core.logging_config import configure_logging
from prompt_curator.database.db import get_active_database_url, get_engine, verify_database_connection
from prompt_curator.database.schema import current_revision, head_revision

logger = logging.getLogger(__name__)


def check_schema_state() -> dict[str, str | bool | None]:
    """Compare the live ``prompts`` revision with the shipped migration head."""
    revision = current_revision(get_engine())
    head = head_revision()
    state = {"revision": revision, "head": head, "pending": head is not None and revision != head}
    logger.info("startup.schema.checked", extra={"event": "startup.schema.checked", **state})
    return state


def validate_startup_config() -> None:
    """Fail fast on an unreachable database when connectivity is required."""
    config = get_config()
    reachable = verify_database_connection()
    if not reachable and config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError("Database connectivity check failed.")

    active_url = get_active_database_url()
    scheme = active_url.split("://", 1)[0]
    if not reachable:
        logger.warning(
            "startup.database.unreachable",
            extra={"event": "startup.database.unreachable", "database_url_scheme": scheme},
        )
    else:
        check_schema_state()
        if config.is_production and scheme == "sqlite":
            logger.warning("startup.production.sqlite", extra={"event": "startup.production.sqlite"})

    logger.info(
        "startup.config.validated",
        extra={
            "event": "startup.config.validated",
            "env": config.ENV,
            "database_url_scheme": scheme,
            "server_port": config.SERVER_PORT,
            "rpc_prefix": config.RPC_PREFIX,
        },
    )


def bootstrap() -> None:
    """Configure logging, then check the database the process will use."""
    configure_logging()
    validate_startup_config()
