"""Bring the configured database up to the current ``prompts`` schema."""

import logging

from prompt_curator.core.startup import bootstrap
import prompt_curator.database.db as db_module
from prompt_curator.database.models import Base
from prompt_curator.database.schema import current_revision, upgrade_schema

logger = logging.getLogger(__name__)


def init_db() -> None:
    active_url = db_module.get_active_database_url()
    migrated = upgrade_schema(active_url)

    # A no-op once migrated; a later upgrade stamps the tables it creates.
    Base.metadata.create_all(bind=db_module.get_engine())
    logger.info(
        "database.tables.ready",
        extra={
            "event": "database.tables.ready",
            "database_url_scheme": active_url.split("://", 1)[0],
            "migrated": migrated,
            "revision": current_revision(db_module.get_engine()),
        },
    )


def main() -> None:
    bootstrap()
    init_db()


if __name__ == "__main__":
    main()
