"""Alembic revision state of the ``prompts`` schema."""

from __future__ import annotations

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from sqlalchemy import create_engine, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.pool import NullPool

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).resolve().parents[2]
MIGRATIONS_DIR = PROJECT_ROOT / "migrations"
# Revision whose upgrade creates the tables `Base.metadata.create_all` also builds.
BASELINE_REVISION = "20261019_0001"


def _build_alembic_config(database_url: str) -> AlembicConfig:
    cfg = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(MIGRATIONS_DIR))
    cfg.set_main_option("sqlalchemy.url", database_url)
    return cfg


def migrations_available() -> bool:
    return (MIGRATIONS_DIR / "env.py").exists()


def head_revision() -> str | None:
    """Newest revision in the shipped migration tree, or None without a tree."""
    if not migrations_available():
        return None
    return ScriptDirectory(str(MIGRATIONS_DIR)).get_current_head()


def current_revision(engine: Engine) -> str | None:
    with engine.connect() as conn:
        return MigrationContext.configure(conn).get_current_revision()


def requires_baseline_stamp(engine: Engine) -> bool:
    """True when ``prompts`` was built outside Alembic and carries no revision."""
    if "prompts" not in inspect(engine).get_table_names():
        return False
    return current_revision(engine) is None


def upgrade_schema(database_url: str) -> bool:
    """Bring ``database_url`` to the head revision; False when no migration tree ships."""
    if not migrations_available():
        logger.warning(
            "database.migrations.missing",
            extra={"event": "database.migrations.missing", "project_root": str(PROJECT_ROOT)},
        )
        return False

    alembic_cfg = _build_alembic_config(database_url)
    engine = create_engine(database_url, poolclass=NullPool)
    try:
        if requires_baseline_stamp(engine):
            command.stamp(alembic_cfg, BASELINE_REVISION)
            logger.info(
                "database.schema.stamped",
                extra={"event": "database.schema.stamped", "revision": BASELINE_REVISION},
            )
    finally:
        engine.dispose()

    command.upgrade(alembic_cfg, "head")
    return True
