"""Alembic migrations of the issue store schema."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext

from issueflow.config import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

SCRIPT_LOCATION: Final[Path] = Path(__file__).resolve().parent


def alembic_config(database_uri: str | None = None) -> Config:
    config = Config()
    config.set_main_option("script_location", str(SCRIPT_LOCATION))
    if database_uri is not None:
        config.set_main_option("sqlalchemy.url", database_uri)
    return config


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Bring the schema to the latest revision.

    An ``engine`` is migrated on one of its own connections; otherwise Alembic
    connects to ``database_uri`` (or the configured ``DATABASE_URI``).
    """

    if engine is None:
        command.upgrade(alembic_config(database_uri or get_database_config().uri), "head")
        return
    config = alembic_config()
    with engine.begin() as connection:
        config.attributes["connection"] = connection
        command.upgrade(config, "head")


def current_revision(engine: Engine) -> str | None:
    with engine.connect() as connection:
        return MigrationContext.configure(connection).get_current_revision()
