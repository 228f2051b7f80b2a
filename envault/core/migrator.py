"""Schema migration runner.

Handles both fresh installs and databases written by older releases:
- Missing tables are created from the SQLAlchemy models (never dropped)
- Legacy ``projects`` tables without display columns get them added with
  their defaults, preserving existing rows

Usage:
    from envault.core.migrator import run_migrations, MigrationError

    try:
        result = run_migrations(engine, Base)
    except MigrationError as e:
        logger.critical(f"Migration failed: {e}")
        raise SystemExit(1)
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy import Engine, text, inspect
from sqlalchemy.exc import SQLAlchemyError

from ..models.project import DEFAULT_ICON, DEFAULT_ICON_COLOR

logger = logging.getLogger(__name__)


class MigrationError(Exception):
    """Raised when a migration fails to apply."""
    pass


@dataclass
class MigrationResult:
    """Result of running migrations."""
    created_tables: list[str] = field(default_factory=list)
    added_columns: list[str] = field(default_factory=list)


# Columns added to ``projects`` after the first release, with the DDL used to
# backfill them on legacy databases.
_PROJECT_COLUMN_UPGRADES = {
    "icon": f"TEXT DEFAULT '{DEFAULT_ICON}'",
    "icon_color": f"TEXT DEFAULT '{DEFAULT_ICON_COLOR}'",
}


def _get_schema_state(engine: Engine) -> dict:
    """Get current schema state for migration detection."""
    inspector = inspect(engine)
    tables = set(inspector.get_table_names())

    project_columns = set()
    if "projects" in tables:
        project_columns = {col["name"] for col in inspector.get_columns("projects")}

    return {
        "tables": tables,
        "project_columns": project_columns,
    }


def _add_project_column(engine: Engine, column: str, ddl: str) -> None:
    with engine.connect() as conn:
        try:
            conn.execute(text(f"ALTER TABLE projects ADD COLUMN {column} {ddl}"))
            conn.commit()
        except SQLAlchemyError as e:
            raise MigrationError(f"Failed to add projects.{column}: {e}") from e


def run_migrations(engine: Engine, base: type) -> MigrationResult:
    """Bring the schema up to date. Idempotent.

    Args:
        engine: SQLAlchemy engine
        base: SQLAlchemy declarative base holding the model metadata

    Returns:
        MigrationResult listing created tables and added columns

    Raises:
        MigrationError: If a table or column cannot be created
    """
    logger.info("Starting migration check")
    result = MigrationResult()

    before = _get_schema_state(engine)
    expected = set(base.metadata.tables.keys())
    missing = sorted(expected - before["tables"])

    if missing:
        logger.info(f"Creating tables: {', '.join(missing)}")
        try:
            # create_all skips tables that already exist
            base.metadata.create_all(bind=engine)
        except SQLAlchemyError as e:
            raise MigrationError(f"Failed to create tables: {e}") from e
        result.created_tables = missing

    # Legacy projects table: add display columns that older releases lacked
    if "projects" in before["tables"]:
        for column, ddl in _PROJECT_COLUMN_UPGRADES.items():
            if column in before["project_columns"]:
                continue
            logger.info(f"Adding column projects.{column}")
            _add_project_column(engine, column, ddl)
            result.added_columns.append(column)

    if not missing and not result.added_columns:
        logger.info("No pending migrations")

    return result
