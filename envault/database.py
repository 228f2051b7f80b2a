"""Database configuration and session management.

Envault keeps one SQLite connection for the lifetime of the process. Every
store operation runs inside ``Database.session()``, which holds a single lock
for its full duration, so reads and writes are fully serialized.
"""

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from fastapi import Request
from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, declarative_base, sessionmaker
from sqlalchemy.pool import StaticPool

from .exceptions import DatabaseError, StoreInitializationError

logger = logging.getLogger(__name__)

# Create base class for models
Base = declarative_base()


def _create_engine(db_path: Union[str, Path]) -> Engine:
    engine = create_engine(
        f"sqlite:///{db_path}",
        connect_args={"check_same_thread": False},
        # One physical connection shared by every session.
        poolclass=StaticPool,
    )

    # SQLite defaults foreign_keys to OFF; CASCADE constraints are silently
    # ignored unless we enable them on every connection.
    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


class Database:
    """Owns the engine, its single connection, and the lock guarding it."""

    def __init__(self, db_path: Union[str, Path]):
        self.db_path = Path(db_path)
        self.engine = _create_engine(self.db_path)
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self.engine,
        )
        self._lock = threading.Lock()

    @contextmanager
    def session(self) -> Iterator[Session]:
        """Exclusive session scope. Commits on success, rolls back on error.

        Raw SQLAlchemy failures are re-raised as DatabaseError so callers only
        ever see the Envault exception hierarchy.
        """
        with self._lock:
            db = self._session_factory()
            try:
                yield db
                db.commit()
            except SQLAlchemyError as e:
                db.rollback()
                logger.error(f"Database operation failed: {e}")
                raise DatabaseError(f"Database operation failed: {e}", e) from e
            except Exception:
                db.rollback()
                raise
            finally:
                db.close()

    def ping(self) -> None:
        """Run a trivial query; raises SQLAlchemyError if the file is unusable."""
        with self._lock:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))

    def close(self) -> None:
        self.engine.dispose()


def initialize(db_path: Optional[Union[str, Path]] = None) -> Database:
    """Open (or create) the Envault database and bring its schema up to date.

    Args:
        db_path: Explicit database file. Defaults to the configured per-user
                 location (``<local data dir>/envault/envault.db``).

    Raises:
        StoreInitializationError: If the directory cannot be created, the file
            cannot be opened, or migrations fail. Callers treat this as fatal.
    """
    from .core.config import settings
    from .core.migrator import run_migrations, MigrationError

    path = Path(db_path) if db_path is not None else settings.get_database_path()

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StoreInitializationError(
            f"Cannot create data directory {path.parent}: {e}", e
        ) from e

    logger.info(f"Opening database: {path}")
    database = Database(path)

    try:
        database.ping()
        result = run_migrations(database.engine, Base)
    except SQLAlchemyError as e:
        database.close()
        raise StoreInitializationError(f"Cannot open database {path}: {e}", e) from e
    except MigrationError as e:
        database.close()
        raise StoreInitializationError(f"Database migration failed: {e}", e) from e

    if result.created_tables or result.added_columns:
        logger.info(
            "Database schema updated",
            extra={"created_tables": result.created_tables, "added_columns": result.added_columns},
        )
    else:
        logger.debug("Database schema up to date")

    return database


def get_database(request: Request) -> Database:
    """Dependency for FastAPI routes to get the process-wide database."""
    return request.app.state.database
