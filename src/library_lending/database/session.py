"""
SQLite connection handling for the record store.

The record store opens one short-lived session per load, save or counter
advance. Everything shares a single SQLite connection (``StaticPool``) so
those sessions see each other's commits immediately and never contend for
the file lock.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import get_config
from .schema import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Owns the engine for one SQLite database and hands out transactional sessions."""

    def __init__(self, database_url: str | None = None):
        """
        Args:
            database_url: ``sqlite:///`` URL; defaults to the configured database file
        """
        self.database_url = database_url or get_config().get_database_url()
        self._engine: Engine | None = None
        self._sessions: sessionmaker | None = None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = create_engine(
                self.database_url,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
            logger.info("Opened ledger database %s", self._engine.url)
        return self._engine

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Run the enclosed work as one transaction.

        Commits on success; on any exception the transaction is rolled back
        and the exception re-raised.
        """
        if self._sessions is None:
            self._sessions = sessionmaker(bind=self.engine, expire_on_commit=False)

        session = self._sessions()
        try:
            yield session
            session.commit()
        except Exception:
            logger.exception("Ledger transaction failed, rolling back")
            session.rollback()
            raise
        finally:
            session.close()

    def init_database(self, drop_existing: bool = False) -> None:
        """Create the ledger tables, optionally dropping existing ones first."""
        if drop_existing:
            logger.warning("Dropping ledger tables in %s", self.database_url)
            Base.metadata.drop_all(bind=self.engine)
        Base.metadata.create_all(bind=self.engine)
        logger.info("Ledger tables ready")

    def verify_connection(self) -> bool:
        """Return True if the database answers a trivial query."""
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except Exception:
            logger.exception("Cannot reach ledger database %s", self.database_url)
            return False
        return True

    def close(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
        self._engine = None
        self._sessions = None


_db_manager: DatabaseManager | None = None


def get_db_manager(database_url: str | None = None) -> DatabaseManager:
    """Return the process-wide manager, creating it on first use."""
    global _db_manager  # noqa: PLW0603

    if _db_manager is None:
        _db_manager = DatabaseManager(database_url)
    return _db_manager


def reset_db_manager() -> None:
    """Close and forget the process-wide manager."""
    global _db_manager  # noqa: PLW0603

    if _db_manager is not None:
        _db_manager.close()
    _db_manager = None
