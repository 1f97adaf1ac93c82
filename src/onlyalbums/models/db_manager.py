# Copyright (c) 2025 onlyalbums and contributors. All rights reserved.
# Licensed under the MIT license. See LICENSE file in the project root for details.

"""Database manager for SQLAlchemy operations."""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import TYPE_CHECKING

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

from onlyalbums.models.database import Base

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, database_path: Path | str) -> None:
        """Initialize database manager.

        Args:
            database_path: Path to the SQLite database file
        """
        self.database_path = Path(database_path)
        self.engine: Engine | None = None
        self.session_factory: sessionmaker[Session] | None = None

    @property
    def is_initialized(self) -> bool:
        """Check if the engine and session factory are ready."""
        return self.session_factory is not None

    def initialize(self) -> None:
        """Initialize the database connection and create tables."""
        self.database_path.parent.mkdir(parents=True, exist_ok=True)

        database_url = f"sqlite:///{self.database_path}"
        self.engine = create_engine(
            database_url,
            echo=False,
            pool_pre_ping=True,
            connect_args={"check_same_thread": False},
        )

        self.session_factory = sessionmaker(bind=self.engine)
        self.create_tables()

        logger.info("Database initialized at %s", self.database_path)

    def create_tables(self) -> None:
        """Create all database tables."""
        if self.engine is None:
            msg = "Database engine not initialized"
            raise RuntimeError(msg)

        Base.metadata.create_all(self.engine)
        logger.debug("Database tables created")

    @contextmanager
    def get_session(self) -> Generator[Session, None, None]:
        """Get a database session with automatic cleanup.

        Yields
        ------
            SQLAlchemy session

        Example:
            with db_manager.get_session() as session:
                session.add(record)
                session.commit()
        """
        if self.session_factory is None:
            msg = "Database not initialized"
            raise RuntimeError(msg)

        session = self.session_factory()
        try:
            yield session
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def close(self) -> None:
        """Close the database connection."""
        if self.engine:
            self.engine.dispose()
            self.engine = None
            self.session_factory = None
            logger.info("Database connection closed")


_library_db: DatabaseManager | None = None


def get_library_db() -> DatabaseManager:
    """Get the library database manager (singleton).

    Returns
    -------
        Initialized DatabaseManager for the configured database path
    """
    global _library_db
    if _library_db is None:
        from onlyalbums.config.user import UserConfig

        config = UserConfig()
        _library_db = DatabaseManager(config.database.database_path)
        _library_db.initialize()
    return _library_db


def initialize_databases(database_path: Path | str | None = None) -> DatabaseManager:
    """Initialize the library database, optionally at an explicit path."""
    global _library_db
    if database_path is not None:
        close_databases()
        _library_db = DatabaseManager(database_path)
        _library_db.initialize()
        return _library_db

    db = get_library_db()
    if not db.is_initialized:
        db.initialize()
    return db


def close_databases() -> None:
    """Close all database connections."""
    global _library_db

    if _library_db:
        _library_db.close()
        _library_db = None

    logger.info("All database connections closed")
