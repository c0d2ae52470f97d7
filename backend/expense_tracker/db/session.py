"""
Database session management.

The engine and session factory live on a ``Database`` object that the
application opens at startup and disposes at shutdown; request handlers get
sessions through the ``get_db`` dependency.
"""
import logging
from contextlib import contextmanager
from typing import Iterator, Union
from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from expense_tracker.core.config import Settings
from expense_tracker.db.base import Base

logger = logging.getLogger(__name__)


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Engine plus session factory for one relational store."""

    def __init__(self, url: Union[str, URL], echo: bool = False, use_tls: bool = False):
        url = make_url(url)
        engine_kwargs = {"echo": echo}

        if url.get_backend_name() == "sqlite":
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if url.database in (None, "", ":memory:"):
                # Single shared connection so every session sees the same in-memory database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_pre_ping"] = True
            engine_kwargs["pool_recycle"] = 3600
            if use_tls:
                # Encrypted transport without certificate verification
                engine_kwargs["connect_args"] = {"ssl": {"check_hostname": False}}

        self.engine = create_engine(url, **engine_kwargs)
        if url.get_backend_name() == "sqlite":
            event.listen(self.engine, "connect", _enable_sqlite_foreign_keys)

        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(
            settings.database_url,
            echo=settings.DB_ECHO,
            use_tls=settings.is_production,
        )

    def create_all(self) -> None:
        """Create all tables that do not exist yet."""
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self) -> None:
        logger.info("Closing database connections")
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    """Dependency for getting database session."""
    db = request.app.state.db.SessionLocal()
    try:
        yield db
    finally:
        db.close()
