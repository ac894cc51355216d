"""Database connection and session management."""

import logging
import threading
from typing import Optional

from sqlalchemy import create_engine, Engine
from sqlalchemy.pool import StaticPool
from sqlalchemy.orm import sessionmaker, Session, declarative_base

logger = logging.getLogger(__name__)

Base = declarative_base()


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in url


class Database:
    """
    Owner of the SQLAlchemy engine and session factory.

    Created closed; open() builds the engine and schema, close() disposes the
    connection pool. One instance is shared by every service in the process.
    """

    def __init__(self, url: str, timeout_seconds: float = 5.0, echo: bool = False):
        self._url = url
        self._timeout = timeout_seconds
        self._echo = echo
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        # In-memory databases share one connection (StaticPool); units of work
        # on it must not overlap
        self._unit_of_work_lock = threading.RLock() if _is_memory_url(url) else None

    @property
    def url(self) -> str:
        return self._url

    @property
    def unit_of_work_lock(self):
        """Lock units of work must hold, or None when each session gets its own connection."""
        return self._unit_of_work_lock

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database is not open. Call open() first.")
        return self._engine

    @property
    def session_factory(self) -> sessionmaker:
        if self._session_factory is None:
            raise RuntimeError("Database is not open. Call open() first.")
        return self._session_factory

    def open(self) -> None:
        """Create the engine, session factory and tables."""
        if self._engine is not None:
            return

        kwargs: dict = {"echo": self._echo}
        if self._url.startswith("sqlite"):
            # Busy timeout bounds how long a write waits on a locked database
            kwargs["connect_args"] = {
                "check_same_thread": False,
                "timeout": self._timeout,
            }
            if _is_memory_url(self._url):
                kwargs["poolclass"] = StaticPool
        else:
            kwargs["pool_timeout"] = self._timeout

        self._engine = create_engine(self._url, **kwargs)
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=self._engine,
        )

        # Import ORM models and create tables
        from brokerage.repositories.sqlalchemy import orm_models  # noqa: F401
        Base.metadata.create_all(bind=self._engine)
        logger.info("Opened database %s", self._engine.url.render_as_string(hide_password=True))

    def close(self) -> None:
        """Dispose of the engine; the instance can be reopened later."""
        if self._engine is not None:
            self._engine.dispose()
            logger.info("Closed database")
        self._engine = None
        self._session_factory = None

    def session(self) -> Session:
        """Get a new database session."""
        return self.session_factory()
