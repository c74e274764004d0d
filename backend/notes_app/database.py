"""
Notes App Backend - Database Connection Management
====================================================

What:  Async SQLAlchemy engine, session factory and schema bootstrap,
       owned by one `Database` object per process.
How:   create_app() builds a Database from settings and stores it on
       `app.state`; NoteService borrows sessions from it for each statement.
Who:   Used by NoteService, the application lifespan and the readiness probe.
When:  Constructed at startup; ensure_schema() runs in the lifespan, close()
       runs on shutdown.

Connection Pooling:
    pool_size / max_overflow come from settings for server databases.
    SQLite (tests, local hacking) keeps SQLAlchemy's default pool because
    it does not accept the sizing arguments.
    pool_pre_ping validates a pooled connection before handing it out.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from starlette.requests import Request

from notes_app.config import Settings
from notes_app.exceptions import DatabaseError, DatabaseUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy ORM models.

    Shares one metadata object between create_all() and Alembic.
    """
    pass


class Database:
    """
    Owns the engine (connection pool) for the lifetime of the process.

    One instance is created per process and passed explicitly to whoever
    needs it; nothing in the package holds an engine at module level.
    """

    def __init__(
        self,
        url: str,
        pool_size: int = 5,
        max_overflow: int = 10,
        pool_pre_ping: bool = True,
        echo: bool = False,
    ):
        self.url = make_url(url)

        engine_kwargs = {"pool_pre_ping": pool_pre_ping, "echo": echo}
        if self.url.get_backend_name() != "sqlite":
            engine_kwargs.update(
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_recycle=3600,
            )

        self.engine: AsyncEngine = create_async_engine(self.url, **engine_kwargs)
        # expire_on_commit=False keeps attributes readable after commit
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        self._closed = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Build a Database from application settings."""
        return cls(
            settings.sqlalchemy_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def safe_url(self) -> str:
        """Connection URL with the password masked, for logs."""
        return self.url.render_as_string(hide_password=True)

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """
        Yield a session for a single statement.

        The caller commits. Any exception rolls the session back and is
        re-raised; the session is always closed on exit, returning its
        connection to the pool.

        Raises:
            DatabaseError: close() has already been called.
        """
        if self._closed:
            raise DatabaseError(
                message="Database connection is closed",
                context={"url": self.safe_url},
            )

        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def ensure_schema(self) -> None:
        """
        Create the notes table (and its index) if it does not exist yet.

        Idempotent: create_all() checks for existing tables first and never
        touches rows. Called once from the application lifespan.

        Raises:
            DatabaseUnavailableError: the store could not be reached or the
            DDL failed. Startup is expected to abort on this error.
        """
        # Registers the Note model on Base.metadata
        from notes_app.models.note import Note  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except Exception as e:
            logger.error("Database connection failed (%s): %s", self.safe_url, e)
            raise DatabaseUnavailableError(
                context={"url": self.safe_url, "error_type": type(e).__name__},
            ) from e

        logger.info("Database connected and notes table ready (%s)", self.safe_url)

    async def ping(self) -> bool:
        """Run SELECT 1; True when the store answers."""
        if self._closed:
            return False
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except Exception as e:
            logger.warning("Database ping failed: %s", e)
            return False
        return True

    async def close(self) -> None:
        """
        Dispose the connection pool.

        Safe to call more than once, and on a Database whose engine never
        opened a connection.
        """
        if self._closed:
            return
        self._closed = True
        await self.engine.dispose()
        logger.info("Database connections closed")


def create_database(settings: Optional[Settings] = None) -> Database:
    """Build the process-wide Database from settings (defaults to the singleton)."""
    if settings is None:
        from notes_app.config import settings as default_settings
        settings = default_settings
    return Database.from_settings(settings)


def get_database(request: Request) -> Database:
    """FastAPI dependency returning the Database stored on app.state."""
    return request.app.state.database
