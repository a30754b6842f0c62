"""Async SQLAlchemy engine and session factory owned by an explicit Database handle."""

import logging
from collections.abc import AsyncGenerator
from typing import Any

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from shelflife.core.config import settings
from shelflife.core.exceptions import StoreUnavailableError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


def engine_options(url: str) -> dict[str, Any]:
    """Driver-specific engine options with bounded connect and checkout waits."""
    if url.startswith("sqlite"):
        options: dict[str, Any] = {
            "connect_args": {"timeout": settings.DB_CONNECT_TIMEOUT},
        }
        if ":memory:" in url:
            # One shared connection, otherwise every session sees an empty database
            options["poolclass"] = StaticPool
        return options
    return {
        "pool_pre_ping": True,
        "pool_size": 10,
        "max_overflow": 20,
        "pool_timeout": settings.DB_POOL_TIMEOUT,
        "connect_args": {"timeout": settings.DB_CONNECT_TIMEOUT},
    }


class Database:
    """Owns the engine and session factory for one process.

    Created by the application entry point, initialized during startup and
    disposed on shutdown. Nothing imports an engine as module state.
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any) -> None:
        self.url = url
        options = engine_options(url)
        options.update(engine_kwargs)
        self.engine: AsyncEngine = create_async_engine(url, echo=echo, **options)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    async def init(self) -> None:
        """Create database tables. Used during application startup."""
        # Models must be registered on Base.metadata before create_all
        import shelflife.models  # noqa: F401

        try:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except (OperationalError, DBAPIError, OSError) as exc:
            logger.error("Database initialization failed: %s", exc)
            raise StoreUnavailableError(str(exc)) from exc

    async def drop_all(self) -> None:
        """Drop all tables. Development and tests only."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Verify database connectivity."""
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (OperationalError, DBAPIError, OSError) as exc:
            logger.warning("Database ping failed: %s", exc)
            return False
        return True

    async def close(self) -> None:
        """Dispose of the engine. Used during application shutdown."""
        await self.engine.dispose()


async def init_database(app_state: object, url: str | None = None) -> Database:
    """Create and initialize the Database and store it on app.state."""
    database = Database(url or settings.DATABASE_URL, echo=settings.DB_ECHO)
    await database.init()
    app_state.database = database  # type: ignore[attr-defined]
    return database


async def close_database(app_state: object) -> None:
    """Dispose the Database stored on app.state."""
    database: Database | None = getattr(app_state, "database", None)
    if database is not None:
        await database.close()
        app_state.database = None  # type: ignore[attr-defined]


def get_database(request: Request) -> Database:
    """Return the Database from app.state or fail as unavailable."""
    database: Database | None = getattr(request.app.state, "database", None)
    if database is None:
        raise StoreUnavailableError("database not initialized")
    return database


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency that provides a request-scoped async session."""
    database = get_database(request)
    async with database.session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
