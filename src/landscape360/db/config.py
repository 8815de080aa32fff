"""Database configuration and session management."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from landscape360.config.settings import Settings, get_settings

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker[AsyncSession] | None = None


def create_engine(settings: Settings) -> AsyncEngine:
    """Create an async engine for the configured database."""
    if settings.DATABASE_URL.startswith("sqlite"):
        # An in-memory database only exists on its one connection
        pool = StaticPool if ":memory:" in settings.DATABASE_URL else NullPool
        return create_async_engine(settings.DATABASE_URL, echo=False, poolclass=pool)
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=settings.DATABASE_POOL_SIZE,
        max_overflow=settings.DATABASE_MAX_OVERFLOW,
        pool_pre_ping=True,
    )


def configure_engine(
    settings: Settings | None = None,
    engine: AsyncEngine | None = None,
) -> AsyncEngine:
    """Install the process-wide engine and session factory.

    Args:
        settings: Settings to build the engine from (default: global settings)
        engine: Pre-built engine to use instead (tests)
    """
    global _engine, _session_factory

    _engine = engine or create_engine(settings or get_settings())
    _session_factory = async_sessionmaker(
        _engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    return _engine


def get_engine() -> AsyncEngine:
    """Get the engine, creating it from settings on first use."""
    if _engine is None:
        return configure_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the session factory, creating the engine on first use."""
    if _session_factory is None:
        configure_engine()
    assert _session_factory is not None
    return _session_factory


async def init_db() -> None:
    """Verify database connectivity.

    Called during application startup so connection problems show up
    before the first request.
    """
    async with get_engine().begin() as conn:
        await conn.execute(text("SELECT 1"))


async def close_db() -> None:
    """Dispose of the engine and release all pooled connections."""
    global _engine, _session_factory

    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _session_factory = None


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Context manager for obtaining a database session.

    Use this when you need a session outside of FastAPI dependency injection,
    such as in middleware or background tasks.

    Usage:
        async with get_async_session() as session:
            result = await session.execute(query)
    """
    async with get_session_factory()() as session:
        yield session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for FastAPI to inject database sessions."""
    async with get_session_factory()() as session:
        yield session
