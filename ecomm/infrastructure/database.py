"""Database configuration and session management.

Provides async SQLAlchemy engine and session factory.
"""

from functools import lru_cache

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import declarative_base

from ecomm.infrastructure.config import settings

# Base class for models
Base = declarative_base()


@lru_cache
def get_engine() -> AsyncEngine:
    """Get the process-wide async engine.

    Created on first use so the memory backend never opens a pool.

    Returns:
        AsyncEngine bound to ``settings.database_url``.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
    )


@lru_cache
def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Get the process-wide session factory.

    Returns:
        Session factory bound to the shared engine.
    """
    return async_sessionmaker(
        get_engine(),
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def dispose_engine() -> None:
    """Close pooled connections if the engine was ever created."""
    if get_engine.cache_info().currsize:
        await get_engine().dispose()
        get_engine.cache_clear()
        get_session_factory.cache_clear()
