"""Dependency injection for FastAPI."""

import logging
from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request
from redis.asyncio import Redis
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import QueuePool

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Lifespan helpers: called from main.py to create & destroy shared resources
# ---------------------------------------------------------------------------


def _register_pool_events(engine: AsyncEngine) -> None:
    """Attach pool event listeners for observability."""
    pool = engine.pool
    if not isinstance(pool, QueuePool):
        return

    @event.listens_for(pool, "checkout")
    def _on_checkout(_dbapi_conn, _conn_record, _conn_proxy):
        logger.debug("Pool checkout: size=%s checked_out=%s", pool.size(), pool.checkedout())

    @event.listens_for(pool, "overflow")
    def _on_overflow(_dbapi_conn):
        logger.warning("Pool overflow: size=%s overflow=%s", pool.size(), pool.overflow())


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the async database engine."""
    engine = create_async_engine(
        str(settings.database_url),
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
        pool_pre_ping=True,
        echo=settings.debug,
    )
    _register_pool_events(engine)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create session factory bound to *engine*."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


def create_redis(settings: Settings) -> Redis:
    """Create the async Redis client."""
    return Redis.from_url(str(settings.redis_url), decode_responses=True)


# ---------------------------------------------------------------------------
# FastAPI dependencies: pull resources from app.state (set in lifespan)
# ---------------------------------------------------------------------------


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Dependency that provides a database session from app.state.

    Owns the unit-of-work lifecycle: commits on success, rolls back on
    exception.  Repositories should call ``session.flush()`` (not
    ``session.commit()``) so that all writes within a single request
    are committed atomically.
    """
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


# ---------------------------------------------------------------------------
# Type aliases for cleaner dependency injection
# ---------------------------------------------------------------------------
DBSession = Annotated[AsyncSession, Depends(get_db_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]
