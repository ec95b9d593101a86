"""
Database Session Management

One async engine per process, one AsyncSession per request.

    engine               pooled connections, built from DATABASE_URL at import
    AsyncSessionLocal    session factory bound to the engine
    get_db()             FastAPI dependency: yields a session, commits when the
                         handler returns, rolls back when it raises

Repositories never commit. Everything a request writes (a post row and the
slug check in front of it, a user and its Google link) succeeds or fails
together.

Pool sizing comes from DATABASE_POOL_SIZE / DATABASE_MAX_OVERFLOW and only
applies to server databases; SQLite URLs get the driver's own pool.
"""

from typing import Any, AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.config.settings import settings
from src.shared.core.logging import logger


def _engine_options(url: str) -> dict[str, Any]:
    options: dict[str, Any] = {"echo": settings.DEBUG, "pool_pre_ping": True}
    if not url.startswith("sqlite"):
        options["pool_size"] = settings.DATABASE_POOL_SIZE
        options["max_overflow"] = settings.DATABASE_MAX_OVERFLOW
    return options


engine = create_async_engine(settings.DATABASE_URL, **_engine_options(settings.DATABASE_URL))

# Handlers serialize service results after commit, so instances must not expire
AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session; the request is one transaction."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """
    Check the database answers before the app starts serving.

    Re-raises the connection error so a misconfigured deployment fails at
    startup rather than on the first request.
    """
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Database unreachable", error=str(e))
        raise
    logger.info("Database ready")


async def close_db() -> None:
    await engine.dispose()
    logger.info("Database connections closed")
