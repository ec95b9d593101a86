"""
Database Dependency

FastAPI dependency for database sessions.

get_db is the single seam between the HTTP layer and the session factory:
tests replace it through app.dependency_overrides to point every service at
an in-memory database.

Usage:
======
    from src.api.dependencies.database import DbSession

    @router.get("/posts/{post_id}")
    async def get_post(post_id: UUID, db: DbSession):
        return await PostRepository(db).find(post_id)
"""

from typing import Annotated, AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.db import get_db as _get_db


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Yield the request's database session.

    Committed when the request succeeds, rolled back when it raises.
    """
    async for session in _get_db():
        yield session


DbSession = Annotated[AsyncSession, Depends(get_db)]
