"""
Post Repository

Database operations specific to the Post model.

Soft Deletes:
=============
Every read except find(include_deleted=True) and the inherited get()
ignores rows whose deleted_at is set.

Common Operations:
==================
- find()          → Post by id (optionally including soft-deleted)
- list_active()   → Newest-first page of live posts
- count_active()  → Number of live posts
- slug_exists()   → Whether a live post already uses a slug
- create() / update() / soft_delete() / restore()  (from BaseRepository)
"""

from typing import Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.functions import count as sql_count

from src.shared.repositories.base import BaseRepository
from src.shared.models.post import Post


class PostRepository(BaseRepository[Post]):
    """
    Repository for Post database operations.

    PostService depends on this class only through the methods listed in
    the module docstring, so it can be swapped for another implementation.
    """

    conflict_message = "The slug has already been taken."

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize PostRepository.

        Args:
            session: Async database session
        """
        super().__init__(Post, session)

    # ═══════════════════════════════════════════════════════════════════════════
    # LOOKUP METHODS
    # ═══════════════════════════════════════════════════════════════════════════

    async def find(self, post_id: UUID, include_deleted: bool = False) -> Optional[Post]:
        """
        Get a post by id.

        Args:
            post_id: Post UUID
            include_deleted: Also return the post if it is soft-deleted

        Returns:
            Post if found, None otherwise
        """
        query = select(Post).where(Post.id == post_id)
        if not include_deleted:
            query = query.where(Post.deleted_at.is_(None))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def list_active(self, *, offset: int = 0, limit: int = 10) -> list[Post]:
        """
        Get a page of live posts, newest first.

        Args:
            offset: Number of posts to skip
            limit: Maximum posts to return

        Returns:
            List of posts
        """
        query = (
            select(Post)
            .where(Post.deleted_at.is_(None))
            .order_by(Post.created_at.desc(), Post.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def count_active(self) -> int:
        """Count posts that are not soft-deleted."""
        result = await self.session.execute(
            select(sql_count()).select_from(Post).where(Post.deleted_at.is_(None))
        )
        return result.scalar() or 0

    async def slug_exists(self, slug: str, exclude_id: Optional[UUID] = None) -> bool:
        """
        Check whether a live post already uses a slug.

        Args:
            slug: Slug to look for
            exclude_id: Post to ignore (the one being updated)

        Returns:
            True if another live post has this slug
        """
        query = (
            select(sql_count())
            .select_from(Post)
            .where(Post.slug == slug, Post.deleted_at.is_(None))
        )
        if exclude_id is not None:
            query = query.where(Post.id != exclude_id)

        result = await self.session.execute(query)
        return (result.scalar() or 0) > 0
