"""
Post Service

Business logic for the post lifecycle.

LIFECYCLE:
    create_post ──► live ──► delete_post ──► soft-deleted
                     ▲                            │
                     └──────── restore_post ◄─────┘

RULES:
- The slug is derived from the title at creation unless one is given, and
  is never regenerated when the title changes later.
- A live post's slug is unique among live posts.
- The slug is checked before the cover image is written, and nothing is
  persisted if the write fails, so creation is all-or-nothing.
- Replacing a cover image keeps the old blob in the file store.
- Soft-deleted posts are invisible to list/get/update/delete.

Every operation takes the id of the authenticated user making the call.

Usage:
======
    from src.shared.services.post_service import PostService

    service = PostService(db, file_store)
    post = await service.create_post(user_id, title="Hello", body="...")
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, List, Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.adapters.file_store import FileStore
from src.shared.core.exceptions import PostNotFoundError, ValidationError
from src.shared.core.logging import get_logger
from src.shared.models.post import Post
from src.shared.repositories.post_repository import PostRepository
from src.shared.utils.slug import derive_slug

logger = get_logger("quill.posts")

COVER_IMAGE_DIRECTORY = "posts"


@dataclass
class CoverImage:
    """Validated cover image upload."""

    content: bytes
    extension: str
    content_type: Optional[str] = None


@dataclass
class PaginatedPosts:
    """One page of live posts plus the live-post total."""

    items: List[Post]
    total: int
    page: int
    page_size: int


class PostService:
    """
    Service for post-related business logic.

    Handles:
    - Listing live posts, newest first
    - Creating posts (slug derivation, cover image storage)
    - Partial updates
    - Soft delete and restore

    Attributes:
        session: Database session
        repo: Post repository
        file_store: Cover image storage
    """

    def __init__(
        self,
        session: AsyncSession,
        file_store: FileStore,
        repo: Optional[PostRepository] = None,
    ) -> None:
        """
        Initialize PostService.

        Args:
            session: Async database session
            file_store: Where cover images are written
            repo: Post repository (built from the session if omitted)
        """
        self.session = session
        self.file_store = file_store
        self.repo = repo or PostRepository(session)

    async def list_posts(
        self,
        user_id: UUID,
        page: int = 1,
        page_size: Optional[int] = None,
    ) -> PaginatedPosts:
        """
        Get a page of live posts, newest first.

        Args:
            user_id: Requesting user
            page: Page number (1-indexed)
            page_size: Posts per page (defaults to DEFAULT_PAGE_SIZE)

        Returns:
            PaginatedPosts with items and pagination info

        Raises:
            ValidationError: If page or page_size is not a positive integer
        """
        if page_size is None:
            page_size = settings.DEFAULT_PAGE_SIZE
        if page < 1 or page_size < 1:
            raise ValidationError("Page and page size must be positive integers")

        skip = (page - 1) * page_size
        items = await self.repo.list_active(offset=skip, limit=page_size)
        total = await self.repo.count_active()

        return PaginatedPosts(
            items=items,
            total=total,
            page=page,
            page_size=page_size,
        )

    async def create_post(
        self,
        user_id: UUID,
        title: str,
        body: str,
        slug: Optional[str] = None,
        cover_image: Optional[CoverImage] = None,
        is_published: Optional[bool] = None,
        published_at: Optional[datetime] = None,
    ) -> Post:
        """
        Create a post authored by user_id.

        Flow:
        1. Resolve the slug (explicit, else derived from title) and check it
        2. Store the cover image under posts/, if any
        3. Persist the post

        Args:
            user_id: Author
            title: Post title
            body: Post content
            slug: Explicit slug
            cover_image: Validated image upload
            is_published: Publish immediately
            published_at: Publication time (defaults to now when publishing)

        Returns:
            The created post

        Raises:
            ValidationError: If the slug is empty or already taken
            StorageError: If the cover image cannot be stored
        """
        resolved_slug = slug if slug else derive_slug(title)
        if not resolved_slug:
            raise ValidationError(
                "The slug could not be derived from the title.",
                details={"slug": ["The title must contain at least one letter or digit."]},
            )
        await self._ensure_slug_available(resolved_slug)

        fields: dict[str, Any] = {
            "user_id": user_id,
            "title": title,
            "body": body,
            "slug": resolved_slug,
            "is_published": bool(is_published),
            "published_at": published_at,
        }
        if is_published and published_at is None:
            fields["published_at"] = datetime.now(timezone.utc)

        if cover_image is not None:
            fields["cover_image"] = await self._store_cover_image(cover_image)

        post = await self.repo.create(**fields)

        logger.info(
            "Post created",
            post_id=str(post.id),
            user_id=str(user_id),
            has_cover_image=post.cover_image is not None,
        )
        return post

    async def get_post(self, user_id: UUID, post_id: UUID) -> Post:
        """
        Get a live post by id.

        Raises:
            PostNotFoundError: If no live post has this id
        """
        post = await self.repo.find(post_id)
        if not post:
            raise PostNotFoundError(str(post_id))
        return post

    async def update_post(
        self,
        user_id: UUID,
        post_id: UUID,
        title: Optional[str] = None,
        body: Optional[str] = None,
        slug: Optional[str] = None,
        cover_image: Optional[CoverImage] = None,
        is_published: Optional[bool] = None,
        published_at: Optional[datetime] = None,
    ) -> Post:
        """
        Apply the supplied fields to a live post.

        Arguments left as None are not changed. Changing the title does not
        change the slug; pass slug explicitly for that. A new cover image
        replaces the reference but the previous file is not deleted.

        Returns:
            The updated post

        Raises:
            PostNotFoundError: If no live post has this id
            ValidationError: If the new slug is taken by another live post
            StorageError: If the cover image cannot be stored
        """
        post = await self.get_post(user_id, post_id)

        if slug is not None and slug != post.slug:
            await self._ensure_slug_available(slug, exclude_id=post.id)

        fields: dict[str, Any] = {
            "title": title,
            "body": body,
            "slug": slug,
            "is_published": is_published,
            "published_at": published_at,
        }
        if is_published and published_at is None and post.published_at is None:
            fields["published_at"] = datetime.now(timezone.utc)

        if cover_image is not None:
            fields["cover_image"] = await self._store_cover_image(cover_image)

        updated = await self.repo.update(post.id, **fields)

        logger.info(
            "Post updated",
            post_id=str(post.id),
            user_id=str(user_id),
            fields=sorted(name for name, value in fields.items() if value is not None),
        )
        return updated

    async def delete_post(self, user_id: UUID, post_id: UUID) -> Post:
        """
        Soft delete a live post.

        Raises:
            PostNotFoundError: If the post does not exist or is already deleted
        """
        post = await self.get_post(user_id, post_id)
        deleted = await self.repo.soft_delete(post.id)

        logger.info("Post deleted", post_id=str(post.id), user_id=str(user_id))
        return deleted

    async def restore_post(self, user_id: UUID, post_id: UUID) -> Post:
        """
        Restore a soft-deleted post.

        Restoring a post that is not deleted returns it unchanged.

        Raises:
            PostNotFoundError: If no post with this id exists at all
        """
        post = await self.repo.find(post_id, include_deleted=True)
        if not post:
            raise PostNotFoundError(str(post_id))

        if not post.is_deleted:
            return post

        await self._ensure_slug_available(post.slug, exclude_id=post.id)
        restored = await self.repo.restore(post.id)

        logger.info("Post restored", post_id=str(post.id), user_id=str(user_id))
        return restored

    async def _ensure_slug_available(self, slug: str, exclude_id: Optional[UUID] = None) -> None:
        if await self.repo.slug_exists(slug, exclude_id=exclude_id):
            raise ValidationError(
                "The slug has already been taken.",
                details={"slug": ["The slug has already been taken."]},
            )

    async def _store_cover_image(self, cover_image: CoverImage) -> str:
        return await self.file_store.put(
            COVER_IMAGE_DIRECTORY,
            cover_image.content,
            extension=cover_image.extension,
            content_type=cover_image.content_type,
        )
