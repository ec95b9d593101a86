"""
Post Entity Model

A blog post written by a user.

SAMPLE POST RECORD:
┌──────────────────────────────────────────────────────────────────────────────┐
│ id               │ 770e8400-e29b-41d4-a716-446655440000                      │
│ user_id          │ 550e8400-e29b-41d4-a716-446655440000                      │
│ title            │ "My Awesome Post Title"                                   │
│ slug             │ "my-awesome-post-title"                                   │
│ body             │ "Lorem ipsum..."                                          │
│ cover_image      │ "posts/3f2a9c...e1.jpg" or NULL                           │
│ is_published     │ false                                                     │
│ published_at     │ NULL                                                      │
│ deleted_at       │ NULL (set when soft-deleted)                              │
└──────────────────────────────────────────────────────────────────────────────┘

cover_image holds the storage key, never a URL. URLs are built from the key
by the file store when the post is serialized.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Optional
import uuid

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, String, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.shared.models.base import Base, TimestampMixin, SoftDeleteMixin


if TYPE_CHECKING:
    from src.shared.models.user import User


class Post(Base, TimestampMixin, SoftDeleteMixin):
    """
    Post model.

    Attributes:
        id: Unique identifier (UUID v4)
        user_id: Author
        title: Post title
        slug: URL identifier, unique among live posts, derived at creation
        body: Post content
        cover_image: Storage key of the cover image
        is_published: Whether the post is public
        published_at: When the post was published

    Relationships:
        author: The user who wrote the post
    """

    __tablename__ = "posts"
    __table_args__ = (
        # Slugs only have to be unique among live posts
        Index(
            "uq_posts_slug_live",
            "slug",
            unique=True,
            postgresql_where=text("deleted_at IS NULL"),
            sqlite_where=text("deleted_at IS NULL"),
        ),
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PRIMARY KEY
    # ═══════════════════════════════════════════════════════════════════════════

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # FOREIGN KEYS
    # ═══════════════════════════════════════════════════════════════════════════

    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # CONTENT
    # ═══════════════════════════════════════════════════════════════════════════

    title: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    slug: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
    )

    body: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    cover_image: Mapped[Optional[str]] = mapped_column(
        String(512),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLISHING
    # ═══════════════════════════════════════════════════════════════════════════

    is_published: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )

    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # RELATIONSHIPS
    # ═══════════════════════════════════════════════════════════════════════════

    author: Mapped["User"] = relationship(
        "User",
        back_populates="posts",
    )

    def __repr__(self) -> str:
        """String representation for debugging."""
        return f"<Post(id={self.id}, slug={self.slug})>"
