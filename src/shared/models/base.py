"""
Base Model Classes

Declarative base and the mixins shared by the Quill models.

Model Hierarchy:
================
    Base                    ← SQLAlchemy declarative base
       │
       ├── TimestampMixin   ← created_at / updated_at
       │
       └── SoftDeleteMixin  ← deleted_at

Usage:
======
    from src.shared.models.base import Base, TimestampMixin, SoftDeleteMixin

    class Post(Base, TimestampMixin, SoftDeleteMixin):
        __tablename__ = "posts"
        id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def utcnow() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """
    Base class for all SQLAlchemy models.

    Every model inherits from this class, directly or through the mixins,
    so that ``Base.metadata`` knows about all tables (Alembic relies on it).
    """


class TimestampMixin:
    """
    Mixin that adds automatic timestamp tracking to models.

    - created_at: Set when the record is first inserted
    - updated_at: Updated whenever the record is modified

    Database Behavior:
    ==================
    Both columns are filled by SQLAlchemy with microsecond precision (so
    "newest first" ordering is stable within a second), and carry a
    CURRENT_TIMESTAMP server default for rows inserted outside the ORM.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        nullable=False,
        index=True,
    )

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=text("CURRENT_TIMESTAMP"),
        onupdate=utcnow,
        nullable=False,
    )


class SoftDeleteMixin:
    """
    Mixin that adds soft delete capability to models.

    Instead of removing rows, soft delete stamps ``deleted_at``:

        deleted_at: None                   (record is active)
        deleted_at: 2026-01-20T09:00:00Z   (record was soft-deleted)

    Queries must filter out soft-deleted records:
        query.where(MyModel.deleted_at.is_(None))

    Restoring a record sets ``deleted_at`` back to None.
    """

    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
        default=None,
    )

    @property
    def is_deleted(self) -> bool:
        """True when the record has been soft deleted."""
        return self.deleted_at is not None
