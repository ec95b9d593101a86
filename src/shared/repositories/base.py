"""
Base Repository

CRUD shared by every repository. Subclasses bind a model and add their own
queries:

    class PostRepository(BaseRepository[Post]):
        def __init__(self, session):
            super().__init__(Post, session)

    post = await PostRepository(db).get(post_id)   # typed as Post

Transactions:
=============
Writes only flush. get_db() commits once the handler has returned, or rolls
back if anything raised, so one request is one transaction.

Unique constraints:
===================
An IntegrityError during flush is re-raised as
ValidationError(conflict_message), so services and handlers never deal with
driver exceptions.
"""

from datetime import datetime, timezone
from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import ValidationError
from src.shared.models.base import Base


ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Generic repository over one SQLAlchemy model.

    Attributes:
        model: Model class rows are loaded as
        session: Request-scoped async session
        conflict_message: ValidationError message for unique violations
    """

    conflict_message = "The given data conflicts with an existing record."

    def __init__(self, model: Type[ModelType], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    # ═══════════════════════════════════════════════════════════════════════════
    # READS
    # ═══════════════════════════════════════════════════════════════════════════

    async def get(self, record_id: UUID) -> Optional[ModelType]:
        """Row by primary key, soft-deleted or not."""
        result = await self.session.execute(select(self.model).where(self.model.id == record_id))
        return result.scalar_one_or_none()

    # ═══════════════════════════════════════════════════════════════════════════
    # WRITES
    # ═══════════════════════════════════════════════════════════════════════════

    async def create(self, **kwargs: Any) -> ModelType:
        """
        Insert a row and return it with database defaults loaded.

        Raises:
            ValidationError: On a unique constraint violation
        """
        instance = self.model(**kwargs)
        self.session.add(instance)
        await self._flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, record_id: UUID, **kwargs: Any) -> Optional[ModelType]:
        """
        Apply the given fields to a row.

        None values are skipped, so callers can pass optional fields straight
        through. Returns None when the row does not exist.

        Raises:
            ValidationError: On a unique constraint violation
        """
        instance = await self.get(record_id)
        if not instance:
            return None

        for field, value in kwargs.items():
            if value is not None and hasattr(instance, field):
                setattr(instance, field, value)

        await self._flush()
        await self.session.refresh(instance)
        return instance

    async def soft_delete(self, record_id: UUID) -> Optional[ModelType]:
        """
        Stamp deleted_at on a row.

        Returns None when the row does not exist or the model has no
        deleted_at column.
        """
        instance = await self.get(record_id)
        if not instance or not hasattr(instance, "deleted_at"):
            return None

        instance.deleted_at = datetime.now(timezone.utc)
        await self._flush()
        await self.session.refresh(instance)
        return instance

    async def restore(self, record_id: UUID) -> Optional[ModelType]:
        """
        Clear deleted_at on a row. Rows that are not deleted come back as is.

        Raises:
            ValidationError: If bringing the row back violates a unique index
        """
        instance = await self.get(record_id)
        if not instance or not hasattr(instance, "deleted_at"):
            return None

        if instance.deleted_at is not None:
            instance.deleted_at = None
            await self._flush()
            await self.session.refresh(instance)

        return instance

    # ═══════════════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ValidationError(self.conflict_message) from e
