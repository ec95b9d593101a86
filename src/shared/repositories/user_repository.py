"""
User Repository

Lookups by the two identities a user signs in with: email and Google id.

Emails are stored and compared lowercased, so "Ada@Example.com" and
"ada@example.com" are the same account whether they arrive through
registration, password login or Google.
"""

from typing import Any, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.repositories.base import BaseRepository
from src.shared.models.user import User


def normalize_email(email: str) -> str:
    return email.strip().lower()


class UserRepository(BaseRepository[User]):

    conflict_message = "The email has already been taken."

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def create(self, **kwargs: Any) -> User:
        if kwargs.get("email"):
            kwargs["email"] = normalize_email(kwargs["email"])
        return await super().create(**kwargs)

    async def get_by_email(self, email: str) -> Optional[User]:
        return await self._first_where(User.email == normalize_email(email))

    async def get_by_google_id(self, google_id: str) -> Optional[User]:
        """Find the user linked to a Google profile (its ``sub`` claim)."""
        return await self._first_where(User.google_id == google_id)

    async def email_exists(self, email: str) -> bool:
        return await self.get_by_email(email) is not None

    async def _first_where(self, condition) -> Optional[User]:
        result = await self.session.execute(select(User).where(condition))
        return result.scalar_one_or_none()
