"""
API Dependencies

    DbSession      request-scoped AsyncSession (get_db)
    CurrentUser    {"user_id": UUID, "email": str} from the bearer token
    get_pagination page / per_page query parameters

Service factories live in src.api.dependencies.services.
"""

from src.api.dependencies.database import (
    get_db,
    DbSession,
)
from src.api.dependencies.auth import (
    get_current_user,
    get_current_user_token,
    CurrentUser,
)
from src.api.dependencies.pagination import get_pagination

__all__ = [
    # Database
    "get_db",
    "DbSession",
    # Authentication
    "get_current_user",
    "get_current_user_token",
    "CurrentUser",
    # Pagination
    "get_pagination",
]
