"""
Business Logic Services

Services encapsulate business logic and coordinate between repositories,
external services, and domain rules.

Service Pattern:
================
    Handler → Service → Repository → Database
                ↘ Adapters (Google OAuth, file store)

Services should:
- Contain business logic and validation
- Coordinate repositories and adapters
- Handle transactions (via session)
- NOT handle HTTP concerns (that's for handlers)

Available Services:
===================
- AuthService: Registration, password login, Google login, token issuance
- PostService: Post lifecycle (create, list, get, update, soft delete, restore)

Usage:
======
    from src.shared.services import AuthService, PostService

    service = AuthService(db)
    token, user, expires_in = await service.login_user(email, password)
"""

from src.shared.services.auth_service import AuthService
from src.shared.services.post_service import (
    CoverImage,
    PaginatedPosts,
    PostService,
)

__all__ = [
    "AuthService",
    "PostService",
    "CoverImage",
    "PaginatedPosts",
]
