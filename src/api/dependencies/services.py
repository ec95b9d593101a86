"""
Service Dependencies

FastAPI dependencies for service injection.

These dependencies create service instances with proper database session injection.
Services are created per-request, which is fine because:
- Services only hold the session and adapter references
- Each request gets its own db session

The adapters (Google OAuth client, file store) are dependencies of their own,
so tests can swap them through app.dependency_overrides.

Usage:
======
    from src.api.dependencies.services import get_auth_service, get_post_service

    @router.post("/login")
    async def login(
        data: UserLogin,
        auth_service: AuthService = Depends(get_auth_service)
    ):
        return await auth_service.login_user(data.email, data.password)
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies.database import get_db
from src.shared.adapters.file_store import FileStore, get_file_store
from src.shared.adapters.google_oauth import GoogleOAuthAdapter
from src.shared.services.auth_service import AuthService
from src.shared.services.post_service import PostService


def get_google_oauth_client() -> GoogleOAuthAdapter:
    """
    Dependency to get the Google OAuth adapter.
    """
    return GoogleOAuthAdapter()


async def get_auth_service(
    db: AsyncSession = Depends(get_db),
    oauth_client: GoogleOAuthAdapter = Depends(get_google_oauth_client),
) -> AuthService:
    """
    Dependency to get AuthService instance.

    Creates a new service instance per request with the request's db session.
    """
    return AuthService(db, oauth_client=oauth_client)


async def get_post_service(
    db: AsyncSession = Depends(get_db),
    file_store: FileStore = Depends(get_file_store),
) -> PostService:
    """
    Dependency to get PostService instance.
    """
    return PostService(db, file_store)
