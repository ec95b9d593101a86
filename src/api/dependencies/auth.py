"""
Authentication Dependencies

    Authorization: Bearer <jwt>
           │  get_current_user_token()   signature + expiry
           ▼
    claims │  get_current_user()         user_id claim must be a UUID
           ▼
    CurrentUser {"user_id": UUID, "email": str}

Anything short of a valid token raises AuthenticationError, which renders
as the standard 401 envelope before the handler body runs.
"""

from typing import Annotated, Optional
from uuid import UUID

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from ...config.settings import settings
from ...shared.core.exceptions import AuthenticationError
from ...shared.utils.security import SecurityUtils


bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_user_token(
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)] = None,
) -> dict:
    """Verified claims of the request's bearer token."""
    if credentials is None:
        raise AuthenticationError()

    try:
        return SecurityUtils.decode_access_token(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except ValueError as e:
        raise AuthenticationError() from e


async def get_current_user(
    token: Annotated[dict, Depends(get_current_user_token)],
) -> dict:
    try:
        user_id = UUID(str(token.get("user_id")))
    except ValueError as e:
        raise AuthenticationError() from e

    return {"user_id": user_id, "email": token.get("email")}


CurrentUser = Annotated[dict, Depends(get_current_user)]
