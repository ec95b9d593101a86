"""
Authentication Handler

Handles registration, sign-in and current-user endpoints.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
          ↘ Utils  ↗

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer, not here. Service exceptions
(ValidationError, AuthenticationError) are turned into responses by the
global exception handlers.

ENDPOINTS:
==========
    POST /v1/auth/register   → 201, created user (no token)
    POST /v1/auth/login      → 200, token + user
    POST /v1/auth/google     → 200, token + user
    GET  /v1/auth/me         → 200, user the token belongs to
"""

from fastapi import APIRouter, Depends, status

from src.shared.models.user import User
from src.shared.schemas.common import DataResponse
from src.shared.schemas.user import (
    UserCreate,
    UserLogin,
    GoogleLoginRequest,
    AuthResponse,
    UserResponse,
)
from src.shared.services.auth_service import AuthService
from src.api.dependencies import CurrentUser
from src.api.dependencies.services import get_auth_service


router = APIRouter()


def _build_user_response(user: User) -> UserResponse:
    """Helper to build UserResponse from ORM object."""
    return UserResponse(
        id=str(user.id),
        name=user.name,
        email=user.email,
    )


@router.post(
    "/register",
    response_model=DataResponse[UserResponse],
    status_code=status.HTTP_201_CREATED,
)
async def register(
    user_data: UserCreate,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register a new user.

    Args:
        user_data: Registration data (name, email, password, confirmation)
        auth_service: Injected AuthService instance

    Returns:
        The created user

    Raises:
        422: If the email is already registered or the payload is invalid
    """
    user = await auth_service.register_user(
        name=user_data.name,
        email=user_data.email,
        password=user_data.password,
    )

    return DataResponse[UserResponse](
        message="User registered successfully",
        data=_build_user_response(user),
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    credentials: UserLogin,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate user and return JWT token.

    Raises:
        401: If credentials are invalid (same response for unknown email
             and wrong password)
    """
    access_token, user, expires_in = await auth_service.login_user(
        email=credentials.email,
        password=credentials.password,
    )

    return AuthResponse(
        message="Login successfully",
        token=access_token,
        expires_in=expires_in,
        data=_build_user_response(user),
    )


@router.post("/google", response_model=AuthResponse)
async def login_with_google(
    request: GoogleLoginRequest,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Sign in with a Google OAuth access token.

    Finds the user by Google id, then by email, and creates one otherwise.

    Raises:
        401: If Google rejects the token
    """
    access_token, user, expires_in = await auth_service.login_with_google(request.token)

    return AuthResponse(
        message="Login with Google successfully",
        token=access_token,
        expires_in=expires_in,
        data=_build_user_response(user),
    )


@router.get("/me", response_model=DataResponse[UserResponse])
async def me(
    current_user: CurrentUser,
    auth_service: AuthService = Depends(get_auth_service),
):
    """Return the authenticated user."""
    user = await auth_service.get_user(current_user["user_id"])

    return DataResponse[UserResponse](
        message="User retrieved successfully",
        data=_build_user_response(user),
    )
