"""
Authentication Service

Business logic for user registration, sign-in and token issuance.

Service Pattern:
================
Services encapsulate business logic and coordinate between:
- Repositories (data access)
- External services (Google OAuth)
- Domain logic

Sign-in Paths:
==============
    login_user()          email + password  → token
    login_with_google()   Google token      → token (account found, linked or created)

Both password failures (unknown email, wrong password) raise the same
AuthenticationError so callers cannot tell which one happened.

Usage:
======
    from src.shared.services.auth_service import AuthService

    service = AuthService(db)
    user = await service.register_user(name, email, password)
    token, user, expires_in = await service.login_user(email, password)
"""

from datetime import timedelta
from typing import Optional, Tuple
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.config.settings import settings
from src.shared.adapters.google_oauth import (
    GoogleIdentity,
    GoogleOAuthAdapter,
    OAuthVerificationError,
)
from src.shared.core.exceptions import (
    AuthenticationError,
    UserNotFoundError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.models.user import User
from src.shared.repositories.user_repository import UserRepository
from src.shared.utils.security import SecurityUtils

logger = get_logger("quill.auth")

INVALID_CREDENTIALS_MESSAGE = "Email or Password is incorrect"
INVALID_GOOGLE_TOKEN_MESSAGE = "Invalid Google token"


class AuthService:
    """
    Service for authentication-related business logic.

    Handles:
    - User registration with email/password
    - Password login
    - Google login with account linking
    - JWT token generation

    Attributes:
        session: Database session
        repo: UserRepository instance
        oauth_client: Google OAuth adapter
    """

    def __init__(
        self,
        session: AsyncSession,
        oauth_client: Optional[GoogleOAuthAdapter] = None,
    ) -> None:
        """
        Initialize AuthService.

        Args:
            session: Async database session
            oauth_client: Google OAuth adapter (a default one is created if omitted)
        """
        self.session = session
        self.repo = UserRepository(session)
        self.oauth_client = oauth_client or GoogleOAuthAdapter()

    async def register_user(
        self,
        name: str,
        email: str,
        password: str,
    ) -> User:
        """
        Register a new user.

        Args:
            name: Display name
            email: User's email address
            password: Plain text password (will be hashed)

        Returns:
            The created user

        Raises:
            ValidationError: If email already registered
        """
        if await self.repo.email_exists(email):
            raise ValidationError(
                "The email has already been taken.",
                details={"email": ["The email has already been taken."]},
            )

        user = await self.repo.create(
            name=name,
            email=email,
            password_hash=SecurityUtils.hash_password(password),
        )

        logger.info("User registered", user_id=str(user.id))
        return user

    async def login_user(
        self,
        email: str,
        password: str,
    ) -> Tuple[str, User, int]:
        """
        Authenticate user with email and password.

        Args:
            email: User's email address
            password: Plain text password

        Returns:
            Tuple of (access_token, user, expires_in_seconds)

        Raises:
            AuthenticationError: If credentials are invalid
        """
        user = await self.repo.get_by_email(email)
        password_hash = user.password_hash if user else None

        # verify_password() still runs bcrypt when there is no hash
        if not SecurityUtils.verify_password(password, password_hash) or user is None:
            logger.info("Login failed")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        token, expires_in = self.issue_token(user)
        logger.info("User logged in", user_id=str(user.id))
        return token, user, expires_in

    async def login_with_google(self, provider_token: str) -> Tuple[str, User, int]:
        """
        Authenticate with a Google OAuth access token.

        Resolution order:
        1. User already linked to this Google account
        2. User registered with the same email (the Google id gets linked)
        3. New user with an unusable random password

        Args:
            provider_token: Google OAuth access token

        Returns:
            Tuple of (access_token, user, expires_in_seconds)

        Raises:
            AuthenticationError: If Google does not accept the token
        """
        try:
            identity = await self.oauth_client.fetch_identity(provider_token)
        except OAuthVerificationError as e:
            logger.info("Google login failed", reason=str(e))
            raise AuthenticationError(INVALID_GOOGLE_TOKEN_MESSAGE) from e

        user = await self._resolve_google_user(identity)

        token, expires_in = self.issue_token(user)
        logger.info("User logged in with Google", user_id=str(user.id))
        return token, user, expires_in

    async def get_user(self, user_id: UUID) -> User:
        """
        Get the user a token was issued to.

        Raises:
            UserNotFoundError: If the user no longer exists
        """
        user = await self.repo.get(user_id)
        if not user:
            raise UserNotFoundError(str(user_id))
        return user

    def issue_token(self, user: User) -> Tuple[str, int]:
        """
        Issue a JWT bound to the user's id.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        access_token = SecurityUtils.create_access_token(
            data={"user_id": str(user.id), "email": user.email},
            secret_key=settings.SECRET_KEY,
            expires_delta=timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES),
            algorithm=settings.JWT_ALGORITHM,
        )
        return access_token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    async def _resolve_google_user(self, identity: GoogleIdentity) -> User:
        user = await self.repo.get_by_google_id(identity.id)
        if user:
            return user

        user = await self.repo.get_by_email(identity.email)
        if user:
            if user.google_id is None:
                user = await self.repo.update(user.id, google_id=identity.id)
                logger.info("Linked Google account", user_id=str(user.id))
            return user

        user = await self.repo.create(
            name=identity.name,
            email=identity.email,
            google_id=identity.id,
            password_hash=SecurityUtils.unusable_password_hash(),
        )
        logger.info("User registered with Google", user_id=str(user.id))
        return user
