"""
Security Utilities

Password hashes (bcrypt via passlib) and bearer tokens (PyJWT).

    SecurityUtils.hash_password(pw)                   → "$2b$12$..."
    SecurityUtils.verify_password(pw, hash)           → bool
    SecurityUtils.create_access_token(claims, key)    → "eyJ..."
    SecurityUtils.decode_access_token(token, key)     → claims, or ValueError

Both login failures (unknown email, wrong password) cost one bcrypt
verification; see verify_password().
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

_DUMMY_PASSWORD_HASH = pwd_context.hash(secrets.token_urlsafe(16))

DEFAULT_TOKEN_LIFETIME = timedelta(hours=1)


class SecurityUtils:
    """Stateless helpers for credentials and tokens."""

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORDS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """Salted bcrypt hash of a plain text password."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
        """
        Check a plain text password against a stored hash.

        With no stored hash the password is checked against a throwaway
        hash and False is returned.
        """
        if not hashed_password:
            pwd_context.verify(plain_password, _DUMMY_PASSWORD_HASH)
            return False
        return pwd_context.verify(plain_password, hashed_password)

    @staticmethod
    def unusable_password_hash() -> str:
        """Password hash for accounts that sign in through Google only."""
        return pwd_context.hash(secrets.token_urlsafe(32))

    # ═══════════════════════════════════════════════════════════════════════════
    # TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Sign a token carrying the given claims.

        iat and exp are added; exp is now + expires_delta (one hour when
        omitted).
        """
        issued_at = datetime.now(timezone.utc)
        claims = {
            **data,
            "iat": issued_at,
            "exp": issued_at + (expires_delta or DEFAULT_TOKEN_LIFETIME),
        }
        return jwt.encode(claims, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Verify a token's signature and expiry and return its claims.

        Raises:
            ValueError: If the token is expired, tampered with or malformed
        """
        try:
            return jwt.decode(token, secret_key, algorithms=[algorithm])
        except jwt.ExpiredSignatureError as e:
            raise ValueError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {e}") from e
