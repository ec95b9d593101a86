"""
Google OAuth adapter - access token verification.

Exchanges a Google OAuth access token for the profile it was issued for by
calling Google's userinfo endpoint. A token Google rejects, a network
failure or a profile without a verified email all raise
OAuthVerificationError.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import httpx

from ...config.settings import settings

logger = logging.getLogger(__name__)


class OAuthVerificationError(Exception):
    """The provider token could not be verified."""


@dataclass
class GoogleIdentity:
    """Verified Google account."""

    id: str
    email: str
    name: str


class GoogleOAuthAdapter:
    """Client for Google's OAuth userinfo endpoint."""

    def __init__(
        self,
        userinfo_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize Google OAuth adapter.

        Args:
            userinfo_url: Profile endpoint (overridable for tests)
            timeout: Request timeout in seconds
            transport: httpx transport (a MockTransport in tests)
        """
        self.userinfo_url = userinfo_url or settings.GOOGLE_USERINFO_URL
        self.timeout = timeout or settings.GOOGLE_TIMEOUT_SECONDS
        self.transport = transport

    async def fetch_identity(self, access_token: str) -> GoogleIdentity:
        """
        Resolve an access token to the Google account it belongs to.

        Args:
            access_token: OAuth access token obtained by the client app

        Returns:
            GoogleIdentity with id (``sub``), email and name

        Raises:
            OAuthVerificationError: If the token is invalid or unverifiable
        """
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(
                    self.userinfo_url,
                    headers={"Authorization": f"Bearer {access_token}"},
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.warning(f"Google rejected token: HTTP {e.response.status_code}")
            raise OAuthVerificationError("Token rejected by Google") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Google userinfo request failed: {e}")
            raise OAuthVerificationError("Could not reach Google") from e

        subject = data.get("sub")
        email = data.get("email")
        if not subject or not email:
            raise OAuthVerificationError("Google profile is missing id or email")
        if data.get("email_verified") is False:
            raise OAuthVerificationError("Google email is not verified")

        return GoogleIdentity(
            id=str(subject),
            email=email,
            name=data.get("name") or email.split("@")[0],
        )
