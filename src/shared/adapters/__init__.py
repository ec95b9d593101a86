"""
External service adapters.

- file_store: Cover image storage (local disk or S3)
- google_oauth: Google access token verification
"""

from src.shared.adapters.file_store import (
    FileStore,
    LocalFileStore,
    S3FileStore,
    get_file_store,
)
from src.shared.adapters.google_oauth import (
    GoogleIdentity,
    GoogleOAuthAdapter,
    OAuthVerificationError,
)

__all__ = [
    "FileStore",
    "LocalFileStore",
    "S3FileStore",
    "get_file_store",
    "GoogleIdentity",
    "GoogleOAuthAdapter",
    "OAuthVerificationError",
]
