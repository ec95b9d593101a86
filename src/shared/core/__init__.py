"""
Core Module

Structured logging and the application exception hierarchy.
"""

from src.shared.core.logging import (
    logger,
    get_logger,
    log_context,
    clear_log_context,
)
from src.shared.core.exceptions import (
    QuillException,
    AuthenticationError,
    NotFoundError,
    UserNotFoundError,
    PostNotFoundError,
    ValidationError,
    StorageError,
)

__all__ = [
    # Logging
    "logger",
    "get_logger",
    "log_context",
    "clear_log_context",
    # Exceptions
    "QuillException",
    "AuthenticationError",
    "NotFoundError",
    "UserNotFoundError",
    "PostNotFoundError",
    "ValidationError",
    "StorageError",
]
