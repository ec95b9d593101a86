"""
API Handlers

Route handlers for the Quill API.

Handlers follow the pattern:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

All business logic is delegated to the service layer, and service
exceptions are rendered by the global exception handlers.
"""

from src.api.handlers import (
    auth_handler,
    post_handler,
    health_handler,
)

__all__ = [
    "auth_handler",
    "post_handler",
    "health_handler",
]
