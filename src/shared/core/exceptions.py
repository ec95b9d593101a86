"""
Custom Exceptions

Every error a request can end in, with its HTTP status and error code.

    QuillException                  500  INTERNAL_ERROR
       ├── AuthenticationError      401  AUTHENTICATION_ERROR   (+ WWW-Authenticate: Bearer)
       ├── NotFoundError            404  NOT_FOUND
       │      ├── UserNotFoundError
       │      └── PostNotFoundError
       ├── ValidationError          422  VALIDATION_ERROR
       └── StorageError             500  STORAGE_ERROR

Services and adapters raise these; only the error handler middleware turns
them into responses, using to_dict() for the body:

    raise ValidationError("The slug has already been taken.",
                          details={"slug": ["The slug has already been taken."]})

    422 {"success": false, "message": "The slug has already been taken.",
         "code": "VALIDATION_ERROR", "errors": {"slug": [...]}}
"""

from typing import Any, Optional


class QuillException(Exception):
    """
    Base class for application errors.

    Attributes:
        message: Shown to the client as "message"
        status_code: HTTP status of the response
        error_code: Shown to the client as "code"
        details: Shown to the client as "errors" when non-empty
        headers: Extra response headers, if any
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.error_code = error_code or "INTERNAL_ERROR"
        self.details = details or {}
        self.headers = headers
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {
            "success": False,
            "message": self.message,
            "code": self.error_code,
        }
        if self.details:
            body["errors"] = self.details
        return body


class AuthenticationError(QuillException):
    """Wrong credentials, an unverifiable Google token, or a missing/bad bearer token."""

    def __init__(
        self,
        message: str = "Unauthenticated",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(
            message,
            status_code=401,
            error_code="AUTHENTICATION_ERROR",
            details=details,
            headers={"WWW-Authenticate": "Bearer"},
        )


class NotFoundError(QuillException):
    """
    A resource that does not exist, or is soft-deleted.

        NotFoundError("Post", "abc")  →  "Post with id 'abc' not found"
        NotFoundError("Post")         →  "Post not found"
    """

    def __init__(
        self,
        resource: str,
        resource_id: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        if resource_id:
            message = f"{resource} with id '{resource_id}' not found"
        else:
            message = f"{resource} not found"
        super().__init__(message, status_code=404, error_code="NOT_FOUND", details=details)


class UserNotFoundError(NotFoundError):
    def __init__(self, user_id: str) -> None:
        super().__init__("User", user_id)


class PostNotFoundError(NotFoundError):
    def __init__(self, post_id: str) -> None:
        super().__init__("Post", post_id)


class ValidationError(QuillException):
    """Malformed input, or input that clashes with stored data (email, slug)."""

    def __init__(
        self,
        message: str = "Validation failed",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, status_code=422, error_code="VALIDATION_ERROR", details=details)


class StorageError(QuillException):
    """The file store could not write a cover image."""

    def __init__(
        self,
        message: str = "Failed to store file",
        details: Optional[dict[str, Any]] = None,
    ) -> None:
        super().__init__(message, status_code=500, error_code="STORAGE_ERROR", details=details)
