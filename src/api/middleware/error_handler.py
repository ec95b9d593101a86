"""
Error Handler Middleware

Global exception handling for the API.

Services raise exceptions from src.shared.core.exceptions and never build
HTTP responses themselves; this module is the only place where those
exceptions become status codes.

Error Response Format:
======================
    {
        "success": false,
        "message": "The slug has already been taken.",
        "code": "VALIDATION_ERROR",
        "errors": {"slug": ["The slug has already been taken."]}
    }

Exception Handling:
===================
1. QuillException subclasses      → Their status_code, headers and to_dict()
2. RequestValidationError         → 422 with per-field errors
3. pydantic ValidationError       → 422 with per-field errors (form payloads
                                    validated inside handlers)
4. Other exceptions               → 500 with generic message (details hidden)

Usage:
======
    from src.api.middleware.error_handler import setup_exception_handlers

    app = FastAPI()
    setup_exception_handlers(app)
"""

from typing import Any, Iterable

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from src.shared.core.exceptions import QuillException
from src.shared.core.logging import logger

# Location prefixes FastAPI puts in front of the field name
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie", "form"}


def format_validation_errors(errors: Iterable[dict[str, Any]]) -> dict[str, list[str]]:
    """
    Group pydantic error entries by field.

    Args:
        errors: Output of ValidationError.errors()

    Returns:
        Mapping of dotted field name to its messages, e.g.
        {"title": ["Field required"]}
    """
    grouped: dict[str, list[str]] = {}
    for error in errors:
        loc = list(error.get("loc", ()))
        if len(loc) > 1 and loc[0] in _LOCATION_PREFIXES:
            loc = loc[1:]
        field = ".".join(str(part) for part in loc) or "non_field_errors"
        message = str(error.get("msg", "Invalid value"))
        # "Value error, ..." is how pydantic wraps ValueError from validators
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        grouped.setdefault(field, []).append(message)
    return grouped


def _validation_response(errors: Iterable[dict[str, Any]]) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={
            "success": False,
            "message": "The given data was invalid.",
            "code": "VALIDATION_ERROR",
            "errors": format_validation_errors(errors),
        },
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Set up global exception handlers.

    Should be called during application initialization to register
    exception handlers for all routes.

    Args:
        app: FastAPI application instance
    """

    @app.exception_handler(QuillException)
    async def quill_exception_handler(
        request: Request,
        exc: QuillException,
    ) -> JSONResponse:
        """
        Handle Quill-specific exceptions.

        All custom exceptions inherit from QuillException and include:
        - status_code: HTTP status code
        - error_code: Machine-readable error code
        - message: Human-readable message
        - details: Per-field messages, if any
        - headers: Extra response headers (WWW-Authenticate on 401)
        """
        log = logger.error if exc.status_code >= 500 else logger.warning
        log(
            "Application error",
            error_code=exc.error_code,
            message=exc.message,
            status_code=exc.status_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.to_dict(),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """
        Handle request parsing errors.

        These occur when the JSON body, query string or form fields don't
        match what the route declares.
        """
        logger.warning(
            "Request validation error",
            fields=sorted(format_validation_errors(exc.errors())),
            path=request.url.path,
        )
        return _validation_response(exc.errors())

    @app.exception_handler(ValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: ValidationError,
    ) -> JSONResponse:
        """
        Handle Pydantic validation errors raised inside handlers.
        """
        logger.warning(
            "Validation error",
            fields=sorted(format_validation_errors(exc.errors())),
            path=request.url.path,
        )
        return _validation_response(exc.errors())

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """
        Handle unexpected exceptions.

        Catches any unhandled exception and returns a generic error.
        Full error details are logged but not exposed to clients.
        """
        logger.error(
            "Unexpected error",
            error=str(exc),
            error_type=type(exc).__name__,
            path=request.url.path,
            exc_info=True,
        )
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "message": "An unexpected error occurred",
                "code": "INTERNAL_ERROR",
            },
        )
