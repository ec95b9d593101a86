"""
Request Context Middleware

Binds per-request fields into the structlog context so every log line
emitted while handling a request carries them:

    request_id  - X-Request-ID header if the client sent one, else a new UUID
    method      - HTTP method
    path        - URL path

The request id is echoed back in the X-Request-ID response header.
"""

import time
import uuid

from fastapi import FastAPI, Request
from fastapi.responses import Response

from src.shared.core.logging import clear_log_context, get_logger, log_context

logger = get_logger("quill.http")

REQUEST_ID_HEADER = "X-Request-ID"


def setup_request_context(app: FastAPI) -> None:
    """Register the request-context middleware on the app."""

    @app.middleware("http")
    async def bind_request_context(request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        log_context(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        started = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "Request handled",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )
            response.headers[REQUEST_ID_HEADER] = request_id
            return response
        finally:
            clear_log_context()
