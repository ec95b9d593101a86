"""
Logging Configuration

structlog on top of the stdlib root logger. Importing this module configures
both, once.

    development    2026-01-15 10:30:00 [info     ] Post created   post_id=... user_id=...
    otherwise      {"timestamp": "...", "level": "info", "event": "Post created", ...}

Request-scoped fields (request_id, method, path) are bound by the request
context middleware through log_context() and merged into every event logged
while that request is handled.

Passwords, password hashes and tokens are never logged.
"""

import logging
import sys
from typing import Any, Optional

import structlog
from structlog.typing import Processor

from src.config.settings import settings


def _processors() -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if settings.is_development:
        chain.append(structlog.dev.ConsoleRenderer(colors=True))
    else:
        chain.append(structlog.processors.format_exc_info)
        chain.append(structlog.processors.JSONRenderer())
    return chain


def setup_logging() -> None:
    """Point the stdlib root logger at stdout and configure structlog."""
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.LOG_LEVEL.upper()),
    )
    structlog.configure(
        processors=_processors(),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: Optional[str] = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def log_context(**kwargs: Any) -> None:
    """Attach fields to every event logged from the current context."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_log_context() -> None:
    structlog.contextvars.clear_contextvars()


setup_logging()

logger = get_logger("quill")
