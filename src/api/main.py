"""
Quill API entry point.

Builds the FastAPI app: middleware, exception handlers, routers and the
/storage mount for locally stored cover images.

Request path:
=============
    client
      │
      ▼
    CORSMiddleware → bind_request_context (request_id, method, path)
      │
      ▼
    router (/v1/auth, /v1/posts, health)
      │   Depends: CurrentUser, get_db, get_*_service, get_file_store
      ▼
    handler → service → repository / adapter
      │
      ▼
    QuillException → setup_exception_handlers → JSON envelope

Startup checks the database with SELECT 1 and refuses to start when it is
unreachable; shutdown disposes of the engine.

Run:
====
    uvicorn src.api.main:app --reload
"""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from src.config.settings import settings
from src.shared.db import init_db, close_db
from src.shared.core.logging import logger
from src.api.middleware import setup_exception_handlers, setup_request_context
from src.api.routes import register_routes


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Verify the database on startup, release its connections on shutdown."""
    logger.info(
        "Quill API starting",
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        storage_backend=settings.STORAGE_BACKEND,
    )
    await init_db()

    yield

    await close_db()
    logger.info("Quill API stopped")


def create_application() -> FastAPI:
    """
    Build the FastAPI application.

    Interactive docs are only exposed when DEBUG is on.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        description="Blog backend: accounts, sign-in and posts",
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # MIDDLEWARE (last added runs first)
    # ═══════════════════════════════════════════════════════════════════════════

    setup_request_context(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # ═══════════════════════════════════════════════════════════════════════════
    # ERRORS AND ROUTES
    # ═══════════════════════════════════════════════════════════════════════════

    setup_exception_handlers(app)
    register_routes(app)

    # S3 objects are served by the bucket itself
    if settings.STORAGE_BACKEND.lower() == "local":
        app.mount(
            "/storage",
            StaticFiles(directory=settings.STORAGE_ROOT, check_dir=False),
            name="storage",
        )

    return app


app = create_application()
