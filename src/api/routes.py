"""
Route Registration

Centralizes all route registration for the FastAPI application.

Route Hierarchy:
================
    /health, /ready, /live  → Health check endpoints
    /v1/auth                → Registration, login, Google login, current user
    /v1/posts               → Blog posts (CRUD, soft delete, restore)

Usage:
======
    from src.api.routes import register_routes

    app = FastAPI()
    register_routes(app)
"""

from fastapi import FastAPI

from src.api.handlers import (
    auth_handler,
    post_handler,
    health_handler,
)

API_PREFIX = "/v1"


def register_routes(app: FastAPI) -> None:
    """
    Register all API routes.

    Args:
        app: FastAPI application instance
    """
    # Health check endpoints (no prefix, root level)
    app.include_router(
        health_handler.router,
        tags=["Health"],
    )

    # Authentication endpoints
    app.include_router(
        auth_handler.router,
        prefix=f"{API_PREFIX}/auth",
        tags=["Authentication"],
    )

    # Post endpoints
    app.include_router(
        post_handler.router,
        prefix=f"{API_PREFIX}/posts",
        tags=["Posts"],
    )
