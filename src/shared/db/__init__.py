"""
Database Module

Engine, session factory and the get_db() request dependency.

    handler ── Depends(get_db) ──► AsyncSession ──► service ──► repository
"""

from src.shared.db.session import (
    get_db,
    init_db,
    close_db,
    AsyncSessionLocal,
    engine,
)

__all__ = [
    "get_db",
    "init_db",
    "close_db",
    "AsyncSessionLocal",
    "engine",
]
