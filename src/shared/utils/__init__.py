"""
Utilities Package

Common utility functions and helpers.

Contents:
=========
- security: Password hashing and JWT management
- slug: Title to URL slug derivation

Usage:
======
    from src.shared.utils.security import SecurityUtils
    from src.shared.utils.slug import derive_slug
"""

from src.shared.utils.security import SecurityUtils
from src.shared.utils.slug import derive_slug

__all__ = [
    "SecurityUtils",
    "derive_slug",
]
