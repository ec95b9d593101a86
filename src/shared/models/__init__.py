"""
Quill SQLAlchemy Models

Model Hierarchy:
================
    User
       └── posts (Post[])

Models Overview:
================
- Base: Base class and mixins (timestamps, soft delete)
- User: Registered user (password and/or Google sign-in)
- Post: Blog post, soft-deletable

Usage:
======
    from src.shared.models import User, Post
"""

from src.shared.models.base import Base, TimestampMixin, SoftDeleteMixin
from src.shared.models.user import User
from src.shared.models.post import Post

__all__ = [
    # Base classes and mixins
    "Base",
    "TimestampMixin",
    "SoftDeleteMixin",
    # Core models
    "User",
    "Post",
]
