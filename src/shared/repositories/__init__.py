"""
Repositories

Data access for services. Repositories flush but never commit.

    BaseRepository[ModelType]   get / create / update / soft_delete / restore
         ├── UserRepository     by email, by Google id
         └── PostRepository     live posts only, slug checks
"""

from src.shared.repositories.base import BaseRepository
from src.shared.repositories.user_repository import UserRepository
from src.shared.repositories.post_repository import PostRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "PostRepository",
]
