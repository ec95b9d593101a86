"""
Pydantic Schemas

Request and response models for the API.

Schema Categories:
==================
- common: Base schema, pagination, response envelopes
- user: Registration, login and user schemas
- post: Post create/update/response schemas

Usage:
======
    from src.shared.schemas.user import UserCreate, UserResponse, AuthResponse
    from src.shared.schemas.post import PostCreate, PostResponse
"""

from src.shared.schemas.common import (
    BaseSchema,
    PaginationParams,
    PaginationMeta,
    MessageResponse,
    DataResponse,
    PaginatedResponse,
    HealthResponse,
)
from src.shared.schemas.user import (
    UserBase,
    UserCreate,
    UserLogin,
    GoogleLoginRequest,
    UserResponse,
    AuthResponse,
)
from src.shared.schemas.post import (
    PostCreate,
    PostUpdate,
    PostResponse,
)

__all__ = [
    # Common
    "BaseSchema",
    "PaginationParams",
    "PaginationMeta",
    "MessageResponse",
    "DataResponse",
    "PaginatedResponse",
    "HealthResponse",
    # User
    "UserBase",
    "UserCreate",
    "UserLogin",
    "GoogleLoginRequest",
    "UserResponse",
    "AuthResponse",
    # Post
    "PostCreate",
    "PostUpdate",
    "PostResponse",
]
