"""
Common Schemas

Response envelopes shared by every endpoint.

    {"success": true, "message": "Post retrieved successfully", "data": {...}}
    {"success": true, "message": "Posts retrieved successfully", "data": [...],
     "pagination": {"page": 1, "per_page": 10, "total": 42, ...}}
    {"success": true, "message": "Post deleted successfully"}

Errors use the same success/message keys; see QuillException.to_dict().
"""

from datetime import datetime, timezone
from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field


DataT = TypeVar("DataT")


class BaseSchema(BaseModel):
    """Response schemas can be validated straight from ORM instances."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)


# ═══════════════════════════════════════════════════════════════════════════════
# PAGINATION
# ═══════════════════════════════════════════════════════════════════════════════


class PaginationParams(BaseModel):
    page: int = Field(default=1, ge=1, description="Page number, starting at 1")
    per_page: int = Field(default=10, ge=1, description="Posts per page")


class PaginationMeta(BaseModel):
    page: int
    per_page: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def create(cls, page: int, per_page: int, total: int) -> "PaginationMeta":
        """Derive page counts and neighbours from page, page size and row count."""
        total_pages = -(-total // per_page) if per_page > 0 else 0
        return cls(
            page=page,
            per_page=per_page,
            total=total,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


# ═══════════════════════════════════════════════════════════════════════════════
# ENVELOPES
# ═══════════════════════════════════════════════════════════════════════════════


class MessageResponse(BaseModel):
    success: bool = True
    message: str


class DataResponse(BaseModel, Generic[DataT]):
    success: bool = True
    message: str
    data: DataT


class PaginatedResponse(BaseModel, Generic[DataT]):
    success: bool = True
    message: str
    data: list[DataT]
    pagination: PaginationMeta


class HealthResponse(BaseModel):
    status: str = "healthy"
    service: str = "quill"
    version: str = "1.0.0"
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
