"""
Post Schemas

Request/response models for the post endpoints.

Post requests arrive as form fields (so a cover image file can travel with
them); the handlers build these models from the fields, and any
pydantic.ValidationError they raise is rendered as a 422.
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from src.shared.schemas.common import BaseSchema


SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


class PostCreate(BaseModel):
    """Fields accepted when creating a post."""

    title: str = Field(min_length=1, max_length=255)
    body: str = Field(min_length=1)
    slug: Optional[str] = Field(
        default=None,
        max_length=255,
        pattern=SLUG_PATTERN,
        description="Explicit slug; derived from the title when omitted",
    )
    is_published: Optional[bool] = None
    published_at: Optional[datetime] = None


class PostUpdate(BaseModel):
    """Fields accepted when updating a post. Omitted fields are left alone."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    body: Optional[str] = Field(default=None, min_length=1)
    slug: Optional[str] = Field(default=None, max_length=255, pattern=SLUG_PATTERN)
    is_published: Optional[bool] = None
    published_at: Optional[datetime] = None


class PostResponse(BaseSchema):
    """
    Public view of a post.

    cover_image is a fully-qualified URL (or null), never the storage key.
    """

    id: str
    author_id: str
    title: str
    slug: str
    body: str
    cover_image: Optional[str] = None
    is_published: bool
    published_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
