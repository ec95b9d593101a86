"""
Post Handler

Handles the blog post endpoints. Every route requires a bearer token.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model
                 ↘ FileStore

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Post payloads arrive as multipart form fields so that a cover image can be
uploaded in the same request. The handler validates the fields through
PostCreate / PostUpdate and the upload through _read_cover_image(), then
passes plain values to PostService together with the caller's user id.

ENDPOINTS:
==========
    GET    /v1/posts                → paginated live posts, newest first
    POST   /v1/posts                → create (201)
    GET    /v1/posts/{id}           → one live post
    PUT    /v1/posts/{id}           → partial update
    DELETE /v1/posts/{id}           → soft delete
    POST   /v1/posts/{id}/restore   → undo soft delete
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from src.config.settings import settings
from src.shared.adapters.file_store import FileStore, get_file_store
from src.shared.core.exceptions import PostNotFoundError, ValidationError
from src.shared.models.post import Post
from src.shared.schemas.common import (
    DataResponse,
    MessageResponse,
    PaginatedResponse,
    PaginationMeta,
    PaginationParams,
)
from src.shared.schemas.post import PostCreate, PostResponse, PostUpdate
from src.shared.services.post_service import CoverImage, PostService
from src.api.dependencies import CurrentUser, get_pagination
from src.api.dependencies.services import get_post_service


router = APIRouter()

# Accepted cover image content types and the extension they are stored with
IMAGE_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "image/bmp": "bmp",
}


def _build_post_response(post: Post, file_store: FileStore) -> PostResponse:
    """Helper to build PostResponse from ORM object."""
    return PostResponse(
        id=str(post.id),
        author_id=str(post.user_id),
        title=post.title,
        slug=post.slug,
        body=post.body,
        cover_image=file_store.url(post.cover_image) if post.cover_image else None,
        is_published=post.is_published,
        published_at=post.published_at,
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


def _parse_post_id(post_id: str) -> UUID:
    """Malformed ids cannot match a post, so they are reported as not found."""
    try:
        return UUID(post_id)
    except ValueError as e:
        raise PostNotFoundError(post_id) from e


async def _read_cover_image(upload: Optional[UploadFile]) -> Optional[CoverImage]:
    """
    Validate an uploaded cover image.

    Returns:
        CoverImage, or None when no file was sent

    Raises:
        ValidationError: If the file is not an image or is too large
    """
    if upload is None or not upload.filename:
        return None

    extension = IMAGE_EXTENSIONS.get((upload.content_type or "").lower())
    if extension is None:
        raise ValidationError(
            "The cover image must be an image.",
            details={"cover_image": [
                "The cover image must be a file of type: "
                "jpg, jpeg, png, bmp, gif, webp."
            ]},
        )

    max_bytes = settings.COVER_IMAGE_MAX_BYTES
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise ValidationError(
            "The cover image is too large.",
            details={"cover_image": [
                f"The cover image may not be greater than {max_bytes // 1024} kilobytes."
            ]},
        )

    return CoverImage(
        content=content,
        extension=extension,
        content_type=upload.content_type,
    )


def _present(**fields) -> dict:
    """Drop form fields the client did not send."""
    return {name: value for name, value in fields.items() if value is not None}


@router.get("", response_model=PaginatedResponse[PostResponse])
async def list_posts(
    current_user: CurrentUser,
    pagination: PaginationParams = Depends(get_pagination),
    post_service: PostService = Depends(get_post_service),
    file_store: FileStore = Depends(get_file_store),
):
    """
    List live posts, newest first.

    Query params:
    - page: Page number (1-indexed)
    - per_page: Posts per page
    """
    result = await post_service.list_posts(
        user_id=current_user["user_id"],
        page=pagination.page,
        page_size=pagination.per_page,
    )

    return PaginatedResponse[PostResponse](
        message="Posts retrieved successfully",
        data=[_build_post_response(post, file_store) for post in result.items],
        pagination=PaginationMeta.create(
            page=result.page,
            per_page=result.page_size,
            total=result.total,
        ),
    )


@router.post(
    "",
    response_model=DataResponse[PostResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_post(
    current_user: CurrentUser,
    title: Optional[str] = Form(None),
    body: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    is_published: Optional[bool] = Form(None),
    published_at: Optional[datetime] = Form(None),
    cover_image: Optional[UploadFile] = File(None),
    post_service: PostService = Depends(get_post_service),
    file_store: FileStore = Depends(get_file_store),
):
    """
    Create a post authored by the current user.

    The slug is derived from the title unless one is given.

    Raises:
        422: Missing title/body, bad slug, taken slug, bad cover image
    """
    data = PostCreate(**_present(
        title=title,
        body=body,
        slug=slug,
        is_published=is_published,
        published_at=published_at,
    ))
    image = await _read_cover_image(cover_image)

    post = await post_service.create_post(
        user_id=current_user["user_id"],
        title=data.title,
        body=data.body,
        slug=data.slug,
        cover_image=image,
        is_published=data.is_published,
        published_at=data.published_at,
    )

    return DataResponse[PostResponse](
        message="Post created successfully",
        data=_build_post_response(post, file_store),
    )


@router.get("/{post_id}", response_model=DataResponse[PostResponse])
async def get_post(
    post_id: str,
    current_user: CurrentUser,
    post_service: PostService = Depends(get_post_service),
    file_store: FileStore = Depends(get_file_store),
):
    """Get a single live post."""
    post = await post_service.get_post(
        user_id=current_user["user_id"],
        post_id=_parse_post_id(post_id),
    )

    return DataResponse[PostResponse](
        message="Post retrieved successfully",
        data=_build_post_response(post, file_store),
    )


@router.put("/{post_id}", response_model=DataResponse[PostResponse])
async def update_post(
    post_id: str,
    current_user: CurrentUser,
    title: Optional[str] = Form(None),
    body: Optional[str] = Form(None),
    slug: Optional[str] = Form(None),
    is_published: Optional[bool] = Form(None),
    published_at: Optional[datetime] = Form(None),
    cover_image: Optional[UploadFile] = File(None),
    post_service: PostService = Depends(get_post_service),
    file_store: FileStore = Depends(get_file_store),
):
    """
    Update the fields that were sent.

    Changing the title keeps the existing slug.
    """
    parsed_id = _parse_post_id(post_id)
    data = PostUpdate(**_present(
        title=title,
        body=body,
        slug=slug,
        is_published=is_published,
        published_at=published_at,
    ))
    image = await _read_cover_image(cover_image)

    post = await post_service.update_post(
        user_id=current_user["user_id"],
        post_id=parsed_id,
        cover_image=image,
        **data.model_dump(exclude_unset=True),
    )

    return DataResponse[PostResponse](
        message="Post updated successfully",
        data=_build_post_response(post, file_store),
    )


@router.delete("/{post_id}", response_model=MessageResponse)
async def delete_post(
    post_id: str,
    current_user: CurrentUser,
    post_service: PostService = Depends(get_post_service),
):
    """Soft delete a post. It disappears from reads but can be restored."""
    await post_service.delete_post(
        user_id=current_user["user_id"],
        post_id=_parse_post_id(post_id),
    )

    return MessageResponse(message="Post deleted successfully")


@router.post("/{post_id}/restore", response_model=DataResponse[PostResponse])
async def restore_post(
    post_id: str,
    current_user: CurrentUser,
    post_service: PostService = Depends(get_post_service),
    file_store: FileStore = Depends(get_file_store),
):
    """Restore a soft-deleted post."""
    post = await post_service.restore_post(
        user_id=current_user["user_id"],
        post_id=_parse_post_id(post_id),
    )

    return DataResponse[PostResponse](
        message="Post restored successfully",
        data=_build_post_response(post, file_store),
    )
