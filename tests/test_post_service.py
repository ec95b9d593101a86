"""PostService tests."""

import uuid
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import AsyncMock

import pytest

from src.shared.core.exceptions import PostNotFoundError, StorageError, ValidationError
from src.shared.repositories.post_repository import PostRepository
from src.shared.services.auth_service import AuthService
from src.shared.services.post_service import CoverImage, PostService


@pytest.fixture
async def author(db):
    return await AuthService(db).register_user("Author", "author@example.com", "password123")


@pytest.fixture
def post_service(db, file_store):
    return PostService(db, file_store)


def _image(content: bytes = b"\xff\xd8\xff fake jpeg") -> CoverImage:
    return CoverImage(content=content, extension="jpg", content_type="image/jpeg")


async def test_create_post_derives_slug(post_service, author):
    """Without an explicit slug, the slug comes from the title."""
    post = await post_service.create_post(author.id, "My Awesome Post Title", "Body")

    assert post.slug == "my-awesome-post-title"
    assert post.user_id == author.id
    assert post.cover_image is None
    assert post.is_published is False
    assert post.published_at is None
    assert post.deleted_at is None


async def test_create_post_explicit_slug(post_service, author):
    post = await post_service.create_post(author.id, "Title", "Body", slug="custom-slug")

    assert post.slug == "custom-slug"


async def test_create_post_slug_collision(post_service, author):
    """Re-deriving the same slug fails unless a distinct slug is given."""
    await post_service.create_post(author.id, "My Awesome Post Title", "Body")

    with pytest.raises(ValidationError) as exc_info:
        await post_service.create_post(author.id, "My Awesome Post Title", "Other body")
    assert "slug" in exc_info.value.details

    second = await post_service.create_post(
        author.id, "My Awesome Post Title", "Other body", slug="my-awesome-post-title-2"
    )
    assert second.slug == "my-awesome-post-title-2"


async def test_create_post_title_without_slug_characters(post_service, author):
    with pytest.raises(ValidationError):
        await post_service.create_post(author.id, "!!!", "Body")


async def test_create_post_stores_cover_image(post_service, author, file_store):
    """The post keeps the storage key; the bytes land in the file store."""
    post = await post_service.create_post(author.id, "With Image", "Body", cover_image=_image())

    assert post.cover_image.startswith("posts/")
    assert post.cover_image.endswith(".jpg")
    stored = Path(file_store.root) / post.cover_image
    assert stored.read_bytes() == b"\xff\xd8\xff fake jpeg"


async def test_create_post_slug_checked_before_image_written(db, author):
    """A rejected slug leaves nothing in the file store."""
    store = AsyncMock()
    service = PostService(db, store)
    await service.create_post(author.id, "Taken", "Body")

    with pytest.raises(ValidationError):
        await service.create_post(author.id, "Taken", "Body", cover_image=_image())

    store.put.assert_not_called()


async def test_create_post_storage_failure_persists_nothing(db, author):
    """When the image cannot be stored, no post is created."""
    store = AsyncMock()
    store.put.side_effect = StorageError("Failed to store file")
    service = PostService(db, store)

    with pytest.raises(StorageError):
        await service.create_post(author.id, "Title", "Body", cover_image=_image())

    assert await service.repo.count_active() == 0


async def test_create_published_post_stamps_published_at(post_service, author):
    post = await post_service.create_post(author.id, "Live", "Body", is_published=True)

    assert post.is_published is True
    assert post.published_at is not None


async def test_create_post_keeps_explicit_published_at(post_service, author):
    when = datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc)

    post = await post_service.create_post(
        author.id, "Scheduled", "Body", is_published=True, published_at=when
    )

    assert post.published_at.replace(tzinfo=timezone.utc) == when


async def test_get_post_not_found(post_service, author):
    with pytest.raises(PostNotFoundError):
        await post_service.get_post(author.id, uuid.uuid4())


async def test_update_title_keeps_slug(post_service, author):
    """Changing the title does not regenerate the slug."""
    post = await post_service.create_post(author.id, "Original Title", "Body")

    updated = await post_service.update_post(author.id, post.id, title="Brand New Title")

    assert updated.title == "Brand New Title"
    assert updated.slug == "original-title"
    assert updated.body == "Body"


async def test_update_explicit_slug(post_service, author):
    post = await post_service.create_post(author.id, "Original Title", "Body")

    updated = await post_service.update_post(author.id, post.id, slug="renamed")

    assert updated.slug == "renamed"


async def test_update_slug_collision(post_service, author):
    await post_service.create_post(author.id, "First", "Body")
    second = await post_service.create_post(author.id, "Second", "Body")

    with pytest.raises(ValidationError):
        await post_service.update_post(author.id, second.id, slug="first")


async def test_update_keeping_own_slug_is_allowed(post_service, author):
    post = await post_service.create_post(author.id, "Mine", "Body")

    updated = await post_service.update_post(author.id, post.id, slug="mine", body="New body")

    assert updated.slug == "mine"
    assert updated.body == "New body"


async def test_update_cover_image_keeps_old_file(post_service, author, file_store):
    """Replacing the cover image leaves the previous file in place."""
    post = await post_service.create_post(author.id, "Photo", "Body", cover_image=_image(b"old"))
    old_key = post.cover_image

    updated = await post_service.update_post(author.id, post.id, cover_image=_image(b"new"))

    assert updated.cover_image != old_key
    assert (Path(file_store.root) / old_key).read_bytes() == b"old"
    assert (Path(file_store.root) / updated.cover_image).read_bytes() == b"new"


async def test_update_missing_post(post_service, author):
    with pytest.raises(PostNotFoundError):
        await post_service.update_post(author.id, uuid.uuid4(), title="Nope")


async def test_soft_delete_hides_post(post_service, author):
    """Deleted posts vanish from reads but stay in storage."""
    post = await post_service.create_post(author.id, "Doomed", "Body")

    deleted = await post_service.delete_post(author.id, post.id)

    assert deleted.deleted_at is not None
    with pytest.raises(PostNotFoundError):
        await post_service.get_post(author.id, post.id)
    with pytest.raises(PostNotFoundError):
        await post_service.delete_post(author.id, post.id)
    page = await post_service.list_posts(author.id)
    assert page.total == 0

    repo = PostRepository(post_service.session)
    assert (await repo.find(post.id, include_deleted=True)) is not None


async def test_restore_preserves_author_and_created_at(post_service, author):
    post = await post_service.create_post(author.id, "Comeback", "Body")
    created_at = post.created_at
    await post_service.delete_post(author.id, post.id)

    restored = await post_service.restore_post(author.id, post.id)

    assert restored.deleted_at is None
    assert restored.user_id == author.id
    assert restored.created_at == created_at
    assert (await post_service.get_post(author.id, post.id)).id == post.id


async def test_restore_live_post_is_noop(post_service, author):
    post = await post_service.create_post(author.id, "Alive", "Body")

    restored = await post_service.restore_post(author.id, post.id)

    assert restored.id == post.id
    assert restored.deleted_at is None


async def test_restore_unknown_post(post_service, author):
    with pytest.raises(PostNotFoundError):
        await post_service.restore_post(author.id, uuid.uuid4())


async def test_deleted_post_releases_slug(post_service, author):
    """A soft-deleted post's slug can be reused, which then blocks its restore."""
    old = await post_service.create_post(author.id, "Reused", "Body")
    await post_service.delete_post(author.id, old.id)

    new = await post_service.create_post(author.id, "Reused", "Body")
    assert new.slug == "reused"

    with pytest.raises(ValidationError):
        await post_service.restore_post(author.id, old.id)


async def test_list_posts_newest_first_with_pagination(post_service, author):
    for i in range(3):
        await post_service.create_post(author.id, f"Post {i}", "Body")

    first_page = await post_service.list_posts(author.id, page=1, page_size=2)
    second_page = await post_service.list_posts(author.id, page=2, page_size=2)

    assert [p.title for p in first_page.items] == ["Post 2", "Post 1"]
    assert [p.title for p in second_page.items] == ["Post 0"]
    assert first_page.total == 3
    assert second_page.total == 3
    assert (second_page.page, second_page.page_size) == (2, 2)


async def test_list_posts_rejects_bad_page(post_service, author):
    with pytest.raises(ValidationError):
        await post_service.list_posts(author.id, page=0)
