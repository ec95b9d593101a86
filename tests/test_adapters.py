"""File store and Google OAuth adapter tests."""

from unittest.mock import MagicMock, patch

import httpx
import pytest
from botocore.exceptions import ClientError

from src.shared.adapters.file_store import LocalFileStore, S3FileStore, get_file_store
from src.shared.adapters.google_oauth import GoogleOAuthAdapter, OAuthVerificationError
from src.shared.core.exceptions import StorageError


class TestLocalFileStore:
    """Tests for the local disk backend."""

    async def test_put_writes_file_under_directory(self, tmp_path):
        store = LocalFileStore(root=str(tmp_path), base_url="http://cdn.example.com/storage/")

        key = await store.put("posts", b"image-bytes", extension="png")

        assert key.startswith("posts/")
        assert key.endswith(".png")
        assert (tmp_path / key).read_bytes() == b"image-bytes"

    async def test_keys_are_unique(self, tmp_path):
        store = LocalFileStore(root=str(tmp_path), base_url="http://test/storage")

        first = await store.put("posts", b"a", extension="jpg")
        second = await store.put("posts", b"a", extension="jpg")

        assert first != second

    def test_url_is_fully_qualified(self, tmp_path):
        store = LocalFileStore(root=str(tmp_path), base_url="http://cdn.example.com/storage/")

        assert store.url("posts/abc.jpg") == "http://cdn.example.com/storage/posts/abc.jpg"

    async def test_write_failure_raises_storage_error(self, tmp_path):
        blocker = tmp_path / "not-a-directory"
        blocker.write_bytes(b"")
        store = LocalFileStore(root=str(blocker), base_url="http://test/storage")

        with pytest.raises(StorageError):
            await store.put("posts", b"data", extension="jpg")


class TestS3FileStore:
    """Tests for the S3 backend with a mocked boto3 client."""

    def _store(self):
        store = S3FileStore(bucket="quill-covers", region="eu-west-1")
        store._client = MagicMock()
        return store

    async def test_put_uploads_object(self):
        store = self._store()

        key = await store.put("posts", b"bytes", extension="jpg", content_type="image/jpeg")

        store.client.put_object.assert_called_once_with(
            Bucket="quill-covers",
            Key=key,
            Body=b"bytes",
            ContentType="image/jpeg",
        )
        assert key.startswith("posts/")

    async def test_put_failure_raises_storage_error(self):
        store = self._store()
        store.client.put_object.side_effect = ClientError(
            {"Error": {"Code": "AccessDenied", "Message": "Access Denied"}},
            "PutObject",
        )

        with pytest.raises(StorageError):
            await store.put("posts", b"bytes", extension="jpg")

    def test_default_url_is_bucket_host(self):
        with patch("src.shared.adapters.file_store.settings") as mock_settings:
            mock_settings.STORAGE_URL = ""
            store = S3FileStore(bucket="quill-covers", region="eu-west-1")

        assert store.url("posts/a.jpg") == (
            "https://quill-covers.s3.eu-west-1.amazonaws.com/posts/a.jpg"
        )


class TestGetFileStore:
    def setup_method(self):
        get_file_store.cache_clear()

    def teardown_method(self):
        get_file_store.cache_clear()

    def test_local_backend(self):
        with patch("src.shared.adapters.file_store.settings") as mock_settings:
            mock_settings.STORAGE_BACKEND = "local"
            mock_settings.STORAGE_ROOT = "storage/app/public"
            mock_settings.storage_base_url = "http://test/storage"
            assert isinstance(get_file_store(), LocalFileStore)

    def test_unknown_backend(self):
        with patch("src.shared.adapters.file_store.settings") as mock_settings:
            mock_settings.STORAGE_BACKEND = "ftp"
            with pytest.raises(ValueError):
                get_file_store()


def _google(handler) -> GoogleOAuthAdapter:
    return GoogleOAuthAdapter(
        userinfo_url="https://google.test/userinfo",
        timeout=1.0,
        transport=httpx.MockTransport(handler),
    )


class TestGoogleOAuthAdapter:
    """Tests for Google userinfo lookups over a mock transport."""

    async def test_fetch_identity(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["authorization"] = request.headers["Authorization"]
            return httpx.Response(
                200,
                json={
                    "sub": "1234",
                    "email": "grace@example.com",
                    "name": "Grace",
                    "email_verified": True,
                },
            )

        identity = await _google(handler).fetch_identity("access-token")

        assert seen["authorization"] == "Bearer access-token"
        assert identity.id == "1234"
        assert identity.email == "grace@example.com"
        assert identity.name == "Grace"

    async def test_name_falls_back_to_email(self):
        def handler(request):
            return httpx.Response(200, json={"sub": "1234", "email": "grace@example.com"})

        identity = await _google(handler).fetch_identity("access-token")

        assert identity.name == "grace"

    @pytest.mark.parametrize(
        "status_code, payload",
        [
            (401, {"error": "invalid_token"}),
            (200, {"email": "grace@example.com"}),
            (200, {"sub": "1234"}),
            (200, {"sub": "1234", "email": "grace@example.com", "email_verified": False}),
        ],
    )
    async def test_rejected_tokens(self, status_code, payload):
        def handler(request):
            return httpx.Response(status_code, json=payload)

        with pytest.raises(OAuthVerificationError):
            await _google(handler).fetch_identity("access-token")

    async def test_network_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(OAuthVerificationError):
            await _google(handler).fetch_identity("access-token")
