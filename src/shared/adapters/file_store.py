"""
File store adapters - cover image blob storage.

Provides:
- FileStore: the contract the post service relies on
- LocalFileStore: files on local disk, served by the API under /storage
- S3FileStore: objects in an S3 bucket

Keys are storage-relative ("posts/3f2a...e1.jpg"). Only the key is persisted;
url() turns it into a fully-qualified URL when a post is serialized.
"""

import asyncio
import logging
import uuid
from abc import ABC, abstractmethod
from functools import lru_cache
from pathlib import Path
from typing import Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from ...config.settings import settings
from ..core.exceptions import StorageError

logger = logging.getLogger(__name__)


class FileStore(ABC):
    """Durable blob storage for uploaded files."""

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    @staticmethod
    def make_key(directory: str, extension: str = "") -> str:
        """Random, collision-free key inside a directory."""
        suffix = f".{extension.lstrip('.').lower()}" if extension else ""
        return f"{directory.strip('/')}/{uuid.uuid4().hex}{suffix}"

    @abstractmethod
    async def put(
        self,
        directory: str,
        content: bytes,
        extension: str = "",
        content_type: Optional[str] = None,
    ) -> str:
        """
        Store content under directory and return its key.

        Raises:
            StorageError: If the write fails
        """

    def url(self, key: str) -> str:
        """Fully-qualified retrieval URL for a key."""
        return f"{self.base_url}/{key.lstrip('/')}"


class LocalFileStore(FileStore):
    """
    Stores files below a root directory on local disk.

    The API mounts the root at /storage, so the default base URL is
    APP_URL/storage.
    """

    def __init__(self, root: Optional[str] = None, base_url: Optional[str] = None):
        """
        Initialize local file store.

        Args:
            root: Directory that keys are relative to
            base_url: Public URL the root is served from
        """
        super().__init__(base_url or settings.storage_base_url)
        self.root = Path(root or settings.STORAGE_ROOT)

    async def put(
        self,
        directory: str,
        content: bytes,
        extension: str = "",
        content_type: Optional[str] = None,
    ) -> str:
        key = self.make_key(directory, extension)
        path = self.root / key
        try:
            await asyncio.to_thread(self._write, path, content)
        except OSError as e:
            logger.error(f"Failed to write {path}: {e}")
            raise StorageError("Failed to store file") from e

        logger.info(f"Stored {len(content)} bytes at {key}")
        return key

    @staticmethod
    def _write(path: Path, content: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content)


class S3FileStore(FileStore):
    """
    Stores files as objects in an S3 bucket.

    Handles:
    - Lazy boto3 client creation (explicit keys or default credential chain)
    - Uploads with content type
    - Public URLs (STORAGE_URL, e.g. a CDN, or the bucket's virtual-host URL)
    """

    def __init__(
        self,
        bucket: Optional[str] = None,
        region: Optional[str] = None,
        aws_access_key_id: Optional[str] = None,
        aws_secret_access_key: Optional[str] = None,
        base_url: Optional[str] = None,
    ):
        """
        Initialize S3 file store.

        Args:
            bucket: Bucket name
            region: AWS region
            aws_access_key_id: AWS access key
            aws_secret_access_key: AWS secret key
            base_url: Public URL prefix for object keys
        """
        self.bucket = bucket or settings.S3_BUCKET
        self.region = region or settings.AWS_REGION
        self.aws_access_key_id = aws_access_key_id or settings.AWS_ACCESS_KEY_ID
        self.aws_secret_access_key = aws_secret_access_key or settings.AWS_SECRET_ACCESS_KEY
        super().__init__(
            base_url
            or settings.STORAGE_URL
            or f"https://{self.bucket}.s3.{self.region}.amazonaws.com"
        )
        self._client = None

    @property
    def client(self):
        """Lazy-loaded S3 client."""
        if self._client is None:
            if self.aws_access_key_id and self.aws_secret_access_key:
                self._client = boto3.client(
                    "s3",
                    region_name=self.region,
                    aws_access_key_id=self.aws_access_key_id,
                    aws_secret_access_key=self.aws_secret_access_key,
                )
            else:
                # Use default credentials (IAM role, environment, etc.)
                self._client = boto3.client("s3", region_name=self.region)
        return self._client

    async def put(
        self,
        directory: str,
        content: bytes,
        extension: str = "",
        content_type: Optional[str] = None,
    ) -> str:
        key = self.make_key(directory, extension)
        params = {
            "Bucket": self.bucket,
            "Key": key,
            "Body": content,
        }
        if content_type:
            params["ContentType"] = content_type

        try:
            await asyncio.to_thread(self.client.put_object, **params)
        except (ClientError, BotoCoreError) as e:
            logger.error(f"Failed to upload {key} to {self.bucket}: {e}")
            raise StorageError("Failed to store file") from e

        logger.info(f"Uploaded {key} to {self.bucket}")
        return key


@lru_cache
def get_file_store() -> FileStore:
    """
    File store selected by STORAGE_BACKEND.

    Raises:
        ValueError: If STORAGE_BACKEND is not 'local' or 's3'
    """
    backend = settings.STORAGE_BACKEND.lower()
    if backend == "local":
        return LocalFileStore()
    if backend == "s3":
        return S3FileStore()
    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.STORAGE_BACKEND}")
