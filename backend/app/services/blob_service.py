"""
Blob storage for uploaded photo files.

Files are written under ``UPLOAD_DIR`` with a uuid name and served from
``STATIC_URL_PREFIX`` by the static mount in ``app.main``.
"""
import os
import uuid
import logging
from typing import Optional
from app.core.config import settings

logger = logging.getLogger(__name__)


class BlobStoreError(Exception):
    """Raised when a blob cannot be stored or deleted."""


class LocalBlobStore:
    """Blob store on the local filesystem."""

    def __init__(self, upload_dir: str = None, url_prefix: str = None):
        self.upload_dir = upload_dir or settings.UPLOAD_DIR
        self.url_prefix = (url_prefix or settings.STATIC_URL_PREFIX).rstrip("/")

    def _path_for(self, url: str) -> str:
        filename = os.path.basename(url)
        return os.path.join(self.upload_dir, filename)

    def store(self, data: bytes, content_type: str, filename: Optional[str] = None) -> str:
        """Persist the bytes and return the public URL."""
        os.makedirs(self.upload_dir, exist_ok=True)

        file_ext = os.path.splitext(filename)[1] if filename else ""
        unique_filename = f"{uuid.uuid4()}{file_ext}"
        file_path = os.path.join(self.upload_dir, unique_filename)

        try:
            with open(file_path, "wb") as buffer:
                buffer.write(data)
        except OSError as e:
            raise BlobStoreError(f"Failed to store {filename}: {e}") from e

        url = f"{self.url_prefix}/{unique_filename}"
        logger.info(f"Stored blob {filename} ({content_type}) -> {url}")
        return url

    def delete(self, url: str) -> None:
        """Remove the blob behind ``url``."""
        file_path = self._path_for(url)
        try:
            os.remove(file_path)
        except OSError as e:
            raise BlobStoreError(f"Failed to delete {url}: {e}") from e
        logger.info(f"Deleted blob {url}")
