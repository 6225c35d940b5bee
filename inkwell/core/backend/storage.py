"""
File storage on the backend-as-a-service.

Uploads go to a named bucket and are served back through the bucket's public
URL. Object paths are always namespaced by the owning user's id.
"""

from __future__ import annotations

import re
import uuid
from typing import Optional

import httpx
from storage3.utils import StorageException
from supabase import AsyncClient

from inkwell.core.errors import BackendError, ValidationError
from inkwell.core.logging_config import get_logger

logger = get_logger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^\w.-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")


def file_extension(filename: str) -> str:
    """Text after the last dot of ``filename`` (the whole name when there is none)."""
    return filename.rsplit(".", 1)[-1]


def sanitize_file_name(filename: str) -> str:
    """Replace whitespace runs with ``_`` and drop anything but letters, digits, ``_``, ``.`` and ``-``."""
    return _UNSAFE_NAME_CHARS.sub("", _WHITESPACE.sub("_", filename))


def author_avatar_path(owner_id: str, filename: str) -> str:
    return f"{owner_id}/avatars/{uuid.uuid4()}.{file_extension(filename)}"


def user_avatar_path(owner_id: str, filename: str) -> str:
    return f"{owner_id}/avatar/{owner_id}-{uuid.uuid4()}.{file_extension(filename)}"


def poster_path(owner_id: str, filename: str) -> str:
    return f"{owner_id}/posters/{uuid.uuid4()}.{file_extension(filename)}"


def cover_path(owner_id: str, filename: str) -> str:
    return f"{owner_id}/covers/{uuid.uuid4()}.{file_extension(filename)}"


def book_file_path(owner_id: str, filename: str) -> str:
    return f"{owner_id}/files/{uuid.uuid4()}-{sanitize_file_name(filename)}"


def validate_cover_image(content_type: Optional[str], size_bytes: int, max_size_mb: float) -> None:
    """
    Reject covers that are not images or are too large.

    Raises:
        ValidationError: On a non-image content type or a size at or above the limit
    """
    if not content_type or not content_type.startswith("image/"):
        raise ValidationError("Only images can be uploaded as a cover")
    if size_bytes / 1024 / 1024 >= max_size_mb:
        raise ValidationError(f"Cover image must be smaller than {max_size_mb:g}MB")


class FileStorage:
    """Upload files to storage buckets and resolve their public URLs."""

    def __init__(self, client: AsyncClient) -> None:
        self.client = client

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        content_type: Optional[str] = None,
        upsert: bool = False,
        cache_control: Optional[str] = None,
    ) -> str:
        """
        Upload ``data`` to ``bucket/path``.

        Args:
            bucket: Storage bucket name
            path: Object path inside the bucket
            data: File content
            content_type: MIME type stored with the object
            upsert: Overwrite an existing object at the same path
            cache_control: Cache max-age in seconds, as a string

        Returns:
            The public URL of the stored object
        """
        file_options = {"upsert": "true" if upsert else "false"}
        if content_type:
            file_options["content-type"] = content_type
        if cache_control:
            file_options["cache-control"] = cache_control

        bucket_api = self.client.storage.from_(bucket)
        try:
            await bucket_api.upload(path=path, file=data, file_options=file_options)
            public_url = await bucket_api.get_public_url(path)
        except StorageException as e:
            logger.error(f"Upload to {bucket}/{path} failed: {e}")
            raise BackendError(f"Upload failed: {e}") from e
        except httpx.HTTPError as e:
            logger.error(f"Upload to {bucket}/{path} failed: {e}")
            raise BackendError(f"Upload failed: {e}") from e

        logger.debug(f"Uploaded {len(data)} bytes to {bucket}/{path}")
        return public_url
