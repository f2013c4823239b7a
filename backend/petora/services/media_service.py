"""
Petora Backend - Media Intake Service
======================================

What:  Accepts pet images, names them, writes them under the upload root.
How:   Checks the declared MIME type (image/* only), reserves a filename of
       the form `<field>-<timestamp><ext>`, writes the bytes with aiofiles.
Who:   Called by PetService while creating a pet.
When:  After the pet fields validate, before the pet record is inserted.

Naming:
    image-1718000000123.jpg
    │     │             └── original extension, lowercased (may be empty)
    │     └── epoch milliseconds, strictly increasing within this process
    └── multipart field name

    Two uploads in the same millisecond get consecutive timestamps, so
    names never collide within a process.

Served at:
    The upload root is mounted at settings.upload_url_prefix (default
    /uploads). The value stored on the pet is the relative URL path,
    e.g. "uploads/image-1718000000123.jpg".

Not handled: size limits, content scanning, deduplication, and removal of
a written file when the following record insert fails.
"""

import logging
import time
from pathlib import Path
from typing import Optional

import aiofiles

from petora.exceptions import FileStorageError, ValidationError

logger = logging.getLogger(__name__)


class MediaService:
    """
    Stores uploaded images beneath `upload_root`.

    Args:
        upload_root: Directory receiving the files; created if absent.
        url_prefix:  URL prefix the directory is served under.
        field_name:  Multipart field name, also used as the filename stem.
    """

    def __init__(self, upload_root: str, url_prefix: str = "/uploads", field_name: str = "image"):
        self.upload_root = Path(upload_root).resolve()
        self.url_prefix = url_prefix.strip("/")
        self.field_name = field_name
        self._last_timestamp = 0
        self.upload_root.mkdir(parents=True, exist_ok=True)
        logger.info("MediaService initialized with upload_root=%s", self.upload_root)

    def validate_image(self, content_type: Optional[str], filename: Optional[str] = None) -> None:
        """
        Reject anything not declared as an image.

        Raises:
            ValidationError: content type missing or not image/*
        """
        if not content_type or not content_type.lower().startswith("image/"):
            raise ValidationError(
                message="Not an image! Please upload only images.",
                field=self.field_name,
                context={"content_type": content_type, "filename": filename},
            )

    def _next_timestamp(self) -> int:
        now = int(time.time() * 1000)
        # Single event loop: no lock needed around this counter
        self._last_timestamp = max(now, self._last_timestamp + 1)
        return self._last_timestamp

    def reserve_name(self, original_filename: Optional[str]) -> str:
        """Collision-free stored filename for an upload."""
        extension = Path(original_filename or "").suffix.lower()
        return f"{self.field_name}-{self._next_timestamp()}{extension}"

    def url_for(self, stored_name: str) -> str:
        """Relative URL path recorded on the pet, e.g. uploads/image-1.jpg."""
        return f"{self.url_prefix}/{stored_name}"

    def path_for(self, stored_name: str) -> Path:
        return self.upload_root / stored_name

    async def store(self, stored_name: str, content: bytes) -> Path:
        """
        Write the file under the upload root.

        Raises:
            FileStorageError: directory or file could not be written
        """
        path = self.path_for(stored_name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            async with aiofiles.open(path, "wb") as f:
                await f.write(content)
        except OSError as e:
            logger.error("Failed to store upload at %s: %s", path, str(e))
            raise FileStorageError(
                message="Failed to save uploaded image. Please try again.",
                context={"path": str(path), "os_error": str(e)},
            ) from e

        logger.info("Upload stored: %s (%d bytes)", stored_name, len(content))
        return path
