"""Local File Store — accepts uploaded lesson images and releases them on delete.

Invariants:
    - Only allowed MIME types are stored; extension derived from MIME type, never from the client filename
    - Files larger than max_bytes are rejected before anything is written
    - Stored names are random UUIDs: client filenames never reach the filesystem
    - release() never raises: failures are logged (orphaned files are acceptable)

Design Decisions:
    - Blocking filesystem calls run in asyncio.to_thread: request loop never blocks on disk
    - accept() raises ValidationFailedError (422): a bad upload is a bad request
"""

import asyncio
import logging
import os
import uuid
from pathlib import Path

from fastapi import UploadFile

from lessonmap.core.errors import ValidationFailedError

logger = logging.getLogger(__name__)

MIME_TYPE_EXTENSIONS = {
    "image/png": "png",
    "image/jpeg": "jpeg",
    "image/jpg": "jpg",
}

_CHUNK_SIZE = 64 * 1024


class LocalFileStore:
    """FileStore protocol implementation over a local directory."""

    def __init__(
        self,
        upload_dir: str,
        max_bytes: int = 500_000,
        allowed_types: list[str] | None = None,
    ):
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.allowed_types = set(allowed_types or MIME_TYPE_EXTENSIONS)

    def ensure_directory(self) -> None:
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    async def accept(self, upload: UploadFile) -> str:
        """Validate and persist an uploaded image. Returns its stored path."""
        content_type = upload.content_type or ""
        extension = MIME_TYPE_EXTENSIONS.get(content_type)
        if content_type not in self.allowed_types or extension is None:
            raise ValidationFailedError("Invalid mime type!", "image")

        data = await self._read_limited(upload)
        path = self.upload_dir / f"{uuid.uuid4()}.{extension}"
        await asyncio.to_thread(self._write, path, data)
        logger.info("Image accepted", extra={"image_path": str(path)})
        return str(path)

    async def release(self, path: str) -> None:
        """Best-effort removal of a stored image."""
        try:
            await asyncio.to_thread(os.remove, path)
            logger.info("Image released", extra={"image_path": path})
        except OSError as e:
            logger.warning(
                f"Could not release image: {e}", extra={"image_path": path},
            )

    async def _read_limited(self, upload: UploadFile) -> bytes:
        chunks: list[bytes] = []
        total = 0
        while chunk := await upload.read(_CHUNK_SIZE):
            total += len(chunk)
            if total > self.max_bytes:
                raise ValidationFailedError(
                    f"Image exceeds the {self.max_bytes} byte limit.", "image",
                )
            chunks.append(chunk)
        if not total:
            raise ValidationFailedError("Image is empty.", "image")
        return b"".join(chunks)

    def _write(self, path: Path, data: bytes) -> None:
        self.ensure_directory()
        path.write_bytes(data)
