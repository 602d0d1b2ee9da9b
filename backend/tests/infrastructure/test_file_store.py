"""Local File Store — upload acceptance rules and best-effort release.

Invariants:
    - Allowed MIME types stored under a UUID name with the MIME-derived extension
    - Disallowed MIME types and oversized files rejected with 422, nothing written
    - release() of a missing file does not raise
"""

import io
from pathlib import Path

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from lessonmap.core.errors import ValidationFailedError
from lessonmap.infrastructure.file_store import LocalFileStore


def _upload(data: bytes, content_type: str, filename: str = "photo.png") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(data),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.fixture
def store(tmp_path):
    return LocalFileStore(str(tmp_path / "images"), max_bytes=1_000)


async def test_accept_writes_file_with_uuid_name(store, tmp_path):
    path = await store.accept(_upload(b"png-bytes", "image/png", "../../etc/passwd"))

    stored = Path(path)
    assert stored.parent == tmp_path / "images"
    assert stored.suffix == ".png"
    assert stored.name != "passwd"
    assert stored.read_bytes() == b"png-bytes"


async def test_accept_uses_mime_extension(store):
    path = await store.accept(_upload(b"jpeg-bytes", "image/jpeg", "photo.png"))
    assert path.endswith(".jpeg")


async def test_rejects_disallowed_mime_type(store, tmp_path):
    with pytest.raises(ValidationFailedError) as exc_info:
        await store.accept(_upload(b"%PDF", "application/pdf", "doc.pdf"))

    assert exc_info.value.message == "Invalid mime type!"
    assert exc_info.value.http_status == 422
    assert not (tmp_path / "images").exists()


async def test_rejects_oversized_file(store, tmp_path):
    with pytest.raises(ValidationFailedError):
        await store.accept(_upload(b"x" * 1_001, "image/png"))

    assert not (tmp_path / "images").exists()


async def test_rejects_empty_file(store):
    with pytest.raises(ValidationFailedError):
        await store.accept(_upload(b"", "image/png"))


async def test_release_removes_file(store):
    path = await store.accept(_upload(b"png-bytes", "image/png"))

    await store.release(path)

    assert not Path(path).exists()


async def test_release_missing_file_is_swallowed(store, tmp_path):
    await store.release(str(tmp_path / "images" / "gone.png"))
