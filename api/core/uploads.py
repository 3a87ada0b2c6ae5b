"""
Image upload handling shared by program images and team photos.

- Validate uploads by filename extension
- Read file bytes with a size limit
- Push to object storage and return the public URL
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from fastapi import HTTPException, UploadFile

from . import settings, storage

ALLOWED_IMAGE_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredImage:
    filename: str
    size_bytes: int
    url: str


def _file_ext(filename: str) -> str:
    return Path(filename).suffix.lower()


def validate_image(file: UploadFile) -> str:
    """
    Return the normalized file extension if this upload is acceptable.

    `content_type` is often missing or wrong, so the extension decides.
    """
    if not file.filename:
        raise HTTPException(status_code=400, detail="Missing filename.")

    ext = _file_ext(file.filename)
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type '{ext}'. Allowed: {sorted(ALLOWED_IMAGE_EXTENSIONS)}",
        )
    return ext


async def read_upload_bytes(file: UploadFile, max_bytes: int) -> bytes:
    """
    Read the upload into memory, enforcing a maximum size.
    """
    chunk_size = 1024 * 1024  # 1 MiB
    buf = bytearray()

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        buf.extend(chunk)
        if len(buf) > max_bytes:
            raise HTTPException(
                status_code=413,
                detail=f"File too large. Max is {max_bytes} bytes.",
            )

    if not buf:
        raise HTTPException(status_code=400, detail="Uploaded file is empty.")
    return bytes(buf)


async def store_image(file: UploadFile, *, bucket: str, folder: str | None = None) -> StoredImage:
    validate_image(file)
    data = await read_upload_bytes(file, max_bytes=settings.max_upload_bytes())

    try:
        url = await storage.upload(
            bucket,
            filename=file.filename or "",
            data=data,
            content_type=file.content_type,
            folder=folder,
        )
    except storage.StorageError as exc:
        logger.warning("Image upload to %s failed: %s", bucket, exc)
        raise HTTPException(status_code=502, detail=f"Upload failed: {exc}") from exc

    return StoredImage(filename=file.filename or "", size_bytes=len(data), url=url)


async def remove_image(bucket: str, url: str | None) -> bool:
    """
    Best-effort removal of a stored object; the DB row is the source of truth.
    """
    if not url:
        return False
    try:
        return await storage.delete_by_url(bucket, url)
    except storage.StorageError as exc:
        logger.warning("Could not delete %s from %s: %s", url, bucket, exc)
        return False
