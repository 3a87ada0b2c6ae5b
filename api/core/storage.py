"""
Object storage HTTP client helpers.

Talks to a Supabase-compatible storage REST API.

Used endpoints:
- POST   /storage/v1/object/{bucket}/{path}   -> upload bytes
- DELETE /storage/v1/object/{bucket}          -> {"prefixes": [path, ...]}
- Public objects are served from /storage/v1/object/public/{bucket}/{path}
"""

from __future__ import annotations

import secrets
from pathlib import PurePosixPath

import httpx

from . import settings

PROGRAM_IMAGES_BUCKET = "program-images"
TEAM_PHOTOS_BUCKET = "team-photos"


class StorageError(RuntimeError):
    pass


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise StorageError("STORAGE_URL is empty.")
    return base_url.rstrip("/")


def _auth_headers(service_key: str) -> dict[str, str]:
    key = (service_key or "").strip()
    if not key:
        raise StorageError("STORAGE_SERVICE_KEY is empty.")
    return {"Authorization": f"Bearer {key}", "apikey": key}


def object_name(filename: str, *, folder: str | None = None) -> str:
    """
    Random object name that keeps the original extension.
    """
    ext = PurePosixPath(filename or "").suffix.lower()
    name = f"{secrets.token_urlsafe(12)}{ext}"
    folder = (folder or "").strip("/")
    return f"{folder}/{name}" if folder else name


def public_url(bucket: str, path: str, *, base_url: str | None = None) -> str:
    base = _normalize_base_url(base_url if base_url is not None else settings.storage_url())
    return f"{base}/storage/v1/object/public/{bucket}/{path}"


def path_from_public_url(bucket: str, url: str) -> str | None:
    """
    Recover the object path from a public URL; None if it is not in `bucket`.
    """
    parts = (url or "").split(f"{bucket}/", 1)
    if len(parts) < 2 or not parts[1]:
        return None
    return parts[1]


async def upload(
    bucket: str,
    *,
    filename: str,
    data: bytes,
    content_type: str | None = None,
    folder: str | None = None,
    timeout_s: float = 60.0,
) -> str:
    """
    Upload `data` into `bucket` and return its public URL.
    """
    base_url = _normalize_base_url(settings.storage_url())
    headers = _auth_headers(settings.storage_service_key())
    headers["Content-Type"] = content_type or "application/octet-stream"
    path = object_name(filename, folder=folder)

    async with httpx.AsyncClient(base_url=base_url, timeout=timeout_s) as client:
        resp = await client.post(f"/storage/v1/object/{bucket}/{path}", content=data, headers=headers)

    if resp.status_code not in (200, 201):
        body = resp.text[:500]
        raise StorageError(f"Storage upload failed: {resp.status_code} {body}")

    return public_url(bucket, path, base_url=base_url)


async def delete_by_url(bucket: str, url: str, *, timeout_s: float = 30.0) -> bool:
    """
    Delete the object behind a public URL. Returns False when the URL does not
    point into `bucket` (nothing to delete).
    """
    path = path_from_public_url(bucket, url)
    if path is None:
        return False

    base_url = _normalize_base_url(settings.storage_url())
    headers = _auth_headers(settings.storage_service_key())

    async with httpx.AsyncClient(base_url=base_url, timeout=timeout_s) as client:
        resp = await client.request(
            "DELETE",
            f"/storage/v1/object/{bucket}",
            json={"prefixes": [path]},
            headers=headers,
        )

    if resp.status_code != 200:
        body = resp.text[:500]
        raise StorageError(f"Storage delete failed: {resp.status_code} {body}")
    return True
