"""
Blob store HTTP client helpers (Google Cloud Storage JSON API).

Used endpoint:
- GET /storage/v1/b/{bucket}/o/{object}?alt=media  -> raw object bytes

One `httpx.AsyncClient` is created at startup and shared by all requests;
httpx pools connections internally.
"""

from __future__ import annotations

import logging
from urllib.parse import quote

import httpx

from .config import Settings
from .errors import StoreError

BACKEND = "object store"

logger = logging.getLogger(__name__)


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise RuntimeError("STORAGE_BASE_URL is empty.")
    return base_url.rstrip("/")


def create_client(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    base_url = _normalize_base_url(settings.storage_base_url)
    headers: dict[str, str] = {}
    if settings.storage_access_token:
        headers["Authorization"] = f"Bearer {settings.storage_access_token}"
    logger.info(
        "blob_client_ready base_url=%s credentials=%s",
        base_url,
        "configured" if headers else "absent",
    )
    return httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=settings.storage_timeout,
        transport=transport,
    )


def object_path(bucket: str, key: str) -> str:
    # Object names may contain "/", which must be encoded as a single segment.
    return f"/storage/v1/b/{quote(bucket, safe='')}/o/{quote(key, safe='')}"


def _reason_for_status(status_code: int) -> str:
    if status_code == 404:
        return "not_found"
    if status_code in (401, 403):
        return "permission_denied"
    if status_code in (429, 502, 503, 504):
        return "unavailable"
    return "backend_error"


async def download_object(client: httpx.AsyncClient, bucket: str, key: str) -> bytes:
    """
    Download the whole object into memory.
    """
    try:
        resp = await client.get(object_path(bucket, key), params={"alt": "media"})
    except httpx.HTTPError as exc:
        raise StoreError(BACKEND, "unavailable", f"{type(exc).__name__}: {exc}") from exc

    if resp.status_code != 200:
        # Avoid dumping huge bodies; include a small snippet.
        body = resp.text[:500]
        raise StoreError(
            BACKEND,
            _reason_for_status(resp.status_code),
            f"{resp.status_code} {body}",
        )

    return resp.content
