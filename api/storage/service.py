"""
Object fetch service.

Wraps the shared blob client. Every backend failure surfaces as
core.errors.StoreError; there is no retry and no partial read.
"""

from __future__ import annotations

import httpx

from core import blobstore


class ObjectFetchService:
    def __init__(self, client: httpx.AsyncClient):
        self._client = client

    async def fetch_object(self, bucket: str, key: str) -> bytes:
        if not bucket or not key:
            raise ValueError("bucket and key must be non-empty.")
        return await blobstore.download_object(self._client, bucket, key)
