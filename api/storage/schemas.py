"""
Object fetch schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class StorageQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    bucket: str
    object: str


class FetchedObject(BaseModel):
    model_config = ConfigDict(frozen=True)

    content: str

    @classmethod
    def from_bytes(cls, raw: bytes) -> FetchedObject:
        # Lossy on purpose: invalid UTF-8 becomes U+FFFD and cannot be recovered.
        return cls(content=raw.decode("utf-8", errors="replace"))
