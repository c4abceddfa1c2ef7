"""
User lookup service.

Wraps the shared pool; holds no other state. Absence is returned as None,
only backend failures raise (core.errors.StoreError).
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from core import db

from . import repository
from .schemas import User


def _as_epoch(value: Any) -> int | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        # `timestamp without time zone` columns arrive naive and hold UTC.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return int(value.timestamp())
    return int(value)


def _as_int(value: Any) -> int | None:
    return None if value is None else int(value)


def row_to_user(row: dict[str, Any]) -> User:
    return User(
        user_id=int(row["user_id"]),
        email_address=row["email_address"],
        created_at=_as_epoch(row["created_at"]),
        deleted=_as_int(row["deleted"]),
        settings=row["settings"],
    )


class UserLookupService:
    def __init__(self, source: db.RowSource):
        self._source = source

    async def fetch_user(self, user_id: int) -> User | None:
        row = await repository.get_user_row(self._source, user_id)
        if row is None:
            return None
        return row_to_user(row)
