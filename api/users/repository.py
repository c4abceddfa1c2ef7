"""
User persistence (raw SQL, read-only).
"""

from __future__ import annotations

from typing import Any

from core import db


async def get_user_row(source: db.RowSource, user_id: int) -> dict[str, Any] | None:
    # `user_id` is unique in the schema; at most one row comes back.
    return await db.fetch_one(
        source,
        """
        SELECT user_id, email_address, created_at, deleted, settings
        FROM users
        WHERE user_id = $1
        """,
        user_id,
    )
