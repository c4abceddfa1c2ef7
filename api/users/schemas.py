"""
User lookup schemas.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


class User(BaseModel):
    """
    One `users` row, read in a single SELECT. Field order is the wire order.
    """

    model_config = ConfigDict(frozen=True)

    user_id: int
    email_address: str | None = None
    created_at: int | None = None
    deleted: int | None = None
    settings: str | None = None


class UserQuery(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: int
