"""
User lookup API endpoint.
"""

from __future__ import annotations

import logging
import re

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from core import envelope
from core.errors import StoreError, ValidationError

from .schemas import INT64_MAX, INT64_MIN, UserQuery
from .service import UserLookupService

logger = logging.getLogger(__name__)

router = APIRouter()

_INTEGER = re.compile(r"[+-]?[0-9]+")


def get_user_service(request: Request) -> UserLookupService:
    return request.app.state.user_service


def parse_user_query(raw_user_id: str | None) -> UserQuery:
    text = (raw_user_id or "").strip()
    if not text:
        raise ValidationError("user_id is required.", field="user_id")
    if not _INTEGER.fullmatch(text):
        raise ValidationError("user_id must be an integer.", field="user_id")
    value = int(text)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValidationError("user_id is out of range.", field="user_id")
    return UserQuery(user_id=value)


async def handle_user_query(raw_user_id: str | None, service: UserLookupService) -> envelope.Envelope:
    try:
        query = parse_user_query(raw_user_id)
    except ValidationError as exc:
        logger.info("user_query_rejected field=%s reason=%s", exc.field, exc.message)
        return envelope.Failure(exc.message, envelope.FailureKind.VALIDATION)

    try:
        user = await service.fetch_user(query.user_id)
    except StoreError as exc:
        logger.warning(
            "user_lookup_failed user_id=%s reason=%s detail=%s",
            query.user_id,
            exc.reason,
            exc.detail,
            extra={"backend": exc.backend, "reason": exc.reason, "error_code": exc.code},
        )
        return envelope.Failure(exc.public_message("user lookup"))

    return envelope.UserResult(user)


@router.get("/users")
async def get_user(
    user_id: str | None = Query(default=None),
    service: UserLookupService = Depends(get_user_service),
) -> JSONResponse:
    """
    Fetch one user by id. A missing row is `null` with status 200.
    """
    return envelope.render(await handle_user_query(user_id, service))
