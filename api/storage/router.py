"""
Object fetch API endpoint.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from core import envelope
from core.errors import StoreError, ValidationError

from .schemas import FetchedObject, StorageQuery
from .service import ObjectFetchService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_object_service(request: Request) -> ObjectFetchService:
    return request.app.state.object_service


def parse_storage_query(raw_bucket: str | None, raw_object: str | None) -> StorageQuery:
    bucket = raw_bucket or ""
    key = raw_object or ""
    # Names are passed through as given; whitespace-only names are rejected.
    if not bucket.strip():
        raise ValidationError("bucket is required.", field="bucket")
    if not key.strip():
        raise ValidationError("object is required.", field="object")
    return StorageQuery(bucket=bucket, object=key)


async def handle_object_query(
    raw_bucket: str | None,
    raw_object: str | None,
    service: ObjectFetchService,
) -> envelope.Envelope:
    try:
        query = parse_storage_query(raw_bucket, raw_object)
    except ValidationError as exc:
        logger.info("object_query_rejected field=%s reason=%s", exc.field, exc.message)
        return envelope.Failure(exc.message, envelope.FailureKind.VALIDATION)

    try:
        raw = await service.fetch_object(query.bucket, query.object)
    except StoreError as exc:
        logger.warning(
            "object_fetch_failed bucket=%s object=%s reason=%s detail=%s",
            query.bucket,
            query.object,
            exc.reason,
            exc.detail,
            extra={"backend": exc.backend, "reason": exc.reason, "error_code": exc.code},
        )
        return envelope.Failure(exc.public_message("object fetch"))

    return envelope.ObjectResult(FetchedObject.from_bytes(raw))


@router.get("/storage")
async def get_object(
    bucket: str | None = Query(default=None),
    object_name: str | None = Query(default=None, alias="object"),
    service: ObjectFetchService = Depends(get_object_service),
) -> JSONResponse:
    """
    Fetch one object, fully buffered, as lossy UTF-8 text.
    """
    return envelope.render(await handle_object_query(bucket, object_name, service))
