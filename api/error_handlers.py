"""
Global exception handlers.

Anything that escapes a route is still answered with a Failure envelope, so
clients only ever see one error body shape.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core import envelope
from core.errors import GatewayError, StoreError

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.info("request_invalid path=%s errors=%s", request.url.path, exc.errors())
        return envelope.render(envelope.Failure("Invalid request parameters.", envelope.FailureKind.VALIDATION))

    @app.exception_handler(GatewayError)
    async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
        logger.error("gateway_error path=%s error=%s", request.url.path, exc, extra={"error_code": exc.code})
        if isinstance(exc, StoreError):
            return envelope.render(envelope.Failure(exc.public_message("request")))
        kind = envelope.FailureKind.VALIDATION if exc.http_status == 400 else envelope.FailureKind.INTERNAL
        return envelope.render(envelope.Failure(exc.message, kind))

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
        # Never leaks internal details.
        logger.exception("unhandled_error path=%s", request.url.path, extra={"path": request.url.path})
        return envelope.render(envelope.Failure("internal error", envelope.FailureKind.INTERNAL))
