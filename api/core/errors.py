"""
Error taxonomy for the gateway.

- ValidationError: malformed/missing query parameters (client error, 400).
- StoreError: relational or blob backend failure (server error, 500).

Absence of a user row is not an error and has no class here.
"""

from __future__ import annotations


class GatewayError(Exception):
    code = "GATEWAY_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(GatewayError):
    code = "VALIDATION_ERROR"
    http_status = 400

    def __init__(self, message: str, *, field: str):
        super().__init__(message)
        self.field = field


class StoreError(GatewayError):
    """
    A backend call failed.

    `detail` is the raw backend text and is only meant for logs. `reason` is a
    coarse category that is safe to show to clients.
    """

    code = "STORE_ERROR"

    def __init__(self, backend: str, reason: str, detail: str = ""):
        super().__init__(f"{backend} {reason}: {detail}" if detail else f"{backend} {reason}")
        self.backend = backend
        self.reason = reason
        self.detail = detail

    def public_message(self, operation: str) -> str:
        """
        Client-facing text: operation plus category, never the raw detail.
        """
        return f"{operation} failed: {self.reason.replace('_', ' ')}"
