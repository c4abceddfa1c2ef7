"""
Response envelope: the one place where a lookup outcome becomes an HTTP
status and body.

Variants:
- UserResult(user | None)  -> 200, user object or `null`
- ObjectResult(obj)        -> 200, {"content": "..."}
- Failure(message, kind)   -> 400 (validation) / 500 (backend, internal),
                              body is the message as a JSON string

Absence (`UserResult(None)`) is a success. Only a backend malfunction is a
failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

from fastapi.responses import JSONResponse

if TYPE_CHECKING:
    from storage.schemas import FetchedObject
    from users.schemas import User


class FailureKind(str, Enum):
    VALIDATION = "validation"
    BACKEND = "backend"
    INTERNAL = "internal"


_FAILURE_STATUS = {
    FailureKind.VALIDATION: 400,
    FailureKind.BACKEND: 500,
    FailureKind.INTERNAL: 500,
}


@dataclass(frozen=True)
class UserResult:
    user: User | None


@dataclass(frozen=True)
class ObjectResult:
    obj: FetchedObject


@dataclass(frozen=True)
class Failure:
    message: str
    kind: FailureKind = FailureKind.BACKEND


Envelope = Union[UserResult, ObjectResult, Failure]


def status_code(envelope: Envelope) -> int:
    if isinstance(envelope, (UserResult, ObjectResult)):
        return 200
    if isinstance(envelope, Failure):
        return _FAILURE_STATUS[envelope.kind]
    raise TypeError(f"Unknown envelope variant: {type(envelope).__name__}")


def body(envelope: Envelope) -> Any:
    """
    JSON-ready body for an envelope.
    """
    if isinstance(envelope, UserResult):
        return envelope.user.model_dump(mode="json") if envelope.user is not None else None
    if isinstance(envelope, ObjectResult):
        return envelope.obj.model_dump(mode="json")
    if isinstance(envelope, Failure):
        return envelope.message
    raise TypeError(f"Unknown envelope variant: {type(envelope).__name__}")


def render(envelope: Envelope) -> JSONResponse:
    return JSONResponse(status_code=status_code(envelope), content=body(envelope))
