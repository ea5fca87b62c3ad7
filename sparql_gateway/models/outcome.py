"""Query outcome types returned by the gateway.

Every gateway call produces exactly one of ``QuerySuccess`` or
``QueryFailure``. Failures carry a ``FailureKind`` which maps onto one of the
two machine-readable API error codes.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from pydantic import JsonValue


class FailureKind(str, Enum):
    """Classified cause of a failed query."""

    ENDPOINT_NOT_FOUND = "endpoint_not_found"
    TRANSPORT_ERROR = "transport_error"
    HTTP_ERROR = "http_error"

    @property
    def code(self) -> str:
        if self is FailureKind.ENDPOINT_NOT_FOUND:
            return "endpoint-not-found"
        return "query-failed"


@dataclass(frozen=True)
class QuerySuccess:
    """Decoded response payload. ``data`` is ``None`` for an undecodable body."""

    data: JsonValue


@dataclass(frozen=True)
class QueryFailure:
    kind: FailureKind
    message: str
    http_status: int = 0  # 0 when no HTTP response was received


QueryOutcome = Union[QuerySuccess, QueryFailure]
