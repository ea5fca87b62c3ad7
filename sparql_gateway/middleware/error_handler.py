"""Gateway error hierarchy and FastAPI exception handlers.

All gateway-specific errors extend GatewayError. The FastAPI exception handlers
catch these errors (plus Pydantic's RequestValidationError and unhandled
exceptions) and return a consistent JSON envelope: { success, data, error, meta }.
Machine-readable error codes travel in ``meta.code``.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from sparql_gateway.models.outcome import FailureKind, QueryFailure

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Error hierarchy
# ---------------------------------------------------------------------------


class GatewayError(Exception):
    """Base error for all gateway-specific errors."""

    status_code: int = 500
    message: str = "Internal server error"
    code: str = "internal-error"

    def __init__(self, message: str | None = None, **kwargs: object) -> None:
        self.message = message or self.__class__.message
        self.details = kwargs
        super().__init__(self.message)


class ValidationError(GatewayError):
    """Payload validation failures — includes field-level details."""

    status_code = 422
    message = "Validation error"
    code = "validation-error"


class EndpointNotFoundError(GatewayError):
    """No endpoint is registered under the requested name."""

    status_code = 404
    message = "SPARQL endpoint not found"
    code = "endpoint-not-found"


class QueryFailedError(GatewayError):
    """The remote endpoint could not be reached or answered with an error status."""

    status_code = 502
    message = "SPARQL query failed"
    code = "query-failed"


def error_from_failure(failure: QueryFailure) -> GatewayError:
    """Map a gateway failure outcome onto the matching API error."""
    if failure.kind is FailureKind.ENDPOINT_NOT_FOUND:
        return EndpointNotFoundError(
            f"SPARQL endpoint '{failure.message}' is not defined"
        )
    return QueryFailedError(
        f"SPARQL query failed: {failure.message}",
        httpcode=failure.http_status,
    )


# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------


def _error_body(error: str, meta: dict | None = None) -> dict:
    return {"success": False, "data": None, "error": error, "meta": meta}


async def _gateway_error_handler(_request: Request, exc: GatewayError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.message, {"code": exc.code, **exc.details}),
    )


async def _validation_error_handler(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 with one entry per offending field of the query parameters or body."""
    fields = [
        {
            "field": " -> ".join(str(loc) for loc in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in exc.errors()
    ]
    return JSONResponse(
        status_code=ValidationError.status_code,
        content=_error_body(
            ValidationError.message,
            {"code": ValidationError.code, "fields": fields},
        ),
    )


async def _unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled %s while serving %s %s",
        exc.__class__.__name__,
        request.method,
        request.url.path,
    )
    return JSONResponse(
        status_code=GatewayError.status_code,
        content=_error_body(GatewayError.message),
    )


_HANDLERS = (
    (GatewayError, _gateway_error_handler),
    (RequestValidationError, _validation_error_handler),
    (Exception, _unhandled_error_handler),
)


def register_error_handlers(app: FastAPI) -> None:
    """Install the envelope handlers; most specific exception types first."""
    for exc_class, handler in _HANDLERS:
        app.add_exception_handler(exc_class, handler)  # type: ignore[arg-type]
