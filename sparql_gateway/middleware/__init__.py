"""Middleware package — error hierarchy and request ID."""

from sparql_gateway.middleware.error_handler import (
    EndpointNotFoundError,
    GatewayError,
    QueryFailedError,
    ValidationError,
    error_from_failure,
    register_error_handlers,
)
from sparql_gateway.middleware.request_id import RequestIdMiddleware, request_id_var

__all__ = [
    "EndpointNotFoundError",
    "GatewayError",
    "QueryFailedError",
    "RequestIdMiddleware",
    "ValidationError",
    "error_from_failure",
    "register_error_handlers",
    "request_id_var",
]
