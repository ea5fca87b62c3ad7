"""Public models for the gateway service."""

from sparql_gateway.models.endpoint import BasicAuthCredentials, EndpointProfile
from sparql_gateway.models.outcome import (
    FailureKind,
    QueryFailure,
    QueryOutcome,
    QuerySuccess,
)
from sparql_gateway.models.requests import SparqlQueryRequest
from sparql_gateway.models.responses import ApiResponse

__all__ = [
    "ApiResponse",
    "BasicAuthCredentials",
    "EndpointProfile",
    "FailureKind",
    "QueryFailure",
    "QueryOutcome",
    "QuerySuccess",
    "SparqlQueryRequest",
]
