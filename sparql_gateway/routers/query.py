"""SPARQL query endpoints.

- POST /api/v1/sparqlquery — JSON body {endpointName, query}
- GET  /api/v1/sparqlquery?endpointName=...&query=...

Both answer with ``data.sparqlresult`` on success. Failures are raised as
``EndpointNotFoundError`` / ``QueryFailedError`` and rendered by the
registered error handlers.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Query

from sparql_gateway.middleware.error_handler import error_from_failure
from sparql_gateway.models.outcome import QueryFailure
from sparql_gateway.models.requests import SparqlQueryRequest
from sparql_gateway.models.responses import ApiResponse

logger = logging.getLogger(__name__)


def create_query_router(*, gateway: Any) -> APIRouter:
    """Factory that creates the query router with an injected gateway.

    Parameters
    ----------
    gateway:
        Object with an async ``execute(endpoint_name, query)`` returning a
        ``QueryOutcome`` (``QueryGateway`` or ``RetryingQueryGateway``).
    """
    query_router = APIRouter(prefix="/api/v1", tags=["sparql"])

    async def _run(body: SparqlQueryRequest) -> dict:
        outcome = await gateway.execute(body.endpoint_name, body.query)
        if isinstance(outcome, QueryFailure):
            raise error_from_failure(outcome)
        return ApiResponse(
            success=True,
            data={"sparqlresult": outcome.data},
        ).model_dump()

    @query_router.post("/sparqlquery")
    async def post_query(body: SparqlQueryRequest) -> dict:
        """Forward a query to a named SPARQL endpoint."""
        return await _run(body)

    @query_router.get("/sparqlquery")
    async def get_query(
        endpoint_name: str = Query(..., min_length=1, alias="endpointName"),
        query: str = Query(...),
    ) -> dict:
        """Query-string variant of the POST endpoint."""
        return await _run(SparqlQueryRequest(endpoint_name=endpoint_name, query=query))

    return query_router
