"""Pydantic request models for the query API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class SparqlQueryRequest(BaseModel):
    """Inbound query request.

    ``query`` is required but may be empty; the remote service decides
    whether an empty query is valid.
    """

    model_config = ConfigDict(populate_by_name=True)

    endpoint_name: str = Field(..., min_length=1, alias="endpointName")
    query: str
