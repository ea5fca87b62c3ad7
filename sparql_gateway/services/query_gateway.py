"""SPARQL query gateway.

Resolves an endpoint name against the ``EndpointRegistry``, forwards the query
to the remote endpoint as a single form-encoded POST and classifies the result
into a ``QueryOutcome``. Network, HTTP-status and payload-decoding problems
are returned as data; only caller cancellation propagates.

SECURITY: Never logs credential values or query bodies.
"""

from __future__ import annotations

import asyncio
import logging
import time

import httpx

from sparql_gateway.config.settings import DEFAULT_USER_AGENT
from sparql_gateway.middleware.error_handler import EndpointNotFoundError
from sparql_gateway.models.endpoint import EndpointProfile
from sparql_gateway.models.outcome import (
    FailureKind,
    QueryFailure,
    QueryOutcome,
    QuerySuccess,
)
from sparql_gateway.services.endpoint_registry import EndpointRegistry

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded; charset=UTF-8"
SPARQL_RESULTS_JSON = "application/sparql-results+json"


def _bound(seconds: int) -> float | None:
    """0 (or less) disables the bound, as the endpoint definitions allow."""
    return float(seconds) if seconds > 0 else None


def build_timeout(profile: EndpointProfile) -> httpx.Timeout:
    """Per-phase timeouts; connect uses its own bound, the rest the request bound."""
    return httpx.Timeout(
        _bound(profile.request_timeout_seconds),
        connect=_bound(profile.connection_timeout_seconds),
    )


def build_auth(profile: EndpointProfile) -> httpx.BasicAuth | None:
    if profile.credentials is None:
        return None
    user, password = profile.credentials.as_pair()
    return httpx.BasicAuth(user, password)


class QueryGateway:
    """Executes one SPARQL query against one named endpoint per call.

    Parameters
    ----------
    registry:
        Endpoint registry used to resolve endpoint names.
    user_agent:
        Fixed ``User-Agent`` sent with every outbound request.
    transport:
        Optional httpx transport (tests inject ``httpx.MockTransport``).
    """

    def __init__(
        self,
        registry: EndpointRegistry,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._registry = registry
        self._user_agent = user_agent
        self._transport = transport

    async def execute(self, endpoint_name: str, query: str) -> QueryOutcome:
        """Resolve *endpoint_name* and run *query* against it."""
        try:
            profile = self._registry.lookup(endpoint_name)
        except EndpointNotFoundError:
            logger.warning(
                "Unknown SPARQL endpoint '%s'",
                endpoint_name,
                extra={
                    "endpoint_name": endpoint_name,
                    "failure_kind": FailureKind.ENDPOINT_NOT_FOUND.value,
                },
            )
            return QueryFailure(
                kind=FailureKind.ENDPOINT_NOT_FOUND,
                message=endpoint_name,
                http_status=0,
            )

        return await self.execute_profile(endpoint_name, profile, query)

    async def execute_profile(
        self, endpoint_name: str, profile: EndpointProfile, query: str
    ) -> QueryOutcome:
        """Run *query* against an already resolved *profile*."""
        started = time.monotonic()
        outcome = await self._send(profile, query)
        duration_ms = round((time.monotonic() - started) * 1000, 1)

        if isinstance(outcome, QueryFailure):
            logger.warning(
                "SPARQL query to '%s' failed: %s",
                endpoint_name,
                outcome.kind.value,
                extra={
                    "endpoint_name": endpoint_name,
                    "failure_kind": outcome.kind.value,
                    "http_status": outcome.http_status,
                    "error_reason": outcome.message,
                    "duration_ms": duration_ms,
                },
            )
        else:
            logger.info(
                "SPARQL query to '%s' completed",
                endpoint_name,
                extra={
                    "endpoint_name": endpoint_name,
                    "duration_ms": duration_ms,
                    "query_length": len(query),
                },
            )
        return outcome

    async def _send(self, profile: EndpointProfile, query: str) -> QueryOutcome:
        headers = {
            "Content-Type": FORM_CONTENT_TYPE,
            "Accept": SPARQL_RESULTS_JSON,
            "User-Agent": self._user_agent,
        }
        total = _bound(profile.request_timeout_seconds)

        try:
            async with httpx.AsyncClient(
                verify=profile.verify_ssl_certificate,
                timeout=build_timeout(profile),
                transport=self._transport,
            ) as client:
                response = await asyncio.wait_for(
                    client.post(
                        profile.url,
                        data={"query": query},
                        headers=headers,
                        auth=build_auth(profile),
                    ),
                    timeout=total,
                )
        except asyncio.TimeoutError:
            return QueryFailure(
                kind=FailureKind.TRANSPORT_ERROR,
                message=f"Operation timed out after {profile.request_timeout_seconds} seconds",
                http_status=0,
            )
        except (httpx.HTTPError, httpx.InvalidURL, UnicodeError) as exc:
            # UnicodeError: hosts that fail IDNA encoding while the request is built
            return QueryFailure(
                kind=FailureKind.TRANSPORT_ERROR,
                message=str(exc) or exc.__class__.__name__,
                http_status=0,
            )

        if response.status_code >= 400:
            return QueryFailure(
                kind=FailureKind.HTTP_ERROR,
                message=f"HTTP {response.status_code}",
                http_status=response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            # Undecodable bodies pass through as null.
            logger.warning(
                "SPARQL endpoint %s returned a body that is not JSON",
                profile.url,
                extra={"endpoint_name": profile.name, "http_status": response.status_code},
            )
            data = None
        return QuerySuccess(data=data)
