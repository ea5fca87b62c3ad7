"""Retry decorator around the query gateway.

The gateway itself makes exactly one HTTP attempt per call. This wrapper
re-issues queries whose outcome looks transient (transport failures and 5xx
statuses) with exponential backoff. Unknown endpoints and 4xx statuses are
returned immediately.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Protocol

from sparql_gateway.models.outcome import FailureKind, QueryFailure, QueryOutcome

logger = logging.getLogger(__name__)


class SupportsExecute(Protocol):
    async def execute(self, endpoint_name: str, query: str) -> QueryOutcome: ...


def is_retryable(outcome: QueryOutcome) -> bool:
    if not isinstance(outcome, QueryFailure):
        return False
    if outcome.kind is FailureKind.TRANSPORT_ERROR:
        return True
    return outcome.kind is FailureKind.HTTP_ERROR and outcome.http_status >= 500


class RetryingQueryGateway:
    """Wraps a gateway with up to *max_retries* extra attempts.

    Retry schedule: backoff_seconds * 2**attempt (1s, 2s, 4s with the default).
    """

    def __init__(
        self,
        gateway: SupportsExecute,
        max_retries: int = 3,
        backoff_seconds: float = 1.0,
    ) -> None:
        self._gateway = gateway
        self._max_retries = max_retries
        self._backoff_seconds = backoff_seconds

    async def execute(self, endpoint_name: str, query: str) -> QueryOutcome:
        outcome = await self._gateway.execute(endpoint_name, query)

        for attempt in range(self._max_retries):
            if not is_retryable(outcome):
                return outcome

            backoff = self._backoff_seconds * 2**attempt
            logger.warning(
                "SPARQL query to '%s' failed (attempt %d/%d), retrying in %.1fs",
                endpoint_name,
                attempt + 1,
                self._max_retries + 1,
                backoff,
                extra={
                    "endpoint_name": endpoint_name,
                    "retry_attempts": attempt + 1,
                },
            )
            await asyncio.sleep(backoff)
            outcome = await self._gateway.execute(endpoint_name, query)

        return outcome
