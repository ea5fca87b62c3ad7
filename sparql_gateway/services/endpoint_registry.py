"""Registry of named SPARQL endpoint profiles.

Writes are copy-on-write: a new mapping is built and the reference swapped
under a lock, so lookups never take the lock and never observe a partially
updated mapping during a reload.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping

from sparql_gateway.middleware.error_handler import EndpointNotFoundError
from sparql_gateway.models.endpoint import EndpointProfile

logger = logging.getLogger(__name__)


class EndpointRegistry:
    """Maps endpoint names (case-sensitive) to their ``EndpointProfile``."""

    def __init__(self, profiles: Mapping[str, EndpointProfile] | None = None) -> None:
        self._lock = threading.Lock()
        self._profiles: dict[str, EndpointProfile] = dict(profiles or {})

    def register(self, name: str, profile: EndpointProfile) -> None:
        """Insert or replace the profile for *name*. Last writer wins."""
        with self._lock:
            updated = dict(self._profiles)
            replaced = name in updated
            updated[name] = profile
            self._profiles = updated
        logger.info(
            "%s SPARQL endpoint '%s'",
            "Replaced" if replaced else "Registered",
            name,
        )

    def replace_all(self, profiles: Mapping[str, EndpointProfile]) -> None:
        """Atomically swap the whole mapping (configuration reload)."""
        updated = dict(profiles)
        with self._lock:
            self._profiles = updated
        logger.info("Loaded %d SPARQL endpoint definition(s)", len(updated))

    def lookup(self, name: str) -> EndpointProfile:
        """Return the profile registered under exactly *name*.

        Raises
        ------
        EndpointNotFoundError
            If no profile is registered under *name*.
        """
        try:
            return self._profiles[name]
        except KeyError:
            raise EndpointNotFoundError(
                f"SPARQL endpoint '{name}' is not defined"
            ) from None

    def names(self) -> list[str]:
        return sorted(self._profiles)

    def __contains__(self, name: object) -> bool:
        return name in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)
