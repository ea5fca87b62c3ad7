"""Endpoint profile models.

Field aliases follow the endpoint definition keys used in configuration
(``connectionTimeout``, ``requestTimeout``, ``verifySSLCertificate``,
``basicAuth``); the Python attribute names are used everywhere else.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class BasicAuthCredentials(BaseModel):
    """HTTP Basic credentials. Either side may be missing."""

    model_config = ConfigDict(frozen=True)

    user: str | None = None
    password: str | None = None

    def as_pair(self) -> tuple[str, str]:
        """Return ``(user, password)`` with missing sides as empty strings."""
        return (self.user or "", self.password or "")


class EndpointProfile(BaseModel):
    """Connection profile for one remote SPARQL endpoint.

    ``url`` is not validated; a malformed value surfaces as a transport
    failure when the endpoint is queried. A timeout of ``0`` disables the
    bound for that phase.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = ""
    url: str
    connection_timeout_seconds: int = Field(default=10, alias="connectionTimeout")
    request_timeout_seconds: int = Field(default=30, alias="requestTimeout")
    verify_ssl_certificate: bool = Field(default=True, alias="verifySSLCertificate")
    credentials: BasicAuthCredentials | None = Field(default=None, alias="basicAuth")
