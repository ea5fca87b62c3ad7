"""Pydantic Settings for the SPARQL gateway service.

All environment variables use the SPARQL_GATEWAY_ prefix.
Example: SPARQL_GATEWAY_PORT=8002, SPARQL_GATEWAY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings

DEFAULT_USER_AGENT = "SparqlResultFormat Gateway/1.0"


class GatewaySettings(BaseSettings):
    """Gateway service configuration validated from environment variables."""

    # Service
    port: int = 8002
    log_level: str = "INFO"

    # Endpoint definitions
    endpoints_path: str = "sparql_gateway/config/endpoints.yaml"
    endpoints: dict[str, dict[str, Any]] = {}  # Inline JSON, overrides the file

    # Outbound requests
    user_agent: str = DEFAULT_USER_AGENT
    query_max_retries: int = Field(default=0, ge=0)
    query_retry_backoff_seconds: float = Field(default=1.0, ge=0)

    model_config = {"env_prefix": "SPARQL_GATEWAY_"}
