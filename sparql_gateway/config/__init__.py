"""Configuration module — settings and endpoint definitions."""

from sparql_gateway.config.endpoints import (
    build_registry,
    collect_endpoint_definitions,
    load_endpoint_definitions,
    parse_endpoint_definitions,
)
from sparql_gateway.config.settings import DEFAULT_USER_AGENT, GatewaySettings

__all__ = [
    "DEFAULT_USER_AGENT",
    "GatewaySettings",
    "build_registry",
    "collect_endpoint_definitions",
    "load_endpoint_definitions",
    "parse_endpoint_definitions",
]
