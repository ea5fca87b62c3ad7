"""Endpoint definition loader.

Parses the endpoint definitions YAML into typed ``EndpointProfile`` objects
and assembles the ``EndpointRegistry`` used by the gateway. The file layout
mirrors the original ``SparqlEndpointDefinition`` mapping::

    endpoints:
      wikidata:
        url: https://query.wikidata.org/sparql
        connectionTimeout: 5
        requestTimeout: 20
        verifySSLCertificate: true
        basicAuth:
          user: reader
          password: secret
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from sparql_gateway.config.settings import GatewaySettings
from sparql_gateway.models.endpoint import EndpointProfile
from sparql_gateway.services.endpoint_registry import EndpointRegistry

logger = logging.getLogger(__name__)


def parse_endpoint_definitions(
    raw: Mapping[str, Any], source: str
) -> dict[str, EndpointProfile]:
    """Validate a name -> definition mapping, skipping invalid entries."""
    profiles: dict[str, EndpointProfile] = {}
    for name, definition in raw.items():
        if not isinstance(definition, dict):
            logger.error(
                "Invalid definition for endpoint '%s' in %s: expected a mapping — skipping",
                name,
                source,
            )
            continue
        try:
            profiles[str(name)] = EndpointProfile.model_validate(
                {**definition, "name": str(name)}
            )
        except Exception as exc:
            logger.error(
                "Invalid definition for endpoint '%s' in %s: %s — skipping",
                name,
                source,
                exc,
            )
    return profiles


def load_endpoint_definitions(yaml_path: str) -> dict[str, EndpointProfile]:
    """Parse an endpoint definitions YAML file.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        A dict mapping endpoint names to EndpointProfile instances. A missing
        file, unparsable YAML or a missing ``endpoints`` key yields an empty
        dict.
    """
    path = Path(yaml_path)

    if not path.exists():
        logger.warning("Endpoint definitions file not found at %s", yaml_path)
        return {}

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        logger.error("Failed to parse endpoint definitions YAML at %s: %s", yaml_path, exc)
        return {}

    if not isinstance(raw, dict) or not isinstance(raw.get("endpoints"), dict):
        logger.warning("Endpoint definitions YAML at %s missing 'endpoints' mapping", yaml_path)
        return {}

    return parse_endpoint_definitions(raw["endpoints"], yaml_path)


def collect_endpoint_definitions(settings: GatewaySettings) -> dict[str, EndpointProfile]:
    """File definitions overlaid with inline ``settings.endpoints`` entries."""
    profiles = load_endpoint_definitions(settings.endpoints_path)
    if settings.endpoints:
        profiles.update(parse_endpoint_definitions(settings.endpoints, "settings"))
    return profiles


def build_registry(settings: GatewaySettings) -> EndpointRegistry:
    """Create a registry populated from the configured definitions."""
    registry = EndpointRegistry()
    registry.replace_all(collect_endpoint_definitions(settings))
    return registry
