"""Shared test fixtures for the gateway test suite."""

from __future__ import annotations

import json
from collections.abc import Callable
from urllib.parse import parse_qs

import httpx
import pytest

from sparql_gateway.config.settings import GatewaySettings
from sparql_gateway.models.endpoint import BasicAuthCredentials, EndpointProfile
from sparql_gateway.services.endpoint_registry import EndpointRegistry

EMPTY_RESULT = {"head": {}, "results": {"bindings": []}}


# ---------------------------------------------------------------------------
# Keep tests independent of the developer's environment
# ---------------------------------------------------------------------------

@pytest.fixture(autouse=True)
def _clear_gateway_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "SPARQL_GATEWAY_ENDPOINTS",
        "SPARQL_GATEWAY_ENDPOINTS_PATH",
        "SPARQL_GATEWAY_QUERY_MAX_RETRIES",
        "SPARQL_GATEWAY_USER_AGENT",
    ):
        monkeypatch.delenv(key, raising=False)


# ---------------------------------------------------------------------------
# Settings / registry fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def settings(tmp_path) -> GatewaySettings:
    """Settings with no definitions file and one inline endpoint named 'test'."""
    return GatewaySettings(
        endpoints_path=str(tmp_path / "missing.yaml"),
        endpoints={"test": {"url": "https://sparql.example.org/query"}},
    )


@pytest.fixture
def public_profile() -> EndpointProfile:
    return EndpointProfile(name="public", url="https://sparql.example.org/query")


@pytest.fixture
def secured_profile() -> EndpointProfile:
    return EndpointProfile(
        name="secured",
        url="https://secure.example.org/sparql",
        credentials=BasicAuthCredentials(user="u", password="p"),
    )


@pytest.fixture
def registry(
    public_profile: EndpointProfile, secured_profile: EndpointProfile
) -> EndpointRegistry:
    return EndpointRegistry({"public": public_profile, "secured": secured_profile})


# ---------------------------------------------------------------------------
# Mock transports
# ---------------------------------------------------------------------------

class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, handler: Callable) -> None:
        self.requests: list[httpx.Request] = []

        def _record(request: httpx.Request):
            self.requests.append(request)
            return handler(request)

        super().__init__(_record)


@pytest.fixture
def make_transport() -> Callable[..., RecordingTransport]:
    """Factory for recording transports.

    Pass ``handler`` for custom behaviour, otherwise every request is answered
    with ``status`` and ``payload`` as JSON.
    """

    def _factory(
        handler: Callable | None = None,
        status: int = 200,
        payload: object = EMPTY_RESULT,
    ) -> RecordingTransport:
        if handler is None:
            def handler(_request: httpx.Request) -> httpx.Response:
                return httpx.Response(status, json=payload)

        return RecordingTransport(handler)

    return _factory


@pytest.fixture
def echo_transport() -> RecordingTransport:
    """Echo server: decodes the form body and returns the ``query`` field."""

    def _echo(request: httpx.Request) -> httpx.Response:
        form = parse_qs(request.content.decode("utf-8"), keep_blank_values=True)
        return httpx.Response(200, content=json.dumps({"echo": form["query"][0]}))

    return RecordingTransport(_echo)
