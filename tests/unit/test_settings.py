"""Unit tests for GatewaySettings, endpoint models and definition loading."""

from pathlib import Path

import pytest
import yaml

from sparql_gateway.config.endpoints import (
    build_registry,
    collect_endpoint_definitions,
    load_endpoint_definitions,
)
from sparql_gateway.config.settings import DEFAULT_USER_AGENT, GatewaySettings
from sparql_gateway.models.endpoint import BasicAuthCredentials, EndpointProfile


# ---------------------------------------------------------------------------
# GatewaySettings
# ---------------------------------------------------------------------------


class TestGatewaySettings:
    def test_defaults_are_correct(self):
        settings = GatewaySettings()

        assert settings.port == 8002
        assert settings.log_level == "INFO"
        assert settings.endpoints_path == "sparql_gateway/config/endpoints.yaml"
        assert settings.endpoints == {}
        assert settings.user_agent == DEFAULT_USER_AGENT
        assert settings.query_max_retries == 0
        assert settings.query_retry_backoff_seconds == 1.0

    def test_env_prefix_is_sparql_gateway(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SPARQL_GATEWAY_PORT", "9000")

        settings = GatewaySettings()
        assert settings.port == 9000

    def test_inline_endpoints_from_env(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv(
            "SPARQL_GATEWAY_ENDPOINTS",
            '{"local": {"url": "http://localhost:3030/ds/sparql", "requestTimeout": 5}}',
        )

        settings = GatewaySettings()
        assert settings.endpoints == {
            "local": {"url": "http://localhost:3030/ds/sparql", "requestTimeout": 5}
        }

    def test_negative_retries_rejected(self, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("SPARQL_GATEWAY_QUERY_MAX_RETRIES", "-1")

        with pytest.raises(Exception):
            GatewaySettings()


# ---------------------------------------------------------------------------
# EndpointProfile model
# ---------------------------------------------------------------------------


class TestEndpointProfile:
    def test_default_values(self):
        profile = EndpointProfile(url="https://example.org/sparql")
        assert profile.connection_timeout_seconds == 10
        assert profile.request_timeout_seconds == 30
        assert profile.verify_ssl_certificate is True
        assert profile.credentials is None

    def test_accepts_configuration_keys(self):
        profile = EndpointProfile.model_validate(
            {
                "url": "https://example.org/sparql",
                "connectionTimeout": 2,
                "requestTimeout": 7,
                "verifySSLCertificate": False,
                "basicAuth": {"user": "reader", "password": "pw"},
            }
        )
        assert profile.connection_timeout_seconds == 2
        assert profile.request_timeout_seconds == 7
        assert profile.verify_ssl_certificate is False
        assert profile.credentials == BasicAuthCredentials(user="reader", password="pw")

    def test_timeout_ordering_not_enforced(self):
        profile = EndpointProfile(
            url="https://example.org/sparql",
            connection_timeout_seconds=30,
            request_timeout_seconds=5,
        )
        assert profile.request_timeout_seconds < profile.connection_timeout_seconds

    def test_url_is_required(self):
        with pytest.raises(Exception):
            EndpointProfile.model_validate({"requestTimeout": 5})

    def test_credentials_pair(self):
        profile = EndpointProfile(
            url="http://example.com/sparql",
            credentials=BasicAuthCredentials(user="testuser", password="testpassword"),
        )
        assert profile.credentials.as_pair() == ("testuser", "testpassword")

    def test_credentials_missing_user(self):
        profile = EndpointProfile.model_validate(
            {"url": "http://example.com/sparql", "basicAuth": {"password": "onlypassword"}}
        )
        assert profile.credentials.as_pair() == ("", "onlypassword")

    def test_credentials_missing_password(self):
        profile = EndpointProfile.model_validate(
            {"url": "http://example.com/sparql", "basicAuth": {"user": "onlyuser"}}
        )
        assert profile.credentials.as_pair() == ("onlyuser", "")


# ---------------------------------------------------------------------------
# load_endpoint_definitions
# ---------------------------------------------------------------------------


class TestLoadEndpointDefinitions:
    def test_loads_valid_yaml(self, tmp_path: Path):
        yaml_content = {
            "endpoints": {
                "wikidata": {
                    "url": "https://query.wikidata.org/sparql",
                    "connectionTimeout": 5,
                    "requestTimeout": 20,
                },
                "private": {
                    "url": "https://private.example.org/sparql",
                    "verifySSLCertificate": False,
                    "basicAuth": {"user": "testuser", "password": "testpass"},
                },
            }
        }
        yaml_file = tmp_path / "endpoints.yaml"
        yaml_file.write_text(yaml.dump(yaml_content))

        profiles = load_endpoint_definitions(str(yaml_file))

        assert set(profiles) == {"wikidata", "private"}
        assert profiles["wikidata"].name == "wikidata"
        assert profiles["wikidata"].connection_timeout_seconds == 5
        assert profiles["wikidata"].request_timeout_seconds == 20
        assert profiles["private"].verify_ssl_certificate is False
        assert profiles["private"].credentials.as_pair() == ("testuser", "testpass")

    def test_file_not_found_returns_empty(self):
        assert load_endpoint_definitions("/nonexistent/path/endpoints.yaml") == {}

    def test_loads_bundled_yaml(self):
        """Load the endpoints.yaml shipped with the package."""
        bundled = Path(__file__).resolve().parents[2] / "sparql_gateway" / "config" / "endpoints.yaml"

        profiles = load_endpoint_definitions(str(bundled))

        assert profiles["wikidata"].url == "https://query.wikidata.org/sparql"
        assert profiles["dbpedia"].request_timeout_seconds == 60
        assert profiles["dbpedia"].connection_timeout_seconds == 10

    def test_missing_endpoints_key_returns_empty(self, tmp_path: Path):
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("some_other_key: value\n")

        assert load_endpoint_definitions(str(yaml_file)) == {}

    def test_invalid_yaml_returns_empty(self, tmp_path: Path):
        yaml_file = tmp_path / "broken.yaml"
        yaml_file.write_text(": : : not valid yaml [[[")

        assert load_endpoint_definitions(str(yaml_file)) == {}

    def test_skips_invalid_entries(self, tmp_path: Path):
        yaml_content = {
            "endpoints": {
                "good": {"url": "https://good.example.org/sparql"},
                "no_url": {"requestTimeout": 5},
                "bad_timeout": {"url": "https://x.example.org", "requestTimeout": "soon"},
                "not_a_mapping": "https://y.example.org",
            }
        }
        yaml_file = tmp_path / "endpoints.yaml"
        yaml_file.write_text(yaml.dump(yaml_content))

        profiles = load_endpoint_definitions(str(yaml_file))

        assert list(profiles) == ["good"]


# ---------------------------------------------------------------------------
# build_registry
# ---------------------------------------------------------------------------


class TestBuildRegistry:
    def test_inline_definitions_override_file(self, tmp_path: Path):
        yaml_file = tmp_path / "endpoints.yaml"
        yaml_file.write_text(
            yaml.dump(
                {
                    "endpoints": {
                        "shared": {"url": "https://file.example.org/sparql"},
                        "file_only": {"url": "https://only.example.org/sparql"},
                    }
                }
            )
        )
        settings = GatewaySettings(
            endpoints_path=str(yaml_file),
            endpoints={"shared": {"url": "https://inline.example.org/sparql"}},
        )

        registry = build_registry(settings)

        assert registry.names() == ["file_only", "shared"]
        assert registry.lookup("shared").url == "https://inline.example.org/sparql"

    def test_replace_all_picks_up_file_changes(self, tmp_path: Path):
        yaml_file = tmp_path / "endpoints.yaml"
        yaml_file.write_text(yaml.dump({"endpoints": {"a": {"url": "https://a.example.org"}}}))
        settings = GatewaySettings(endpoints_path=str(yaml_file))
        registry = build_registry(settings)

        yaml_file.write_text(yaml.dump({"endpoints": {"b": {"url": "https://b.example.org"}}}))
        registry.replace_all(collect_endpoint_definitions(settings))

        assert registry.names() == ["b"]
