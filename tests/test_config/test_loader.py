"""
Tests for the configuration loader.
"""

import json

import pytest

from gql_request import ConfigError, GraphQLClient
from gql_request.config import ConfigLoader, LogLevel
from gql_request.config import loader as loader_module


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "gql_request.json"
    path.write_text(
        json.dumps(
            {
                "endpoint": "https://file.example.com/graphql",
                "headers": {"X-Source": "file"},
                "timeout": 10,
                "logging": {"level": "INFO", "format": "%(message)s"},
            }
        ),
        encoding="utf-8",
    )
    return path


class TestConfigLoader:
    """Test loading from files and environment variables."""

    def test_load_from_file(self, config_file):
        config = ConfigLoader(env={}).load_config(config_file)

        assert str(config.endpoint) == "https://file.example.com/graphql"
        assert config.headers == {"X-Source": "file"}
        assert config.timeout == 10
        assert config.logging.level == LogLevel.INFO
        assert config.logging.format == "%(message)s"

    def test_environment_overrides_file(self, config_file):
        env = {
            "GQL_REQUEST_ENDPOINT": "https://env.example.com/graphql",
            "GQL_REQUEST_TIMEOUT": "2.5",
            "GQL_REQUEST_LOG_LEVEL": "debug",
            "GQL_REQUEST_LOG_STRUCTURED": "true",
            "GQL_REQUEST_HEADERS": '{"Authorization": "Bearer env"}',
        }

        config = ConfigLoader(env=env).load_config(config_file)

        assert str(config.endpoint) == "https://env.example.com/graphql"
        assert config.timeout == 2.5
        assert config.headers == {"Authorization": "Bearer env"}
        # nested values are merged, not replaced
        assert config.logging.level == LogLevel.DEBUG
        assert config.logging.enable_structured is True
        assert config.logging.format == "%(message)s"

    def test_environment_headers_replace_file_headers(self, config_file):
        env = {"GQL_REQUEST_HEADERS": '{"Authorization": "Bearer env"}'}

        config = ConfigLoader(env=env).load_config(config_file)

        assert config.headers == {"Authorization": "Bearer env"}

    def test_file_headers_kept_without_header_env(self, config_file):
        config = ConfigLoader(env={"GQL_REQUEST_TIMEOUT": "3"}).load_config(config_file)

        assert config.headers == {"X-Source": "file"}
        assert config.timeout == 3

    def test_load_from_yaml_file(self, tmp_path):
        path = tmp_path / "gql_request.yaml"
        path.write_text(
            "endpoint: https://yaml.example.com/graphql\n"
            "headers:\n"
            "  X-Source: yaml\n"
            "subscription_protocol: graphql-ws\n",
            encoding="utf-8",
        )

        config = ConfigLoader(env={}).load_config(path)

        assert str(config.endpoint) == "https://yaml.example.com/graphql"
        assert config.headers == {"X-Source": "yaml"}
        assert config.subscription_protocol.value == "graphql-ws"

    def test_yaml_file_found_on_default_paths(self, tmp_path):
        path = tmp_path / "gql_request.yml"
        path.write_text("endpoint: http://localhost:4000/graphql\n", encoding="utf-8")
        loader = ConfigLoader(env={})
        loader.config_paths = [tmp_path / "missing.json", path]

        config = loader.load_config()

        assert str(config.endpoint) == "http://localhost:4000/graphql"

    def test_invalid_yaml_file(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("endpoint: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigError, match="Failed to parse"):
            ConfigLoader(env={}).load_config(path)

    def test_yaml_without_pyyaml(self, tmp_path, monkeypatch):
        path = tmp_path / "gql_request.yaml"
        path.write_text("endpoint: https://example.com\n", encoding="utf-8")
        monkeypatch.setattr(loader_module, "HAS_YAML", False)

        with pytest.raises(ConfigError, match="PyYAML is required"):
            ConfigLoader(env={}).load_config(path)

    def test_environment_only(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("HOME", str(tmp_path))
        monkeypatch.setenv("GQL_REQUEST_ENDPOINT", "http://localhost:4000/graphql")
        monkeypatch.setenv("GQL_REQUEST_SUBSCRIPTION_PROTOCOL", "graphql-ws")

        loader = ConfigLoader()
        loader.config_paths = [tmp_path / "missing.json"]
        config = loader.load_config()

        assert str(config.endpoint) == "http://localhost:4000/graphql"
        assert config.subscription_protocol.value == "graphql-ws"

    def test_missing_explicit_file(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            ConfigLoader(env={}).load_config(tmp_path / "nope.json")

        assert exc_info.value.source.endswith("nope.json")

    def test_invalid_json_file(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(ConfigError, match="Failed to parse"):
            ConfigLoader(env={}).load_config(path)

    def test_unsupported_format(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('endpoint = "https://example.com"', encoding="utf-8")

        with pytest.raises(ConfigError, match="Unsupported"):
            ConfigLoader(env={}).load_config(path)

    def test_invalid_headers_env(self, config_file):
        with pytest.raises(ConfigError):
            ConfigLoader(env={"GQL_REQUEST_HEADERS": "[1, 2]"}).load_config(config_file)

    def test_missing_endpoint(self, tmp_path):
        loader = ConfigLoader(env={})
        loader.config_paths = [tmp_path / "missing.json"]

        with pytest.raises(ConfigError, match="Invalid configuration"):
            loader.load_config()

    def test_config_error_is_value_error(self, tmp_path):
        with pytest.raises(ValueError):
            ConfigLoader(env={}).load_config(tmp_path / "nope.json")

    def test_client_from_loaded_config(self, config_file):
        config = ConfigLoader(env={}).load_config(config_file)

        client = GraphQLClient.from_config(config)

        assert client.url == "https://file.example.com/graphql"
        assert client.headers == {"X-Source": "file"}
        assert client.options.fetch_options["timeout"].total == 10
