"""
Configuration loader for gql_request.

This module loads a :class:`ClientConfig` from a JSON or YAML file and
environment variables. Environment variables win over file values; a
``GQL_REQUEST_HEADERS`` value replaces the file's headers as a whole.
YAML files need PyYAML (the ``yaml`` extra).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

from pydantic import ValidationError

try:
    import yaml

    HAS_YAML = True
except Exception:
    yaml = None
    HAS_YAML = False

from ..exceptions import ConfigError
from .models import ClientConfig

logger = logging.getLogger(__name__)


class ConfigLoader:
    """Configuration loader for files and environment variables."""

    def __init__(self, env: Optional[Mapping[str, str]] = None) -> None:
        """
        Initialize configuration loader.

        Args:
            env: Environment to read, ``os.environ`` when None
        """
        self.config_paths = [
            Path("gql_request.yaml"),
            Path("gql_request.yml"),
            Path("gql_request.json"),
            Path("config/gql_request.yaml"),
            Path("config/gql_request.yml"),
            Path("config/gql_request.json"),
            Path.home() / ".gql_request" / "config.yaml",
            Path.home() / ".gql_request" / "config.yml",
            Path.home() / ".gql_request" / "config.json",
        ]

        # Environment variable prefix
        self.env_prefix = "GQL_REQUEST_"
        self._env = env

    def load_config(self, config_file: Optional[Union[str, Path]] = None) -> ClientConfig:
        """
        Load configuration from all available sources.

        Args:
            config_file: Specific config file to load

        Returns:
            Validated ClientConfig

        Raises:
            ConfigError: If a source cannot be parsed or the result is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_from_file(config_file)
        if file_config:
            config_data.update(file_config)

        env_config = self._load_from_environment()
        if env_config:
            config_data = self._deep_merge(config_data, env_config)
            # a header set is replaced, never merged name by name
            if "headers" in env_config:
                config_data["headers"] = env_config["headers"]

        try:
            return ClientConfig(**config_data)
        except ValidationError as e:
            raise ConfigError(f"Invalid configuration: {e}") from e

    def _load_from_file(
        self, config_file: Optional[Union[str, Path]] = None
    ) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        if config_file:
            config_path = Path(config_file)
            if not config_path.exists():
                raise ConfigError(f"Config file not found: {config_path}", source=str(config_path))
            return self._parse_config_file(config_path)

        for config_path in self.config_paths:
            if config_path.exists():
                return self._parse_config_file(config_path)

        return None

    def _parse_config_file(self, config_path: Path) -> Dict[str, Any]:
        """Parse a JSON or YAML configuration file."""
        suffix = config_path.suffix.lower()
        if suffix in (".yaml", ".yml"):
            if not HAS_YAML or yaml is None:
                raise ConfigError(
                    "PyYAML is required for YAML config files. Install with: pip install PyYAML",
                    source=str(config_path),
                )
            parse_errors: tuple = (OSError, yaml.YAMLError)
        elif suffix == ".json":
            parse_errors = (OSError, json.JSONDecodeError)
        else:
            raise ConfigError(
                f"Unsupported config file format: {config_path.suffix}", source=str(config_path)
            )

        try:
            with open(config_path, "r", encoding="utf-8") as f:
                if suffix == ".json":
                    data = json.load(f) or {}
                else:
                    data = yaml.safe_load(f) or {}
        except parse_errors as e:
            raise ConfigError(
                f"Failed to parse config file {config_path}: {e}", source=str(config_path)
            ) from e

        if not isinstance(data, dict):
            raise ConfigError(
                f"Config file {config_path} must contain a mapping", source=str(config_path)
            )
        logger.debug("Loaded configuration from %s", config_path)
        return data

    def _load_from_environment(self) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env = os.environ if self._env is None else self._env
        config: Dict[str, Any] = {}

        env_mappings = {
            f"{self.env_prefix}ENDPOINT": ("endpoint",),
            f"{self.env_prefix}TIMEOUT": ("timeout",),
            f"{self.env_prefix}SUBSCRIPTION_PROTOCOL": ("subscription_protocol",),
            # Logging
            f"{self.env_prefix}LOG_LEVEL": ("logging", "level"),
            f"{self.env_prefix}LOG_FORMAT": ("logging", "format"),
            f"{self.env_prefix}LOG_FILE": ("logging", "file_path"),
            f"{self.env_prefix}LOG_STRUCTURED": ("logging", "enable_structured"),
        }

        for env_var, config_path in env_mappings.items():
            value = env.get(env_var)
            if value is not None:
                current = config
                for key in config_path[:-1]:
                    current = current.setdefault(key, {})
                current[config_path[-1]] = self._convert_env_value(value)

        # headers come as a JSON object
        raw_headers = env.get(f"{self.env_prefix}HEADERS")
        if raw_headers:
            try:
                headers = json.loads(raw_headers)
            except json.JSONDecodeError as e:
                raise ConfigError(
                    f"{self.env_prefix}HEADERS must be a JSON object: {e}",
                    source=f"{self.env_prefix}HEADERS",
                ) from e
            if not isinstance(headers, dict):
                raise ConfigError(
                    f"{self.env_prefix}HEADERS must be a JSON object",
                    source=f"{self.env_prefix}HEADERS",
                )
            config["headers"] = headers

        return config

    def _convert_env_value(self, value: str) -> Any:
        """Convert environment variable string to appropriate type."""
        lower = value.lower()
        if lower in ("true", "yes", "on"):
            return True
        if lower in ("false", "no", "off"):
            return False

        try:
            if "." in value:
                return float(value)
            return int(value)
        except ValueError:
            pass

        return value

    def _deep_merge(
        self, base: Dict[str, Any], override: Dict[str, Any]
    ) -> Dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if (
                key in result
                and isinstance(result[key], dict)
                and isinstance(value, dict)
            ):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result


def load_config(config_file: Optional[Union[str, Path]] = None) -> ClientConfig:
    """Load client configuration with the default loader."""
    return ConfigLoader().load_config(config_file)
