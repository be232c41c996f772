"""Configuration management for the registry client."""

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from .config import (
    DEFAULT_CONFIG_PATH,
    DEFAULT_LOG_LEVEL,
    DEFAULT_REGISTRY_URL,
    DEFAULT_TIMEOUT,
    DEFAULT_USER_AGENT,
    ENV_CONFIG_PATH,
    ENV_LOG_LEVEL,
    ENV_REGISTRY_URL,
    ENV_TIMEOUT,
    ENV_USER_AGENT,
    get_env_var,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientConfig:
    """Settings for talking to the package registry.

    Attributes:
        registry_url: Base URL of the crates endpoint, without trailing slash
        timeout: Request timeout in seconds
        user_agent: User-Agent header sent with every request
        log_level: Log level name used by setup_logging
    """

    registry_url: str = DEFAULT_REGISTRY_URL
    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "ClientConfig":
        """Load configuration from a YAML file.

        Keys that are absent from the file keep their built-in defaults.

        Args:
            yaml_path: Path to the YAML configuration file

        Returns:
            ClientConfig populated from the YAML file

        Raises:
            FileNotFoundError: If the YAML file does not exist
            ValueError: If the file is not valid YAML, not a mapping, or has a bad timeout
        """
        with open(yaml_path) as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid configuration file {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Configuration file {yaml_path} must contain a mapping")

        return cls().merged(data)

    def merged(self, overrides: dict[str, Any]) -> "ClientConfig":
        """Return a copy with every non-empty override applied."""
        changes: dict[str, Any] = {}
        for key in ("registry_url", "user_agent", "log_level"):
            value = overrides.get(key)
            if value:
                changes[key] = str(value)

        timeout = overrides.get("timeout")
        if timeout not in (None, ""):
            try:
                changes["timeout"] = float(timeout)
            except (TypeError, ValueError) as e:
                raise ValueError(f"Invalid timeout value: {timeout!r}") from e
            if not changes["timeout"] > 0:
                raise ValueError(f"Invalid timeout value: {timeout!r}, timeout must be positive")

        if "registry_url" in changes:
            changes["registry_url"] = changes["registry_url"].rstrip("/")

        return replace(self, **changes)


class ConfigManager:
    """Resolves the effective client configuration.

    Precedence, highest first: explicit overrides, environment variables,
    the YAML configuration file, built-in defaults.

    Attributes:
        config_path: Path to the YAML configuration file
        explicit: Whether the path was named by the user rather than defaulted
    """

    def __init__(self, config_path: str | None = None) -> None:
        """Initialize ConfigManager.

        Args:
            config_path: Path to the YAML config. Falls back to the
                CARGO_INFO_CONFIG environment variable, then the per-user default.
        """
        env_path = get_env_var(ENV_CONFIG_PATH)
        self.explicit = bool(config_path or env_path)
        self.config_path = Path(config_path or env_path or DEFAULT_CONFIG_PATH).expanduser()

    def load(self, **overrides: Any) -> ClientConfig:
        """Build the effective configuration.

        Args:
            **overrides: Values that win over every other source (e.g. CLI options)

        Returns:
            The resolved ClientConfig

        Raises:
            FileNotFoundError: If an explicitly named config file does not exist
        """
        config = ClientConfig()

        if self.config_path.is_file():
            logger.debug(f"Loading configuration from {self.config_path}")
            config = ClientConfig.from_yaml(self.config_path)
        elif self.explicit:
            raise FileNotFoundError(f"Configuration file not found: {self.config_path}")

        config = config.merged(
            {
                "registry_url": get_env_var(ENV_REGISTRY_URL),
                "timeout": get_env_var(ENV_TIMEOUT),
                "user_agent": get_env_var(ENV_USER_AGENT),
                "log_level": get_env_var(ENV_LOG_LEVEL),
            }
        )

        return config.merged(overrides)
