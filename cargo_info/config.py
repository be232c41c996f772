"""Configuration and logging setup for cargo-info."""

import logging
import os
import sys


def setup_logging(level: str | None = None) -> None:
    """Set up logging on stderr so it never mixes with report output.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR). Defaults to the
            CARGO_INFO_LOG_LEVEL environment variable, then WARNING.
    """
    log_level = level or os.getenv(ENV_LOG_LEVEL, DEFAULT_LOG_LEVEL)

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )

    # Connection pool chatter is noise for a one-shot CLI
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def get_env_var(name: str, default: str | None = None, required: bool = False) -> str:
    """Get environment variable with optional default and validation.

    Args:
        name: Environment variable name
        default: Default value if not set
        required: Whether the variable is required

    Returns:
        Environment variable value

    Raises:
        ValueError: If required variable is not set
    """
    value = os.getenv(name, default)

    if required and not value:
        raise ValueError(f"Required environment variable {name} is not set")

    return value or ""


# Environment variable names
ENV_REGISTRY_URL = "CARGO_INFO_REGISTRY_URL"
ENV_TIMEOUT = "CARGO_INFO_TIMEOUT"
ENV_USER_AGENT = "CARGO_INFO_USER_AGENT"
ENV_LOG_LEVEL = "CARGO_INFO_LOG_LEVEL"
ENV_CONFIG_PATH = "CARGO_INFO_CONFIG"

# Built-in defaults
DEFAULT_REGISTRY_URL = "https://crates.io/api/v1/crates"
DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "cargo-info/0.3.0"
DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_CONFIG_PATH = "~/.config/cargo-info/config.yaml"
