"""
Configuration loading for applications built on the client.

The client factory never looks at files or the environment; this module is
what the CLI (and any other calling application) uses to gather settings:

- A YAML file, if present
- Environment variables, which override the file:
  - POCKETSMITH_BASE_URL
  - POCKETSMITH_API_KEY
  - POCKETSMITH_ACCESS_TOKEN
  - POCKETSMITH_TIMEOUT
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .factory import DEFAULT_BASE_URL, ClientConfig


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


@dataclass
class PocketSmithConfig:
    """PocketSmith connection settings."""

    base_url: str = DEFAULT_BASE_URL
    api_key: str | None = field(default=None, repr=False)
    access_token: str | None = field(default=None, repr=False)
    timeout: float = 30

    def has_credentials(self) -> bool:
        return bool(self.api_key or self.access_token)

    def validate(self) -> list[str]:
        """Validate configuration completeness and consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors: list[str] = []

        if not self.base_url:
            errors.append("base_url is required")
        elif not self.base_url.startswith(("http://", "https://")):
            errors.append("base_url must start with http:// or https://")

        if self.timeout <= 0:
            errors.append("timeout must be positive")

        return errors

    def to_client_config(self) -> ClientConfig:
        errors = self.validate()
        if errors:
            raise ConfigValidationError("; ".join(errors))
        return ClientConfig(
            base_url=self.base_url,
            api_key=self.api_key or None,
            access_token=self.access_token or None,
        )


def load_config(config_path: Path) -> PocketSmithConfig:
    """
    Load configuration from a YAML file, with environment overrides.

    A missing file is not an error; defaults and the environment are used.
    """
    if config_path.exists():
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
    else:
        data = {}

    if not isinstance(data, dict):
        raise ConfigValidationError(f"{config_path} must contain a mapping")

    data = data.get("pocketsmith", data) or {}
    if not isinstance(data, dict):
        raise ConfigValidationError(f"the pocketsmith section of {config_path} must be a mapping")

    timeout = os.environ.get("POCKETSMITH_TIMEOUT", data.get("timeout", 30))
    try:
        timeout = float(timeout)
    except (TypeError, ValueError) as e:
        raise ConfigValidationError(f"timeout must be a number, got {timeout!r}") from e

    return PocketSmithConfig(
        base_url=os.environ.get("POCKETSMITH_BASE_URL", data.get("base_url", DEFAULT_BASE_URL)),
        api_key=os.environ.get("POCKETSMITH_API_KEY", data.get("api_key")),
        access_token=os.environ.get("POCKETSMITH_ACCESS_TOKEN", data.get("access_token")),
        timeout=timeout,
    )


def create_default_config(config_path: Path) -> None:
    """Create a default configuration file."""
    default_config = """# PocketSmith client configuration
#
# Environment variables override these values:
#   POCKETSMITH_BASE_URL, POCKETSMITH_API_KEY,
#   POCKETSMITH_ACCESS_TOKEN, POCKETSMITH_TIMEOUT
#
# Set one credential. If both are set, api_key is used.

pocketsmith:
  base_url: "https://api.pocketsmith.com/v2"
  api_key: null        # Developer key (Settings -> Security & Integrations)
  access_token: null   # OAuth access token
  timeout: 30          # Request timeout in seconds
"""

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w") as f:
        f.write(default_config)
