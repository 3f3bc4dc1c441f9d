"""Configuration management for the rat CLI.

This module loads general output settings and per-provider client
credentials from a YAML file, with environment variable overrides.

Example configuration (~/.rat/config.yaml):

    general:
      output_format: human
      verbosity: normal
    centerdevice:
      client_id: my_client_id
      client_secret: my_client_secret
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from .oauth import ConfigurationError, OutputMode
from .providers import PROVIDERS

logger = logging.getLogger(__name__)

OUTPUT_FORMATS = ("human", "json")
VERBOSITIES = ("verbose", "normal", "quiet")


@dataclass
class GeneralConfig:
    """General output settings.

    Attributes:
        output_format: "human" or "json"; json echoes raw provider responses
        verbosity: "verbose", "normal" or "quiet"
    """

    output_format: str = "human"
    verbosity: str = "normal"

    def __post_init__(self) -> None:
        """Normalize and validate settings."""
        self.output_format = str(self.output_format).lower()
        self.verbosity = str(self.verbosity).lower()

        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"output_format must be one of: {', '.join(OUTPUT_FORMATS)}"
            )
        if self.verbosity not in VERBOSITIES:
            raise ConfigurationError(
                f"verbosity must be one of: {', '.join(VERBOSITIES)}"
            )

    @property
    def output_mode(self) -> OutputMode:
        """Output mode for the token exchange."""
        if self.output_format == "json" or self.verbosity == "verbose":
            return OutputMode.VERBOSE
        return OutputMode.QUIET


@dataclass
class ProviderCredentials:
    """Client credentials and previously obtained tokens for one provider."""

    client_id: str
    client_secret: str = field(repr=False)
    access_token: Optional[str] = field(default=None, repr=False)
    refresh_token: Optional[str] = field(default=None, repr=False)


class RatConfig:
    """Configuration for the rat CLI.

    Attributes:
        general: General output settings
        providers: Credentials by provider name
    """

    def __init__(
        self,
        general: Optional[GeneralConfig] = None,
        providers: Optional[dict[str, ProviderCredentials]] = None,
    ):
        self.general = general or GeneralConfig()
        self.providers = providers or {}

    def credentials(self, provider: str) -> ProviderCredentials:
        """Get the credentials configured for a provider.

        Raises:
            ConfigurationError: If the provider has no credentials
        """
        credentials = self.providers.get(provider)
        if credentials is None:
            env_prefix = f"RAT_{provider.upper()}"
            raise ConfigurationError(
                f"Missing {provider} credentials. Add a '{provider}' section with "
                f"client_id and client_secret to the configuration file, or set\n"
                f"  {env_prefix}_CLIENT_ID=your_client_id\n"
                f"  {env_prefix}_CLIENT_SECRET=your_client_secret"
            )
        return credentials

    @classmethod
    def get_default_config_path(cls) -> Path:
        """Get default configuration file path.

        Returns:
            $RAT_CONFIG if set, otherwise ~/.rat/config.yaml
        """
        env_path = os.getenv("RAT_CONFIG")
        if env_path:
            return Path(env_path).expanduser()
        return Path.home() / ".rat" / "config.yaml"

    @classmethod
    def load_from_file(cls, path: Optional[Path] = None) -> "RatConfig":
        """Load configuration from a YAML file.

        A missing file yields the defaults (plus environment overrides).

        Args:
            path: Optional path to config file (default: get_default_config_path())

        Returns:
            Configuration instance

        Raises:
            ConfigurationError: If the file is unreadable or invalid
        """
        config_path = path or cls.get_default_config_path()
        config_dict: dict[str, Any] = {}

        if config_path.exists():
            try:
                with open(config_path) as f:
                    file_config = yaml.safe_load(f)
                if file_config:
                    config_dict = file_config
                logger.debug(f"Loaded configuration from {config_path}")
            except yaml.YAMLError as e:
                raise ConfigurationError(
                    f"Invalid YAML in configuration file: {e}"
                ) from e
            except OSError as e:
                raise ConfigurationError(
                    f"Failed to load configuration file: {e}"
                ) from e
        else:
            logger.debug(f"Configuration file not found at {config_path}, using defaults")

        if not isinstance(config_dict, dict):
            raise ConfigurationError(
                f"Configuration file {config_path} must contain a mapping"
            )

        return cls.merge_with_defaults(config_dict)

    @classmethod
    def merge_with_defaults(cls, config_dict: dict[str, Any]) -> "RatConfig":
        """Merge a configuration dictionary with defaults and environment.

        Precedence order (highest to lowest):
        1. Environment variables
        2. Config file values
        3. Default values

        Raises:
            ConfigurationError: If configuration is invalid
        """
        general_config = _section(config_dict, "general")
        general = GeneralConfig(
            output_format=os.getenv(
                "RAT_OUTPUT_FORMAT", general_config.get("output_format", "human")
            ),
            verbosity=os.getenv(
                "RAT_VERBOSITY", general_config.get("verbosity", "normal")
            ),
        )

        providers: dict[str, ProviderCredentials] = {}
        for name in PROVIDERS:
            section = _section(config_dict, name)
            env_prefix = f"RAT_{name.upper()}"
            client_id = os.getenv(f"{env_prefix}_CLIENT_ID", section.get("client_id"))
            client_secret = os.getenv(
                f"{env_prefix}_CLIENT_SECRET", section.get("client_secret")
            )

            if not client_id and not client_secret:
                continue
            if not client_id or not client_secret:
                raise ConfigurationError(
                    f"Section '{name}' needs both client_id and client_secret"
                )

            providers[name] = ProviderCredentials(
                client_id=str(client_id),
                client_secret=str(client_secret),
                access_token=section.get("access_token"),
                refresh_token=section.get("refresh_token"),
            )

        return cls(general=general, providers=providers)


def _section(config_dict: dict[str, Any], name: str) -> dict[str, Any]:
    """Get a top-level section; a missing or empty one is {}."""
    section = config_dict.get(name) or {}
    if not isinstance(section, dict):
        raise ConfigurationError(f"Section '{name}' must contain a mapping")
    return section
