"""imageref configuration management.

Configuration lives in ~/.imageref/config.yaml (or the file named by
``IMAGEREF_CONFIG``) and supplies the Azure subscription and default
region used by the CLI.
"""

import os
import re
from pathlib import Path

from pydantic import BaseModel, Field, field_validator

from ..errors import ConfigError
from .config_base import ConfigModel

_GUID_RE = re.compile(r"[0-9a-fA-F]{8}-([0-9a-fA-F]{4}-){3}[0-9a-fA-F]{12}")

DEFAULT_REGION = "eastus"


class ConfigNotFoundError(ConfigError):
    """Raised when configuration file is not found."""

    pass


class AzureSettings(BaseModel):
    """Azure-specific configuration."""

    subscription_id: str | None = None
    """Subscription used for marketplace lookups; AZURE_SUBSCRIPTION_ID if unset."""

    @field_validator("subscription_id")
    @classmethod
    def validate_subscription_id(cls, v: str | None) -> str | None:
        if v is not None and not _GUID_RE.fullmatch(v):
            raise ValueError(f"Invalid subscription ID (expected a GUID): {v}")
        return v


class DefaultsConfig(BaseModel):
    """Default values for CLI commands."""

    region: str = DEFAULT_REGION
    """Region used to resolve marketplace images."""


class ImageRefConfig(ConfigModel):
    """Main configuration model for imageref."""

    azure: AzureSettings = Field(default_factory=AzureSettings)
    defaults: DefaultsConfig = Field(default_factory=DefaultsConfig)

    @staticmethod
    def get_config_path() -> Path:
        from .paths import get_config_file

        return get_config_file()

    @classmethod
    def load(cls) -> "ImageRefConfig":
        """Load configuration from file.

        Raises:
            ConfigNotFoundError: If configuration file doesn't exist
        """
        config_path = cls.get_config_path()
        if not config_path.exists():
            raise ConfigNotFoundError(
                f"Configuration not found at {config_path}\n"
                "Run 'imgref config init' to create configuration"
            )
        return cls.from_yaml(config_path)

    @classmethod
    def load_or_create(cls) -> "ImageRefConfig":
        """Load configuration from file, or return defaults if there is none."""
        return cls.load_or_default(cls.get_config_path())

    def save(self) -> Path:
        """Save configuration, creating the parent directory if needed."""
        config_path = self.get_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_yaml(config_path)
        return config_path


def resolve_subscription_id(config: ImageRefConfig, override: str | None = None) -> str:
    """Pick the subscription from an explicit value, the config, or the environment.

    Raises:
        ConfigError: If no subscription is configured anywhere
    """
    subscription_id = (
        override or config.azure.subscription_id or os.environ.get("AZURE_SUBSCRIPTION_ID")
    )
    if not subscription_id:
        raise ConfigError(
            "No Azure subscription configured. Set azure.subscription_id with "
            "'imgref config set' or export AZURE_SUBSCRIPTION_ID"
        )
    return subscription_id


def resolve_region(config: ImageRefConfig, override: str | None = None) -> str:
    return override or config.defaults.region
