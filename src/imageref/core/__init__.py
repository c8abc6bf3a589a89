"""Configuration and paths for imageref."""

from .config import (
    AzureSettings,
    ConfigNotFoundError,
    DefaultsConfig,
    ImageRefConfig,
    resolve_region,
    resolve_subscription_id,
)
from .paths import CONFIG_FILE, get_config_file

__all__ = [
    "AzureSettings",
    "CONFIG_FILE",
    "ConfigNotFoundError",
    "DefaultsConfig",
    "ImageRefConfig",
    "get_config_file",
    "resolve_region",
    "resolve_subscription_id",
]
