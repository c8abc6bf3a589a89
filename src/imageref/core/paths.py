"""Centralized path management for imageref."""

import os
from pathlib import Path

IMAGEREF_HOME = Path.home() / ".imageref"

# Configuration file
CONFIG_FILE = IMAGEREF_HOME / "config.yaml"


def get_config_file() -> Path:
    """Get the configuration file path, honoring ``IMAGEREF_CONFIG``."""
    override = os.environ.get("IMAGEREF_CONFIG")
    if override:
        return Path(override).expanduser()
    return CONFIG_FILE
