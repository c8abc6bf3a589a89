"""Shared utilities for CLI commands."""

import logging

import typer

from ..errors import ConfigError
from .display import error, info


def configure_logging(verbose: bool = False) -> None:
    """Configure root logging for CLI runs."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def get_config_or_exit(command_name: str = None, required: bool = True):
    """Get config instance or exit with helpful message.

    Args:
        command_name: Optional command name for better error context
        required: If False, fall back to defaults when no config file exists

    Returns:
        ImageRefConfig instance

    Raises:
        typer.Exit: If config is missing (and required) or invalid
    """
    from ..core.config import ConfigNotFoundError, ImageRefConfig

    try:
        if required:
            return ImageRefConfig.load()
        return ImageRefConfig.load_or_create()
    except ConfigNotFoundError:
        error("Error: Configuration not initialized")
        info("Run 'imgref config init' to create configuration")
        if command_name:
            info(f"(Required for 'imgref {command_name}')")
        raise typer.Exit(1)
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)
