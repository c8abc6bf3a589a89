"""Configuration management CLI commands."""

import typer
from pydantic import ValidationError
from rich.syntax import Syntax

from ..core.config import ImageRefConfig
from .display import console, error, info, section, success, warning
from .utils import get_config_or_exit

app = typer.Typer(help="Manage imageref configuration")


@app.command()
def init(
    subscription: str | None = typer.Option(
        None, "--subscription", "-s", help="Default Azure subscription ID"
    ),
    region: str | None = typer.Option(None, "--region", "-r", help="Default Azure region"),
    force: bool = typer.Option(False, "--force", help="Overwrite an existing configuration"),
):
    """Initialize configuration file with sensible defaults."""
    config_path = ImageRefConfig.get_config_path()
    if config_path.exists() and not force:
        warning(f"Configuration already exists at {config_path} (use --force to overwrite)")
        raise typer.Exit(0)

    try:
        config = ImageRefConfig()
        if subscription:
            config.azure.subscription_id = subscription
        if region:
            config.defaults.region = region
        config = ImageRefConfig.model_validate(config.model_dump())
    except ValidationError as e:
        error(f"Invalid configuration: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    config.save()
    success(f"Configuration saved to {config_path}")


@app.command()
def show():
    """Display current configuration."""
    config = get_config_or_exit("config show")

    yaml_content = config.to_yaml_string()
    syntax = Syntax(yaml_content, "yaml", theme="monokai", line_numbers=False)

    section(f"Configuration from {ImageRefConfig.get_config_path()}")
    console.print(syntax)


@app.command()
def set(
    key: str = typer.Argument(
        ..., help="Configuration key (e.g., azure.subscription_id, defaults.region)"
    ),
    value: str = typer.Argument(..., help="Value to set"),
):
    """Set a configuration value.

    Examples:
        imgref config set azure.subscription_id 00000000-0000-0000-0000-000000000000
        imgref config set defaults.region westeurope
    """
    config = get_config_or_exit("config set")

    parts = key.split(".")
    if len(parts) != 2:
        error(f"Invalid key format: {key}")
        info("Use format: section.field (e.g., defaults.region)")
        raise typer.Exit(1)

    section_name, field = parts
    if section_name not in ImageRefConfig.model_fields:
        error(f"Unknown configuration section: {section_name}")
        info(f"Valid sections: {', '.join(ImageRefConfig.model_fields)}")
        raise typer.Exit(1)

    section_obj = getattr(config, section_name)
    if field not in type(section_obj).model_fields:
        error(f"Unknown field '{field}' in section '{section_name}'")
        info(f"Valid fields: {', '.join(type(section_obj).model_fields)}")
        raise typer.Exit(1)

    new_value = None if value.lower() in ["none", "null", ""] else value
    data = config.model_dump()
    data[section_name][field] = new_value
    try:
        config = ImageRefConfig.model_validate(data)
    except ValidationError as e:
        error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(1)

    config.save()
    success(f"Set {key} = {new_value}")
