"""Image reference CLI commands."""

import asyncio
import json

import typer

from ..errors import ConfigError, ImageResult
from ..reference import OS, ImageReference
from .display import console, error, info_dict, section, success
from .utils import get_config_or_exit

app = typer.Typer(help="Inspect and resolve VM image references")


def _parse_or_exit(image: str) -> ImageReference:
    result = ImageReference.parse(image)
    if not result.ok:
        for message in result.error.errors:
            error(message)
        raise typer.Exit(1)
    return result.value


@app.command()
def parse(
    image: str = typer.Argument(..., help="ARM image identifier or publisher:offer:sku:version"),
    as_json: bool = typer.Option(False, "--json", help="Print machine-readable JSON"),
):
    """Classify an image reference and show its derived properties."""
    reference = _parse_or_exit(image)
    details = {
        "kind": type(reference).__name__,
        "canonical": str(reference),
        "max_vm_count": reference.max_vm_count,
        "arm": reference.to_arm().as_dict(),
    }

    if as_json:
        typer.echo(json.dumps(details, indent=2))
        return

    section("Image reference")
    info_dict({k: v for k, v in details.items() if k != "arm"})
    section("ARM image reference")
    info_dict(details["arm"])


async def _resolve_os(reference: ImageReference, subscription_id: str, region: str) -> ImageResult[OS]:
    from ..client import AzureComputeClient

    async with AzureComputeClient(subscription_id) as client:
        return await reference.resolve_os(client, region)


@app.command(name="os")
def resolve_os(
    image: str = typer.Argument(..., help="ARM image identifier or publisher:offer:sku:version"),
    region: str | None = typer.Option(None, "--region", "-r", help="Azure region (default from config)"),
    subscription: str | None = typer.Option(
        None, "--subscription", "-s", help="Subscription for marketplace lookups"
    ),
):
    """Resolve the operating system of an image through Azure."""
    from ..core.config import resolve_region, resolve_subscription_id

    reference = _parse_or_exit(image)
    config = get_config_or_exit("image os", required=False)
    try:
        subscription_id = resolve_subscription_id(config, subscription)
    except ConfigError as e:
        error(str(e))
        raise typer.Exit(1)
    region = resolve_region(config, region)

    with console.status(f"Resolving OS for {reference} in {region}..."):
        result = asyncio.run(_resolve_os(reference, subscription_id, region))

    if not result.ok:
        for message in result.error.errors:
            error(message)
        raise typer.Exit(1)
    success(f"{reference}: {result.value.value}")
