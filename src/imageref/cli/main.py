"""imageref CLI entry point."""

import typer

from . import config as config_cli
from . import images
from .display import error, info, warning
from .utils import configure_logging

app = typer.Typer(
    name="imgref",
    help="Parse and resolve Azure VM image references",
    no_args_is_help=True,
    add_completion=False,
    rich_markup_mode="rich",
)

app.add_typer(images.app, name="image", help="Inspect and resolve image references")
app.add_typer(config_cli.app, name="config", help="⚙️ Configure imageref settings")


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Parse and resolve Azure VM image references."""
    configure_logging(verbose)


@app.command()
def version():
    """Show imageref version."""
    from .. import __version__

    info(f"imageref version: {__version__}")


def main():
    """Main CLI entry point."""
    try:
        app()
    except KeyboardInterrupt:
        warning("\nInterrupted by user")
        raise typer.Exit(1)
    except Exception as e:
        error(f"Error: {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    main()
