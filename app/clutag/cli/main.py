"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from clutag import __version__
from clutag.cli.commands import config, info, init, next_entry, review, shuf, status

LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Create main Typer app
app = typer.Typer(
    name="clutag",
    help="Tag every path under your home directory and triage it bit by bit.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"clutag version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool, quiet: bool) -> None:
    """Route library logging to stderr at the requested level."""
    level = logging.WARNING
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    logging.basicConfig(level=level, format=LOG_FORMAT)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-essential output.",
        ),
    ] = False,
) -> None:
    """clutag - triage a directory tree one path at a time.

    Every file and directory under $HOME gets a tag (keep, filter,
    ignore, delete, review). New paths under kept directories are
    discovered on each rescan.
    """
    configure_logging(verbose, quiet)
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet


# Register commands
app.add_typer(status.app, name="status")
app.add_typer(init.app, name="init")
app.add_typer(init.app, name="rescan", help="Alias of init.")
app.command(name="review")(review.review)
app.add_typer(shuf.app, name="shuf")
app.add_typer(next_entry.app, name="next")
app.command(name="info")(info.info)
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
