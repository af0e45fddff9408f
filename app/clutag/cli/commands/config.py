"""Config commands.

Shows the effective settings and writes a default config.toml.
"""

from typing import Annotated

import typer
from rich.markup import escape
from rich.table import Table

from clutag.cli.context import require_settings
from clutag.core.paths import get_settings_path
from clutag.core.settings import FileSettings, SettingsError, save_file_settings
from clutag.utils.formatting import console, format_path, print_error, print_info, print_success

app = typer.Typer(
    help="Show or create the clutag configuration.",
    no_args_is_help=True,
)


@app.command()
def show() -> None:
    """Show the effective settings."""
    settings = require_settings()

    table = Table(title="Settings", show_header=False, border_style="border")
    table.add_column("Setting", style="bold_header")
    table.add_column("Value")
    table.add_row("root", format_path(str(settings.root)))
    table.add_row("database", format_path(str(settings.database_path)))
    filesystem = "enabled" if settings.filesystem_enabled else "[warning]disabled[/]"
    table.add_row("filesystem", filesystem)
    table.add_row("include_hidden", str(settings.include_hidden))
    table.add_row("sanity_threshold", f"{settings.sanity_threshold:.0%}")
    table.add_row("config file", format_path(str(get_settings_path())))
    console.print(table)


@app.command()
def init(
    force: Annotated[
        bool,
        typer.Option("--force", "-f", help="Overwrite an existing config file."),
    ] = False,
) -> None:
    """Write a config.toml with default settings."""
    path = get_settings_path()
    if path.exists() and not force:
        print_info(f"Config already exists: {format_path(str(path))} (use --force to overwrite)")
        raise typer.Exit(code=1)

    try:
        saved = save_file_settings(FileSettings(), path)
    except SettingsError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e

    print_success(f"Config written to {format_path(str(saved))}")
