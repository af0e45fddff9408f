"""Next command implementation.

Reviews the shallowest unprocessed entry, alphabetically first among
equally deep ones, so triage works its way down the tree.
"""

from typing import Annotated

import typer

from clutag.cli.commands.review import run_review
from clutag.cli.context import open_workspace
from clutag.engine.selector import pick_next
from clutag.utils.formatting import console, format_path, print_success

app = typer.Typer(
    help="Review the shallowest unprocessed entry.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def next_entry(
    dotfiles: Annotated[
        bool,
        typer.Option("--dotfiles", "-d", help="Include hidden files and directories."),
    ] = False,
) -> None:
    """Review the shallowest unprocessed entry."""
    workspace = open_workspace()

    pick = pick_next(workspace.db)
    if pick is None:
        print_success("Clean soul! No unprocessed files.")
        return

    console.print(f"[muted]\\[shallow][/muted] Next item: {format_path(pick)}")
    run_review(workspace, pick, include_hidden=dotfiles)
