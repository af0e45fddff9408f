"""Shuf command implementation.

Picks a random unprocessed (or review-tagged) entry and reviews it.
"""

import random
from typing import Annotated

import typer

from clutag.cli.commands.review import run_review
from clutag.cli.context import open_workspace
from clutag.engine.selector import pick_random
from clutag.utils.formatting import console, format_path, print_info

app = typer.Typer(
    help="Review a randomly picked entry.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def shuf(
    dotfiles: Annotated[
        bool,
        typer.Option("--dotfiles", "-d", help="Include hidden files and directories."),
    ] = False,
    review_mode: Annotated[
        bool,
        typer.Option("--review", "-r", help="Pick among entries marked for review."),
    ] = False,
    seed: Annotated[
        int | None,
        typer.Option("--seed", help="Seed the random pick for reproducible runs."),
    ] = None,
) -> None:
    """Pick a random unprocessed entry and review it."""
    workspace = open_workspace()
    rng = random.Random(seed)

    pick = pick_random(workspace.db, rng, review_mode=review_mode)
    if pick is None:
        print_info("No entries to pick.")
        return

    console.print(f"Random pick: {format_path(pick)}")
    run_review(workspace, pick, include_hidden=dotfiles, rng=rng)
