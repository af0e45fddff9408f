"""Review command implementation.

Runs the interactive review loop on one path. The loop is shared with
the shuf and next commands, which only differ in how they pick the
first path.
"""

import random
from typing import Annotated

import typer
from rich.markup import escape

from clutag.cli.context import Workspace, open_workspace, warn_not_saved
from clutag.cli.display import REVIEW_HELP, print_entry
from clutag.engine.review import Decision, ReviewSession, ReviewStep
from clutag.models.entry import Tag
from clutag.utils.clipboard import copy_to_clipboard
from clutag.utils.formatting import (
    console,
    format_path,
    format_tag,
    print_error,
    print_info,
    print_success,
    print_warning,
)

PROMPT = "> "


def review(
    path: Annotated[str, typer.Argument(help="Path to review, absolute or relative to $HOME.")],
    dotfiles: Annotated[
        bool,
        typer.Option("--dotfiles", "-d", help="Include hidden files and directories."),
    ] = False,
) -> None:
    """Interactively classify PATH."""
    workspace = open_workspace()
    run_review(workspace, workspace.resolver.to_relative(path), include_hidden=dotfiles)


def run_review(
    workspace: Workspace,
    key: str,
    *,
    include_hidden: bool = False,
    rng: random.Random | None = None,
) -> None:
    """Drive one review session until it ends or input runs out.

    Args:
        workspace: Loaded workspace.
        key: Root-relative key to start with.
        include_hidden: Include hidden entries when expanding directories.
        rng: Random source for picking the next entry on skip.
    """
    session = ReviewSession(
        workspace.db,
        key,
        workspace.walker(include_hidden=include_hidden),
        workspace.store,
        rng,
    )
    entry = session.start()
    console.print(
        f"Reviewing: {format_path(key)} ({format_tag(entry.tag)}) -- press h for help."
    )

    while not session.ended:
        try:
            line = console.input(PROMPT)
        except EOFError:
            return
        decision = Decision.parse(line)
        if decision is None:
            if line.strip():
                print_warning("Unknown command (h for help).")
            continue
        _render_step(session, session.apply(decision), workspace)


def _render_step(session: ReviewSession, step: ReviewStep, workspace: Workspace) -> None:
    """Show the user what a decision did."""
    if step.decision == Decision.HELP:
        console.print(REVIEW_HELP, markup=False)
        return
    if step.decision == Decision.SHOW:
        print_entry(session.entry, step.key)
        return
    if step.decision == Decision.COPY:
        _copy_path(session.absolute_path)
        return
    if step.decision == Decision.QUIT:
        print_info(f"Quitting review for: {format_path(step.key)}")
        return
    if step.decision == Decision.NEXT:
        console.print(f"Skipping: {format_path(step.key)}")
        if step.next_key is None:
            print_info("No more unprocessed entries.")
        else:
            console.print(f"Next up: {format_path(step.next_key)}")
        return

    if step.error is not None:
        print_error(escape(step.error))
        return
    if step.tag == Tag.KEEP and step.decision == Decision.KEEP:
        print_success(f"Kept recursively: {format_path(step.key)} ({step.added} below)")
    elif step.tag == Tag.KEEP:
        print_success(f"Marked as filter: {format_path(step.key)} ({step.added} children added)")
    elif step.tag is not None:
        console.print(f"Tagged {format_path(step.key)} as {format_tag(step.tag)}")
    if step.removed:
        print_info(f"Dropped {step.removed} entries below {format_path(step.key)}.")
    if not step.saved:
        warn_not_saved(workspace.store)


def _copy_path(path: str) -> None:
    if copy_to_clipboard(path):
        print_success(f"Copied to clipboard: {format_path(path)}")
        return
    print_warning("No clipboard tool found, path printed instead.")
    console.print(path, markup=False, highlight=False)
