"""Init / rescan command implementation.

Reconciles the tag database with the directory tree: creates the root
entry on first use, prunes vanished paths, discovers new ones and
expands deferred keep/filter directives.
"""

from typing import Annotated

import typer

from clutag.cli.context import open_workspace, warn_not_saved
from clutag.cli.display import print_reconcile_report
from clutag.engine.reconcile import Reconciler

app = typer.Typer(
    help="Scan the tree and bring the database up to date.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def init(
    dotfiles: Annotated[
        bool,
        typer.Option("--dotfiles", "-d", help="Include hidden files and directories."),
    ] = False,
) -> None:
    """Scan the tree and bring the database up to date.

    Safe to run repeatedly: without filesystem changes a second run
    leaves the database as it is.
    """
    workspace = open_workspace()
    reconciler = Reconciler(workspace.walker(include_hidden=dotfiles), workspace.store)

    report = reconciler.run(workspace.db)
    print_reconcile_report(report)
    if not report.skipped and not report.saved:
        warn_not_saved(workspace.store)
