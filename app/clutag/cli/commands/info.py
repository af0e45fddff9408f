"""Info command implementation.

Prints the stored entry of a single path.
"""

from typing import Annotated

import typer

from clutag.cli.context import open_workspace
from clutag.cli.display import print_entry


def info(
    path: Annotated[str, typer.Argument(help="Path to show, absolute or relative to $HOME.")],
) -> None:
    """Show the database entry for PATH."""
    workspace = open_workspace(check_sanity=False)
    key = workspace.resolver.to_relative(path)
    print_entry(workspace.db.get(key), key)
