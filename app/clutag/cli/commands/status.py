"""Status command implementation.

Reports triage progress for every top-level tracked path.
"""

import json
from typing import Annotated

import typer

from clutag.cli.context import open_workspace
from clutag.cli.display import create_status_table
from clutag.engine.stats import top_level_stats
from clutag.utils.formatting import console, print_info

app = typer.Typer(
    help="Show triage progress per top-level path.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def status(
    review: Annotated[
        bool,
        typer.Option("--review", "-r", help="Include pending review counts."),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Output as JSON."),
    ] = False,
) -> None:
    """Show the share of processed entries below each top-level path.

    Examples:
        clutag status          # Percent processed per top-level path
        clutag status -r       # Also show how many entries await review
    """
    workspace = open_workspace()
    stats = top_level_stats(workspace.db)

    if json_output:
        console.print_json(json.dumps([item.to_dict() for item in stats]))
        return

    if not stats:
        print_info("No top-level entries in database. Run 'clutag init' to populate.")
        return

    console.print(create_status_table(stats, show_review=review))
