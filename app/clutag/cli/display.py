"""Shared Rich display functions for progress and entries.

Provides the table builders and printers used by the status, info,
rescan and review commands.
"""

from rich.table import Table

from clutag.engine.reconcile import ReconcileReport
from clutag.engine.stats import SubtreeStats
from clutag.models.entry import TIMESTAMP_FORMAT, Entry
from clutag.utils.formatting import console, format_path, format_tag, print_info, print_success

REVIEW_HELP = """\
Review commands:
  h   Show this help
  c   Copy path  -- copy absolute path to clipboard
  k   Keep       -- keep this path and everything below it
  r   Review     -- mark as to be reviewed later
  f   Filter     -- keep this directory, triage its children one by one
  i   Ignore     -- mark ignore
  d   Delete     -- mark delete
  s   Show info  -- show database entry
  n   Next       -- skip this entry
  q   Quit review"""


def create_status_table(stats: list[SubtreeStats], show_review: bool = False) -> Table:
    """Create a Rich table of per-path progress.

    Args:
        stats: Statistics for each top-level path.
        show_review: Add a column with the pending review count.

    Returns:
        Rich Table configured for progress display.
    """
    table = Table(
        title="Progress",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Path", no_wrap=True)
    table.add_column("Done", justify="right", width=5)
    table.add_column("Processed", justify="right", style="muted")
    if show_review:
        table.add_column("Review", justify="right")

    for item in stats:
        style = "success" if item.percent == 100 else "text"
        row = [
            format_path(item.key),
            f"[{style}]{item.percent}%[/]",
            f"{item.processed}/{item.total}",
        ]
        if show_review:
            row.append(f"[tag.review]{item.review}[/]" if item.review else "[muted]0[/]")
        table.add_row(*row)

    return table


def create_entry_table(entry: Entry) -> Table:
    """Create a two-column Rich table describing one entry."""
    table = Table(show_header=False, border_style="border")
    table.add_column("Field", style="bold_header")
    table.add_column("Value")
    table.add_row("Path", format_path(entry.path))
    table.add_row("Type", entry.kind.value)
    table.add_row("Tag", format_tag(entry.tag))
    table.add_row("Created", entry.created_at.strftime(TIMESTAMP_FORMAT))
    table.add_row("Updated", entry.updated_at.strftime(TIMESTAMP_FORMAT))
    return table


def print_entry(entry: Entry | None, key: str) -> None:
    """Print one entry, or a notice if it is not tracked."""
    if entry is None:
        print_info(f"No database entry for: {format_path(key)}")
        return
    console.print(create_entry_table(entry))


def print_reconcile_report(report: ReconcileReport) -> None:
    """Print a one-paragraph summary of a rescan."""
    if report.skipped:
        print_info("CLUTAG_NO_FS=1 set, skipping init/rescan.")
        return
    if report.bootstrapped:
        print_info("Root (.) initialized in database.")

    parts = [
        f"{report.discovered} discovered",
        f"{report.pruned} pruned",
        f"{report.not_found} not found",
        f"{report.expanded} expanded",
    ]
    console.print(f"[muted]{', '.join(parts)}[/muted]")
    print_success("Rescan complete.")
