"""Shared setup for database commands.

Every command that touches the tag database owns exactly one
Workspace: the effective settings, the store, the loaded database and
the path resolver, threaded explicitly into the engine.
"""

from dataclasses import dataclass

import typer
from rich.markup import escape

from clutag.core.settings import Settings, SettingsError, load_settings
from clutag.core.store import DatabaseStore
from clutag.engine.stats import missing_ratio
from clutag.models.database import Database
from clutag.tree.keys import PathResolver
from clutag.tree.walker import TreeWalker
from clutag.utils.formatting import format_path, print_error, print_info, print_warning


@dataclass(slots=True)
class Workspace:
    """Everything one command invocation needs to work on the database.

    Attributes:
        settings: Effective settings.
        store: Database persistence.
        db: Database loaded at startup.
        resolver: Converts between absolute paths and keys.
    """

    settings: Settings
    store: DatabaseStore
    db: Database
    resolver: PathResolver

    def walker(self, include_hidden: bool = False) -> TreeWalker:
        """Build a TreeWalker honouring the settings.

        Args:
            include_hidden: Force hidden entries on for this command.
        """
        return TreeWalker(
            self.resolver,
            include_hidden=include_hidden or self.settings.include_hidden,
            enabled=self.settings.filesystem_enabled,
        )

    def save(self) -> bool:
        """Persist the database, warning the user if that failed."""
        if self.store.save(self.db):
            return True
        warn_not_saved(self.store)
        return False


def warn_not_saved(store: DatabaseStore) -> None:
    """Tell the user the last change only lives in memory."""
    print_warning(f"Changes could not be saved to {format_path(str(store.path))}")


def require_settings() -> Settings:
    """Load settings or exit with a helpful error message.

    Raises:
        typer.Exit: If the settings file is invalid.
    """
    try:
        return load_settings()
    except SettingsError as e:
        print_error(escape(str(e)))
        raise typer.Exit(code=1) from e


def open_workspace(*, check_sanity: bool = True) -> Workspace:
    """Load settings and the database, then run the sanity check.

    Args:
        check_sanity: Ask for confirmation when most entries are missing on disk.

    Returns:
        Workspace for this invocation.

    Raises:
        typer.Exit: If settings are invalid or the user declines to continue.
    """
    settings = require_settings()
    store = DatabaseStore(settings.database_path)
    workspace = Workspace(
        settings=settings,
        store=store,
        db=store.load(),
        resolver=PathResolver(settings.root),
    )
    if check_sanity:
        sanity_check(workspace)
    return workspace


def sanity_check(workspace: Workspace) -> None:
    """Guard against running against the wrong machine or root.

    When most tracked entries are missing on disk, a rescan would mark
    or prune nearly everything, so the user has to confirm first.
    Skipped when the filesystem is disabled.

    Raises:
        typer.Exit: If the user declines to continue.
    """
    walker = workspace.walker()
    if not walker.enabled:
        return

    ratio = missing_ratio(workspace.db, walker)
    if ratio <= workspace.settings.sanity_threshold:
        return

    print_warning(
        f"{ratio:.0%} of database entries were not found under "
        f"{format_path(str(workspace.resolver.root))}. "
        "Remote review mode is recommended (CLUTAG_NO_FS=1)."
    )
    if not typer.confirm("Continue anyway?", default=False):
        print_info("Aborted.")
        raise typer.Exit(code=0)
