"""Reconciliation of the tag database with the live directory tree.

This module provides the Reconciler that brings the database in line
with the filesystem and expands deferred bulk directives. A run is
idempotent once the tree stops changing, and a ``keep`` decision is
never silently lost because its path went missing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from clutag.engine.expand import add_untracked_children, keep_filtered, keep_recursively
from clutag.models.entry import EntryKind, Tag
from clutag.tree.keys import ROOT_KEY

if TYPE_CHECKING:
    from clutag.core.store import DatabaseStore
    from clutag.models.database import Database
    from clutag.tree.walker import TreeWalker

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileReport:
    """Summary of one reconciliation run.

    Attributes:
        skipped: True if the filesystem is disabled and nothing was done.
        bootstrapped: True if the root entry had to be created.
        not_found: Kept entries whose path vanished and were marked not-found.
        pruned: Entries removed because their path vanished.
        discovered: New unprocessed entries found under kept directories.
        expanded: Deferred r-keep / filter directives that were applied.
        saved: Whether the result was persisted.
    """

    skipped: bool = False
    bootstrapped: bool = False
    not_found: int = 0
    pruned: int = 0
    discovered: int = 0
    expanded: int = 0
    saved: bool = False

    @property
    def changed(self) -> bool:
        """Whether the run modified the database."""
        return bool(
            self.bootstrapped or self.not_found or self.pruned or self.discovered or self.expanded
        )


class Reconciler:
    """Runs the rescan algorithm against a database.

    Phases run in a fixed order because each depends on the previous
    one: root bootstrap, pruning, discovery, directive expansion, save.

    Args:
        walker: Filesystem access.
        store: Store used to persist the result. If None, nothing is saved.
    """

    def __init__(self, walker: TreeWalker, store: DatabaseStore | None = None) -> None:
        self._walker = walker
        self._store = store

    def run(self, db: Database) -> ReconcileReport:
        """Reconcile db with the filesystem.

        Args:
            db: Database to update in place.

        Returns:
            ReconcileReport describing what changed.
        """
        if not self._walker.enabled:
            logger.info("Filesystem disabled, skipping reconciliation")
            return ReconcileReport(skipped=True)

        bootstrapped = self._bootstrap_root(db)
        not_found, pruned = self._prune(db)
        discovered = self._discover(db)
        expanded = self._expand(db)

        saved = self._store.save(db) if self._store is not None else False

        report = ReconcileReport(
            bootstrapped=bootstrapped,
            not_found=not_found,
            pruned=pruned,
            discovered=discovered,
            expanded=expanded,
            saved=saved,
        )
        logger.debug("Reconciliation finished: %s", report)
        return report

    def _bootstrap_root(self, db: Database) -> bool:
        if db.is_initialized:
            return False
        db.add(ROOT_KEY, Tag.KEEP, EntryKind.DIRECTORY)
        logger.info("Root entry initialized")
        return True

    def _prune(self, db: Database) -> tuple[int, int]:
        """Handle entries whose path no longer exists.

        Kept entries become not-found; everything else is removed.
        Entries already not-found stay, so a rescan is idempotent: running
        it twice leaves the same database as running it once, and the
        record of a lost keep decision survives until the user retags it.

        Returns:
            Tuple of (marked not-found, removed).
        """
        not_found = 0
        doomed: list[str] = []
        for key, entry in db.items():
            if key == ROOT_KEY:
                continue
            if self._walker.exists(self._walker.resolver.to_absolute(key)):
                continue
            if entry.tag == Tag.KEEP:
                db.set_tag(key, Tag.NOT_FOUND)
                not_found += 1
            elif entry.tag != Tag.NOT_FOUND:
                doomed.append(key)

        for key in doomed:
            db.remove(key)
            logger.debug("Pruned vanished entry %s", key)
        return not_found, len(doomed)

    def _discover(self, db: Database) -> int:
        """Track untracked children of every existing kept directory."""
        discovered = 0
        for key, entry in db.items():
            if entry.tag != Tag.KEEP or entry.kind != EntryKind.DIRECTORY:
                continue
            if not self._walker.is_dir(self._walker.resolver.to_absolute(key)):
                continue
            discovered += add_untracked_children(db, key, self._walker)
        return discovered

    def _expand(self, db: Database) -> int:
        """Apply deferred r-keep and filter directives."""
        expanded = 0
        for key in db.with_tag(Tag.RECURSIVE_KEEP, Tag.FILTER):
            entry = db.get(key)
            if entry is None:
                continue
            if not self._walker.is_dir(self._walker.resolver.to_absolute(key)):
                db.set_tag(key, Tag.KEEP)
            elif entry.tag == Tag.RECURSIVE_KEEP:
                keep_recursively(db, key, self._walker)
            elif entry.tag == Tag.FILTER:
                keep_filtered(db, key, self._walker)
            else:
                continue
            expanded += 1
        return expanded
