"""Expansion of bulk tag directives into per-path entries.

Both the reconciliation engine (for deferred ``r-keep`` / ``filter``
tags) and the review session (for immediate decisions) turn a single
directive on a directory into concrete records for its contents.
"""

import logging

from clutag.models.database import Database
from clutag.models.entry import EntryKind, Tag
from clutag.tree.keys import join_key
from clutag.tree.walker import TreeWalker

logger = logging.getLogger(__name__)


def keep_recursively(db: Database, key: str, walker: TreeWalker) -> int:
    """Keep a directory and every path below it.

    The key itself becomes ``keep`` and every on-disk descendant is
    recorded as ``keep`` with its own kind. The caller is responsible
    for checking that the path exists.

    Args:
        db: Database to update.
        key: Root-relative key of the directory (or file).
        walker: Filesystem access.

    Returns:
        Number of descendant entries written.
    """
    path = walker.resolver.to_absolute(key)
    kind = walker.kind_of(path)
    db.set_tag(key, Tag.KEEP, kind)
    if kind != EntryKind.DIRECTORY:
        return 0

    descendants = walker.collect_descendants(path)
    for child in descendants:
        child_kind = walker.kind_of(walker.resolver.to_absolute(child))
        db.set_tag(child, Tag.KEEP, child_kind)
    logger.debug("Kept %s with %d descendants", key, len(descendants))
    return len(descendants)


def keep_filtered(db: Database, key: str, walker: TreeWalker) -> int:
    """Keep a directory but track only its immediate children.

    The key becomes ``keep``; each child that is not tracked yet is
    added as ``unprocessed``. Already tracked children are left alone
    and nothing deeper is touched.

    Args:
        db: Database to update.
        key: Root-relative key of the directory (or file).
        walker: Filesystem access.

    Returns:
        Number of children added.
    """
    path = walker.resolver.to_absolute(key)
    kind = walker.kind_of(path)
    db.set_tag(key, Tag.KEEP, kind)
    if kind != EntryKind.DIRECTORY:
        return 0
    return add_untracked_children(db, key, walker)


def add_untracked_children(db: Database, key: str, walker: TreeWalker) -> int:
    """Record every untracked immediate child of a directory as ``unprocessed``.

    Returns:
        Number of children added.
    """
    path = walker.resolver.to_absolute(key)
    added = 0
    for name in walker.list_children(path):
        child = join_key(key, name)
        if child in db:
            continue
        db.add(child, Tag.UNPROCESSED, walker.kind_of(walker.resolver.to_absolute(child)))
        added += 1
    return added
