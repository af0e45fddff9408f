"""Progress statistics over the tag database."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

from clutag.models.entry import Tag
from clutag.tree.keys import depth, is_under

if TYPE_CHECKING:
    from clutag.models.database import Database
    from clutag.tree.walker import TreeWalker


@dataclass(frozen=True, slots=True)
class SubtreeStats:
    """Counts for one subtree of the database.

    Attributes:
        key: Subtree root key.
        processed: Entries whose tag is neither unprocessed nor review.
        total: All entries in the subtree, the root included.
        review: Entries tagged review.
    """

    key: str
    processed: int
    total: int
    review: int

    @property
    def percent(self) -> int:
        """Processed share of total, rounded half up; 0 for an empty subtree."""
        if self.total == 0:
            return 0
        return math.floor(self.processed / self.total * 100 + 0.5)

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON output."""
        return {
            "path": self.key,
            "percent": self.percent,
            "processed": self.processed,
            "total": self.total,
            "review": self.review,
        }


def subtree_stats(db: Database, root: str) -> SubtreeStats:
    """Count processed, total and review entries at or below root."""
    processed = total = review = 0
    for key, entry in db.items():
        if not is_under(key, root):
            continue
        total += 1
        if entry.tag.is_processed:
            processed += 1
        if entry.tag == Tag.REVIEW:
            review += 1
    return SubtreeStats(key=root, processed=processed, total=total, review=review)


def top_level_stats(db: Database) -> list[SubtreeStats]:
    """Stats for every depth-1 key, sorted by key."""
    top = sorted(key for key in db if depth(key) == 1)
    return [subtree_stats(db, key) for key in top]


def missing_ratio(db: Database, walker: TreeWalker) -> float:
    """Share of tracked entries whose path does not exist on disk.

    Returns:
        Ratio between 0.0 and 1.0; 0.0 for an empty database.
    """
    if len(db) == 0:
        return 0.0
    missing = sum(1 for key in db if not walker.exists(walker.resolver.to_absolute(key)))
    return missing / len(db)
