"""Selection of the next entry to classify.

Two policies are offered: a uniform random draw (``shuf``) and a
depth-priority pick of the shallowest unprocessed entry (``next``).
Both return None when nothing is left, so callers can tell exhaustion
apart from a pick.
"""

from __future__ import annotations

import random
from collections.abc import Iterable
from typing import TYPE_CHECKING

from clutag.models.entry import Tag
from clutag.tree.keys import depth

if TYPE_CHECKING:
    from clutag.models.database import Database


def candidates(db: Database, review_mode: bool = False) -> list[str]:
    """Keys eligible for selection, sorted for reproducible draws.

    Args:
        db: Database to scan.
        review_mode: Select review-tagged entries instead of unprocessed ones.
    """
    tag = Tag.REVIEW if review_mode else Tag.UNPROCESSED
    return sorted(db.with_tag(tag))


def pick_random(
    db: Database,
    rng: random.Random,
    review_mode: bool = False,
    exclude: Iterable[str] = (),
) -> str | None:
    """Draw one candidate uniformly at random.

    Args:
        db: Database to select from.
        rng: Random source; seed it for deterministic draws.
        review_mode: Draw from review-tagged entries instead of unprocessed ones.
        exclude: Keys that must not be drawn.

    Returns:
        The drawn key, or None if no candidate remains.
    """
    skipped = set(exclude)
    pool = [key for key in candidates(db, review_mode) if key not in skipped]
    if not pool:
        return None
    return rng.choice(pool)


def pick_next(db: Database) -> str | None:
    """Shallowest unprocessed key, ties broken alphabetically.

    Returns:
        The selected key, or None if nothing is unprocessed.
    """
    pool = db.with_tag(Tag.UNPROCESSED)
    if not pool:
        return None
    return min(pool, key=lambda key: (depth(key), key))
