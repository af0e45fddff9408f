"""Interactive review of a single entry.

A ReviewSession holds exactly one current key and applies one human
decision at a time to it. Classifying decisions mutate and persist the
database and end the session; informational decisions leave the
database alone and keep the session open. Rendering, prompting and the
clipboard are left to the caller.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING

from clutag.engine.expand import keep_filtered, keep_recursively
from clutag.engine.selector import pick_random
from clutag.models.entry import EntryKind, Tag

if TYPE_CHECKING:
    from clutag.core.store import DatabaseStore
    from clutag.models.database import Database
    from clutag.models.entry import Entry
    from clutag.tree.walker import TreeWalker

logger = logging.getLogger(__name__)


class Decision(str, Enum):
    """Single-letter commands accepted during review."""

    HELP = "h"
    COPY = "c"
    KEEP = "k"
    REVIEW = "r"
    FILTER = "f"
    IGNORE = "i"
    DELETE = "d"
    SHOW = "s"
    NEXT = "n"
    QUIT = "q"

    @classmethod
    def parse(cls, line: str) -> Decision | None:
        """Parse the first word of an input line; None if it is not a decision."""
        words = line.split()
        if not words:
            return None
        try:
            return cls(words[0])
        except ValueError:
            return None

    @property
    def is_informational(self) -> bool:
        """Whether the decision leaves the session open and the database untouched."""
        return self in (Decision.HELP, Decision.COPY, Decision.SHOW)


# Tags set directly by a decision, after clearing a kept directory's subtree
_RETAG_DECISIONS: dict[Decision, Tag] = {
    Decision.IGNORE: Tag.IGNORE,
    Decision.DELETE: Tag.DELETE,
    Decision.REVIEW: Tag.REVIEW,
}


@dataclass(frozen=True, slots=True)
class ReviewStep:
    """Outcome of applying one decision.

    Attributes:
        decision: The decision that was applied.
        key: Key the decision applied to.
        ended: Whether the session is over.
        tag: Tag written to key, if any.
        next_key: Key now under review after a skip, if any.
        removed: Number of descendant entries dropped.
        added: Number of entries added or retagged beneath key.
        saved: Whether the change was persisted.
        error: Reason the decision could not be applied, if any.
    """

    decision: Decision
    key: str
    ended: bool
    tag: Tag | None = None
    next_key: str | None = None
    removed: int = 0
    added: int = 0
    saved: bool = False
    error: str | None = None


class ReviewSession:
    """Applies review decisions to one entry at a time.

    Args:
        db: Database to update.
        key: Root-relative key to review.
        walker: Filesystem access.
        store: Store used to persist every change.
        rng: Random source for picking the next entry on skip.
    """

    def __init__(
        self,
        db: Database,
        key: str,
        walker: TreeWalker,
        store: DatabaseStore,
        rng: random.Random | None = None,
    ) -> None:
        self._db = db
        self._key = key
        self._walker = walker
        self._store = store
        self._rng = rng if rng is not None else random.Random()
        self._ended = False

    @property
    def key(self) -> str:
        """Key currently under review."""
        return self._key

    @property
    def ended(self) -> bool:
        """Whether the session is over."""
        return self._ended

    @property
    def entry(self) -> Entry | None:
        """Stored entry of the current key."""
        return self._db.get(self._key)

    @property
    def absolute_path(self) -> str:
        """Absolute path of the current key."""
        return self._walker.resolver.to_absolute(self._key)

    def start(self) -> Entry:
        """Make sure the current key is tracked before any decision.

        An untracked key is recorded as unprocessed with a freshly
        determined kind and persisted immediately.

        Returns:
            The entry under review.
        """
        entry = self._db.get(self._key)
        if entry is None:
            kind = self._walker.kind_of(self.absolute_path)
            entry = self._db.add(self._key, Tag.UNPROCESSED, kind)
            self._store.save(self._db)
            logger.debug("Started tracking %s for review", self._key)
        return entry

    def apply(self, decision: Decision) -> ReviewStep:
        """Apply one decision to the current key.

        Args:
            decision: Parsed human decision.

        Returns:
            ReviewStep describing the outcome.

        Raises:
            RuntimeError: If the session has already ended.
        """
        if self._ended:
            msg = f"Review of {self._key} has already ended"
            raise RuntimeError(msg)

        if decision.is_informational:
            return ReviewStep(decision=decision, key=self._key, ended=False)
        if decision == Decision.QUIT:
            return self._end(ReviewStep(decision=decision, key=self._key, ended=True))
        if decision == Decision.NEXT:
            return self._skip()
        if decision == Decision.KEEP:
            return self._keep()
        if decision == Decision.FILTER:
            return self._filter()
        return self._retag(decision, _RETAG_DECISIONS[decision])

    def _end(self, step: ReviewStep) -> ReviewStep:
        self._ended = step.ended
        return step

    def _skip(self) -> ReviewStep:
        skipped = self._key
        next_key = pick_random(self._db, self._rng, exclude=(skipped,))
        if next_key is None:
            return self._end(ReviewStep(decision=Decision.NEXT, key=skipped, ended=True))
        self._key = next_key
        return ReviewStep(decision=Decision.NEXT, key=skipped, ended=False, next_key=next_key)

    def _keep(self) -> ReviewStep:
        key = self._key
        if not self._walker.enabled:
            # Expanded by the next reconciliation with the filesystem available
            self._db.set_tag(key, Tag.RECURSIVE_KEEP)
            return self._persist(
                ReviewStep(decision=Decision.KEEP, key=key, ended=True, tag=Tag.RECURSIVE_KEEP)
            )

        if not self._walker.exists(self.absolute_path):
            return self._end(
                ReviewStep(
                    decision=Decision.KEEP,
                    key=key,
                    ended=True,
                    error=f"Path does not exist on disk: {key}",
                )
            )

        removed = self._db.remove_descendants(key)
        added = keep_recursively(self._db, key, self._walker)
        return self._persist(
            ReviewStep(
                decision=Decision.KEEP,
                key=key,
                ended=True,
                tag=Tag.KEEP,
                removed=removed,
                added=added,
            )
        )

    def _filter(self) -> ReviewStep:
        key = self._key
        if not self._walker.enabled:
            self._db.set_tag(key, Tag.FILTER, EntryKind.DIRECTORY)
            return self._persist(
                ReviewStep(decision=Decision.FILTER, key=key, ended=True, tag=Tag.FILTER)
            )

        if not self._walker.exists(self.absolute_path):
            return self._end(
                ReviewStep(
                    decision=Decision.FILTER,
                    key=key,
                    ended=True,
                    error=f"Path missing: {key}",
                )
            )

        added = keep_filtered(self._db, key, self._walker)
        return self._persist(
            ReviewStep(decision=Decision.FILTER, key=key, ended=True, tag=Tag.KEEP, added=added)
        )

    def _retag(self, decision: Decision, tag: Tag) -> ReviewStep:
        key = self._key
        entry = self.start()
        removed = 0
        if entry.tag == Tag.KEEP and entry.kind == EntryKind.DIRECTORY:
            removed = self._db.remove_descendants(key)
        self._db.set_tag(key, tag)
        return self._persist(
            ReviewStep(decision=decision, key=key, ended=True, tag=tag, removed=removed)
        )

    def _persist(self, step: ReviewStep) -> ReviewStep:
        saved = self._store.save(self._db)
        logger.info("Tagged %s as %s", step.key, step.tag.value if step.tag else "-")
        return self._end(replace(step, saved=saved))
