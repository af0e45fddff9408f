"""Unit tests for ReviewSession decisions."""

import random
from collections.abc import Callable
from pathlib import Path

import pytest
from clutag.core.store import DatabaseStore
from clutag.engine.review import Decision, ReviewSession
from clutag.models.database import Database
from clutag.models.entry import EntryKind, Tag
from clutag.tree.walker import TreeWalker


def _session(
    db: Database, key: str, walker: TreeWalker, store: DatabaseStore, seed: int = 0
) -> ReviewSession:
    session = ReviewSession(db, key, walker, store, random.Random(seed))
    session.start()
    return session


def _tags(db: Database) -> dict[str, Tag]:
    return {key: entry.tag for key, entry in db.items()}


class TestDecisionParse:
    """Tests for Decision.parse."""

    @pytest.mark.parametrize(
        ("line", "expected"),
        [
            ("k", Decision.KEEP),
            ("  d  ", Decision.DELETE),
            ("f now please", Decision.FILTER),
            ("q", Decision.QUIT),
        ],
    )
    def test_first_word_is_the_decision(self, line: str, expected: Decision) -> None:
        """Only the first word of the line counts."""
        assert Decision.parse(line) == expected

    @pytest.mark.parametrize("line", ["", "   ", "x", "keep", "K"])
    def test_invalid_lines(self, line: str) -> None:
        """Empty and unknown input is not a decision."""
        assert Decision.parse(line) is None

    def test_informational_decisions(self) -> None:
        """Help, copy and show are informational."""
        assert {d for d in Decision if d.is_informational} == {
            Decision.HELP,
            Decision.COPY,
            Decision.SHOW,
        }


class TestStart:
    """Tests for ReviewSession.start."""

    def test_untracked_key_is_added_and_saved(
        self, walker: TreeWalker, store: DatabaseStore, build_tree: Callable[..., Path]
    ) -> None:
        """Reviewing an untracked path tracks it first."""
        build_tree({"docs": None})
        db = Database()

        entry = ReviewSession(db, "docs", walker, store).start()

        assert entry.tag == Tag.UNPROCESSED
        assert entry.kind == EntryKind.DIRECTORY
        assert "docs" in store.load()

    def test_tracked_key_unchanged(self, walker: TreeWalker, store: DatabaseStore) -> None:
        """An existing entry is returned as is."""
        db = Database()
        existing = db.add("a", Tag.REVIEW, EntryKind.FILE)

        assert ReviewSession(db, "a", walker, store).start() is existing


class TestKeep:
    """Tests for the keep decision."""

    def test_keep_directory_recursively(
        self, walker: TreeWalker, store: DatabaseStore, build_tree: Callable[..., Path]
    ) -> None:
        """Keep replaces the subtree with keep entries for everything on disk."""
        build_tree({"docs/a.txt": "", "docs/old/b.txt": ""})
        db = Database()
        db.add("docs/gone.txt", Tag.DELETE, EntryKind.FILE)
        db.add("docs/a.txt", Tag.IGNORE, EntryKind.FILE)
        session = _session(db, "docs", walker, store)

        step = session.apply(Decision.KEEP)

        assert step.ended and session.ended
        assert step.tag == Tag.KEEP
        assert step.removed == 2
        assert step.added == 3
        assert step.saved is True
        assert _tags(db) == {
            "docs": Tag.KEEP,
            "docs/a.txt": Tag.KEEP,
            "docs/old": Tag.KEEP,
            "docs/old/b.txt": Tag.KEEP,
        }
        assert store.load() == db

    def test_keep_missing_path_fails(self, walker: TreeWalker, store: DatabaseStore) -> None:
        """Keeping a path that does not exist ends with an error and no change."""
        db = Database()
        session = _session(db, "gone", walker, store)

        step = session.apply(Decision.KEEP)

        assert step.ended
        assert step.error is not None and "gone" in step.error
        assert _tags(db) == {"gone": Tag.UNPROCESSED}

    def test_keep_offline_stores_directive(
        self, offline_walker: TreeWalker, store: DatabaseStore
    ) -> None:
        """Without filesystem access keep is deferred as r-keep."""
        db = Database()
        db.add("docs", Tag.UNPROCESSED, EntryKind.DIRECTORY)
        db.add("docs/a.txt", Tag.UNPROCESSED, EntryKind.FILE)
        session = _session(db, "docs", offline_walker, store)

        step = session.apply(Decision.KEEP)

        assert step.tag == Tag.RECURSIVE_KEEP
        assert _tags(db) == {"docs": Tag.RECURSIVE_KEEP, "docs/a.txt": Tag.UNPROCESSED}


class TestFilter:
    """Tests for the filter decision."""

    def test_filter_tracks_children(
        self, walker: TreeWalker, store: DatabaseStore, build_tree: Callable[..., Path]
    ) -> None:
        """Filter keeps the directory and adds its untracked children."""
        build_tree({"docs/a.txt": "", "docs/b.txt": "", "docs/old/c.txt": ""})
        db = Database()
        db.add("docs/a.txt", Tag.DELETE, EntryKind.FILE)
        session = _session(db, "docs", walker, store)

        step = session.apply(Decision.FILTER)

        assert step.tag == Tag.KEEP
        assert step.added == 2
        assert _tags(db) == {
            "docs": Tag.KEEP,
            "docs/a.txt": Tag.DELETE,
            "docs/b.txt": Tag.UNPROCESSED,
            "docs/old": Tag.UNPROCESSED,
        }

    def test_filter_missing_path_fails(self, walker: TreeWalker, store: DatabaseStore) -> None:
        """Filtering a vanished path reports an error."""
        session = _session(Database(), "gone", walker, store)

        step = session.apply(Decision.FILTER)

        assert step.error == "Path missing: gone"
        assert step.ended

    def test_filter_offline_stores_directive(
        self, offline_walker: TreeWalker, store: DatabaseStore
    ) -> None:
        """Without filesystem access filter is stored for later expansion."""
        db = Database()
        session = _session(db, "docs", offline_walker, store)

        step = session.apply(Decision.FILTER)

        entry = db.get("docs")
        assert step.tag == Tag.FILTER
        assert entry is not None
        assert entry.tag == Tag.FILTER
        assert entry.kind == EntryKind.DIRECTORY


class TestRetag:
    """Tests for ignore, delete and review decisions."""

    @pytest.mark.parametrize(
        ("decision", "tag"),
        [
            (Decision.IGNORE, Tag.IGNORE),
            (Decision.DELETE, Tag.DELETE),
            (Decision.REVIEW, Tag.REVIEW),
        ],
    )
    def test_sets_tag(
        self,
        walker: TreeWalker,
        store: DatabaseStore,
        decision: Decision,
        tag: Tag,
    ) -> None:
        """Each decision writes its tag and ends the session."""
        db = Database()
        db.add("a.txt", Tag.UNPROCESSED, EntryKind.FILE)
        session = _session(db, "a.txt", walker, store)

        step = session.apply(decision)

        assert step.tag == tag
        assert step.ended
        assert _tags(store.load()) == {"a.txt": tag}

    def test_delete_kept_directory_drops_subtree(
        self, walker: TreeWalker, store: DatabaseStore
    ) -> None:
        """Retagging a kept directory removes every entry below it."""
        db = Database()
        db.add("docs", Tag.KEEP, EntryKind.DIRECTORY)
        db.add("docs/a", Tag.KEEP, EntryKind.FILE)
        db.add("docs/b/c", Tag.IGNORE, EntryKind.FILE)
        db.add("docs2", Tag.KEEP, EntryKind.DIRECTORY)
        session = _session(db, "docs", walker, store)

        step = session.apply(Decision.DELETE)

        assert step.removed == 2
        assert _tags(db) == {"docs": Tag.DELETE, "docs2": Tag.KEEP}

    def test_unkept_directory_keeps_subtree(
        self, walker: TreeWalker, store: DatabaseStore
    ) -> None:
        """Entries below a directory that was not kept are left alone."""
        db = Database()
        db.add("docs", Tag.REVIEW, EntryKind.DIRECTORY)
        db.add("docs/a", Tag.KEEP, EntryKind.FILE)
        session = _session(db, "docs", walker, store)

        step = session.apply(Decision.IGNORE)

        assert step.removed == 0
        assert _tags(db) == {"docs": Tag.IGNORE, "docs/a": Tag.KEEP}


class TestNavigation:
    """Tests for informational, skip and quit decisions."""

    @pytest.mark.parametrize("decision", [Decision.HELP, Decision.COPY, Decision.SHOW])
    def test_informational_keeps_session_open(
        self, walker: TreeWalker, store: DatabaseStore, decision: Decision
    ) -> None:
        """Informational decisions change nothing."""
        db = Database()
        db.add("a", Tag.UNPROCESSED, EntryKind.FILE)
        snapshot = db.to_dict()
        session = _session(db, "a", walker, store)

        step = session.apply(decision)

        assert not step.ended
        assert not session.ended
        assert db.to_dict() == snapshot

    def test_quit_ends_without_change(self, walker: TreeWalker, store: DatabaseStore) -> None:
        """Quit ends the session and leaves the entry untouched."""
        db = Database()
        db.add("a", Tag.UNPROCESSED, EntryKind.FILE)
        session = _session(db, "a", walker, store)

        step = session.apply(Decision.QUIT)

        assert step.ended and step.tag is None
        assert _tags(db) == {"a": Tag.UNPROCESSED}

    def test_skip_moves_to_another_entry(self, walker: TreeWalker, store: DatabaseStore) -> None:
        """Skip leaves the current entry unprocessed and picks another one."""
        db = Database()
        db.add("a", Tag.UNPROCESSED, EntryKind.FILE)
        db.add("b", Tag.UNPROCESSED, EntryKind.FILE)
        session = _session(db, "a", walker, store)

        step = session.apply(Decision.NEXT)

        assert not step.ended
        assert step.key == "a"
        assert step.next_key == "b"
        assert session.key == "b"
        assert _tags(db) == {"a": Tag.UNPROCESSED, "b": Tag.UNPROCESSED}

    def test_skip_with_nothing_left_ends(self, walker: TreeWalker, store: DatabaseStore) -> None:
        """Skip ends the session when no other entry is unprocessed."""
        db = Database()
        db.add("a", Tag.UNPROCESSED, EntryKind.FILE)
        session = _session(db, "a", walker, store)

        step = session.apply(Decision.NEXT)

        assert step.ended
        assert step.next_key is None

    def test_apply_after_end_raises(self, walker: TreeWalker, store: DatabaseStore) -> None:
        """A finished session accepts no more decisions."""
        session = _session(Database(), "a", walker, store)
        session.apply(Decision.QUIT)

        with pytest.raises(RuntimeError, match="already ended"):
            session.apply(Decision.KEEP)
