"""In-memory tag database.

The database maps root-relative keys to Entry records. It is not
dense: a directory's record may be absent while records for its
descendants exist, so subtrees are always found by key prefix.
"""

from collections.abc import Iterator

from clutag.models.entry import Entry, EntryKind, Tag
from clutag.tree.keys import ROOT_KEY, is_strict_descendant


class Database:
    """Mapping of root-relative key to Entry.

    Args:
        entries: Initial records, keyed by path.
    """

    def __init__(self, entries: dict[str, Entry] | None = None) -> None:
        self._entries: dict[str, Entry] = dict(entries) if entries else {}

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Database):
            return NotImplemented
        return self._entries == other._entries

    def get(self, key: str) -> Entry | None:
        """Return the entry stored under key, or None."""
        return self._entries.get(key)

    def keys(self) -> list[str]:
        """Snapshot of all keys, safe to iterate while mutating."""
        return list(self._entries)

    def items(self) -> list[tuple[str, Entry]]:
        """Snapshot of all (key, entry) pairs, safe to iterate while mutating."""
        return list(self._entries.items())

    @property
    def is_initialized(self) -> bool:
        """Whether the root entry has been created."""
        return ROOT_KEY in self._entries

    def put(self, entry: Entry) -> Entry:
        """Store entry under its own path, refreshing updated_at."""
        entry.touch()
        self._entries[entry.path] = entry
        return entry

    def add(self, key: str, tag: Tag, kind: EntryKind) -> Entry:
        """Create and store a brand-new entry, replacing any existing one."""
        return self.put(Entry.create(key, tag=tag, kind=kind))

    def set_tag(self, key: str, tag: Tag, kind: EntryKind | None = None) -> Entry:
        """Tag key, creating its entry if needed.

        An existing entry keeps its created_at; its kind is replaced only
        when one is given.

        Args:
            key: Root-relative key.
            tag: New tag.
            kind: Kind to record. Defaults to the existing kind, or file.

        Returns:
            The stored entry.
        """
        entry = self._entries.get(key)
        if entry is None:
            return self.add(key, tag, kind or EntryKind.FILE)
        entry.tag = tag
        if kind is not None:
            entry.kind = kind
        return self.put(entry)

    def remove(self, key: str) -> Entry | None:
        """Drop the entry stored under key, returning it if present."""
        return self._entries.pop(key, None)

    def descendants(self, key: str) -> list[str]:
        """Keys strictly beneath key, in no particular order."""
        return [k for k in self._entries if is_strict_descendant(k, key)]

    def remove_descendants(self, key: str) -> int:
        """Drop every entry strictly beneath key.

        Returns:
            Number of entries removed.
        """
        doomed = self.descendants(key)
        for k in doomed:
            del self._entries[k]
        return len(doomed)

    def with_tag(self, *tags: Tag) -> list[str]:
        """Keys whose entry carries one of the given tags."""
        return [k for k, e in self._entries.items() if e.tag in tags]

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Serialize to the persisted document shape."""
        return {key: entry.to_dict() for key, entry in self._entries.items()}
