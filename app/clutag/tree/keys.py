"""Root-relative path keys.

Every tracked path is stored under a key relative to the tracked root,
with "." standing for the root itself. Hierarchy between keys is
implicit in their string prefixes; ``is_under`` is the single predicate
used to decide subtree membership.
"""

import os
from pathlib import Path

ROOT_KEY = "."
SEPARATOR = "/"


def depth(key: str) -> int:
    """Number of path components below the root ("." has depth 0)."""
    if key == ROOT_KEY:
        return 0
    return key.count(SEPARATOR) + 1


def is_under(key: str, root: str) -> bool:
    """Check whether key equals root or lies anywhere beneath it.

    Args:
        key: Candidate key.
        root: Subtree root key. The root key "." matches everything.

    Returns:
        True if key is root or a descendant of root.
    """
    if root == ROOT_KEY or key == root:
        return True
    return key.startswith(root + SEPARATOR)


def is_strict_descendant(key: str, root: str) -> bool:
    """Check whether key lies beneath root without being root itself."""
    return key != root and is_under(key, root)


def join_key(parent: str, name: str) -> str:
    """Key of the child called name inside parent."""
    if parent == ROOT_KEY:
        return name
    return f"{parent}{SEPARATOR}{name}"


class PathResolver:
    """Converts between absolute paths and root-relative keys.

    Args:
        root: Directory all keys are relative to (usually the home directory).
    """

    def __init__(self, root: Path | str) -> None:
        self._root = str(root).rstrip(SEPARATOR) or SEPARATOR

    @property
    def root(self) -> str:
        """Absolute path of the tracked root."""
        return self._root

    def _prefix(self) -> str:
        return self._root if self._root == SEPARATOR else self._root + SEPARATOR

    def to_absolute(self, path: str) -> str:
        """Resolve a key, a home-relative or an absolute path to an absolute path.

        Relative input is normalized lexically, so "docs", "./docs" and
        "docs/../docs" all resolve alike. No existence check is performed.
        """
        if len(path) > 1:
            path = path.rstrip(SEPARATOR)
        if path.startswith(SEPARATOR):
            return path
        if path in (ROOT_KEY, "~", ""):
            return self._root
        if path.startswith("~" + SEPARATOR):
            path = path[2:]
        return os.path.normpath(self._prefix() + path)

    def to_relative(self, path: str) -> str:
        """Convert a path to its root-relative key.

        Paths outside the root are returned as absolute paths; callers
        must tolerate such keys.
        """
        absolute = self.to_absolute(path)
        if absolute == self._root:
            return ROOT_KEY
        prefix = self._prefix()
        if absolute.startswith(prefix):
            return absolute[len(prefix) :]
        return absolute
