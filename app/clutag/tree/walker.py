"""Filesystem queries used by reconciliation and review.

All filesystem access of the engine goes through TreeWalker so that it
can be switched off wholesale (CLUTAG_NO_FS=1) to work against a
previously captured database without touching or misreading the disk.
"""

import errno
import logging
import os
import stat
from pathlib import Path

from clutag.models.entry import EntryKind
from clutag.tree.keys import PathResolver

logger = logging.getLogger(__name__)

# stat() failures that mean "nothing there" rather than "cannot look"
_ABSENT_ERRNOS = frozenset({errno.ENOENT, errno.ENOTDIR, errno.EBADF, errno.ELOOP})


class TreeWalker:
    """Lists and classifies paths beneath the tracked root.

    Args:
        resolver: Converts between absolute paths and root-relative keys.
        include_hidden: If True, names starting with "." are listed too.
        enabled: If False, nothing exists and no directory has children.
    """

    def __init__(
        self,
        resolver: PathResolver,
        *,
        include_hidden: bool = False,
        enabled: bool = True,
    ) -> None:
        self._resolver = resolver
        self._include_hidden = include_hidden
        self._enabled = enabled

    @property
    def resolver(self) -> PathResolver:
        """Resolver used to build keys."""
        return self._resolver

    @property
    def enabled(self) -> bool:
        """Whether filesystem queries are answered from the disk."""
        return self._enabled

    @property
    def include_hidden(self) -> bool:
        """Whether hidden names are listed."""
        return self._include_hidden

    def _stat(self, path: str) -> os.stat_result | None:
        """Stat a path, following symlinks.

        Returns None for paths that are genuinely absent (including dead or
        looping symlinks). Other failures, such as a parent that is no longer
        searchable, are re-raised for the caller to interpret.
        """
        try:
            return Path(path).stat()
        except OSError as e:
            if e.errno in _ABSENT_ERRNOS:
                return None
            raise

    def exists(self, path: str) -> bool:
        """Check whether an absolute path exists (dead symlinks count as missing).

        A path that cannot be inspected counts as present, so a failed read
        never drops its entry from the database.
        """
        if not self._enabled:
            return False
        try:
            return self._stat(path) is not None
        except OSError as e:
            logger.warning("Cannot inspect %s, assuming it still exists: %s", path, e)
            return True

    def is_dir(self, path: str) -> bool:
        """Check whether an absolute path is a directory, following symlinks."""
        if not self._enabled:
            return False
        try:
            st = self._stat(path)
        except OSError as e:
            logger.warning("Cannot inspect %s: %s", path, e)
            return False
        return st is not None and stat.S_ISDIR(st.st_mode)

    def kind_of(self, path: str) -> EntryKind:
        """Kind to record for an absolute path; anything not a directory is a file."""
        return EntryKind.DIRECTORY if self.is_dir(path) else EntryKind.FILE

    def _visible(self, name: str) -> bool:
        return self._include_hidden or not name.startswith(".")

    def list_children(self, directory: str) -> list[str]:
        """Sorted names of the immediate children of an absolute directory path.

        Unreadable or missing directories yield no children.
        """
        if not self._enabled:
            return []
        try:
            names = [child.name for child in Path(directory).iterdir()]
        except PermissionError:
            logger.warning("Permission denied listing directory: %s", directory)
            return []
        except OSError as e:
            logger.warning("Cannot list directory %s: %s", directory, e)
            return []
        return sorted(name for name in names if self._visible(name))

    def collect_descendants(self, root: str) -> list[str]:
        """Keys of everything below an absolute directory path.

        The root itself is not included. Symlinked directories are listed
        but not descended into.

        Args:
            root: Absolute directory path.

        Returns:
            Root-relative keys in depth-first order.
        """
        if not self._enabled:
            return []

        keys: list[str] = []
        stack = [root]
        while stack:
            directory = stack.pop()
            for name in reversed(self.list_children(directory)):
                child = Path(directory) / name
                keys.append(self._resolver.to_relative(str(child)))
                if self.is_dir(str(child)) and not child.is_symlink():
                    stack.append(str(child))
        return keys
