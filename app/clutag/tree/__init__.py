"""Path keys and filesystem traversal.

This module provides the root-relative key helpers and the TreeWalker
used by the reconciliation engine.
"""

from clutag.tree.keys import (
    ROOT_KEY,
    PathResolver,
    depth,
    is_strict_descendant,
    is_under,
    join_key,
)
from clutag.tree.walker import TreeWalker

__all__ = [
    "ROOT_KEY",
    "PathResolver",
    "TreeWalker",
    "depth",
    "is_strict_descendant",
    "is_under",
    "join_key",
]
