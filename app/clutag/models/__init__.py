"""Data models for clutag.

This module exports the tag database record types.
"""

from clutag.models.database import Database
from clutag.models.entry import Entry, EntryKind, Tag

__all__ = [
    "Database",
    "Entry",
    "EntryKind",
    "Tag",
]
