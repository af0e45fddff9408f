"""Tag database record model.

This module defines the Entry record stored for every tracked path,
together with the closed set of tags and entry kinds it may carry.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_serializer

# Persisted timestamp layout (UTC, second precision)
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%SZ"


class Tag(str, Enum):
    """Classification state of a tracked path.

    Attributes:
        UNPROCESSED: Discovered but not yet classified.
        KEEP: Kept; directories with this tag have their children discovered.
        RECURSIVE_KEEP: Pending directive to keep a directory and everything below it.
        FILTER: Pending directive to keep a directory and track only its children.
        REVIEW: Deferred for a later look.
        IGNORE: Deliberately left alone.
        DELETE: Marked for deletion.
        NOT_FOUND: Was kept, but the path has disappeared from disk.
    """

    UNPROCESSED = "unprocessed"
    KEEP = "keep"
    RECURSIVE_KEEP = "r-keep"
    FILTER = "filter"
    REVIEW = "review"
    IGNORE = "ignore"
    DELETE = "delete"
    NOT_FOUND = "not-found"

    @property
    def is_processed(self) -> bool:
        """Whether an entry with this tag counts as classified."""
        return self not in (Tag.UNPROCESSED, Tag.REVIEW)


class EntryKind(str, Enum):
    """Filesystem kind of a tracked path."""

    FILE = "file"
    DIRECTORY = "dir"


def utc_now() -> datetime:
    """Current UTC time truncated to whole seconds."""
    return datetime.now(UTC).replace(microsecond=0)


class Entry(BaseModel):
    """One record of the tag database.

    The kind is persisted under the field name ``type``.

    Attributes:
        path: Root-relative key of the tracked path.
        tag: Current classification.
        kind: File or directory, as last observed on disk.
        created_at: When the record was first created.
        updated_at: When the record was last written.
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    path: Annotated[str, Field(min_length=1, description="Root-relative key")]
    tag: Annotated[Tag, Field(description="Classification state")] = Tag.UNPROCESSED
    kind: Annotated[EntryKind, Field(alias="type", description="File or directory")] = (
        EntryKind.FILE
    )
    created_at: Annotated[datetime, Field(default_factory=utc_now)]
    updated_at: Annotated[datetime, Field(default_factory=utc_now)]

    @classmethod
    def create(
        cls,
        path: str,
        tag: Tag = Tag.UNPROCESSED,
        kind: EntryKind = EntryKind.FILE,
    ) -> "Entry":
        """Create a fresh entry stamped with the current time."""
        now = utc_now()
        return cls(path=path, tag=tag, kind=kind, created_at=now, updated_at=now)

    @property
    def is_dir(self) -> bool:
        """Check if the entry was recorded as a directory."""
        return self.kind == EntryKind.DIRECTORY

    def touch(self) -> None:
        """Refresh updated_at to the current time."""
        self.updated_at = utc_now()

    @field_serializer("created_at", "updated_at")
    def _serialize_timestamp(self, value: datetime) -> str:
        return value.astimezone(UTC).strftime(TIMESTAMP_FORMAT)

    def to_dict(self) -> dict[str, str]:
        """Serialize to the persisted document shape."""
        return self.model_dump(mode="json", by_alias=True)
