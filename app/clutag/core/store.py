"""Tag database persistence.

The database is stored as a single JSON object keyed by root-relative
path. It is always read and written as a whole; there is no partial
persistence and no locking.
"""

import json
import logging
import os
import shutil
from pathlib import Path
from tempfile import NamedTemporaryFile

from pydantic import TypeAdapter, ValidationError

from clutag.core.paths import get_database_path
from clutag.models.database import Database
from clutag.models.entry import Entry

logger = logging.getLogger(__name__)

_ENTRIES_ADAPTER = TypeAdapter(dict[str, Entry])

CORRUPT_SUFFIX = ".corrupt"


class DatabaseError(Exception):
    """Base exception for tag database errors."""


class DatabaseParseError(DatabaseError):
    """Raised when the database file is not valid JSON."""


class DatabaseValidationError(DatabaseError):
    """Raised when the database content does not match the record schema."""


class DatabaseWriteError(DatabaseError):
    """Raised when the database file cannot be written."""


def read_database(path: Path) -> Database:
    """Read and validate a database file.

    A missing or empty file yields an empty database.

    Args:
        path: Database file location.

    Returns:
        Loaded Database.

    Raises:
        DatabaseParseError: If the file is not valid UTF-8 JSON.
        DatabaseValidationError: If an entry is malformed or carries an unknown tag.
        DatabaseError: If the file cannot be read.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        return Database()
    except UnicodeDecodeError as e:
        raise DatabaseParseError(f"Invalid UTF-8: {e}") from e
    except OSError as e:
        raise DatabaseError(f"Failed to read database: {e}") from e

    if not content.strip():
        return Database()

    try:
        data = json.loads(content)
    except json.JSONDecodeError as e:
        raise DatabaseParseError(f"Invalid JSON: {e}") from e

    # An empty table may have been encoded as an empty array
    if data == []:
        return Database()

    try:
        entries = _ENTRIES_ADAPTER.validate_python(data)
    except ValidationError as e:
        raise DatabaseValidationError(f"Invalid database content: {e}") from e

    return Database(entries)


def write_database(db: Database, path: Path) -> Path:
    """Write the whole database atomically.

    The document is written to a temporary file in the same directory
    and moved into place with os.replace().

    Args:
        db: Database to persist.
        path: Destination file.

    Returns:
        Path where the database was saved.

    Raises:
        DatabaseWriteError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            json.dump(db.to_dict(), f, indent=2, sort_keys=True)
            f.write("\n")
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise DatabaseWriteError(f"Failed to write database: {e}") from e

    return path


class DatabaseStore:
    """Loads and saves the tag database as whole-file snapshots.

    Neither operation raises: failures are logged as warnings and the
    caller carries on with an empty (load) or non-durable (save) state.

    Args:
        path: Database file location. Defaults to the XDG state file
            or CLUTAG_DB.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path if path is not None else get_database_path()

    @property
    def path(self) -> Path:
        """Location of the database file."""
        return self._path

    def load(self) -> Database:
        """Load the database, degrading to an empty one on any failure.

        An unreadable document is copied aside so a later save cannot
        destroy the only copy.
        """
        try:
            return read_database(self._path)
        except DatabaseError as e:
            logger.warning("Failed to load database %s, starting empty: %s", self._path, e)
            self._preserve_corrupt()
            return Database()

    def save(self, db: Database) -> bool:
        """Persist the database.

        Returns:
            True if the file was written, False otherwise.
        """
        try:
            write_database(db, self._path)
        except DatabaseWriteError as e:
            logger.warning("%s (%s)", e, self._path)
            return False
        logger.debug("Saved %d entries to %s", len(db), self._path)
        return True

    def _preserve_corrupt(self) -> None:
        backup = self._path.with_name(self._path.name + CORRUPT_SUFFIX)
        try:
            shutil.copy2(self._path, backup)
        except OSError as e:
            logger.warning("Could not back up unreadable database to %s: %s", backup, e)
            return
        logger.warning("Unreadable database copied to %s", backup)
