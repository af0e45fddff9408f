"""Runtime settings for clutag.

Settings are assembled from built-in defaults, the optional
~/.config/clutag/config.toml file and the environment:

- HOME: tracked root directory
- CLUTAG_DB: database file location
- CLUTAG_NO_FS=1: disable all filesystem access
"""

import os
import tomllib
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from clutag.core.paths import get_database_path, get_settings_path

NO_FS_ENV_VAR = "CLUTAG_NO_FS"

DEFAULT_SANITY_THRESHOLD = 0.8


class FileSettings(BaseModel):
    """Settings that may be stored in config.toml.

    Attributes:
        include_hidden: List dot-files and dot-directories by default.
        sanity_threshold: Share of missing entries above which commands
            ask for confirmation before touching the database.
    """

    model_config = ConfigDict(extra="forbid")

    include_hidden: Annotated[
        bool,
        Field(description="Track hidden entries by default"),
    ] = False
    sanity_threshold: Annotated[
        float,
        Field(ge=0.0, le=1.0, description="Missing-entry ratio that triggers a warning"),
    ] = DEFAULT_SANITY_THRESHOLD


class Settings(FileSettings):
    """Effective settings for one invocation.

    Attributes:
        root: Directory whose contents are tracked.
        database_path: Location of the tag database.
        filesystem_enabled: False when CLUTAG_NO_FS=1.
    """

    root: Path
    database_path: Path
    filesystem_enabled: bool = True


class SettingsError(Exception):
    """Raised when the settings file cannot be read or is invalid."""


def load_file_settings(path: Path | None = None) -> FileSettings:
    """Load config.toml, falling back to defaults when it does not exist.

    Args:
        path: Path to the settings file. If None, uses the default path.

    Returns:
        Validated FileSettings.

    Raises:
        SettingsError: If the file cannot be read, parsed or validated.
    """
    settings_path = path or get_settings_path()

    if not settings_path.exists():
        return FileSettings()

    try:
        with open(settings_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise SettingsError(f"Invalid TOML syntax in {settings_path}: {e}") from e
    except OSError as e:
        raise SettingsError(f"Failed to read {settings_path}: {e}") from e

    try:
        return FileSettings.model_validate(data)
    except ValidationError as e:
        raise SettingsError(f"Invalid settings in {settings_path}: {e}") from e


def load_settings(path: Path | None = None) -> Settings:
    """Assemble the effective settings from file and environment.

    Args:
        path: Optional settings file override.

    Returns:
        Settings for this invocation.

    Raises:
        SettingsError: If the settings file is invalid.
    """
    file_settings = load_file_settings(path)
    home = os.environ.get("HOME")
    return Settings(
        **file_settings.model_dump(),
        root=Path(home) if home else Path.home(),
        database_path=get_database_path(),
        filesystem_enabled=os.environ.get(NO_FS_ENV_VAR) != "1",
    )


def save_file_settings(settings: FileSettings, path: Path | None = None) -> Path:
    """Write config.toml atomically.

    Args:
        settings: Settings to store.
        path: Destination. If None, uses the default settings path.

    Returns:
        Path where the settings were saved.

    Raises:
        SettingsError: If the file cannot be written.
    """
    settings_path = path or get_settings_path()
    data = {
        "include_hidden": settings.include_hidden,
        "sanity_threshold": settings.sanity_threshold,
    }

    tmp_path: Path | None = None
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="wb",
            dir=settings_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(settings_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise SettingsError(f"Failed to write settings: {e}") from e

    return settings_path
