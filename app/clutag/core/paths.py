"""XDG-compliant path management for clutag.

This module provides standardized paths following the XDG Base Directory
Specification for configuration and state storage.

XDG defaults:
- Config: ~/.config/clutag/
- State: ~/.local/state/clutag/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "clutag"

# Environment variable overriding the database location
DATABASE_ENV_VAR = "CLUTAG_DB"

DATABASE_FILENAME = "clutag.json"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/clutag/ (or XDG_CONFIG_HOME/clutag/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    The tag database lives here unless CLUTAG_DB points elsewhere.

    Returns:
        Path to ~/.local/state/clutag/ (or XDG_STATE_HOME/clutag/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_database_path() -> Path:
    """Get the tag database file path.

    Returns:
        Path from CLUTAG_DB if set, otherwise ~/.local/state/clutag/clutag.json.
    """
    override = os.environ.get(DATABASE_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return get_state_dir() / DATABASE_FILENAME


def get_settings_path() -> Path:
    """Get the settings file path.

    Returns:
        Path to ~/.config/clutag/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_user_theme_path() -> Path:
    """Get the user theme configuration path.

    Returns:
        Path to ~/.config/clutag/theme.toml.
    """
    return get_config_dir() / "theme.toml"


def _ensure_dir(path: Path, name: str) -> Path:
    """Create directory if it doesn't exist.

    Args:
        path: Directory path to create.
        name: Human-readable name for error messages.

    Returns:
        The created/existing directory path.

    Raises:
        RuntimeError: If directory cannot be created.
    """
    try:
        path.mkdir(parents=True, exist_ok=True)
    except PermissionError as e:
        msg = f"Cannot create {name} directory {path}: Permission denied"
        raise RuntimeError(msg) from e
    except OSError as e:
        msg = f"Cannot create {name} directory {path}: {e}"
        raise RuntimeError(msg) from e
    return path


def ensure_config_dir() -> Path:
    """Create the configuration directory if it doesn't exist.

    Returns:
        Path to the configuration directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_config_dir(), "config")


def ensure_state_dir() -> Path:
    """Create the state directory if it doesn't exist.

    Returns:
        Path to the state directory.

    Raises:
        RuntimeError: If the directory cannot be created.
    """
    return _ensure_dir(get_state_dir(), "state")
