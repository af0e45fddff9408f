"""Unit tests for runtime settings."""

import tomllib
from pathlib import Path

import pytest
from clutag.core.settings import (
    DEFAULT_SANITY_THRESHOLD,
    NO_FS_ENV_VAR,
    FileSettings,
    SettingsError,
    load_file_settings,
    load_settings,
    save_file_settings,
)


@pytest.fixture
def env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolated HOME and XDG directories."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    monkeypatch.delenv("CLUTAG_DB", raising=False)
    monkeypatch.delenv(NO_FS_ENV_VAR, raising=False)
    return home


class TestLoadFileSettings:
    """Tests for load_file_settings function."""

    def test_defaults_when_missing(self, tmp_path: Path) -> None:
        """A missing config file yields defaults."""
        settings = load_file_settings(tmp_path / "config.toml")

        assert settings.include_hidden is False
        assert settings.sanity_threshold == DEFAULT_SANITY_THRESHOLD

    def test_reads_values(self, tmp_path: Path) -> None:
        """Values from the file are applied."""
        path = tmp_path / "config.toml"
        path.write_text("include_hidden = true\nsanity_threshold = 0.5\n")

        settings = load_file_settings(path)

        assert settings.include_hidden is True
        assert settings.sanity_threshold == 0.5

    def test_invalid_toml_raises(self, tmp_path: Path) -> None:
        """Malformed TOML is reported as SettingsError."""
        path = tmp_path / "config.toml"
        path.write_text("include_hidden = ")

        with pytest.raises(SettingsError, match="Invalid TOML"):
            load_file_settings(path)

    def test_unknown_key_raises(self, tmp_path: Path) -> None:
        """Unknown keys are rejected."""
        path = tmp_path / "config.toml"
        path.write_text("colour = 'blue'\n")

        with pytest.raises(SettingsError, match="Invalid settings"):
            load_file_settings(path)

    def test_threshold_out_of_range_raises(self, tmp_path: Path) -> None:
        """The sanity threshold must be a ratio."""
        path = tmp_path / "config.toml"
        path.write_text("sanity_threshold = 1.5\n")

        with pytest.raises(SettingsError):
            load_file_settings(path)


class TestLoadSettings:
    """Tests for load_settings function."""

    def test_root_is_home(self, env: Path) -> None:
        """The tracked root is HOME."""
        settings = load_settings()

        assert settings.root == env
        assert settings.filesystem_enabled is True

    def test_no_fs_env_disables_filesystem(
        self, env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """CLUTAG_NO_FS=1 disables filesystem access."""
        monkeypatch.setenv(NO_FS_ENV_VAR, "1")

        assert load_settings().filesystem_enabled is False

    def test_no_fs_env_other_value_is_ignored(
        self, env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """Only the exact value 1 disables the filesystem."""
        monkeypatch.setenv(NO_FS_ENV_VAR, "yes")

        assert load_settings().filesystem_enabled is True

    def test_database_path_from_env(
        self, env: Path, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """CLUTAG_DB is honored."""
        monkeypatch.setenv("CLUTAG_DB", str(tmp_path / "db.json"))

        assert load_settings().database_path == tmp_path / "db.json"


class TestSaveFileSettings:
    """Tests for save_file_settings function."""

    def test_writes_toml(self, tmp_path: Path) -> None:
        """Settings are written as TOML and can be read back."""
        path = tmp_path / "nested" / "config.toml"

        result = save_file_settings(FileSettings(include_hidden=True), path)

        assert result == path
        with open(path, "rb") as f:
            data = tomllib.load(f)
        assert data == {"include_hidden": True, "sanity_threshold": DEFAULT_SANITY_THRESHOLD}
        assert load_file_settings(path).include_hidden is True

    def test_no_temp_files_left(self, tmp_path: Path) -> None:
        """The atomic write leaves no temporary files behind."""
        save_file_settings(FileSettings(), tmp_path / "config.toml")

        assert [p.name for p in tmp_path.iterdir()] == ["config.toml"]
