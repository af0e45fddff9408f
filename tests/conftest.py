"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable
from pathlib import Path

import pytest
from clutag.core.store import DatabaseStore
from clutag.tree.keys import PathResolver
from clutag.tree.walker import TreeWalker

TreeBuilder = Callable[[dict[str, str | None]], Path]


@pytest.fixture
def home(tmp_path: Path) -> Path:
    """Empty directory standing in for the tracked root."""
    root = tmp_path / "home"
    root.mkdir()
    return root


@pytest.fixture
def build_tree(home: Path) -> TreeBuilder:
    """Create files and directories below the fake home directory.

    Keys are root-relative paths; a None value makes a directory,
    a string value a file with that content.
    """

    def _build(layout: dict[str, str | None]) -> Path:
        for rel, content in layout.items():
            path = home / rel
            if content is None:
                path.mkdir(parents=True, exist_ok=True)
            else:
                path.parent.mkdir(parents=True, exist_ok=True)
                path.write_text(content)
        return home

    return _build


@pytest.fixture
def resolver(home: Path) -> PathResolver:
    """Resolver rooted at the fake home directory."""
    return PathResolver(home)


@pytest.fixture
def walker(resolver: PathResolver) -> TreeWalker:
    """Walker with the filesystem enabled and hidden entries excluded."""
    return TreeWalker(resolver)


@pytest.fixture
def offline_walker(resolver: PathResolver) -> TreeWalker:
    """Walker with the filesystem disabled."""
    return TreeWalker(resolver, enabled=False)


@pytest.fixture
def store(tmp_path: Path) -> DatabaseStore:
    """Store writing to a temporary state directory."""
    return DatabaseStore(tmp_path / "state" / "clutag.json")


@pytest.fixture
def cli_store(
    home: Path, tmp_path: Path, store: DatabaseStore, monkeypatch: pytest.MonkeyPatch
) -> DatabaseStore:
    """Point the CLI at the fake home directory and the temporary store."""
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("CLUTAG_DB", str(store.path))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "xdg-state"))
    monkeypatch.delenv("CLUTAG_NO_FS", raising=False)
    return store
