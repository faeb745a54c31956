"""Test configuration and shared fixtures."""

import logging
import os
from pathlib import Path
from typing import Dict, List

import pytest

from tager.app import TagerApp
from tager.config import TagerConfig, set_config
from tager.core.models import RootState, TagNode
from tager.store.snapshot import SnapshotStore


def build_state(
    edges: Dict[str, List[str]],
    files: Dict[str, List[str]] = None,
    current: str = None,
) -> RootState:
    """Build a RootState from adjacency lists.

    Every key of ``edges`` and ``files`` becomes a tag; child names are stored
    as given, so a name that is not a key yields a dangling edge.

    Example:
        build_state({"A": ["B"], "B": []}, files={"B": ["/tmp/x"]})
    """
    files = files or {}
    tags = {}
    for name in list(edges) + [n for n in files if n not in edges]:
        tags[name] = TagNode(
            name=name,
            child_tags={child: child for child in edges.get(name, [])},
            files={path: path for path in files.get(name, [])},
        )
    return RootState(current=current, tags=tags)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Keep every test away from the user's ~/.tager and TAGER_* variables."""
    for key in list(os.environ):
        if key.upper().startswith("TAGER_"):
            monkeypatch.delenv(key)
    monkeypatch.setattr("tager.config._USER_CONFIG_PATH", tmp_path / "no-settings.json")
    config = TagerConfig(store_path=str(tmp_path / "store" / "config.json"))
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo configure_logging() calls made by CLI invocations."""
    original_class = logging.getLoggerClass()
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level
    yield
    logging.setLoggerClass(original_class)
    logging.root.handlers = original_handlers
    logging.root.setLevel(original_level)


@pytest.fixture
def snapshot_path(tmp_path) -> Path:
    return tmp_path / "store" / "config.json"


@pytest.fixture
def app(snapshot_path, isolated_config) -> TagerApp:
    """App over an empty, persisted store."""
    return TagerApp.open(isolated_config, snapshot_path)


@pytest.fixture
def make_app(snapshot_path, isolated_config):
    """Factory for an app over a given state, persisted to ``snapshot_path``."""

    def _make(state: RootState) -> TagerApp:
        return TagerApp(state, SnapshotStore(snapshot_path), isolated_config)

    return _make


@pytest.fixture
def sample_files(tmp_path) -> Dict[str, str]:
    """Create a few real files and return name -> absolute path."""
    base = tmp_path / "files"
    base.mkdir()
    paths = {}
    for name in ("f1.txt", "f2.txt", "f3.txt", "f4.txt"):
        path = base / name
        path.write_text(name)
        paths[name] = str(path)
    return paths


@pytest.fixture
def graph():
    """The ``build_state`` helper as a fixture."""
    return build_state
