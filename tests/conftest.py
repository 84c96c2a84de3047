"""Shared fixtures for envreader tests."""

import logging
from collections.abc import Callable
from pathlib import Path

import pytest

from envreader import reader
from envreader.settings import ReaderSettings
from envreader.store import ConfigStore


@pytest.fixture(autouse=True)
def restore_root_logging():
    """Undo logging.basicConfig(force=True) calls made by the CLI."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def write_config(tmp_path: Path) -> Callable[[str, str], Path]:
    """Write a configuration file under tmp_path and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def store() -> ConfigStore:
    """Store without system properties and without the key dump."""
    return ConfigStore(
        settings=ReaderSettings(include_system_properties=False, dump_on_load=False)
    )


@pytest.fixture
def fresh_reader():
    """Isolate the process-wide reader from other tests."""
    reader.reset_reader()
    yield
    reader.reset_reader()
