"""
Process-wide configuration reader

Optional convenience layer that keeps one shared ConfigStore for the whole
process:
- Lazy creation with settings read from ENVREADER_* environment variables
- Module-level load/get helpers
- set_override() to start over with a different override policy

Code that can receive a ConfigStore explicitly should do so; this module is
for scripts and legacy call sites that need a global lookup.
"""

import threading
from pathlib import Path
from typing import Any

from envreader.protocol import LoadResult
from envreader.settings import ReaderSettings
from envreader.store import ConfigStore

# Shared store, created on first use
_READER: ConfigStore | None = None
_READER_LOCK = threading.Lock()


def get_reader() -> ConfigStore:
    """Return the process-wide store, creating it on first use."""
    global _READER

    with _READER_LOCK:
        if _READER is None:
            _READER = ConfigStore(settings=ReaderSettings.from_env())
        return _READER


def set_override(override: bool) -> ConfigStore:
    """
    Replace the process-wide store with an empty one using ``override``.

    Everything loaded into the previous store is discarded.

    Args:
        override: Whether OS-provided values overwrite file values

    Returns:
        The new store
    """
    global _READER

    settings = ReaderSettings.from_env().model_copy(
        update={"override_with_environment": override}
    )
    with _READER_LOCK:
        _READER = ConfigStore(settings=settings)
        return _READER


def reset_reader() -> None:
    """Drop the process-wide store; the next call creates a fresh one."""
    global _READER
    with _READER_LOCK:
        _READER = None


def get_environment(key: str, default: Any = None) -> Any:
    """Look up ``key`` in the process-wide store."""
    return get_reader().get(key, default)


def load_from_file(path: str | Path) -> LoadResult:
    """Load a configuration file into the process-wide store."""
    return get_reader().load_file(path)


def load_from_resource(anchor: Any, resource_path: str) -> LoadResult:
    """Load a bundled resource into the process-wide store."""
    return get_reader().load_from_resource(anchor, resource_path)


def load_from_system() -> LoadResult:
    """Apply the environment overlay to the process-wide store and log every key."""
    reader = get_reader()
    result = reader.load_environment()
    reader.dump()
    return result
