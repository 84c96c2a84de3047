"""Flat configuration store with multi-source loading.

ConfigStore holds one flat mapping from string key to leaf value and fills it
from configuration files, bundled resources and the process environment.

Merge policy:
    - File entries always overwrite keys of the same name.
    - The environment overlay (system properties, then os.environ) runs after
      every file load. With override_with_environment=True it overwrites
      existing keys; with False it only adds keys that are still missing.

Every load call is fail-soft: errors are logged, recorded in the returned
LoadResult and in ``history``, and never raised to the caller.

Example:
    from envreader import ConfigStore

    store = ConfigStore(override_with_environment=False)
    result = store.load_file("config/app.yaml")
    if not result.ok:
        print(f"{result.source}: {result.message}")

    port = store.get_int("server.port", default=8080)
"""

import importlib
import importlib.resources
import logging
import shutil
import tempfile
import threading
from collections.abc import Mapping
from pathlib import Path, PurePosixPath
from types import ModuleType
from typing import Any

from envreader.observability.logging import log_entries
from envreader.protocol import (
    ConfigLoadError,
    ConversionError,
    LoadErrorKind,
    LoadResult,
    MissingConfigError,
    ResourceCopyError,
    UnsupportedFormatError,
)
from envreader.settings import FALSE_VALUES, TRUE_VALUES, ReaderSettings
from envreader.sources import (
    EnvironmentConfigSource,
    file_extension,
    source_for_path,
)

logger = logging.getLogger(__name__)

__all__ = ["ConfigStore"]

# Buffer size used when copying a bundled resource to disk
_COPY_BUFFER_SIZE = 1024

_MISSING = object()


class ConfigStore:
    """Flat key/value configuration aggregated from several sources.

    The store is an ordinary object: create one per application (or use
    envreader.reader for a process-wide instance) and pass it to whatever
    needs configuration.
    """

    def __init__(
        self,
        override_with_environment: bool = True,
        *,
        settings: ReaderSettings | None = None,
    ) -> None:
        """Initialize an empty store.

        Args:
            override_with_environment: OS-provided values overwrite file values
                of the same key (ignored when ``settings`` is given)
            settings: Full reader settings
        """
        self.settings = settings or ReaderSettings(
            override_with_environment=override_with_environment
        )
        self.history: list[LoadResult] = []
        self._entries: dict[str, Any] = {}
        self._lock = threading.RLock()

    @property
    def override_with_environment(self) -> bool:
        return self.settings.override_with_environment

    # ------------------------------------------------------------------
    # Lookup

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value.

        Args:
            key: Flat configuration key (e.g. "server.port")
            default: Value returned when the key is absent

        Returns:
            Stored value or default
        """
        if not self._entries:
            logger.warning("No configuration has been loaded")
        return self._entries.get(key, default)

    def require(self, key: str) -> Any:
        """Get a configuration value that must be present.

        Raises:
            MissingConfigError: If the key is absent
        """
        value = self.get(key, _MISSING)
        if value is _MISSING:
            raise MissingConfigError(key)
        return value

    def get_string(self, key: str, default: str | None = None) -> str | None:
        """Get configuration value as string.

        Raises:
            ConversionError: If the value is a sequence or mapping
        """
        value = self._typed_lookup(key)
        if value is _MISSING:
            return default
        if isinstance(value, (list, tuple, dict)):
            raise ConversionError(key, value, str)
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    def get_int(self, key: str, default: int | None = None) -> int | None:
        """Get configuration value as integer.

        Raises:
            ConversionError: If the value is not an integer or integral text
        """
        value = self._typed_lookup(key)
        if value is _MISSING:
            return default
        if isinstance(value, bool):
            raise ConversionError(key, value, int)
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError as e:
                raise ConversionError(key, value, int) from e
        raise ConversionError(key, value, int)

    def get_float(self, key: str, default: float | None = None) -> float | None:
        """Get configuration value as float.

        Raises:
            ConversionError: If the value is not numeric
        """
        value = self._typed_lookup(key)
        if value is _MISSING:
            return default
        if isinstance(value, bool):
            raise ConversionError(key, value, float)
        if isinstance(value, (int, float)):
            return float(value)
        if isinstance(value, str):
            try:
                return float(value.strip())
            except ValueError as e:
                raise ConversionError(key, value, float) from e
        raise ConversionError(key, value, float)

    def get_bool(self, key: str, default: bool | None = None) -> bool | None:
        """Get configuration value as boolean.

        Accepts booleans, 0/1 and the strings true/false, yes/no, on/off, 1/0.

        Raises:
            ConversionError: If the value is not recognized as a boolean
        """
        value = self._typed_lookup(key)
        if value is _MISSING:
            return default
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            value_lower = value.strip().lower()
            if value_lower in TRUE_VALUES:
                return True
            if value_lower in FALSE_VALUES:
                return False
        raise ConversionError(key, value, bool)

    def _typed_lookup(self, key: str) -> Any:
        # A key explicitly set to null reads like an absent key
        value = self.get(key, _MISSING)
        return _MISSING if value is None else value

    def keys(self) -> list[str]:
        return list(self._entries)

    def as_dict(self) -> dict[str, Any]:
        """Copy of every entry."""
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __repr__(self) -> str:
        return (
            f"ConfigStore(entries={len(self._entries)}, "
            f"override_with_environment={self.override_with_environment})"
        )

    # ------------------------------------------------------------------
    # Mutation

    def put(self, key: Any, value: Any) -> "ConfigStore":
        """Insert one entry; blank keys are ignored.

        Non-string keys are stored under their ``str()`` form.

        Returns:
            self, for chaining
        """
        if key is None:
            return self
        key = str(key)
        if not key.strip():
            return self
        with self._lock:
            self._entries[key] = value
        return self

    def put_all(self, entries: Mapping[str, Any]) -> "ConfigStore":
        """Insert every entry, overwriting existing keys regardless of policy.

        Returns:
            self, for chaining
        """
        with self._lock:
            for key, value in entries.items():
                self.put(key, value)
        return self

    # ------------------------------------------------------------------
    # Loading

    def load_environment(self) -> LoadResult:
        """Overlay system properties and environment variables.

        A key is written when override_with_environment is enabled or when the
        store does not hold it yet.

        Returns:
            LoadResult with the number of entries written
        """
        source = EnvironmentConfigSource(
            include_system_properties=self.settings.include_system_properties
        )

        try:
            pairs = source.items()
        except Exception as e:
            logger.exception(
                "Failed to read the process environment", extra={"config_source": source.name}
            )
            return self._record(
                LoadResult.failure(source.name, LoadErrorKind.PARSE_FAILURE, str(e))
            )

        written = 0
        with self._lock:
            for key, value in pairs:
                if self.override_with_environment or key not in self._entries:
                    self.put(key, value)
                    written += 1

        logger.debug("Applied %s environment values", written)
        return self._record(LoadResult.success(source.name, written))

    def load_file(self, path: str | Path) -> LoadResult:
        """Load a .properties, .xml, .yaml or .yml file.

        After the file is merged the environment overlay is applied and, when
        dump_on_load is set, every key is logged.

        Args:
            path: Path to the configuration file

        Returns:
            LoadResult describing what the file contributed
        """
        return self._load_path(Path(path), str(path))

    def load_from_resource(self, anchor: Any, resource_path: str) -> LoadResult:
        """Load a configuration file bundled inside a Python package.

        The resource is copied into a temporary directory and loaded with
        load_file(); the directory is removed before this call returns.

        Args:
            anchor: Package name, module, class or instance whose package
                contains the resource
            resource_path: Path relative to the anchor's package, or to its
                top-level package when it starts with "/"

        Returns:
            LoadResult whose source is "resource:<package>/<path>"
        """
        try:
            package, resource = _resolve_resource(anchor, resource_path)
        except (ImportError, TypeError, ValueError, AttributeError) as e:
            logger.exception("Resource anchor %r could not be resolved", anchor)
            return self._record(
                LoadResult.failure(
                    f"resource:{resource_path}", LoadErrorKind.SOURCE_NOT_FOUND, str(e)
                )
            )

        label = f"resource:{package}/{resource_path.lstrip('/')}"
        try:
            exists = resource.is_file()
        except OSError as e:
            logger.error("%s cannot be accessed: %s", label, e, extra={"config_source": label})
            return self._record(LoadResult.failure(label, LoadErrorKind.SOURCE_NOT_FOUND, str(e)))

        if not exists:
            logger.error(
                "%s resource does not exist in package %s",
                resource_path,
                package,
                extra={"config_source": label},
            )
            return self._record(
                LoadResult.failure(
                    label, LoadErrorKind.SOURCE_NOT_FOUND, f"{resource_path} resource does not exist"
                )
            )

        with tempfile.TemporaryDirectory(prefix="envreader-") as tmp_dir:
            target = Path(tmp_dir) / PurePosixPath(resource_path).name
            try:
                _copy_resource(resource, target)
            except ResourceCopyError as e:
                logger.exception("Failed to copy %s", label, extra={"config_source": label})
                return self._record(LoadResult.failure(label, e.kind, str(e)))

            return self._load_path(target, label)

    def _load_path(self, file_path: Path, label: str) -> LoadResult:
        log_extra = {"config_source": label}

        # is_file() only hides "not found" style errors; e.g. ENAMETOOLONG still raises
        try:
            exists = file_path.is_file()
            absolute_path = file_path.absolute()
        except OSError as e:
            logger.error("%s file cannot be accessed: %s", label, e, extra=log_extra)
            return self._record(LoadResult.failure(label, LoadErrorKind.SOURCE_NOT_FOUND, str(e)))

        if not exists:
            logger.error("%s file does not exist [%s]", label, absolute_path, extra=log_extra)
            return self._record(
                LoadResult.failure(label, LoadErrorKind.SOURCE_NOT_FOUND, f"{label} file does not exist")
            )

        try:
            source = source_for_path(file_path, self.settings.properties_encoding)
        except UnsupportedFormatError as e:
            logger.error("%s", e, extra=log_extra)
            return self._record(LoadResult.failure(label, e.kind, str(e)))

        logger.debug(
            "Reading configuration from %s as %s", label, file_extension(file_path), extra=log_extra
        )

        try:
            entries = source.load()
        except ConfigLoadError as e:
            logger.error("Failed to load %s", label, exc_info=True, extra=log_extra)
            return self._record(LoadResult.failure(label, e.kind, str(e)))

        self.put_all(entries)
        result = self._record(LoadResult.success(label, len(entries)))

        self.load_environment()
        if self.settings.dump_on_load:
            self.dump()

        return result

    # ------------------------------------------------------------------
    # Diagnostics

    def dump(self, level: int = logging.INFO) -> None:
        """Log every key, sorted case-insensitively, aligned to the longest key."""
        log_entries(logger, self.as_dict(), level)

    def failed_sources(self) -> list[LoadResult]:
        """Load results that contributed nothing because of an error."""
        return [result for result in self.history if not result.ok]

    def _record(self, result: LoadResult) -> LoadResult:
        with self._lock:
            self.history.append(result)
        return result


def _resource_package(anchor: Any) -> str:
    """Name of the package a resource anchor points to."""
    if isinstance(anchor, str):
        return anchor

    module = anchor if isinstance(anchor, ModuleType) else importlib.import_module(anchor.__module__)
    if hasattr(module, "__path__"):
        return module.__name__
    return module.__package__ or module.__name__.rpartition(".")[0]


def _resolve_resource(anchor: Any, resource_path: str) -> tuple[str, Any]:
    package = _resource_package(anchor)
    if resource_path.startswith("/"):
        package = package.partition(".")[0]

    resource = importlib.resources.files(package)
    for part in PurePosixPath(resource_path.lstrip("/")).parts:
        resource = resource / part
    return package, resource


def _copy_resource(resource: Any, target: Path) -> None:
    """Copy a package resource to ``target`` byte for byte."""
    try:
        with resource.open("rb") as src, open(target, "wb") as dst:
            shutil.copyfileobj(src, dst, _COPY_BUFFER_SIZE)
    except OSError as e:
        msg = f"Failed to copy resource to {target}: {e}"
        raise ResourceCopyError(msg) from e
