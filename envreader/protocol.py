"""Configuration source protocol and load result types.

This module defines the protocol every configuration source implements, the
result object returned by each load call, and the exception hierarchy shared
by sources and the store.

Example:
    from envreader.protocol import ConfigSource

    class StaticConfigSource:
        '''Custom config source implementation.'''

        name = "static"

        def load(self) -> dict[str, Any]:
            return {"app.name": "demo", "app.port": 8080}
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Protocol, runtime_checkable


class LoadErrorKind(str, Enum):
    """Why a source contributed nothing to the store."""

    SOURCE_NOT_FOUND = "source_not_found"
    UNSUPPORTED_FORMAT = "unsupported_format"
    PARSE_FAILURE = "parse_failure"
    COPY_FAILURE = "copy_failure"


@dataclass(frozen=True)
class LoadResult:
    """Outcome of a single load call.

    Attributes:
        source: Name of the source that was loaded (path, resource or "environment")
        entries: Number of entries the source contributed
        error: Failure kind, or None when the load succeeded
        message: Human readable failure description
    """

    source: str
    entries: int = 0
    error: LoadErrorKind | None = None
    message: str | None = None

    @property
    def ok(self) -> bool:
        """True when the source was loaded."""
        return self.error is None

    @classmethod
    def success(cls, source: str, entries: int) -> "LoadResult":
        return cls(source=source, entries=entries)

    @classmethod
    def failure(cls, source: str, error: LoadErrorKind, message: str) -> "LoadResult":
        return cls(source=source, error=error, message=message)

    def __repr__(self) -> str:
        """String representation of load result."""
        if self.ok:
            return f"LoadResult(source={self.source}, entries={self.entries})"
        return f"LoadResult(source={self.source}, error={self.error.value}, message={self.message!r})"


@runtime_checkable
class ConfigSource(Protocol):
    """Protocol for configuration sources.

    A config source reads one configuration origin (a file, the process
    environment) and returns its entries as a flat mapping.

    Attributes:
        name: Name used in logs and load results
    """

    name: str

    def load(self) -> dict[str, Any]:
        """Load all configuration values from this source.

        Returns:
            Dictionary mapping flat config keys to leaf values

        Raises:
            ConfigLoadError: If the source cannot be read or parsed
        """
        ...


class ConfigLoadError(Exception):
    """Exception raised when a configuration source cannot be loaded."""

    kind = LoadErrorKind.PARSE_FAILURE


class SourceNotFoundError(ConfigLoadError):
    """The file or bundled resource does not exist."""

    kind = LoadErrorKind.SOURCE_NOT_FOUND


class UnsupportedFormatError(ConfigLoadError):
    """The file extension is missing or not recognized."""

    kind = LoadErrorKind.UNSUPPORTED_FORMAT


class ResourceCopyError(ConfigLoadError):
    """A bundled resource could not be copied to a temporary file."""

    kind = LoadErrorKind.COPY_FAILURE


class ConversionError(ValueError):
    """Raised when a typed accessor cannot convert a stored value."""

    def __init__(self, key: str, value: Any, target: type) -> None:
        self.key = key
        self.value = value
        self.target = target
        super().__init__(
            f"Config key '{key}' value {value!r} cannot be converted to {target.__name__}"
        )


class MissingConfigError(KeyError):
    """Raised when a required configuration key is absent."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(key)

    def __str__(self) -> str:
        return f"Required config key '{self.key}' is not set"
