"""Concrete configuration source implementations.

This module provides implementations of ConfigSource for each supported origin:
- PropertiesConfigSource: Load from Java-style .properties files
- XMLPropertiesConfigSource: Load from Java property-list XML files
- YAMLConfigSource: Load from YAML files (nested keys flattened to dot notation)
- EnvironmentConfigSource: Load from process system properties and os.environ

File sources are selected by extension with source_for_path().

Example:
    # Pick the parser from the file extension
    source = source_for_path("config/app.yaml")
    entries = source.load()

    # OS environment plus system properties
    env_source = EnvironmentConfigSource(include_system_properties=True)
"""

import getpass
import locale
import logging
import os
import platform
import sys
from pathlib import Path
from typing import Any

import javaproperties
import yaml

from envreader.flatten import flatten_mapping
from envreader.protocol import (
    ConfigLoadError,
    ConfigSource,
    SourceNotFoundError,
    UnsupportedFormatError,
)

logger = logging.getLogger(__name__)


class _FileConfigSource:
    """Shared path handling for file based sources."""

    format_name = "file"

    def __init__(self, file_path: str | Path, name: str | None = None) -> None:
        self.file_path = Path(file_path)
        self.name = name or f"{self.format_name}:{self.file_path}"

    def load(self) -> dict[str, Any]:
        if not self.file_path.is_file():
            msg = f"{self.file_path} file does not exist"
            raise SourceNotFoundError(msg)

        try:
            entries = self._parse()
        except ConfigLoadError:
            raise
        except Exception as e:
            msg = f"Failed to load {self.format_name} config from {self.file_path}: {e}"
            raise ConfigLoadError(msg) from e

        logger.debug("Loaded %s values from %s", len(entries), self.file_path)
        return entries

    def _parse(self) -> dict[str, Any]:
        raise NotImplementedError


class PropertiesConfigSource(_FileConfigSource):
    """Configuration source that loads a .properties file.

    Supports the full Java syntax: ``key=value``, ``key: value``, ``#``/``!``
    comments, line continuations and unicode escapes. Values are strings.

    Example:
        source = PropertiesConfigSource("app.properties")
        config = source.load()  # {"app.name": "demo"}
    """

    format_name = "properties"

    def __init__(
        self,
        file_path: str | Path,
        name: str | None = None,
        encoding: str = "latin-1",
    ) -> None:
        """Initialize properties config source.

        Args:
            file_path: Path to .properties file
            name: Optional name for this source (defaults to format and path)
            encoding: Text encoding of the file (Java reads ISO-8859-1)
        """
        super().__init__(file_path, name)
        self.encoding = encoding

    def _parse(self) -> dict[str, Any]:
        with open(self.file_path, encoding=self.encoding) as f:
            return javaproperties.load(f)


class XMLPropertiesConfigSource(_FileConfigSource):
    """Configuration source that loads a property-list XML file.

    Expected layout::

        <!DOCTYPE properties SYSTEM "http://java.sun.com/dtd/properties.dtd">
        <properties>
            <comment>optional</comment>
            <entry key="app.name">demo</entry>
        </properties>
    """

    format_name = "xml"

    def _parse(self) -> dict[str, Any]:
        with open(self.file_path, "rb") as f:
            return javaproperties.load_xml(f)


class YAMLConfigSource(_FileConfigSource):
    """Configuration source that loads a YAML file.

    Nested mappings are flattened to dot notation, each top-level key being
    the prefix of its subtree. An empty document contributes nothing.

    Example:
        source = YAMLConfigSource("config.yml")
        config = source.load()  # {"server.port": 8080, "server.host": "localhost"}
    """

    format_name = "yaml"

    def _parse(self) -> dict[str, Any]:
        with open(self.file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is None:
            return {}

        if not isinstance(data, dict):
            msg = f"YAML root must be a mapping, got {type(data).__name__}"
            raise ConfigLoadError(msg)

        return flatten_mapping(data)


# Extension (text after the last dot of the file name) -> source class
SOURCE_TYPES: dict[str, type[_FileConfigSource]] = {
    "properties": PropertiesConfigSource,
    "xml": XMLPropertiesConfigSource,
    "yaml": YAMLConfigSource,
    "yml": YAMLConfigSource,
}


def file_extension(file_path: str | Path) -> str | None:
    """Return the text after the last dot of the file name, or None."""
    _, dot, ext = Path(file_path).name.rpartition(".")
    return ext if dot else None


def source_for_path(file_path: str | Path, properties_encoding: str = "latin-1") -> ConfigSource:
    """Create the config source matching a file's extension.

    Args:
        file_path: Path to a configuration file
        properties_encoding: Encoding passed to PropertiesConfigSource

    Returns:
        ConfigSource for the file

    Raises:
        UnsupportedFormatError: If the extension is missing or not supported
    """
    ext = file_extension(file_path)
    source_type = SOURCE_TYPES.get(ext) if ext is not None else None

    if source_type is None:
        msg = f"not supported file format [{Path(file_path).name}]"
        raise UnsupportedFormatError(msg)

    if source_type is PropertiesConfigSource:
        return PropertiesConfigSource(file_path, encoding=properties_encoding)
    return source_type(file_path)


def system_properties() -> dict[str, str]:
    """Describe the running process with Java-style system property names."""
    props = {
        "os.name": platform.system(),
        "os.arch": platform.machine(),
        "os.version": platform.release(),
        "python.version": platform.python_version(),
        "python.implementation": platform.python_implementation(),
        "python.executable": sys.executable,
        "file.separator": os.sep,
        "path.separator": os.pathsep,
        "line.separator": os.linesep,
        "file.encoding": locale.getpreferredencoding(False),
    }

    try:
        props["user.dir"] = os.getcwd()
    except OSError:
        logger.debug("Working directory could not be determined")

    # Both lookups depend on the password database and HOME, absent in some containers
    try:
        props["user.home"] = str(Path.home())
    except RuntimeError:
        logger.debug("Home directory could not be determined")

    try:
        props["user.name"] = getpass.getuser()
    except (KeyError, OSError):
        logger.debug("User name could not be determined")

    return props


class EnvironmentConfigSource:
    """Configuration source that reads the process environment.

    System properties are read first and os.environ second, so an environment
    variable replaces a system property of the same name.
    """

    def __init__(self, include_system_properties: bool = True, name: str = "environment") -> None:
        """Initialize environment config source.

        Args:
            include_system_properties: Also return system_properties()
            name: Name for this source
        """
        self.include_system_properties = include_system_properties
        self.name = name

    def load(self) -> dict[str, Any]:
        """Load system properties and environment variables.

        Returns:
            Dictionary of raw string values
        """
        config = dict(self.items())
        logger.debug("Loaded %s values from the process environment", len(config))
        return config

    def items(self) -> list[tuple[str, Any]]:
        """Entries in read order, system properties first.

        Keys may repeat when a system property and an environment variable
        share a name; callers applying a merge policy need every pair.
        """
        pairs: list[tuple[str, Any]] = []
        if self.include_system_properties:
            pairs.extend(system_properties().items())
        pairs.extend(os.environ.items())
        return pairs
