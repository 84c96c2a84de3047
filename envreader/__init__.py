"""Multi-source flat configuration store.

Loads key/value settings from .properties files, property-list XML files,
YAML documents, process system properties and environment variables into one
flat mapping of dot-separated keys.

Merge order:
1. Configuration files, in load order (later files overwrite earlier ones)
2. System properties and environment variables, applied after every file
   load; they overwrite file values unless override_with_environment=False

Example:
    from envreader import ConfigStore

    store = ConfigStore()
    store.load_file("config/app.yaml")        # server: {port: 8080}
    store.load_file("config/app.properties")  # app.name=demo

    port = store.get_int("server.port")
    name = store.get_string("app.name")

Process-wide access:
    from envreader import reader

    reader.load_from_file("config/app.yaml")
    port = reader.get_environment("server.port")
"""

from envreader.flatten import flatten, flatten_mapping
from envreader.protocol import (
    ConfigLoadError,
    ConfigSource,
    ConversionError,
    LoadErrorKind,
    LoadResult,
    MissingConfigError,
    ResourceCopyError,
    SourceNotFoundError,
    UnsupportedFormatError,
)
from envreader.settings import ReaderSettings
from envreader.sources import (
    EnvironmentConfigSource,
    PropertiesConfigSource,
    XMLPropertiesConfigSource,
    YAMLConfigSource,
    source_for_path,
    system_properties,
)
from envreader.store import ConfigStore

__version__ = "0.1.0"

__all__ = [
    # Store
    "ConfigStore",
    "ReaderSettings",
    # Flattening
    "flatten",
    "flatten_mapping",
    # Sources
    "ConfigSource",
    "EnvironmentConfigSource",
    "PropertiesConfigSource",
    "XMLPropertiesConfigSource",
    "YAMLConfigSource",
    "source_for_path",
    "system_properties",
    # Results and errors
    "ConfigLoadError",
    "ConversionError",
    "LoadErrorKind",
    "LoadResult",
    "MissingConfigError",
    "ResourceCopyError",
    "SourceNotFoundError",
    "UnsupportedFormatError",
]
