"""Construction-time options for a configuration store.

Example:
    from envreader.settings import ReaderSettings

    # Keep file values when the OS environment defines the same key
    settings = ReaderSettings(override_with_environment=False)

    # Or read the options from ENVREADER_* environment variables
    settings = ReaderSettings.from_env()
"""

import os

from pydantic import BaseModel, ConfigDict, Field

TRUE_VALUES = ("true", "yes", "1", "on")
FALSE_VALUES = ("false", "no", "0", "off")


class ReaderSettings(BaseModel):
    """Options for ConfigStore.

    Attributes:
        override_with_environment: OS-provided values overwrite file values of the same key
        include_system_properties: Read process system properties alongside os.environ
        dump_on_load: Log the full key table after each file load
        properties_encoding: Text encoding of .properties files
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    override_with_environment: bool = Field(
        True, description="OS environment overwrites previously loaded keys"
    )
    include_system_properties: bool = Field(
        True, description="Include process system properties in the environment overlay"
    )
    dump_on_load: bool = Field(True, description="Log every key after a file load")
    properties_encoding: str = Field("latin-1", description="Encoding of .properties files")

    @classmethod
    def from_env(cls, prefix: str = "ENVREADER") -> "ReaderSettings":
        """Build settings from environment variables.

        Environment variables:
            {prefix}_OVERRIDE_WITH_ENVIRONMENT: true|false
            {prefix}_INCLUDE_SYSTEM_PROPERTIES: true|false
            {prefix}_DUMP_ON_LOAD: true|false
            {prefix}_PROPERTIES_ENCODING: codec name

        Unset or unrecognized boolean values keep the defaults.
        """
        values: dict[str, object] = {}

        for field_name in ("override_with_environment", "include_system_properties", "dump_on_load"):
            raw = os.environ.get(f"{prefix}_{field_name.upper()}")
            if raw is None:
                continue
            if raw.lower() in TRUE_VALUES:
                values[field_name] = True
            elif raw.lower() in FALSE_VALUES:
                values[field_name] = False

        encoding = os.environ.get(f"{prefix}_PROPERTIES_ENCODING")
        if encoding:
            values["properties_encoding"] = encoding

        return cls(**values)
