"""Logging helpers for configuration loading."""

import json
import logging
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any

# Key column width used when there are no keys to measure
_DEFAULT_KEY_WIDTH = 10


class JSONFormatter(logging.Formatter):
    """ELK/Datadog style JSON output, one object per record."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "source": getattr(record, "config_source", None),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def configure_logging(level: str = "INFO", fmt: str = "text") -> None:
    """Configure the root logger for command-line use.

    Args:
        level: Logging level name (debug/info/warning/error)
        fmt: "text" or "json"
    """
    handler = logging.StreamHandler(sys.stderr)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        handlers=[handler],
        force=True,
    )


def format_entries(entries: Mapping[str, Any]) -> list[str]:
    """Render config entries as an aligned key table.

    Keys are sorted case-insensitively and padded to the longest key plus two.

    Example:
        >>> format_entries({"b": 1, "A": "x"})
        ['A  :  x', 'b  :  1']
    """
    width = max((len(key) for key in entries), default=_DEFAULT_KEY_WIDTH) + 2
    return [
        f"{key:<{width}}:  {entries[key]}"
        for key in sorted(entries, key=str.casefold)
    ]


def log_entries(
    logger: logging.Logger, entries: Mapping[str, Any], level: int = logging.INFO
) -> None:
    """Log every entry of the key table as its own record."""
    if not logger.isEnabledFor(level):
        return
    for line in format_entries(entries):
        logger.log(level, "%s", line)
