"""
Logging utilities for envreader.

Exports the key table formatting used by the diagnostic dump and the logging
setup used by the command-line interface.
"""

from .logging import JSONFormatter, configure_logging, format_entries, log_entries

__all__ = [
    "JSONFormatter",
    "configure_logging",
    "format_entries",
    "log_entries",
]
