"""Nested-to-flat key conversion.

Turns nested mappings (as produced by a YAML parser) into a flat mapping of
dot-joined keys:

    {"database": {"host": "localhost"}} -> {"database.host": "localhost"}

The separator is fixed and never escaped, so a source key that already
contains a dot is indistinguishable from a nested path after flattening.
"""

from collections.abc import Mapping
from typing import Any

SEPARATOR = "."


def flatten(prefix: str, value: Any) -> dict[str, Any]:
    """Flatten one value under ``prefix``.

    Args:
        prefix: Dot-separated key of ``value``
        value: Leaf value or nested mapping

    Returns:
        Flat dictionary of dotted keys to leaf values. ``None`` is kept as a
        leaf at its own path, sequences are leaves, empty mappings yield
        nothing.

    Example:
        >>> flatten("root", {"a": {"b": 1, "c": {"d": 2}}})
        {'root.a.b': 1, 'root.a.c.d': 2}
    """
    if not isinstance(value, Mapping):
        return {prefix: value}

    flat: dict[str, Any] = {}
    for child_key, child_value in value.items():
        flat.update(flatten(f"{prefix}{SEPARATOR}{child_key}", child_value))
    return flat


def flatten_mapping(data: Mapping[Any, Any]) -> dict[str, Any]:
    """Flatten every top-level key of ``data`` using the key itself as prefix."""
    flat: dict[str, Any] = {}
    for key, value in data.items():
        flat.update(flatten(str(key), value))
    return flat
