"""
Conversion between format-native value shapes and canonical values.

XML decoders mark attributes with a prefix character (``-id``). Canonical
mappings spell the same key ``attr_id`` so it can be addressed like any other
key. :func:`normalize` converts in both directions.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

ATTR_KEY_PREFIX = "attr_"


class Direction(Enum):
    INBOUND = "inbound"  # decode
    OUTBOUND = "outbound"  # encode


def _rename(key: str, direction: Direction, prefix: str) -> str:
    if direction is Direction.INBOUND:
        if key.startswith(prefix):
            return ATTR_KEY_PREFIX + key[len(prefix) :]
    elif key.startswith(ATTR_KEY_PREFIX):
        return prefix + key[len(ATTR_KEY_PREFIX) :]
    return key


def normalize(value: Any, direction: Direction, prefix: str = "-") -> Any:
    """Rename attribute-style keys throughout ``value``.

    Inbound, keys starting with ``prefix`` become ``attr_``-prefixed keys.
    Outbound, ``attr_``-prefixed keys regain ``prefix``. Mappings and lists are
    rebuilt on every call; scalars are returned unchanged.

    Args:
        value: Any canonical or format-native value.
        direction: Which way to rename.
        prefix: The format's attribute marker.

    Returns:
        A new structure with renamed keys.
    """
    if isinstance(value, dict):
        return {
            _rename(k, direction, prefix): normalize(v, direction, prefix)
            for k, v in value.items()
        }
    if isinstance(value, list):
        return [normalize(v, direction, prefix) for v in value]
    return value


def canonicalize(value: Any) -> Any:
    """Coerce parser output into canonical shape.

    Mapping keys become strings and tuples become lists. Some parsers produce
    non-string keys (YAML ``1: a``) or tuples; the rest of the package relies
    on ``dict[str, ...]`` and ``list``.
    """
    if isinstance(value, dict):
        return {str(k): canonicalize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [canonicalize(v) for v in value]
    return value
