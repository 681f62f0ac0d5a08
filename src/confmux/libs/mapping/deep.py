"""
Dotted-path traversal over nested configuration mappings.

Flat formats (INI sections, properties files, dotenv) express nesting with
``.``-delimited keys. These helpers turn such paths into nested dictionaries
and back.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

KEY_DELIMITER = "."


def split_key(key: str) -> list[str]:
    """Split a fully-qualified key into its path segments."""
    return key.split(KEY_DELIMITER)


def deep_search(root: dict[str, Any], path: Sequence[str]) -> dict[str, Any]:
    """Return the mapping reached by following ``path`` from ``root``.

    Missing intermediate nodes are created as empty mappings. When a segment
    already holds a non-mapping value, that value is discarded and replaced
    with a fresh mapping so the walk can continue: a longer path always wins
    over a scalar declared at one of its prefixes.

    Args:
        root: Mapping to walk. It is modified in place.
        path: Ordered path segments. An empty sequence returns ``root``.

    Returns:
        The innermost mapping. Callers write their leaf value into it.
    """
    node = root
    for segment in path:
        child = node.get(segment)
        if not isinstance(child, dict):
            child = {}
            node[segment] = child
        node = child
    return node


def deep_set(root: dict[str, Any], path: Sequence[str], value: Any) -> None:
    """Store ``value`` at ``path`` inside ``root``, creating parents as needed."""
    if not path:
        raise ValueError("Cannot set a value at an empty path")
    deep_search(root, path[:-1])[path[-1]] = value


def _child(node: dict[str, Any], key: str, case_insensitive: bool) -> tuple[bool, Any]:
    if key in node:
        return True, node[key]
    if case_insensitive:
        folded = key.lower()
        for k, v in node.items():
            if k.lower() == folded:
                return True, v
    return False, None


def deep_get(
    root: dict[str, Any],
    path: Sequence[str],
    case_insensitive: bool = False,
) -> Any:
    """Return the value stored at ``path``.

    Keys that contain the delimiter themselves (``{"a.b": 1}``) are found by
    joining consecutive segments, longest prefix first, so every key listed by
    :func:`flatten_keys` can be read back. With ``case_insensitive`` set, a
    segment that has no exact match falls back to the first key that compares
    equal ignoring case.

    Raises:
        KeyError: If no mapping holds the path.
    """
    if not path:
        return root
    if isinstance(root, dict):
        for end in range(len(path), 0, -1):
            found, child = _child(root, KEY_DELIMITER.join(path[:end]), case_insensitive)
            if not found:
                continue
            try:
                return deep_get(child, path[end:], case_insensitive)
            except KeyError:
                continue
    raise KeyError(KEY_DELIMITER.join(path))


def flatten_keys(mapping: dict[str, Any], prefix: str = "") -> list[str]:
    """List the fully-qualified leaf keys of ``mapping`` in insertion order.

    Scalars and lists are leaves. Empty mappings contribute no key.
    """
    keys: list[str] = []
    for k, v in mapping.items():
        full = f"{prefix}{KEY_DELIMITER}{k}" if prefix else k
        if isinstance(v, dict):
            keys.extend(flatten_keys(v, full))
        else:
            keys.append(full)
    return keys
