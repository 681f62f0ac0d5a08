"""
Capability interfaces a config store exposes to codecs.
"""

from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Protocol, runtime_checkable

from jproperties import Properties

from confmux.schemas import ConfigMap, Value


class ConfigReaderProtocol(Protocol):
    """Read access every codec may rely on.

    Typed getters raise ``KeyAbsentError`` for unset keys and
    ``TypeCoercionError`` when the value cannot be converted.
    """

    def all_keys(self) -> list[str]:
        """Returns every fully-qualified leaf key currently set."""
        ...

    def get_value(self) -> ConfigMap: ...

    def get(self, key: str) -> Value: ...

    def get_string(self, key: str) -> str: ...

    def get_bool(self, key: str) -> bool: ...

    def get_int(self, key: str) -> int: ...

    def get_int32(self, key: str) -> int: ...

    def get_int64(self, key: str) -> int: ...

    def get_float64(self, key: str) -> float: ...

    def get_time(self, key: str) -> datetime: ...

    def get_duration(self, key: str) -> timedelta: ...

    def get_string_slice(self, key: str) -> list[str]: ...

    def get_string_map(self, key: str) -> dict[str, Any]: ...

    def get_string_map_string(self, key: str) -> dict[str, str]: ...

    def get_string_map_string_slice(self, key: str) -> dict[str, list[str]]: ...

    def get_size_in_bytes(self, key: str) -> int: ...


@runtime_checkable
class PropertiesCapable(Protocol):
    """Optional side channel keeping a properties file's key order and layout."""

    def get_properties(self) -> Properties | None: ...

    def set_properties(self, props: Properties) -> None: ...


def properties_capability(store: object) -> PropertiesCapable | None:
    """Return ``store`` as :class:`PropertiesCapable`, or ``None`` if it is not."""
    if isinstance(store, PropertiesCapable):
        return store
    return None
