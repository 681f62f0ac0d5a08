from __future__ import annotations

import dataclasses
import logging
from collections.abc import Callable
from datetime import datetime, timedelta
from typing import IO, Any, TypeVar

from jproperties import Properties

from confmux.errors import KeyAbsentError, TypeCoercionError
from confmux.libs.mapping import deep_get, deep_set, flatten_keys, split_key
from confmux.schemas import ConfigMap, Value
from confmux.store import cast

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ConfigStore:
    """Holds one canonical configuration mapping and answers key queries.

    Keys are ``.``-delimited paths into the mapping. Lookups try the exact
    spelling first and fall back to a case-insensitive match per segment.

    The store also keeps the properties side channel used by the properties
    codec, so it satisfies
    :class:`~confmux.codecs.protocols.PropertiesCapable`.

    Args:
        name: Logical config name, usually the file stem.
        conf_type: Format name the config is read and written in.
    """

    def __init__(self, name: str = "", conf_type: str = "") -> None:
        self.name = name
        self.conf_type = conf_type
        self._data: ConfigMap = {}
        self._properties: Properties | None = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, conf_type={self.conf_type!r})"

    @property
    def full_name(self) -> str:
        """``name.conf_type``, the file name the config would be saved under."""
        if not self.conf_type:
            return self.name
        return f"{self.name}.{self.conf_type}"

    # ------------------------------------------------------------------
    # Loading and dumping
    # ------------------------------------------------------------------

    def load(self, stream: IO[bytes], fmt: str | None = None) -> None:
        """Decode ``stream`` and replace the store's content with the result.

        The current mapping is only replaced once decoding succeeds. A
        successful load also drops the properties side channel of the previous
        content unless the new payload supplies one.

        Args:
            stream: Binary input stream. It is not closed.
            fmt: Format name; defaults to ``conf_type``.

        Raises:
            UnsupportedFormatError: ``fmt`` is not registered.
            DecodeError: The payload could not be parsed.
        """
        from confmux.codecs import get_codec

        fmt = fmt or self.conf_type
        codec = get_codec(fmt)
        data: ConfigMap = {}
        previous = self._properties
        self._properties = None
        try:
            codec.decode(self, stream, data)
        except Exception:
            self._properties = previous
            raise
        self._data = data
        if not self.conf_type:
            self.conf_type = fmt
        logger.debug("Loaded %d keys into %r as %s", len(self.all_keys()), self, fmt)

    def dump(self, stream: IO[bytes], fmt: str | None = None) -> None:
        """Encode the store's content to ``stream``.

        Args:
            stream: Binary output stream. It is not closed.
            fmt: Format name; defaults to ``conf_type``.

        Raises:
            UnsupportedFormatError: ``fmt`` is not registered.
            EncodeError: Serialization or writing failed.
        """
        from confmux.codecs import get_codec

        fmt = fmt or self.conf_type
        get_codec(fmt).encode(self, stream, self._data)
        logger.debug("Dumped %r as %s", self, fmt)

    # ------------------------------------------------------------------
    # Raw access
    # ------------------------------------------------------------------

    def get_value(self) -> ConfigMap:
        return self._data

    def set_value(self, mapping: ConfigMap) -> None:
        self._data = mapping

    def set(self, key: str, value: Value) -> None:
        """Store ``value`` at ``key``, replacing scalars found on the way."""
        deep_set(self._data, split_key(key), value)

    def all_keys(self) -> list[str]:
        return flatten_keys(self._data)

    def get(self, key: str) -> Value:
        try:
            return deep_get(self._data, split_key(key), case_insensitive=True)
        except KeyError:
            raise KeyAbsentError(f"key not found: {key!r}") from None

    def __contains__(self, key: str) -> bool:
        try:
            self.get(key)
        except KeyAbsentError:
            return False
        return True

    # ------------------------------------------------------------------
    # Typed getters
    # ------------------------------------------------------------------

    def _typed(self, key: str, convert: Callable[[Any], T]) -> T:
        value = self.get(key)
        try:
            return convert(value)
        except TypeCoercionError as e:
            raise TypeCoercionError(f"key {key!r}: {e}") from e

    def get_string(self, key: str) -> str:
        return self._typed(key, cast.to_string)

    def get_bool(self, key: str) -> bool:
        return self._typed(key, cast.to_bool)

    def get_int(self, key: str) -> int:
        return self._typed(key, cast.to_int)

    def get_int32(self, key: str) -> int:
        return self._typed(key, cast.to_int32)

    def get_int64(self, key: str) -> int:
        return self._typed(key, cast.to_int64)

    def get_float64(self, key: str) -> float:
        return self._typed(key, cast.to_float)

    def get_time(self, key: str) -> datetime:
        return self._typed(key, cast.to_time)

    def get_duration(self, key: str) -> timedelta:
        return self._typed(key, cast.to_duration)

    def get_string_slice(self, key: str) -> list[str]:
        return self._typed(key, cast.to_string_slice)

    def get_string_map(self, key: str) -> dict[str, Any]:
        return self._typed(key, cast.to_string_map)

    def get_string_map_string(self, key: str) -> dict[str, str]:
        return self._typed(key, cast.to_string_map_string)

    def get_string_map_string_slice(self, key: str) -> dict[str, list[str]]:
        return self._typed(key, cast.to_string_map_string_slice)

    def get_size_in_bytes(self, key: str) -> int:
        return self._typed(key, cast.to_size_in_bytes)

    def unmarshal_key(self, key: str, cls: type[T]) -> T:
        """Build the dataclass ``cls`` from the mapping stored at ``key``.

        Keys without a matching field are ignored; missing fields keep their
        defaults.

        Raises:
            TypeError: ``cls`` is not a dataclass, or a required field is missing.
        """
        if not dataclasses.is_dataclass(cls):
            raise TypeError(f"{cls!r} is not a dataclass")
        section = self.get_string_map(key)
        names = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in section.items() if k in names})

    # ------------------------------------------------------------------
    # Properties side channel
    # ------------------------------------------------------------------

    def get_properties(self) -> Properties | None:
        return self._properties

    def set_properties(self, props: Properties) -> None:
        self._properties = props
