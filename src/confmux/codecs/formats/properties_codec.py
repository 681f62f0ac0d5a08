"""
Java-style ``.properties`` files.

The codec threads a property set through the store so that key order,
original key spelling and comments survive a load/save cycle. Stores without
that side channel are rejected.
"""

from __future__ import annotations

import io
import re
from typing import IO, Any

from jproperties import Properties, PropertyError

from confmux.codecs.protocols import (
    ConfigReaderProtocol,
    PropertiesCapable,
    properties_capability,
)
from confmux.codecs.registry import registry
from confmux.errors import UnsupportedFormatError
from confmux.libs.mapping import deep_search, split_key
from confmux.schemas import ConfigMap, FormatDescriptor

from .base import BaseCodec, flat_string

# an odd number of trailing backslashes continues the entry on the next line
_CONTINUED = re.compile(r"(?<!\\)(?:\\\\)*\\$")


def _entry_key(entry: str) -> str:
    single = Properties()
    single.load(entry)
    return next(iter(single), "")


class CommentedProperties(Properties):
    """Property set that also remembers the comment lines it was read with.

    Each key owns the comment block written directly above it; comments after
    the last entry are kept in :attr:`trailing`. ``jproperties`` itself only
    retains ``#:`` metadata comments.
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.comments: dict[str, list[str]] = {}
        self.trailing: list[str] = []

    def collect_comments(self, text: str) -> None:
        pending: list[str] = []
        entry: list[str] = []
        for line in text.splitlines():
            if not entry:
                stripped = line.lstrip(" \t\f")
                if not stripped:
                    continue
                if stripped[0] in "#!":
                    pending.append(stripped)
                    continue
            entry.append(line)
            if _CONTINUED.search(line):
                continue
            key = _entry_key("\n".join(entry))
            entry = []
            if pending:
                self.comments.setdefault(key, []).extend(pending)
                pending = []
        self.trailing = pending

    def with_comments(self, text: str) -> str:
        """Interleave the remembered comments with ``text`` produced by ``store``."""
        out: list[str] = []
        for line in text.splitlines():
            out.extend(self.comments.get(_entry_key(line), ()))
            out.append(line)
        out.extend(self.trailing)
        return "".join(f"{line}\n" for line in out)


@registry.register_codec()
class PropertiesCodec(BaseCodec):
    descriptor = FormatDescriptor("properties", ("props", "prop"))

    def _capability(self, store: ConfigReaderProtocol) -> PropertiesCapable:
        capable = properties_capability(store)
        if capable is None:
            raise UnsupportedFormatError(
                f"{type(store).__name__} does not support the properties format"
            )
        return capable

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        capable = self._capability(store)
        text = self._read_text(stream)
        props = CommentedProperties()
        try:
            props.load(text)
            props.collect_comments(text)
        except PropertyError as e:
            raise self._decode_failed(e) from e

        parsed: dict[str, Any] = {}
        for key in props:
            path = split_key(key.lower())
            deep_search(parsed, path[:-1])[path[-1]] = props[key].data
        target.update(parsed)
        capable.set_properties(props)

    def encode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        source: ConfigMap,
    ) -> None:
        capable = self._capability(store)
        props = capable.get_properties()
        if props is None:
            props = CommentedProperties()
            capable.set_properties(props)

        keys = store.all_keys()
        current = {k.lower() for k in keys}
        for stale in [k for k in props if k.lower() not in current]:
            del props[stale]

        spelling = {k.lower(): k for k in props}
        for key in keys:
            props[spelling.get(key.lower(), key)] = flat_string(store, key)

        buf = io.BytesIO()
        try:
            props.store(buf, encoding=self.options.encoding, timestamp=False)
        except (PropertyError, UnicodeError) as e:
            raise self._encode_failed(e) from e

        data = buf.getvalue()
        if isinstance(props, CommentedProperties):
            text = props.with_comments(data.decode(self.options.encoding))
            data = text.encode(self.options.encoding)
        self._write_bytes(stream, data)
