"""
dotenv files (``NAME=value`` lines).

Decoded names are kept as written. Encoding turns ``db.max_conns`` into
``DB_MAX_CONNS``.
"""

from __future__ import annotations

import io
import logging
import re
from typing import IO

from dotenv.parser import parse_stream

from confmux.codecs.protocols import ConfigReaderProtocol
from confmux.codecs.registry import registry
from confmux.errors import DecodeError
from confmux.libs.mapping import deep_set, split_key
from confmux.schemas import ConfigMap, FormatDescriptor

from .base import BaseCodec, flat_string

logger = logging.getLogger(__name__)

_NEEDS_QUOTES = re.compile(r"[\s#'\"\\]")


def _env_name(key: str) -> str:
    return key.replace(".", "_").upper()


def _quote(value: str) -> str:
    if not _NEEDS_QUOTES.search(value):
        return value
    escaped = (
        value.replace("\\", "\\\\")
        .replace('"', '\\"')
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )
    return f'"{escaped}"'


@registry.register_codec()
class DotenvCodec(BaseCodec):
    descriptor = FormatDescriptor("dotenv", ("env",))

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        text = self._read_text(stream)
        parsed: list[tuple[str, str]] = []
        for binding in parse_stream(io.StringIO(text)):
            if binding.error:
                raise DecodeError(
                    f"Invalid DOTENV: cannot parse line {binding.original.line}: "
                    f"{binding.original.string.strip()!r}"
                )
            if binding.key is None:
                continue
            value = binding.value
            if value is None:
                logger.debug("dotenv: %r has no value, storing empty string", binding.key)
                value = ""
            parsed.append((binding.key, value))

        for name, value in parsed:
            deep_set(target, split_key(name), value)

    def encode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        source: ConfigMap,
    ) -> None:
        lines = []
        for key in store.all_keys():
            lines.append(f"{_env_name(key)}={_quote(flat_string(store, key))}")
        text = "\n".join(lines)
        if lines:
            text += "\n"
        self._write_text(stream, text)
