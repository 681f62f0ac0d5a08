"""
HCL (version 1) documents.

Decoding is done by ``pyhcl``. Encoding writes HCL directly: nested mappings
become blocks, everything else becomes an ``key = literal`` assignment. Values
the ``pyhcl`` grammar cannot read back (nested lists, booleans inside lists,
strings ending in a backslash) are rejected with an ``EncodeError``.
"""

from __future__ import annotations

import math
import re
from typing import IO, Any

import hcl

from confmux.codecs.protocols import ConfigReaderProtocol
from confmux.codecs.registry import registry
from confmux.libs.mapping import canonicalize
from confmux.schemas import ConfigMap, FormatDescriptor
from confmux.store.cast import format_scalar

from .base import BaseCodec

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_\-]*$")
_BACKSLASH_RUN = re.compile(r"\\+")
_BARE_QUOTE = re.compile(r'(?<!\\)"')
_INDENT = "  "


def _check_interpolations(text: str) -> None:
    # pyhcl keeps ${...} verbatim, so nothing inside it can be escaped
    start = text.find("${")
    while start != -1:
        depth = 0
        for pos in range(start + 1, len(text)):
            ch = text[pos]
            if ch == "{":
                depth += 1
            elif ch == "}":
                depth -= 1
                if depth == 0:
                    break
            elif ch in '"\\':
                raise ValueError(f"HCL cannot escape {ch!r} inside '${{...}}': {text!r}")
        else:
            raise ValueError(f"unterminated '${{' in HCL string: {text!r}")
        start = text.find("${", pos + 1)


def _string(text: str) -> str:
    """Quote ``text`` so that ``pyhcl`` reads it back unchanged.

    ``pyhcl`` only unescapes ``\\"`` and ``\\\\``, deciding from the raw
    previous character. Every run of backslashes therefore gets one extra
    backslash, and a quote with no backslash before it gets one.
    """
    if text.endswith("\\"):
        raise ValueError(f"HCL strings cannot end with a backslash: {text!r}")
    _check_interpolations(text)
    escaped = _BACKSLASH_RUN.sub(lambda m: m.group(0) + "\\", text)
    return '"' + _BARE_QUOTE.sub('\\\\"', escaped) + '"'


def _key(name: str) -> str:
    if _IDENTIFIER.match(name) and not name.startswith(("true", "false")):
        return name
    return _string(name)


def _literal(value: Any, in_list: bool = False) -> str:
    if isinstance(value, bool):
        if in_list:
            raise ValueError("HCL lists cannot hold booleans")
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"HCL has no literal for {value!r}")
        return repr(value)
    if isinstance(value, list):
        if in_list:
            raise ValueError("HCL has no literal for nested lists")
        return "[" + ", ".join(_literal(v, in_list=True) for v in value) + "]"
    if isinstance(value, dict):
        items = "".join(f"{_key(k)} = {_literal(v)}\n" for k, v in value.items())
        return "{\n" + items + "}"
    return _string(format_scalar(value))


def dump_hcl(mapping: ConfigMap, depth: int = 0) -> list[str]:
    """Render ``mapping`` as HCL lines, indented ``depth`` levels.

    Raises:
        ValueError: A value has no HCL form that reads back unchanged.
    """
    pad = _INDENT * depth
    lines: list[str] = []
    for name, value in mapping.items():
        key = _key(name)
        if isinstance(value, dict):
            lines.append(f"{pad}{key} {{")
            lines.extend(dump_hcl(value, depth + 1))
            lines.append(f"{pad}}}")
        else:
            lines.append(f"{pad}{key} = {_literal(value)}")
    return lines


@registry.register_codec()
class HCLCodec(BaseCodec):
    descriptor = FormatDescriptor("hcl")

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        text = self._read_text(stream)
        try:
            data = hcl.loads(text)
        except ValueError as e:
            raise self._decode_failed(e) from e
        target.update(canonicalize(self._require_mapping(data)))

    def encode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        source: ConfigMap,
    ) -> None:
        try:
            lines = dump_hcl(source)
        except ValueError as e:
            raise self._encode_failed(e) from e
        self._write_text(stream, "\n".join(lines) + "\n" if lines else "")
