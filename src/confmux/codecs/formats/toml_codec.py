from __future__ import annotations

import tomllib
from datetime import date, datetime, time
from typing import IO

import tomli_w

from confmux.codecs.protocols import ConfigReaderProtocol
from confmux.codecs.registry import registry
from confmux.schemas import ConfigMap, FormatDescriptor
from confmux.store.cast import to_plain

from .base import BaseCodec


@registry.register_codec()
class TOMLCodec(BaseCodec):
    """TOML documents. Tables map to nested mappings; dates and times keep
    their native types."""

    descriptor = FormatDescriptor("toml")

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        text = self._read_text(stream)
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as e:
            raise self._decode_failed(e) from e
        target.update(data)

    def encode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        source: ConfigMap,
    ) -> None:
        try:
            text = tomli_w.dumps(to_plain(source, keep=(datetime, date, time)))
        except (TypeError, ValueError) as e:
            raise self._encode_failed(e) from e
        self._write_text(stream, text)
