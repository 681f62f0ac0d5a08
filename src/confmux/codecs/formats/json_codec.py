from __future__ import annotations

import json
from typing import IO

from confmux.codecs.protocols import ConfigReaderProtocol
from confmux.codecs.registry import registry
from confmux.libs.mapping import canonicalize
from confmux.schemas import ConfigMap, FormatDescriptor
from confmux.store.cast import to_plain

from .base import BaseCodec


@registry.register_codec()
class JSONCodec(BaseCodec):
    descriptor = FormatDescriptor("json")

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        raw = self._read_bytes(stream)
        try:
            data = json.loads(raw)
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
            text = json.dumps(
                to_plain(source),
                indent=self.options.json_indent,
                ensure_ascii=False,
                allow_nan=False,
            )
        except (TypeError, ValueError) as e:
            raise self._encode_failed(e) from e
        self._write_text(stream, text)
