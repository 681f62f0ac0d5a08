from __future__ import annotations

from datetime import date, datetime
from typing import IO

import yaml

from confmux.codecs.protocols import ConfigReaderProtocol
from confmux.codecs.registry import registry
from confmux.libs.mapping import canonicalize
from confmux.schemas import ConfigMap, FormatDescriptor
from confmux.store.cast import to_plain

from .base import BaseCodec


@registry.register_codec()
class YAMLCodec(BaseCodec):
    descriptor = FormatDescriptor("yaml", ("yml",))

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        raw = self._read_bytes(stream)
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise self._decode_failed(e) from e
        target.update(canonicalize(self._require_mapping(data)))

    def encode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        source: ConfigMap,
    ) -> None:
        try:
            text = yaml.safe_dump(
                to_plain(source, keep=(datetime, date)),
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
            )
        except yaml.YAMLError as e:
            raise self._encode_failed(e) from e
        self._write_text(stream, text)
