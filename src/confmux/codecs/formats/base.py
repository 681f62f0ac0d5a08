"""
Shared plumbing for the built-in codecs: options, stream reading and writing,
and error classification.
"""

from __future__ import annotations

import logging
from typing import IO, Any, ClassVar

from confmux.codecs.protocols import ConfigReaderProtocol
from confmux.errors import DecodeError, EncodeError
from confmux.schemas import CodecOptions, ConfigMap, FormatDescriptor
from confmux.store.cast import format_scalar

logger = logging.getLogger(__name__)


def flat_string(store: ConfigReaderProtocol, key: str) -> str:
    """Render the value at ``key`` for a flat format.

    Lists are joined with spaces so they read back through
    ``get_string_slice``; everything else goes through ``get_string``.
    """
    value = store.get(key)
    if isinstance(value, list):
        return " ".join(format_scalar(v) for v in value)
    return store.get_string(key)


class BaseCodec:
    """Base class for codecs.

    Subclasses set :attr:`descriptor` and implement ``decode`` / ``encode``.
    Instances are immutable once built and hold no per-call state.
    """

    descriptor: ClassVar[FormatDescriptor]

    def __init__(self, options: CodecOptions | None = None) -> None:
        self._options = options or CodecOptions()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.descriptor.name!r})"

    @property
    def options(self) -> CodecOptions:
        return self._options

    @property
    def name(self) -> str:
        return self.descriptor.name

    def _read_bytes(self, stream: IO[bytes]) -> bytes:
        try:
            data = stream.read()
        except OSError as e:
            raise DecodeError(f"Failed to read {self.name} input: {e}") from e
        if isinstance(data, str):
            data = data.encode(self._options.encoding)
        logger.debug("Decoding %d bytes as %s", len(data), self.name)
        return data

    def _read_text(self, stream: IO[bytes]) -> str:
        data = self._read_bytes(stream)
        try:
            return data.decode(self._options.encoding).lstrip("\ufeff")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Invalid {self.name} encoding: {e}") from e

    def _write_bytes(self, stream: IO[bytes], data: bytes) -> None:
        try:
            stream.write(data)
        except (OSError, ValueError) as e:
            # closed files raise ValueError
            raise EncodeError(f"Failed to write {self.name} output: {e}") from e
        logger.debug("Encoded %d bytes as %s", len(data), self.name)

    def _write_text(self, stream: IO[bytes], text: str) -> None:
        self._write_bytes(stream, text.encode(self._options.encoding))

    def _decode_failed(self, e: Exception) -> DecodeError:
        return DecodeError(f"Invalid {self.name.upper()}: {e}")

    def _encode_failed(self, e: Exception) -> EncodeError:
        return EncodeError(f"Cannot encode as {self.name.upper()}: {e}")

    def _require_mapping(self, data: Any) -> ConfigMap:
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise DecodeError(
                f"{self.name.upper()} root must be a mapping, got {type(data).__name__}"
            )
        return data
