"""
Protocol definition for configuration codecs.

This module defines :class:`CodecProtocol`, the pair of operations every
format implementation provides to move data between a byte stream and a
canonical mapping.
"""

from __future__ import annotations

from typing import IO, TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from confmux.schemas import ConfigMap, FormatDescriptor

    from .store import ConfigReaderProtocol


class CodecProtocol(Protocol):
    """Protocol for a single-format codec.

    A codec is stateless. It never keeps a reference to the store or the
    mapping it was handed once a call returns, and never closes the stream.
    """

    descriptor: FormatDescriptor

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        """Reads the whole ``stream`` and populates ``target``.

        Args:
            store: The store the mapping belongs to. Only consulted for
                optional capabilities.
            stream: Binary input stream, owned by the caller.
            target: Mapping receiving canonical keys and values.

        Raises:
            DecodeError: The payload could not be parsed.
            UnsupportedFormatError: ``store`` lacks a capability this format needs.
        """
        ...

    def encode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        source: ConfigMap,
    ) -> None:
        """Serializes the store's content and writes it to ``stream``.

        Args:
            store: Store providing key enumeration and typed retrieval.
            stream: Binary output stream, owned by the caller.
            source: The store's canonical mapping.

        Raises:
            EncodeError: Serialization or writing failed.
            UnsupportedFormatError: ``store`` lacks a capability this format needs.
        """
        ...
