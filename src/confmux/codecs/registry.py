"""
This module provides the process-wide registry mapping format names and
aliases to codec instances.

Registration happens while the process starts (built-in codecs register
themselves on import of :mod:`confmux.codecs`). After that the registry is
only read. Lookups are not synchronized: registering a codec while other
threads are already looking codecs up is a caller error. Call
:meth:`CodecRegistry.finalize` once setup is complete to turn late
registrations into errors.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING, TypeVar

from confmux.errors import RegistryClosedError, UnsupportedFormatError

if TYPE_CHECKING:
    from confmux.codecs.protocols import CodecProtocol

    C = TypeVar("C", bound=CodecProtocol)

logger = logging.getLogger(__name__)


class CodecRegistry:
    """Central registry for codecs.

    Names are matched exactly and case-sensitively. Several names may map to
    the same codec instance (``yaml`` and ``yml``).
    """

    def __init__(self) -> None:
        self._codecs: dict[str, CodecProtocol] = {}
        self._closed = False

    def register(self, codec: CodecProtocol, *names: str) -> CodecProtocol:
        """Register ``codec`` under ``names``.

        Args:
            codec: Codec instance to register.
            *names: Names to register it under. Defaults to the canonical
                name and aliases of ``codec.descriptor``.

        Returns:
            The registered codec.

        Raises:
            RegistryClosedError: The registry has been finalized.
            ValueError: A name is empty.
        """
        if self._closed:
            raise RegistryClosedError("Codec registry is finalized")
        names = names or codec.descriptor.names
        for name in names:
            if not name:
                raise ValueError("Format name cannot be empty")
            if name in self._codecs and self._codecs[name] is not codec:
                logger.debug("Replacing codec for %r", name)
            self._codecs[name] = codec
        logger.debug("Registered %s as %s", type(codec).__name__, ", ".join(names))
        return codec

    def register_codec(self, *names: str) -> Callable[[type[C]], type[C]]:
        """Decorator instantiating and registering a codec class."""

        def deco(cls: type[C]) -> type[C]:
            self.register(cls(), *names)
            return cls

        return deco

    def get(self, name: str) -> CodecProtocol:
        """Return the codec registered under ``name``.

        Raises:
            UnsupportedFormatError: Nothing is registered under ``name``.
        """
        try:
            return self._codecs[name]
        except KeyError:
            raise UnsupportedFormatError(f"unsupported format: {name!r}") from None

    def names(self) -> list[str]:
        """Return every registered name, sorted."""
        return sorted(self._codecs)

    def finalize(self) -> None:
        """Close the registration phase."""
        self._closed = True

    @property
    def finalized(self) -> bool:
        return self._closed

    def __contains__(self, name: object) -> bool:
        return name in self._codecs


registry = CodecRegistry()


def add_codec(codec: CodecProtocol, *names: str) -> CodecProtocol:
    """Register ``codec`` in the process-wide registry."""
    return registry.register(codec, *names)


def get_codec(name: str) -> CodecProtocol:
    """Look ``name`` up in the process-wide registry."""
    return registry.get(name)
