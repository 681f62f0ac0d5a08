"""
Exception hierarchy shared by codecs, the registry and the config store.
"""

__all__ = [
    "ConfmuxError",
    "UnsupportedFormatError",
    "DecodeError",
    "EncodeError",
    "TypeCoercionError",
    "KeyAbsentError",
    "RegistryClosedError",
]


class ConfmuxError(Exception):
    """Base class for every error raised by confmux."""


class UnsupportedFormatError(ConfmuxError):
    """The requested format is not registered, or the target store
    lacks a capability the codec needs."""


class DecodeError(ConfmuxError):
    """The underlying grammar parser rejected the input."""


class EncodeError(ConfmuxError):
    """Serialization or writing to the output stream failed."""


class TypeCoercionError(ConfmuxError, ValueError):
    """A stored value could not be converted to the requested type."""


class KeyAbsentError(ConfmuxError, KeyError):
    """A getter was called on a key that is not set."""

    def __str__(self) -> str:
        # KeyError repr-quotes its argument
        return Exception.__str__(self)


class RegistryClosedError(ConfmuxError):
    """A codec was registered after the registry was finalized."""
