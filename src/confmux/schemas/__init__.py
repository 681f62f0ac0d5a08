"""
Data contracts and type definitions.
"""

__all__ = [
    "CodecOptions",
    "FormatDescriptor",
    "ConfigMap",
    "Value",
]

from .config import CodecOptions
from .format import ConfigMap, FormatDescriptor, Value
