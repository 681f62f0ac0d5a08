"""
Protocol exports for codecs and the store contract they consume.

This module aggregates the codec interface and the capability interfaces a
config store offers to codecs.
"""

__all__ = [
    "CodecProtocol",
    "ConfigReaderProtocol",
    "PropertiesCapable",
    "properties_capability",
]

from .codec import CodecProtocol
from .store import ConfigReaderProtocol, PropertiesCapable, properties_capability
