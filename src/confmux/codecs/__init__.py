"""
Codec registry and built-in format codecs.

Importing this package registers the built-in codecs under their names:
json, toml, yaml|yml, properties|props|prop, hcl, dotenv|env, ini, xml.
"""

__all__ = [
    "CodecRegistry",
    "add_codec",
    "get_codec",
    "registry",
]

from .registry import CodecRegistry, add_codec, get_codec, registry

from . import formats  # noqa: E402,F401  # registers built-in codecs
