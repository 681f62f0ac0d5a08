"""
Helpers for walking and reshaping canonical configuration mappings.
"""

__all__ = [
    "Direction",
    "canonicalize",
    "deep_get",
    "deep_search",
    "deep_set",
    "flatten_keys",
    "normalize",
    "split_key",
]

from .deep import deep_get, deep_search, deep_set, flatten_keys, split_key
from .normalize import Direction, canonicalize, normalize
