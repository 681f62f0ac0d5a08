"""
In-memory configuration store with typed access.
"""

__all__ = [
    "ConfigStore",
]

from .store import ConfigStore
