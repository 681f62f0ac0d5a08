"""
Canonical value types and format descriptors.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union

Value = Union[
    str,
    int,
    float,
    bool,
    datetime,
    date,
    time,
    timedelta,
    None,
    "dict[str, Value]",
    "list[Value]",
]
ConfigMap = dict[str, Value]


@dataclass(frozen=True)
class FormatDescriptor:
    """Identifies a configuration format for registry lookup.

    Attributes:
        name: Canonical lowercase format name.
        aliases: Alternative names resolving to the same codec.
    """

    name: str
    aliases: tuple[str, ...] = ()

    @property
    def names(self) -> tuple[str, ...]:
        """Canonical name followed by every alias."""
        return (self.name, *self.aliases)
