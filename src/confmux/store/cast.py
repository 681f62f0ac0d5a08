"""
Best-effort conversions from stored configuration values to requested types.

Every function raises :class:`~confmux.errors.TypeCoercionError` when the
value cannot be represented as the target type.
"""

from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any

from confmux.errors import TypeCoercionError

_TRUE_STRINGS = {"1", "t", "true", "yes", "y", "on"}
_FALSE_STRINGS = {"0", "f", "false", "no", "n", "off", ""}

_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1

_DURATION_UNITS = {
    "ns": 1e-9,
    "us": 1e-6,
    "µs": 1e-6,
    "ms": 1e-3,
    "s": 1.0,
    "m": 60.0,
    "h": 3600.0,
}
_DURATION_PART = re.compile(r"(\d+(?:\.\d*)?|\.\d+)(ns|us|µs|ms|s|m|h)")

_SIZE_PATTERN = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*([kmgt]?b?)\s*$", re.IGNORECASE)
_SIZE_MULTIPLIERS = {
    "": 1,
    "b": 1,
    "k": 1 << 10,
    "kb": 1 << 10,
    "m": 1 << 20,
    "mb": 1 << 20,
    "g": 1 << 30,
    "gb": 1 << 30,
    "t": 1 << 40,
    "tb": 1 << 40,
}


def _fail(value: Any, target: str) -> TypeCoercionError:
    return TypeCoercionError(
        f"cannot convert {value!r} ({type(value).__name__}) to {target}"
    )


def to_string(value: Any) -> str:
    if isinstance(value, (dict, list)):
        raise _fail(value, "string")
    return format_scalar(value)


def to_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        folded = value.strip().lower()
        if folded in _TRUE_STRINGS:
            return True
        if folded in _FALSE_STRINGS:
            return False
    raise _fail(value, "bool")


def to_int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not value.is_integer():
            raise _fail(value, "int")
        return int(value)
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text, 10)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            raise _fail(value, "int") from None
        if number.is_integer():
            return int(number)
    raise _fail(value, "int")


def _bounded_int(value: Any, low: int, high: int, target: str) -> int:
    result = to_int(value)
    if not low <= result <= high:
        raise TypeCoercionError(f"{result} overflows {target}")
    return result


def to_int32(value: Any) -> int:
    return _bounded_int(value, _INT32_MIN, _INT32_MAX, "int32")


def to_int64(value: Any) -> int:
    return _bounded_int(value, _INT64_MIN, _INT64_MAX, "int64")


def to_float(value: Any) -> float:
    if isinstance(value, (bool, int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            pass
    raise _fail(value, "float")


def to_time(value: Any) -> datetime:
    """Convert to a :class:`datetime`.

    Accepts datetimes, dates (midnight), ISO-8601 strings (a trailing ``Z`` is
    read as UTC) and numbers as Unix epoch seconds in UTC.
    """
    if isinstance(value, datetime):
        return value
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OverflowError, ValueError, OSError):
            raise _fail(value, "time") from None
    if isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(text)
        except ValueError:
            pass
    raise _fail(value, "time")


def parse_duration(text: str) -> timedelta:
    """Parse a duration string such as ``1h30m``, ``250ms`` or ``-1.5h``.

    A bare number is read as seconds.

    Raises:
        ValueError: The text is not a duration, or it is out of range.
    """
    raw = text.strip()
    sign = 1.0
    if raw and raw[0] in "+-":
        sign = -1.0 if raw[0] == "-" else 1.0
        raw = raw[1:]
    if not raw:
        raise ValueError(f"invalid duration {text!r}")
    try:
        return timedelta(seconds=sign * float(raw))
    except (ValueError, OverflowError):
        pass
    seconds = 0.0
    pos = 0
    for match in _DURATION_PART.finditer(raw):
        if match.start() != pos:
            raise ValueError(f"invalid duration {text!r}")
        seconds += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        pos = match.end()
    if pos != len(raw):
        raise ValueError(f"invalid duration {text!r}")
    try:
        return timedelta(seconds=sign * seconds)
    except OverflowError:
        raise ValueError(f"duration out of range: {text!r}") from None


def format_duration(value: timedelta) -> str:
    """Render ``value`` in the ``1h2m3.5s`` form read by :func:`parse_duration`."""
    total_us = (value.days * 86400 + value.seconds) * 1_000_000 + value.microseconds
    if total_us == 0:
        return "0s"
    sign = "-" if total_us < 0 else ""
    total_us = abs(total_us)
    hours, rem = divmod(total_us, 3600 * 1_000_000)
    minutes, rem = divmod(rem, 60 * 1_000_000)
    seconds, micros = divmod(rem, 1_000_000)
    out = sign
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    if micros:
        out += f"{seconds}.{micros:06d}".rstrip("0") + "s"
    else:
        out += f"{seconds}s"
    return out


def to_duration(value: Any) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return timedelta(seconds=value)
        except (OverflowError, ValueError):
            raise _fail(value, "duration") from None
    if isinstance(value, str):
        try:
            return parse_duration(value)
        except ValueError:
            pass
    raise _fail(value, "duration")


def to_string_slice(value: Any) -> list[str]:
    if isinstance(value, list):
        return [to_string(v) for v in value]
    if isinstance(value, str):
        return value.split()
    raise _fail(value, "string slice")


def to_string_map(value: Any) -> dict[str, Any]:
    if isinstance(value, dict):
        return {str(k): v for k, v in value.items()}
    raise _fail(value, "string map")


def to_string_map_string(value: Any) -> dict[str, str]:
    return {k: to_string(v) for k, v in to_string_map(value).items()}


def to_string_map_string_slice(value: Any) -> dict[str, list[str]]:
    return {k: to_string_slice(v) for k, v in to_string_map(value).items()}


def to_size_in_bytes(value: Any) -> int:
    """Convert a size such as ``10mb``, ``1.5 GB`` or ``512`` to bytes.

    Units are binary (``1kb == 1024``). Negative sizes are clamped to zero.
    """
    try:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return max(int(value), 0)
        if isinstance(value, str):
            match = _SIZE_PATTERN.match(value)
            if match:
                number = float(match.group(1))
                return int(number * _SIZE_MULTIPLIERS[match.group(2).lower()])
    except (OverflowError, ValueError):
        raise _fail(value, "size in bytes") from None
    if isinstance(value, str) and value.strip().startswith("-"):
        return 0
    raise _fail(value, "size in bytes")


def format_scalar(value: Any) -> str:
    """Render a scalar the way flat formats (INI, dotenv, properties) store it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, timedelta):
        return format_duration(value)
    if isinstance(value, (datetime, date, time)):
        return value.isoformat()
    if value is None:
        return ""
    return str(value)


def to_plain(value: Any, keep: tuple[type, ...] = ()) -> Any:
    """Replace temporal values a grammar cannot express with their string form.

    Durations, datetimes, dates and times become strings unless their type is
    listed in ``keep``. Mappings and lists are rebuilt.
    """
    if isinstance(value, dict):
        return {k: to_plain(v, keep) for k, v in value.items()}
    if isinstance(value, list):
        return [to_plain(v, keep) for v in value]
    if isinstance(value, (timedelta, datetime, date, time)) and not isinstance(
        value, keep
    ):
        return format_scalar(value)
    return value
