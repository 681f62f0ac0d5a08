from datetime import date, datetime, timedelta, timezone

import pytest

from confmux.errors import TypeCoercionError
from confmux.store import cast


@pytest.mark.parametrize(
    "value, expected",
    [
        (True, True),
        ("yes", True),
        ("On", True),
        ("1", True),
        (0, False),
        ("false", False),
        ("off", False),
    ],
)
def test_to_bool(value, expected):
    assert cast.to_bool(value) is expected


def test_to_bool_rejects_garbage():
    with pytest.raises(TypeCoercionError):
        cast.to_bool("maybe")


def test_to_int_variants():
    assert cast.to_int("42") == 42
    assert cast.to_int(" -7 ") == -7
    assert cast.to_int(3.0) == 3
    assert cast.to_int("5.0") == 5
    assert cast.to_int(True) == 1


@pytest.mark.parametrize("value", ["4.5", 4.5, "abc", [1], {"a": 1}])
def test_to_int_rejects(value):
    with pytest.raises(TypeCoercionError):
        cast.to_int(value)


def test_int32_bounds():
    assert cast.to_int32(2**31 - 1) == 2**31 - 1
    with pytest.raises(TypeCoercionError):
        cast.to_int32(2**31)
    assert cast.to_int64(2**40) == 2**40
    with pytest.raises(TypeCoercionError):
        cast.to_int64(2**63)


def test_to_float():
    assert cast.to_float("1.5") == 1.5
    assert cast.to_float(2) == 2.0
    with pytest.raises(TypeCoercionError):
        cast.to_float("x")


def test_to_time():
    assert cast.to_time("2024-01-02T03:04:05Z") == datetime(
        2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc
    )
    assert cast.to_time(date(2024, 1, 2)) == datetime(2024, 1, 2)
    assert cast.to_time(0) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    with pytest.raises(TypeCoercionError):
        cast.to_time("yesterday")


@pytest.mark.parametrize(
    "text, expected",
    [
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("250ms", timedelta(milliseconds=250)),
        ("1.5h", timedelta(minutes=90)),
        ("-2s", timedelta(seconds=-2)),
        ("10", timedelta(seconds=10)),
    ],
)
def test_parse_duration(text, expected):
    assert cast.to_duration(text) == expected


def test_to_duration_rejects():
    with pytest.raises(TypeCoercionError):
        cast.to_duration("1 hour")
    with pytest.raises(TypeCoercionError):
        cast.to_duration("")


@pytest.mark.parametrize(
    "value, expected",
    [
        (timedelta(0), "0s"),
        (timedelta(seconds=5), "5s"),
        (timedelta(hours=1, minutes=30), "1h30m0s"),
        (timedelta(minutes=2, seconds=3, milliseconds=500), "2m3.5s"),
        (timedelta(seconds=-90), "-1m30s"),
    ],
)
def test_format_duration(value, expected):
    assert cast.format_duration(value) == expected
    assert cast.parse_duration(expected) == value


def test_string_slice():
    assert cast.to_string_slice(["a", 1, True]) == ["a", "1", "true"]
    assert cast.to_string_slice("a b  c") == ["a", "b", "c"]
    with pytest.raises(TypeCoercionError):
        cast.to_string_slice(3)


def test_string_maps():
    assert cast.to_string_map_string({"a": 1, "b": False}) == {"a": "1", "b": "false"}
    assert cast.to_string_map_string_slice({"a": "x y", "b": ["z"]}) == {
        "a": ["x", "y"],
        "b": ["z"],
    }
    with pytest.raises(TypeCoercionError):
        cast.to_string_map("nope")


@pytest.mark.parametrize(
    "value, expected",
    [
        ("10mb", 10 * 1024 * 1024),
        ("1GB", 1 << 30),
        ("512 kb", 512 * 1024),
        ("64b", 64),
        ("100", 100),
        (2048, 2048),
        ("1.5k", 1536),
        ("-1mb", 0),
    ],
)
def test_size_in_bytes(value, expected):
    assert cast.to_size_in_bytes(value) == expected


def test_to_string_rejects_containers():
    with pytest.raises(TypeCoercionError):
        cast.to_string({"a": 1})


# ---------------------------------------------------------------------------
# Out-of-range values
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "convert, value",
    [
        (cast.to_size_in_bytes, float("inf")),
        (cast.to_size_in_bytes, float("nan")),
        (cast.to_size_in_bytes, "9" * 400 + "tb"),
        (cast.to_duration, float("inf")),
        (cast.to_duration, float("nan")),
        (cast.to_duration, 10**20),
        (cast.to_duration, "99999999999h"),
        (cast.to_time, 10**20),
        (cast.to_time, float("nan")),
        (cast.to_time, float("inf")),
        (cast.to_int, float("inf")),
        (cast.to_int, "nan"),
    ],
)
def test_out_of_range_values_raise_coercion_error(convert, value):
    with pytest.raises(TypeCoercionError):
        convert(value)


def test_parse_duration_out_of_range_is_value_error():
    with pytest.raises(ValueError, match="out of range"):
        cast.parse_duration("99999999999h")


def test_format_scalar():
    assert cast.format_scalar(True) == "true"
    assert cast.format_scalar(5) == "5"
    assert cast.format_scalar(timedelta(seconds=90)) == "1m30s"
    assert cast.format_scalar(date(2024, 5, 1)) == "2024-05-01"


def test_to_plain_keeps_listed_types():
    value = {"at": date(2024, 5, 1), "every": [timedelta(seconds=1)]}
    assert cast.to_plain(value) == {"at": "2024-05-01", "every": ["1s"]}
    assert cast.to_plain(value, keep=(date,)) == {
        "at": date(2024, 5, 1),
        "every": ["1s"],
    }
