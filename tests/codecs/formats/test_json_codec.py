import json
from datetime import datetime, timedelta

import pytest

from confmux.errors import DecodeError, EncodeError


def test_decode_nested(decode):
    store = decode("json", '{"db": {"host": "localhost", "ports": [1, 2]}, "on": true}')
    assert store.get_value() == {
        "db": {"host": "localhost", "ports": [1, 2]},
        "on": True,
    }


def test_encode_two_space_indent(encode):
    out = encode("json", {"a": {"b": 1}})
    assert out == '{\n  "a": {\n    "b": 1\n  }\n}'


def test_encode_temporal_values_as_strings(encode):
    out = encode(
        "json",
        {"at": datetime(2024, 1, 2, 3, 4, 5), "every": timedelta(minutes=5)},
    )
    assert json.loads(out) == {"at": "2024-01-02T03:04:05", "every": "5m0s"}


def test_encode_keeps_unicode(encode):
    assert "café" in encode("json", {"name": "café"})


@pytest.mark.parametrize("payload", ['{"a": ', "[1, 2]", '"text"'])
def test_decode_errors(decode, payload):
    with pytest.raises(DecodeError):
        decode("json", payload)


def test_decode_error_chains_parser_exception(decode):
    with pytest.raises(DecodeError) as exc:
        decode("json", "{oops}")
    assert isinstance(exc.value.__cause__, json.JSONDecodeError)


@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_encode_rejects_non_finite_floats(encode, value):
    with pytest.raises(EncodeError):
        encode("json", {"x": value})
