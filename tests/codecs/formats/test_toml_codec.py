import tomllib
from datetime import date, datetime, timedelta

import pytest

from confmux.errors import DecodeError, EncodeError


def test_decode_tables_and_dates(decode):
    store = decode(
        "toml",
        'title = "demo"\nborn = 2024-05-01\n\n[db]\nhost = "localhost"\nports = [1, 2]\n',
    )
    assert store.get_value() == {
        "title": "demo",
        "born": date(2024, 5, 1),
        "db": {"host": "localhost", "ports": [1, 2]},
    }
    assert store.get_time("born") == datetime(2024, 5, 1)


def test_encode(encode):
    out = encode(
        "toml",
        {"title": "demo", "every": timedelta(seconds=30), "db": {"port": 5432}},
    )
    assert tomllib.loads(out) == {
        "title": "demo",
        "every": "30s",
        "db": {"port": 5432},
    }


def test_decode_error(decode):
    with pytest.raises(DecodeError):
        decode("toml", "a = [1,,2]")


def test_encode_error_on_unrepresentable_value(encode):
    with pytest.raises(EncodeError):
        encode("toml", {"a": None})
