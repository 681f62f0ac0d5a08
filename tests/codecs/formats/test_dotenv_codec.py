import pytest

from confmux.errors import DecodeError, KeyAbsentError


def test_decode(decode):
    store = decode(
        "dotenv",
        "# comment\nDB_HOST=localhost\nexport PORT=5432\n"
        "GREETING=\"hello world\"\nEMPTY=\nBARE\napp.name=demo\n",
    )
    assert store.get_value() == {
        "DB_HOST": "localhost",
        "PORT": "5432",
        "GREETING": "hello world",
        "EMPTY": "",
        "BARE": "",
        "app": {"name": "demo"},
    }


def test_env_alias(decode):
    assert decode("env", "A=1\n").get_int("A") == 1


def test_encode_upper_snake_case(encode):
    out = encode("dotenv", {"db": {"max_conns": 5, "host": "localhost"}})
    assert out.splitlines() == ["DB_MAX_CONNS=5", "DB_HOST=localhost"]


def test_encode_quotes_when_needed(encode, decode):
    out = encode(
        "dotenv",
        {"msg": 'say "hi" #now', "multi": "a\nb", "flag": True, "hosts": ["a", "b"]},
    )
    assert "FLAG=true" in out.splitlines()

    store = decode("dotenv", out)
    assert store.get_string("MSG") == 'say "hi" #now'
    assert store.get_string("MULTI") == "a\nb"
    assert store.get_string_slice("HOSTS") == ["a", "b"]


def test_encode_empty_store(encode):
    assert encode("dotenv", {}) == ""


def test_encode_propagates_store_errors(bare_store):
    import io

    from confmux.codecs import get_codec

    class Broken(bare_store):
        def get(self, key):
            raise KeyAbsentError(key)

    store = Broken({"a": 1})
    with pytest.raises(KeyAbsentError):
        get_codec("dotenv").encode(store, io.BytesIO(), store.get_value())


def test_decode_error(decode):
    with pytest.raises(DecodeError):
        decode("dotenv", "GOOD=1\nBAD LINE HERE\n")
