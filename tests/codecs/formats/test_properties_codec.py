import io

import pytest
from jproperties import Properties

from confmux.codecs import get_codec
from confmux.errors import UnsupportedFormatError
from confmux.store import ConfigStore

PAYLOAD = "# service settings\nServer.Port=8080\nserver.host=localhost\napp.name=demo\n"


def test_decode_lowercases_and_nests(decode):
    store = decode("properties", PAYLOAD)
    assert store.get_value() == {
        "server": {"port": "8080", "host": "localhost"},
        "app": {"name": "demo"},
    }
    assert store.get_int("Server.Port") == 8080


def test_decode_attaches_property_set(decode):
    store = decode("props", PAYLOAD)
    props = store.get_properties()
    assert isinstance(props, Properties)
    assert props["Server.Port"].data == "8080"


def test_encode_reuses_original_spelling(decode, encode):
    store = decode("properties", PAYLOAD)
    store.set("server.port", 9090)
    store.set("app.debug", True)

    out = encode("properties", store)
    lines = [line for line in out.splitlines() if line and not line.startswith("#")]
    assert lines == [
        "Server.Port=9090",
        "server.host=localhost",
        "app.name=demo",
        "app.debug=true",
    ]


def test_encode_creates_property_set_when_missing(encode):
    store = ConfigStore()
    store.set_value({"db": {"user": "root"}})
    assert store.get_properties() is None

    out = encode("prop", store)

    assert "db.user=root" in out.splitlines()
    assert store.get_properties() is not None


@pytest.mark.parametrize("name", ["properties", "props", "prop"])
def test_store_without_capability_is_rejected(bare_store, name):
    codec = get_codec(name)
    store = bare_store({"a": "1"})

    with pytest.raises(UnsupportedFormatError):
        codec.decode(store, io.BytesIO(b"a=1\n"), {})

    out = io.BytesIO()
    with pytest.raises(UnsupportedFormatError):
        codec.encode(store, out, store.get_value())
    assert out.getvalue() == b""


def test_rejection_happens_before_reading(bare_store):
    stream = io.BytesIO(b"a=1\n")
    with pytest.raises(UnsupportedFormatError):
        get_codec("properties").decode(bare_store(), stream, {})
    assert stream.tell() == 0


def test_comments_survive_a_round_trip(decode, encode):
    text = (
        "# keep me\n"
        "! bang comment\n"
        "a=1\n"
        "long=first \\\n"
        "  # not a comment\n"
        "\n"
        "#: owner=ops\n"
        "b=2\n"
        "# trailing\n"
    )
    store = decode("properties", text)
    assert store.get_string("long") == "first # not a comment"

    assert encode("properties", store) == (
        "# keep me\n"
        "! bang comment\n"
        "a=1\n"
        "long=first \\# not a comment\n"
        "#: owner=ops\n"
        "b=2\n"
        "# trailing\n"
    )


def test_encode_drops_keys_removed_from_store(decode, encode):
    store = decode("properties", "# old\nold.key=1\nkeep=2\n")
    store.set_value({"keep": "2", "new": "3"})

    assert encode("properties", store) == "keep=2\nnew=3\n"
