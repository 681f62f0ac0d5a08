from __future__ import annotations

import io

import pytest

from confmux.codecs import get_codec
from confmux.store import ConfigStore


class BareStore:
    """Store without the properties side channel."""

    def __init__(self, data: dict | None = None) -> None:
        self._inner = ConfigStore()
        self._inner.set_value(data or {})

    def all_keys(self):
        return self._inner.all_keys()

    def get_value(self):
        return self._inner.get_value()

    def get(self, key):
        return self._inner.get(key)

    def get_string(self, key):
        return self._inner.get_string(key)


@pytest.fixture
def bare_store():
    return BareStore


@pytest.fixture
def decode():
    """Decode ``text`` with the codec named ``fmt`` into a fresh store."""

    def _decode(fmt: str, text: str | bytes, store: ConfigStore | None = None):
        store = store or ConfigStore(conf_type=fmt)
        raw = text.encode("utf-8") if isinstance(text, str) else text
        store.load(io.BytesIO(raw), fmt)
        return store

    return _decode


@pytest.fixture
def encode():
    """Encode ``data`` (or an existing store) with the codec named ``fmt``."""

    def _encode(fmt: str, data) -> str:
        if isinstance(data, dict):
            store = ConfigStore(conf_type=fmt)
            store.set_value(data)
        else:
            store = data
        buf = io.BytesIO()
        get_codec(fmt).encode(store, buf, store.get_value())
        return buf.getvalue().decode("utf-8")

    return _encode
