"""
XML documents.

Decoded elements become mappings: attributes are stored under the
attribute prefix (``-id``), repeated child elements become lists, and text
sitting next to attributes or children is stored under ``#text``. The result
then goes through :func:`~confmux.libs.mapping.normalize` so attributes read
as ``attr_id`` in the canonical mapping. Encoding reverses both steps and
wraps the document in a ``root`` element.
"""

from __future__ import annotations

import re
from typing import IO, Any

from lxml import etree

from confmux.codecs.protocols import ConfigReaderProtocol
from confmux.codecs.registry import registry
from confmux.libs.mapping import Direction, normalize
from confmux.schemas import ConfigMap, FormatDescriptor
from confmux.store.cast import format_scalar

from .base import BaseCodec

XML_HEADER = '<?xml version="1.0" encoding="utf-8"?>\n'

_INT = re.compile(r"^-?(?:0|[1-9]\d*)$")
_FLOAT = re.compile(r"^-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][-+]?\d+)?$")

# nested lists have no element name of their own
_LIST_ITEM_TAG = "item"


def _cast(text: str) -> Any:
    if text in ("true", "false"):
        return text == "true"
    if _INT.match(text):
        return int(text)
    if _FLOAT.match(text):
        return float(text)
    return text


@registry.register_codec()
class XMLCodec(BaseCodec):
    descriptor = FormatDescriptor("xml")

    def _element_value(self, el: etree._Element) -> Any:
        attr_prefix = self.options.xml_attr_prefix
        result: dict[str, Any] = {}
        for name, value in el.attrib.items():
            result[attr_prefix + etree.QName(name).localname] = _cast(value)

        repeated: set[str] = set()
        for child in el:
            if not isinstance(child.tag, str):
                continue
            tag = etree.QName(child).localname
            value = self._element_value(child)
            if tag in repeated:
                result[tag].append(value)
            elif tag in result:
                result[tag] = [result[tag], value]
                repeated.add(tag)
            else:
                result[tag] = value

        text = (el.text or "").strip()
        if not result:
            return _cast(text)
        if text:
            result[self.options.xml_text_key] = _cast(text)
        return result

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        raw = self._read_bytes(stream)
        parser = etree.XMLParser(
            resolve_entities=False,
            no_network=True,
            remove_comments=True,
            remove_pis=True,
        )
        try:
            root = etree.fromstring(raw, parser)
        except etree.XMLSyntaxError as e:
            raise self._decode_failed(e) from e

        tag = etree.QName(root).localname
        data = {tag: self._element_value(root)}
        if tag == self.options.xml_root and isinstance(data[tag], dict):
            data = data[tag]
        target.update(
            normalize(data, Direction.INBOUND, self.options.xml_attr_prefix)
        )

    def _fill(self, el: etree._Element, mapping: dict[str, Any]) -> None:
        attr_prefix = self.options.xml_attr_prefix
        for key, value in mapping.items():
            if key.startswith(attr_prefix):
                el.set(key[len(attr_prefix) :], format_scalar(value))
            elif key == self.options.xml_text_key:
                el.text = format_scalar(value)
            else:
                items = value if isinstance(value, list) else [value]
                if not items:
                    # keeps the key; reads back as an empty string
                    etree.SubElement(el, key)
                for item in items:
                    self._append(el, key, item)

    def _append(self, parent: etree._Element, tag: str, value: Any) -> None:
        child = etree.SubElement(parent, tag)
        if isinstance(value, dict):
            self._fill(child, value)
        elif isinstance(value, list):
            for item in value:
                self._append(child, _LIST_ITEM_TAG, item)
        else:
            child.text = format_scalar(value)

    def encode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        source: ConfigMap,
    ) -> None:
        data = normalize(source, Direction.OUTBOUND, self.options.xml_attr_prefix)
        try:
            root = etree.Element(self.options.xml_root)
            self._fill(root, data)
            body = etree.tostring(root, pretty_print=True, encoding="unicode")
        except ValueError as e:
            raise self._encode_failed(e) from e
        self._write_text(stream, XML_HEADER + body)
