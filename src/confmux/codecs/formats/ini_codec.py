"""
INI files.

Every ``key`` inside ``[section]`` becomes the canonical key ``section.key``.
Keys that appear before the first section header belong to the default
section (``default`` unless configured otherwise), and are written back
without a header.
"""

from __future__ import annotations

import configparser
import io
from typing import IO

from confmux.codecs.protocols import ConfigReaderProtocol
from confmux.codecs.registry import registry
from confmux.errors import DecodeError
from confmux.libs.mapping import deep_set, split_key
from confmux.schemas import ConfigMap, FormatDescriptor

from .base import BaseCodec, flat_string

# never matches a real header, so no section inherits from it
_NO_DEFAULTS = "\x00"


def _continued(value: str) -> str:
    # same layout configparser uses for multi-line values inside sections
    return value.replace("\n", "\n\t")


@registry.register_codec()
class INICodec(BaseCodec):
    descriptor = FormatDescriptor("ini")

    def _parser(self) -> configparser.ConfigParser:
        parser = configparser.ConfigParser(
            interpolation=None,
            strict=False,
            default_section=_NO_DEFAULTS,
            delimiters=("=", ":"),
        )
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        return parser

    def _parse_failed(self, e: configparser.Error) -> DecodeError:
        if not isinstance(e, configparser.ParsingError):
            return self._decode_failed(e)
        # line numbers count the synthetic default section header
        where = "; ".join(
            f"line {lineno - 1}: {str(line).strip()}" for lineno, line in e.errors
        )
        return DecodeError(f"Invalid INI: cannot parse {where}")

    def decode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        target: ConfigMap,
    ) -> None:
        text = self._read_text(stream)
        parser = self._parser()
        try:
            parser.read_string(f"[{self.options.ini_default_section}]\n{text}")
        except configparser.Error as e:
            raise self._parse_failed(e) from e

        for section in parser.sections():
            for key, value in parser.items(section, raw=True):
                deep_set(target, split_key(f"{section}.{key}"), value)

    def encode(
        self,
        store: ConfigReaderProtocol,
        stream: IO[bytes],
        source: ConfigMap,
    ) -> None:
        parser = self._parser()
        top_level: list[str] = []
        for key in store.all_keys():
            section, sep, name = key.rpartition(".")
            value = flat_string(store, key)
            if not sep or section == self.options.ini_default_section:
                top_level.append(f"{name}={_continued(value)}\n")
                continue
            if not parser.has_section(section):
                parser.add_section(section)
            parser.set(section, name, value)

        buf = io.StringIO()
        buf.writelines(top_level)
        if top_level and parser.sections():
            buf.write("\n")
        try:
            parser.write(buf, space_around_delimiters=False)
        except configparser.Error as e:
            raise self._encode_failed(e) from e
        self._write_text(stream, buf.getvalue())
