"""
Defines structured configuration models using dataclasses.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class CodecOptions:
    """Tunables shared by the built-in codecs.

    Attributes:
        encoding: Text encoding used to read and write payloads.
        json_indent: Indentation width of encoded JSON documents.
        xml_root: Name of the wrapper element around encoded XML documents.
        xml_attr_prefix: Marker prepended to XML attribute names in decoded maps.
        xml_text_key: Key holding element text that sits beside attributes or
            child elements.
        ini_default_section: Section name treated as "no section" in INI files.
    """

    encoding: str = "utf-8"
    json_indent: int = 2
    xml_root: str = "root"
    xml_attr_prefix: str = "-"
    xml_text_key: str = "#text"
    ini_default_section: str = "default"
