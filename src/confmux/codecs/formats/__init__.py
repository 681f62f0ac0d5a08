"""
Built-in codecs. Importing a module registers its codec.
"""

__all__ = [
    "BaseCodec",
    "DotenvCodec",
    "HCLCodec",
    "INICodec",
    "JSONCodec",
    "PropertiesCodec",
    "TOMLCodec",
    "XMLCodec",
    "YAMLCodec",
]

from .base import BaseCodec
from .dotenv_codec import DotenvCodec
from .hcl_codec import HCLCodec
from .ini_codec import INICodec
from .json_codec import JSONCodec
from .properties_codec import PropertiesCodec
from .toml_codec import TOMLCodec
from .xml_codec import XMLCodec
from .yaml_codec import YAMLCodec
