from .version import __version__ as __version__

__title__ = "confmux"
__description__ = "Read and write configuration in many formats through one data model."
__url__ = "https://github.com/saudadez21/confmux"
__author__ = "Saudade Z"
__email__ = "saudadez217@gmail.com"
__license__ = "Apache-2.0"
