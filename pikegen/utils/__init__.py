"""
Utils package for pikegen.

Constants, exceptions, logging, and the identifier styling and escaping
helpers shared by the naming engine and the backends.
"""

from .exceptions import (
    PikegenError,
    NamingError,
    UnsupportedTypeError,
    TypeGraphError,
    ConfigError,
    RenderError,
)
from .logging import get_logger, setup_logging, RenderLogger
from .string_utils import (
    legalize_characters,
    split_into_words,
    underscore_style,
    pascal_style,
    string_escape,
)

__all__ = [
    "PikegenError",
    "NamingError",
    "UnsupportedTypeError",
    "TypeGraphError",
    "ConfigError",
    "RenderError",
    "get_logger",
    "setup_logging",
    "RenderLogger",
    "legalize_characters",
    "split_into_words",
    "underscore_style",
    "pascal_style",
    "string_escape",
]
