"""
Parser for nginx-style configuration directives.
"""

from .const import APP_VERSION
from .errors import ErrorKind, ParseError
from .grammar import DirectiveParser, parse_directives
from .loader import ConfigDocument, ConfigError, ConfigLoader
from .value import Literal, Value, Variable

__version__ = APP_VERSION

__all__ = [
    "ConfigDocument",
    "ConfigError",
    "ConfigLoader",
    "DirectiveParser",
    "ErrorKind",
    "Literal",
    "ParseError",
    "Value",
    "Variable",
    "parse_directives",
]
