"""
Error kinds raised while scanning values and parsing directives.

Every failure is a ParseError tagged with one ErrorKind member. The member
holds a fixed message template, so callers can match on the kind instead of
the message text.
"""

from enum import Enum
from typing import Any

from .tokenizer import Pos


class ErrorKind(Enum):
    """All failures the scanner and the grammar can report."""

    # Lexical (value scanner)
    BARE_DOLLAR = "bare $ in expression"
    BAD_VARIABLE_START = "variable name starts with bad char {char!r}"
    UNCLOSED_QUOTE = "unclosed quote"
    PREMATURE_QUOTE_CLOSE = "quote closes prematurely"
    UNSUPPORTED_BRACE_VARIABLE = "${{...}} variables are not supported"

    # Grammar / semantic
    EMPTY_DIRECTIVE = "{directive} directive must not be empty"
    EMPTY_ERROR_CODE = "empty error codes are not supported"
    VARIABLE_IN_ERROR_CODE = "only last argument of error_codes can contain variables"
    INVALID_RESPONSE_CODE = "invalid response code {code!r}"
    INVALID_ADDRESS = "invalid listen address {address!r}"
    INVALID_PORT = "invalid port {port!r}"
    INVALID_NUMBER = "invalid value {value!r} for {option}"
    INVALID_IPV6ONLY = "only on/off supported"
    UNKNOWN_LISTEN_OPTION = "unknown listen option {option!r}"
    UNKNOWN_DIRECTIVE = "unknown directive {directive!r}"
    EXPECTED_VALUE = "expected value after {directive!r}"
    EXPECTED_SEMICOLON = "expected ';', got {got}"
    BLOCKS_NOT_SUPPORTED = "block directives are not supported"

    def format(self, **params: Any) -> str:
        return self.value.format(**params)


class ParseError(Exception):
    """Exception raised for scanner and grammar errors."""

    def __init__(self, kind: ErrorKind, pos: Pos | None = None, **params: Any):
        self.kind = kind
        self.pos = pos
        self.params = params
        self.message = kind.format(**params)
        if pos:
            super().__init__(f"Line {pos.line}, column {pos.column}: {self.message}")
        else:
            super().__init__(self.message)

