"""
Generic string values.

A value consists of literal text and variable references, e.g. the argument
`/static/$host/index.html` becomes::

    Value([Literal("/static/"), Variable("host"), Literal("/index.html")])

Quotes are removed while scanning. Backslash escapes are kept verbatim: the
backslash and the escaped character both end up in the literal text, and
nothing is escaped again on output.
"""

import string
from dataclasses import dataclass, field

from .const import SPECIAL_CHARS
from .errors import ErrorKind, ParseError
from .tokenizer import Pos, Token


VARIABLE_START = frozenset(string.ascii_letters + "_")
VARIABLE_CHARS = frozenset(string.ascii_letters + string.digits + "_")


@dataclass(frozen=True)
class Literal:
    """Raw text, already unquoted."""
    text: str


@dataclass(frozen=True)
class Variable:
    """Reference to a variable, `$name` in the source."""
    name: str


Part = Literal | Variable


@dataclass(frozen=True)
class Value:
    """
    Ordered sequence of literal and variable parts.

    The source position is kept for diagnostics only and is ignored when
    comparing values.
    """
    parts: tuple[Part, ...] = ()
    position: Pos | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.parts, tuple):
            object.__setattr__(self, "parts", tuple(self.parts))

    @classmethod
    def parse(cls, text: str, position: Pos | None = None) -> "Value":
        """Scan the raw text of one token into a Value."""
        return cls(ValueScanner(text, position).scan(), position)

    @classmethod
    def from_token(cls, token: Token) -> "Value":
        return cls.parse(token.value, token.pos)

    @classmethod
    def literal_value(cls, text: str) -> "Value":
        """Build a value holding a single literal (no parts for empty text)."""
        return cls((Literal(text),) if text else ())

    @property
    def literal(self) -> str | None:
        """Text of the value if it is exactly one literal part, else None."""
        if len(self.parts) == 1 and isinstance(self.parts[0], Literal):
            return self.parts[0].text
        return None

    @property
    def variables(self) -> list[str]:
        """Names of all referenced variables, in order of appearance."""
        return [p.name for p in self.parts if isinstance(p, Variable)]

    def has_specials(self) -> bool:
        """Check whether any literal part requires quoting."""
        for part in self.parts:
            if isinstance(part, Literal) and not SPECIAL_CHARS.isdisjoint(part.text):
                return True
        return False

    def display(self) -> str:
        """Render the value back to configuration text."""
        # TODO: escape quotes and backslashes inside quoted output
        text = "".join(
            part.text if isinstance(part, Literal) else f"${part.name}"
            for part in self.parts
        )
        if self.has_specials() or not self.parts:
            return f'"{text}"'
        return text

    def __str__(self) -> str:
        return self.display()


class ValueScanner:
    """
    Scanner turning the raw text of a single token into value parts.

    Raw mode is used unless the text starts with a quote character, in which
    case the matching quote must be the last character of the text.
    """

    def __init__(self, text: str, position: Pos | None = None):
        self.text = text
        self.position = position
        self.pos = 0

    def _error(self, kind: ErrorKind, **params) -> ParseError:
        return ParseError(kind, self.position, **params)

    def scan(self) -> list[Part]:
        if self.text.startswith(('"', "'")):
            return self._scan_quoted(self.text[0])
        return self._scan_raw()

    def _read_variable(self) -> Variable:
        """Read `$name` starting at the dollar sign."""
        self.pos += 1  # skip $
        if self.pos >= len(self.text):
            raise self._error(ErrorKind.BARE_DOLLAR)

        first = self.text[self.pos]
        if first == "{":
            raise self._error(ErrorKind.UNSUPPORTED_BRACE_VARIABLE)
        if first not in VARIABLE_START:
            raise self._error(ErrorKind.BAD_VARIABLE_START, char=first)

        start = self.pos
        while self.pos < len(self.text) and self.text[self.pos] in VARIABLE_CHARS:
            self.pos += 1
        return Variable(self.text[start:self.pos])

    def _scan_raw(self) -> list[Part]:
        parts: list[Part] = []
        text = self.text
        literal_start = 0

        while self.pos < len(text):
            char = text[self.pos]
            if char == "\\":
                self.pos += 2
            elif char == "$":
                if self.pos != literal_start:
                    parts.append(Literal(text[literal_start:self.pos]))
                parts.append(self._read_variable())
                literal_start = self.pos
            else:
                self.pos += 1

        if literal_start < len(text):
            parts.append(Literal(text[literal_start:]))
        return parts

    def _scan_quoted(self, quote: str) -> list[Part]:
        parts: list[Part] = []
        text = self.text
        chunk: list[str] = []
        self.pos = 1  # skip opening quote

        def flush() -> None:
            if chunk:
                parts.append(Literal("".join(chunk)))
                chunk.clear()

        while self.pos < len(text):
            char = text[self.pos]
            if char == "\\":
                chunk.append(text[self.pos:self.pos + 2])
                self.pos += 2
            elif char == quote:
                flush()
                if self.pos + 1 != len(text):
                    # the tokenizer did not split where the quote ends
                    raise self._error(ErrorKind.PREMATURE_QUOTE_CLOSE)
                return parts
            elif char == "$":
                flush()
                parts.append(self._read_variable())
                if self.pos >= len(text):
                    raise self._error(ErrorKind.UNCLOSED_QUOTE)
            else:
                chunk.append(char)
                self.pos += 1

        raise self._error(ErrorKind.UNCLOSED_QUOTE)


def scan_value(text: str, position: Pos | None = None) -> Value:
    """Convenience function to scan one token's text."""
    return Value.parse(text, position)


def serialize(value: Value) -> str:
    return value.display()
