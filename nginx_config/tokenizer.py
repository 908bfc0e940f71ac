"""
Tokenizer for nginx configuration syntax.

Splits source text into whitespace and semicolon delimited tokens:
- Words (directive names, arguments, addresses, options)
- Quoted strings, kept with their quotes for the value scanner
- Semicolons and braces
- Single-line (#) comments
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator


class TokenType(Enum):
    """Token types for the nginx config syntax."""

    WORD = auto()          # directive name or argument, raw text
    SEMICOLON = auto()     # ;
    LBRACE = auto()        # {
    RBRACE = auto()        # }
    EOF = auto()           # end of file


@dataclass(frozen=True)
class Pos:
    """1-based source position."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


@dataclass
class Token:
    """A single token from the tokenizer."""

    type: TokenType
    value: str
    pos: Pos

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.pos})"


class Tokenizer:
    """
    Tokenizer for nginx configuration.

    Example config:
        listen 127.0.0.1:8080 default_server;
        error_page 500 502 503 /50x.html;
        root "/var/www/my site";

    Quoted tokens are returned verbatim (quotes and escapes included); the
    value scanner is responsible for unquoting them.
    """

    WHITESPACE = " \t\r\n"
    DELIMITERS = WHITESPACE + ";{}"

    SINGLE_CHAR_TOKENS = {
        ";": TokenType.SEMICOLON,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
    }

    def __init__(self, source: str, filename: str = "<string>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1

    def _current(self) -> str:
        """Get current character or empty string if at end."""
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def _advance(self) -> str:
        """Advance position and return current character."""
        if self.pos >= len(self.source):
            return ""

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def _skip_whitespace_and_comments(self) -> None:
        while True:
            char = self._current()
            if char and char in self.WHITESPACE:
                self._advance()
            elif char == "#":
                while self._current() and self._current() != "\n":
                    self._advance()
            else:
                break

    def _read_quoted(self) -> None:
        """Consume a quoted run, stopping after the matching quote or at end of input."""
        quote_char = self._advance()
        while self._current():
            char = self._advance()
            if char == "\\":
                self._advance()
            elif char == quote_char:
                return

    def _read_word(self) -> Token:
        """Read a word, which may contain quoted runs and escapes."""
        start = Pos(self.line, self.column)
        start_pos = self.pos

        if self._current() in "\"'":
            self._read_quoted()

        while self._current() and self._current() not in self.DELIMITERS:
            if self._current() == "\\":
                self._advance()
            self._advance()

        return Token(TokenType.WORD, self.source[start_pos:self.pos], start)

    def next_token(self) -> Token:
        """Get the next token from the source."""
        self._skip_whitespace_and_comments()

        start = Pos(self.line, self.column)
        char = self._current()

        if not char:
            return Token(TokenType.EOF, "", start)

        if char in self.SINGLE_CHAR_TOKENS:
            self._advance()
            return Token(self.SINGLE_CHAR_TOKENS[char], char, start)

        return self._read_word()

    def tokenize(self) -> Iterator[Token]:
        """Generate all tokens from the source."""
        while True:
            token = self.next_token()
            yield token
            if token.type == TokenType.EOF:
                break

    def __iter__(self) -> Iterator[Token]:
        return self.tokenize()


def tokenize(source: str, filename: str = "<string>") -> list[Token]:
    """Convenience function to tokenize a source string."""
    return list(Tokenizer(source, filename))
