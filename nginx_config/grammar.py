"""
Directive grammar.

Consumes tokens from the tokenizer and builds AST items. The leading keyword
selects exactly one rule; once a rule is selected, any error it raises is
final for the whole parse.

Grammar:
    error_page  := 'error_page' VALUE+ ';'
    listen      := 'listen' WORD listen_opt* ';'
    root        := 'root' VALUE ';'
    alias       := 'alias' VALUE ';'
    internal    := 'internal' ';'
"""

import re
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from pathlib import PurePosixPath
from typing import Callable, Iterable

from .ast import (
    Address, Alias, ErrorPage, ErrorPageResponse, HttpExt, Internal, Ip, Item,
    Keep, Listen, Port, Redirect, Replace, Root, StarPort, Target, Unix,
)
from .codes import Code
from .errors import ErrorKind, ParseError
from .logging import get_logger
from .tokenizer import Pos, Token, TokenType, Tokenizer
from .value import Value


logger = get_logger("grammar")

INT32 = (-2**31, 2**31 - 1)
UINT16 = (0, 2**16 - 1)
UINT32 = (0, 2**32 - 1)
UINT64 = (0, 2**64 - 1)

_SIGNED_RE = re.compile(r"[+-]?[0-9]+")
_UNSIGNED_RE = re.compile(r"\+?[0-9]+")


def parse_int(text: str, bounds: tuple[int, int]) -> int | None:
    """Parse a decimal integer within bounds, or return None."""
    low, high = bounds
    pattern = _SIGNED_RE if low < 0 else _UNSIGNED_RE
    if not pattern.fullmatch(text):
        return None
    sign = "-" if text.startswith("-") else ""
    digits = text.lstrip("+-").lstrip("0") or "0"
    # more digits than the widest bound is always out of range
    if len(digits) > len(str(max(-low, high))):
        return None
    number = int(sign + digits)
    if not low <= number <= high:
        return None
    return number


# listen

class ListenOption(Enum):
    """Options of the listen directive; values name the Listen field they set."""
    DEFAULT_SERVER = "default_server"
    SSL = "ssl"
    EXT = "ext"
    PROXY_PROTOCOL = "proxy_protocol"
    SETFIB = "setfib"
    FASTOPEN = "fastopen"
    BACKLOG = "backlog"
    RCVBUF = "rcvbuf"
    SNDBUF = "sndbuf"
    DEFERRED = "deferred"
    BIND = "bind"
    IPV6ONLY = "ipv6only"
    REUSEPORT = "reuseport"


ParsedOption = tuple[ListenOption, object]

# Options given as a bare keyword, with the value they store
LISTEN_FLAGS: dict[str, ParsedOption] = {
    "default_server": (ListenOption.DEFAULT_SERVER, True),
    "ssl": (ListenOption.SSL, True),
    "http2": (ListenOption.EXT, HttpExt.HTTP2),
    "spdy": (ListenOption.EXT, HttpExt.SPDY),
    "proxy_protocol": (ListenOption.PROXY_PROTOCOL, True),
    "deferred": (ListenOption.DEFERRED, True),
    "bind": (ListenOption.BIND, True),
    "reuseport": (ListenOption.REUSEPORT, True),
}

# Options given as `name=number`, with the accepted range
LISTEN_NUMBERS: dict[str, tuple[ListenOption, tuple[int, int]]] = {
    "setfib=": (ListenOption.SETFIB, INT32),
    "fastopen=": (ListenOption.FASTOPEN, UINT32),
    "backlog=": (ListenOption.BACKLOG, INT32),
    "rcvbuf=": (ListenOption.RCVBUF, UINT64),
    "sndbuf=": (ListenOption.SNDBUF, UINT64),
}

IPV6ONLY_PREFIX = "ipv6only="
IPV6ONLY_VALUES = {"on": True, "off": False}


def parse_listen_option(token: Token) -> ParsedOption:
    """Recognize one listen option token."""
    text = token.value

    if text in LISTEN_FLAGS:
        return LISTEN_FLAGS[text]

    for prefix, (option, bounds) in LISTEN_NUMBERS.items():
        if text.startswith(prefix):
            raw = text[len(prefix):]
            number = parse_int(raw, bounds)
            if number is None:
                raise ParseError(ErrorKind.INVALID_NUMBER, token.pos, value=raw, option=prefix[:-1])
            return option, number

    if text.startswith(IPV6ONLY_PREFIX):
        raw = text[len(IPV6ONLY_PREFIX):]
        if raw not in IPV6ONLY_VALUES:
            raise ParseError(ErrorKind.INVALID_IPV6ONLY, token.pos)
        return ListenOption.IPV6ONLY, IPV6ONLY_VALUES[raw]

    raise ParseError(ErrorKind.UNKNOWN_LISTEN_OPTION, token.pos, option=text)


def fold_listen(address: Address, options: Iterable[ParsedOption], pos: Pos | None = None) -> Listen:
    """
    Fold parsed options into a Listen record.

    Later options overwrite earlier ones for the same field. Flags only ever
    store True, so a flag stays set once seen.
    """
    listen = Listen(address, position=pos)
    for option, value in options:
        setattr(listen, option.value, value)
    return listen


def _parse_ip(text: str) -> Ip:
    """Parse `a.b.c.d[:port]` or `[v6][:port]`, raising ValueError on bad input."""
    if text.startswith("["):
        host, closed, rest = text[1:].partition("]")
        if not closed:
            raise ValueError(text)
        address: IPv4Address | IPv6Address = IPv6Address(host)
    else:
        host, colon, port_text = text.partition(":")
        rest = colon + port_text
        address = IPv4Address(host)

    if not rest:
        return Ip(address)
    if not rest.startswith(":"):
        raise ValueError(text)
    port = parse_int(rest[1:], UINT16)
    if port is None:
        raise ValueError(text)
    return Ip(address, port)


def parse_address(text: str, pos: Pos | None = None) -> Address:
    """
    Parse the address argument of listen.

    Examples:
        unix:/var/run/app.sock  -> Unix(PurePosixPath("/var/run/app.sock"))
        *:80                    -> StarPort(80)
        8080                    -> Port(8080)
        127.0.0.1:8080          -> Ip(IPv4Address("127.0.0.1"), 8080)
        [::1]:443               -> Ip(IPv6Address("::1"), 443)
    """
    if text.startswith("unix:"):
        path = text[len("unix:"):]
        if not path:
            raise ParseError(ErrorKind.INVALID_ADDRESS, pos, address=text)
        return Unix(PurePosixPath(path))

    if text.startswith("*:"):
        port = parse_int(text[2:], UINT16)
        if port is None:
            raise ParseError(ErrorKind.INVALID_PORT, pos, port=text[2:])
        return StarPort(port)

    port = parse_int(text, UINT16)
    if port is not None:
        return Port(port)

    try:
        return _parse_ip(text)
    except ValueError as e:
        raise ParseError(ErrorKind.INVALID_ADDRESS, pos, address=text) from e


# error_page

def _is_response_marker(value: Value) -> bool:
    literal = value.literal
    return literal is not None and literal.startswith("=")


def _code_literal(value: Value) -> str:
    """Text of a status code argument, which must be one plain literal."""
    if not value.parts:
        raise ParseError(ErrorKind.EMPTY_ERROR_CODE, value.position)
    literal = value.literal
    if literal is None:
        raise ParseError(ErrorKind.VARIABLE_IN_ERROR_CODE, value.position)
    return literal


def build_error_page(values: list[Value], pos: Pos | None = None) -> ErrorPage:
    """
    Build an ErrorPage from the arguments of error_page.

    The last argument is the uri. The one before it may be an `=code`
    override (or a bare `=`). Everything else is a status code.
    """
    if not values:
        raise ParseError(ErrorKind.EMPTY_DIRECTIVE, pos, directive="error_page")

    values = list(values)
    uri = values.pop()

    response_code: ErrorPageResponse = Target()
    if values and _is_response_marker(values[-1]):
        marker = values.pop()
        text = _code_literal(marker)
        if text == "=":
            response_code = Keep()
        else:
            code = Code.parse(text[1:], marker.position)
            if code.is_redirect:
                response_code = Redirect(code.as_code())
            else:
                response_code = Replace(code.as_code())

    codes = [Code.parse(_code_literal(v), v.position).as_code() for v in values]

    return ErrorPage(codes=codes, response_code=response_code, uri=uri, position=pos)


class DirectiveParser:
    """
    Parser for a flat sequence of directives.

    Usage:
        parser = DirectiveParser(tokenize(source))
        items = parser.parse()
    """

    def __init__(self, tokens: Iterable[Token]):
        self._tokens = iter(tokens)
        self._last_pos = Pos(1, 1)
        self.current_token: Token = self._next()

    def _next(self) -> Token:
        token = next(self._tokens, None)
        if token is None:
            return Token(TokenType.EOF, "", self._last_pos)
        self._last_pos = token.pos
        return token

    def _advance(self) -> Token:
        """Advance to next token and return previous."""
        previous = self.current_token
        if previous.type != TokenType.EOF:
            self.current_token = self._next()
        return previous

    def _check(self, token_type: TokenType) -> bool:
        return self.current_token.type == token_type

    def _describe_current(self) -> str:
        if self._check(TokenType.EOF):
            return "end of file"
        return repr(self.current_token.value)

    def _expect_semicolon(self) -> None:
        if self._check(TokenType.SEMICOLON):
            self._advance()
            return
        if self._check(TokenType.LBRACE) or self._check(TokenType.RBRACE):
            raise ParseError(ErrorKind.BLOCKS_NOT_SUPPORTED, self.current_token.pos)
        raise ParseError(
            ErrorKind.EXPECTED_SEMICOLON,
            self.current_token.pos,
            got=self._describe_current(),
        )

    def _values(self) -> list[Value]:
        """Scan all value tokens up to the next non-word token."""
        values = []
        while self._check(TokenType.WORD):
            values.append(Value.from_token(self._advance()))
        return values

    def _single_value(self, keyword: Token) -> Value:
        if not self._check(TokenType.WORD):
            raise ParseError(ErrorKind.EXPECTED_VALUE, self.current_token.pos, directive=keyword.value)
        value = Value.from_token(self._advance())
        self._expect_semicolon()
        return value

    # Rules

    def _error_page(self, keyword: Token) -> ErrorPage:
        item = build_error_page(self._values(), keyword.pos)
        self._expect_semicolon()
        return item

    def _listen(self, keyword: Token) -> Listen:
        if not self._check(TokenType.WORD):
            raise ParseError(ErrorKind.EXPECTED_VALUE, self.current_token.pos, directive=keyword.value)
        address_token = self._advance()
        address = parse_address(address_token.value, address_token.pos)

        options = []
        while self._check(TokenType.WORD):
            options.append(parse_listen_option(self._advance()))
        self._expect_semicolon()

        return fold_listen(address, options, keyword.pos)

    def _root(self, keyword: Token) -> Root:
        return Root(self._single_value(keyword), position=keyword.pos)

    def _alias(self, keyword: Token) -> Alias:
        return Alias(self._single_value(keyword), position=keyword.pos)

    def _internal(self, keyword: Token) -> Internal:
        self._expect_semicolon()
        return Internal(position=keyword.pos)

    RULES: dict[str, Callable[["DirectiveParser", Token], Item]] = {
        "error_page": _error_page,
        "listen": _listen,
        "root": _root,
        "alias": _alias,
        "internal": _internal,
    }

    def at_end(self) -> bool:
        return self._check(TokenType.EOF)

    def parse_directive(self) -> Item:
        """Parse one directive starting at the current token."""
        token = self.current_token

        if token.type in (TokenType.LBRACE, TokenType.RBRACE):
            raise ParseError(ErrorKind.BLOCKS_NOT_SUPPORTED, token.pos)

        rule = self.RULES.get(token.value) if token.type == TokenType.WORD else None
        if rule is None:
            raise ParseError(ErrorKind.UNKNOWN_DIRECTIVE, token.pos, directive=token.value)

        self._advance()
        item = rule(self, token)
        logger.debug(f"Parsed {item.directive} at {token.pos}")
        return item

    def parse(self) -> list[Item]:
        """Parse all directives until end of input."""
        items = []
        while not self.at_end():
            items.append(self.parse_directive())
        return items


def parse_directives(source: str, filename: str = "<string>") -> list[Item]:
    """
    Convenience function to parse configuration text.

    Args:
        source: Configuration source text
        filename: Filename for log messages

    Returns:
        Parsed items in source order

    Raises:
        ParseError: On the first invalid directive
    """
    items = DirectiveParser(Tokenizer(source, filename)).parse()
    logger.debug(f"Parsed {len(items)} directives from {filename}")
    return items
