"""
Tests for directive dispatch and the simple directives.
"""

import pytest

from nginx_config.ast import Alias, ErrorPage, Internal, Listen, Port, Root
from nginx_config.errors import ErrorKind, ParseError
from nginx_config.grammar import DirectiveParser, parse_directives
from nginx_config.tokenizer import Pos, Token, TokenType, tokenize
from nginx_config.value import Literal, Value, Variable


def parse_error(source: str) -> ParseError:
    with pytest.raises(ParseError) as exc_info:
        parse_directives(source)
    return exc_info.value


def test_root() -> None:
    """Test parsing root."""
    assert parse_directives("root /var/www;") == [Root(Value([Literal("/var/www")]))]


def test_root_with_variable() -> None:
    """Test root with a variable in its path."""
    [item] = parse_directives("root /srv/$host;")
    assert item.value == Value([Literal("/srv/"), Variable("host")])


def test_alias_quoted() -> None:
    """Test alias with a quoted path."""
    assert parse_directives('alias "/srv/my files/";') == [Alias(Value([Literal("/srv/my files/")]))]


def test_internal() -> None:
    """Test parsing internal."""
    assert parse_directives("internal;") == [Internal()]


def test_empty_source() -> None:
    """Test that empty input yields no items."""
    assert parse_directives("") == []
    assert parse_directives("  # only a comment\n") == []


def test_several_directives_keep_order() -> None:
    """Test that items come back in source order with positions."""
    items = parse_directives("root /a;\nlisten 80;\n\ninternal;\nerror_page 404 /x;")

    assert [type(i) for i in items] == [Root, Listen, Internal, ErrorPage]
    assert items[1].position == Pos(2, 1)
    assert items[2].position == Pos(4, 1)
    assert items[1].address == Port(80)


def test_directives_without_spaces() -> None:
    """Test directives separated only by semicolons."""
    items = parse_directives("internal;internal;")
    assert items == [Internal(), Internal()]


@pytest.mark.parametrize(
    "source, kind",
    [
        ("server_name example.com;", ErrorKind.UNKNOWN_DIRECTIVE),
        (";", ErrorKind.UNKNOWN_DIRECTIVE),
        ("{ root /x; }", ErrorKind.BLOCKS_NOT_SUPPORTED),
        ("root a b;", ErrorKind.EXPECTED_SEMICOLON),
        ("root;", ErrorKind.EXPECTED_VALUE),
        ("alias", ErrorKind.EXPECTED_VALUE),
        ("internal x;", ErrorKind.EXPECTED_SEMICOLON),
        ("internal", ErrorKind.EXPECTED_SEMICOLON),
        ("root $1;", ErrorKind.BAD_VARIABLE_START),
    ],
)
def test_errors(source: str, kind: ErrorKind) -> None:
    """Test the error kind for malformed directives."""
    assert parse_error(source).kind is kind


def test_unknown_directive_message() -> None:
    """Test the message for an unknown directive."""
    error = parse_error("root /a;\nserver_name example.com;")

    assert error.pos == Pos(2, 1)
    assert str(error) == "Line 2, column 1: unknown directive 'server_name'"


def test_error_after_valid_directives_is_final() -> None:
    """Test that the first error stops parsing."""
    error = parse_error("root /a;\nalias 'b;\ninternal;")

    assert error.kind is ErrorKind.UNCLOSED_QUOTE
    assert error.pos == Pos(2, 7)


def test_expected_semicolon_names_token() -> None:
    """Test that a missing semicolon names the token found."""
    assert "'b'" in str(parse_error("root a b;"))


def test_parser_accepts_tokens_without_eof() -> None:
    """Test that the parser tolerates a token list without EOF."""
    tokens = [
        Token(TokenType.WORD, "internal", Pos(1, 1)),
        Token(TokenType.SEMICOLON, ";", Pos(1, 9)),
    ]
    assert DirectiveParser(tokens).parse() == [Internal()]


def test_parse_directive_one_at_a_time() -> None:
    """Test parsing directives one by one."""
    parser = DirectiveParser(tokenize("internal; root /x;"))

    assert parser.parse_directive() == Internal()
    assert not parser.at_end()
    assert parser.parse_directive() == Root(Value([Literal("/x")]))
    assert parser.at_end()
