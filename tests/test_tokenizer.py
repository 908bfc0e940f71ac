"""
Tests for the tokenizer.
"""

from nginx_config.tokenizer import Pos, TokenType, tokenize


def test_words_and_semicolon() -> None:
    """Test splitting words and semicolons."""
    tokens = tokenize("listen 80 ssl;")

    assert [t.type for t in tokens] == [
        TokenType.WORD,
        TokenType.WORD,
        TokenType.WORD,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert [t.value for t in tokens[:3]] == ["listen", "80", "ssl"]


def test_positions() -> None:
    """Test token line and column numbers."""
    tokens = tokenize("root /x;\n  listen 80;")

    assert tokens[0].pos == Pos(1, 1)
    assert tokens[1].pos == Pos(1, 6)
    assert tokens[3].value == "listen"
    assert tokens[3].pos == Pos(2, 3)


def test_quotes_are_kept() -> None:
    """Test that quotes stay in the token text."""
    tokens = tokenize('root "/var/www/my site";')

    assert tokens[1].value == '"/var/www/my site"'
    assert tokens[2].type == TokenType.SEMICOLON


def test_semicolon_inside_quotes() -> None:
    """Test that quoted semicolons do not end a token."""
    tokens = tokenize("alias 'a;b';")
    assert tokens[1].value == "'a;b'"


def test_quote_followed_by_text_is_one_token() -> None:
    """Test that text after a closing quote joins the token."""
    tokens = tokenize('root "a"b;')
    assert tokens[1].value == '"a"b'


def test_unclosed_quote_runs_to_end() -> None:
    """Test that an unclosed quote runs to end of input."""
    tokens = tokenize('root "abc;\ninternal;')

    assert tokens[1].value == '"abc;\ninternal;'
    assert tokens[2].type == TokenType.EOF


def test_escaped_space() -> None:
    """Test that an escaped space does not split a token."""
    tokens = tokenize(r"root a\ b;")
    assert tokens[1].value == r"a\ b"


def test_comments_are_skipped() -> None:
    """Test that comments are skipped."""
    tokens = tokenize("# comment ; here\ninternal; # trailing\n")

    assert [t.type for t in tokens] == [TokenType.WORD, TokenType.SEMICOLON, TokenType.EOF]
    assert tokens[0].pos == Pos(2, 1)


def test_braces() -> None:
    """Test brace tokens."""
    tokens = tokenize("server {}")
    assert [t.type for t in tokens] == [
        TokenType.WORD,
        TokenType.LBRACE,
        TokenType.RBRACE,
        TokenType.EOF,
    ]


def test_empty_source() -> None:
    """Test that empty input yields only EOF."""
    tokens = tokenize("")
    assert len(tokens) == 1
    assert tokens[0].type == TokenType.EOF
