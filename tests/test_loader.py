"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest

from nginx_config.ast import ErrorPage, Listen, Root
from nginx_config.errors import ErrorKind, ParseError
from nginx_config.loader import ConfigDocument, ConfigError, ConfigLoader, load_config


def test_load_example_config(example_config_path: Path) -> None:
    """Test that example config loads without errors."""
    loader = ConfigLoader()
    document = loader.load_file(example_config_path)

    assert isinstance(document, ConfigDocument)
    assert document.filename == str(example_config_path)
    assert len(document.items) == 6
    assert len(document.get_items(Listen)) == 2
    assert len(document.get_items(ErrorPage)) == 2
    assert document.get_item(Root).value.literal == "/var/www/my site"
    assert loader.last_document is document


def test_validate_example_config(example_config_path: Path) -> None:
    """Test that the example config has no warnings."""
    loader = ConfigLoader()
    document = loader.load(example_config_path)

    assert loader.validate(document) == []


def test_load_alias_matches_load_file(example_config_path: Path) -> None:
    """Test that load() is an alias for load_file()."""
    loader = ConfigLoader()

    via_alias = loader.load(example_config_path)
    via_direct = loader.load_file(example_config_path)

    assert via_alias.items == via_direct.items


def test_load_config_function(example_config_path: Path) -> None:
    """Test the load_config shortcut."""
    assert len(load_config(example_config_path).items) == 6


def test_missing_file(tmp_path: Path) -> None:
    """Test loading a file that does not exist."""
    with pytest.raises(ConfigError, match="not found"):
        ConfigLoader().load_file(tmp_path / "missing.conf")


def test_directory_is_not_a_file(tmp_path: Path) -> None:
    """Test loading a directory."""
    with pytest.raises(ConfigError, match="Not a file"):
        ConfigLoader().load_file(tmp_path)


def test_parse_error_is_wrapped(broken_config_path: Path) -> None:
    """Test that parse errors are wrapped in ConfigError."""
    with pytest.raises(ConfigError) as exc_info:
        ConfigLoader().load_file(broken_config_path)

    cause = exc_info.value.__cause__
    assert isinstance(cause, ParseError)
    assert cause.kind is ErrorKind.INVALID_IPV6ONLY
    assert "only on/off supported" in str(exc_info.value)


def test_failed_load_keeps_previous_document() -> None:
    """Test that a failed load keeps the last document."""
    loader = ConfigLoader()
    first = loader.load_string("internal;")

    with pytest.raises(ConfigError):
        loader.load_string("listen;")

    assert loader.last_document is first


def test_duplicate_listen_warnings() -> None:
    """Test warnings for duplicate listen addresses."""
    loader = ConfigLoader()
    document = loader.load_string("listen 80 default_server;\nlisten 80 default_server;\n")

    warnings = loader.validate(document)

    assert warnings == [
        "Address 80 is listened on more than once (lines 1, 2)",
        "Duplicate default_server for 80",
    ]


def test_root_and_alias_warning() -> None:
    """Test the warning when root and alias are both set."""
    loader = ConfigLoader()
    document = loader.load_string("root /a;\nalias /b;\n")

    assert loader.validate(document) == ["Both root and alias are set; alias takes precedence"]


def test_distinct_addresses_do_not_warn() -> None:
    """Test that distinct addresses produce no warnings."""
    loader = ConfigLoader()
    document = loader.load_string("listen 80 default_server;\nlisten 443 ssl default_server;\n")

    assert loader.validate(document) == []


def test_huge_number_is_a_config_error() -> None:
    """Oversized numbers surface as ConfigError, not a conversion error."""
    with pytest.raises(ConfigError) as exc_info:
        ConfigLoader().load_string("listen 80 backlog=" + "9" * 5000 + ";")
    assert exc_info.value.__cause__.kind is ErrorKind.INVALID_NUMBER
