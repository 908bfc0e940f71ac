"""
Configuration loader with file reading and validation.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from .ast import Alias, Item, Listen, Root
from .errors import ParseError
from .grammar import parse_directives
from .logging import get_logger


logger = get_logger("loader")

ItemT = TypeVar("ItemT", bound=Item)


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


@dataclass
class ConfigDocument:
    """
    Parsed configuration: all directives in source order.
    """
    items: list[Item] = field(default_factory=list)
    filename: str = "<string>"

    def get_items(self, item_type: type[ItemT]) -> list[ItemT]:
        """Get all items of the given type."""
        return [i for i in self.items if isinstance(i, item_type)]

    def get_item(self, item_type: type[ItemT]) -> ItemT | None:
        """Get first item of the given type."""
        for i in self.items:
            if isinstance(i, item_type):
                return i
        return None


class ConfigLoader:
    """
    Loads and validates configuration from files or strings.

    Usage:
        loader = ConfigLoader()
        document = loader.load_file("/etc/nginx/conf.d/site.conf")
        # or
        document = loader.load_string(config_text)
    """

    def __init__(self):
        self.last_document: ConfigDocument | None = None

    def load_file(self, path: str | Path) -> ConfigDocument:
        """
        Load configuration from a file.

        Args:
            path: Path to the configuration file

        Returns:
            Parsed ConfigDocument

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        path = Path(path)

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.is_file():
            raise ConfigError(f"Not a file: {path}")

        try:
            source = path.read_text()
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read configuration: {e}") from e

        logger.info(f"Loading configuration from {path}")
        return self.load_string(source, str(path))

    # Alias for callers that do not care about the source kind
    def load(self, path: str | Path) -> ConfigDocument:
        return self.load_file(path)

    def load_string(self, source: str, filename: str = "<string>") -> ConfigDocument:
        """
        Load configuration from a string.

        Args:
            source: Configuration source text
            filename: Filename for error messages

        Returns:
            Parsed ConfigDocument

        Raises:
            ConfigError: If configuration cannot be parsed
        """
        try:
            items = parse_directives(source, filename)
        except ParseError as e:
            raise ConfigError(f"Failed to parse {filename}: {e}") from e

        document = ConfigDocument(items=items, filename=filename)
        self.last_document = document
        return document

    def validate(self, document: ConfigDocument) -> list[str]:
        """
        Validate configuration and return list of warnings.

        Args:
            document: Configuration to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        # Same address declared by several listen directives
        listens: dict[str, list[Listen]] = {}
        for listen in document.get_items(Listen):
            listens.setdefault(listen.address.display(), []).append(listen)

        for address, group in listens.items():
            if len(group) > 1:
                lines = ", ".join(str(item.position.line) for item in group if item.position)
                warnings.append(f"Address {address} is listened on more than once (lines {lines})")
            if sum(1 for item in group if item.default_server) > 1:
                warnings.append(f"Duplicate default_server for {address}")

        if document.get_item(Root) and document.get_item(Alias):
            warnings.append("Both root and alias are set; alias takes precedence")

        for warning in warnings:
            logger.warning(warning)

        return warnings


def load_config(path: str | Path) -> ConfigDocument:
    """
    Convenience function to load configuration from a file.

    Args:
        path: Path to the configuration file

    Returns:
        Parsed ConfigDocument
    """
    loader = ConfigLoader()
    return loader.load_file(path)
