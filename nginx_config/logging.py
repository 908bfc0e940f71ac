"""
Logging configuration for nginx-config.

Parse diagnostics are logged under the ``nginx_config`` logger tree, one
child per component (``grammar``, ``loader``, ``main``). Console output
goes to stderr so that stdout only carries rendered configuration.
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from pathlib import Path

ROOT_LOGGER = "nginx_config"


class Colors:
    """ANSI escape sequences used by the console formatter."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    MAGENTA = "\033[35m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.DIM,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.BOLD + Colors.RED,
}

# Keyed by the last segment of the logger name
COMPONENT_COLORS = {
    "grammar": Colors.MAGENTA,
    "loader": Colors.BLUE,
}

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "warn": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
}


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level, the component and, for warnings and
    errors, the message itself.

    The record is restored after formatting so other handlers see it
    unchanged.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        use_colors: bool = True,
    ):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        saved = record.levelname, record.name, record.msg
        level_color = LEVEL_COLORS.get(record.levelno, "")

        record.levelname = f"{level_color}{record.levelname:8}{Colors.RESET}"
        component_color = COMPONENT_COLORS.get(record.name.rsplit(".", 1)[-1])
        if component_color:
            record.name = f"{component_color}{record.name}{Colors.RESET}"
        if record.levelno >= logging.WARNING:
            record.msg = f"{level_color}{record.msg}{Colors.RESET}"

        try:
            return super().format(record)
        finally:
            record.levelname, record.name, record.msg = saved


class PlainFormatter(logging.Formatter):
    """Formatter for log files: no colors, level name padded to a fixed width."""

    def format(self, record: logging.LogRecord) -> str:
        levelname = record.levelname
        record.levelname = f"{levelname:8}"
        try:
            return super().format(record)
        finally:
            record.levelname = levelname


@dataclass
class LogConfig:
    """Logging configuration."""

    console_level: str = "WARNING"
    console_colors: bool = True

    file_enabled: bool = False
    file_path: str = "nginx-config.log"
    file_level: str = "DEBUG"
    file_max_bytes: int = 1024 * 1024
    file_backup_count: int = 3

    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    # component name -> level name
    module_levels: dict[str, str] | None = None

    @classmethod
    def for_verbosity(cls, debug: bool = False, verbose: bool = False, quiet: bool = False) -> "LogConfig":
        """Build a config from command-line verbosity flags; the loudest flag wins."""
        if debug:
            return cls(console_level="debug")
        if verbose:
            return cls(console_level="info")
        if quiet:
            return cls(console_level="error")
        return cls()


def get_log_level(level_str: str) -> int:
    """Convert a level name to a logging constant, defaulting to INFO."""
    return LEVELS.get(level_str.lower(), logging.INFO)


def setup_logging(config: LogConfig | None = None) -> None:
    """
    Install console and optional file handlers on the package logger.

    Calling it again replaces the handlers from the previous call.

    Args:
        config: Logging configuration (uses defaults if None)
    """
    if config is None:
        config = LogConfig()

    root_logger = logging.getLogger(ROOT_LOGGER)
    root_logger.setLevel(logging.DEBUG)  # filtering happens in the handlers
    for handler in root_logger.handlers:
        handler.close()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(get_log_level(config.console_level))
    use_colors = config.console_colors and hasattr(sys.stderr, "isatty") and sys.stderr.isatty()
    console_handler.setFormatter(
        ColoredFormatter(fmt=config.format, datefmt=config.date_format, use_colors=use_colors)
    )
    root_logger.addHandler(console_handler)

    if config.file_enabled:
        log_path = Path(config.file_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=config.file_max_bytes,
            backupCount=config.file_backup_count,
        )
        file_handler.setLevel(get_log_level(config.file_level))
        file_handler.setFormatter(PlainFormatter(fmt=config.format, datefmt=config.date_format))
        root_logger.addHandler(file_handler)

    for component, level_str in (config.module_levels or {}).items():
        get_logger(component).setLevel(get_log_level(level_str))


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a component, e.g. ``get_logger("grammar")``."""
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")
