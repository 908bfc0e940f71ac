"""
Entry point for nginx-config.

Usage:
    python -m nginx_config /path/to/site.conf
    python -m nginx_config --validate /path/to/site.conf
    python -m nginx_config --help
"""

import argparse
import sys
from pathlib import Path

from . import __version__
from .ast import ErrorPage, Listen
from .const import DEFAULT_CONFIG_PATH
from .format import display_all
from .loader import ConfigError, ConfigLoader
from .logging import LogConfig, get_logger, setup_logging


logger = get_logger("main")


def validate_config(config_path: str) -> int:
    """Validate configuration file and print warnings."""
    try:
        loader = ConfigLoader()
        document = loader.load_file(config_path)
    except ConfigError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    warnings = loader.validate(document)

    if warnings:
        print(f"Configuration warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    print(f"\nConfiguration summary:")
    print(f"  Directives: {len(document.items)}")
    print(f"  Listen: {len(document.get_items(Listen))}")
    print(f"  Error pages: {len(document.get_items(ErrorPage))}")

    print("\nConfiguration is valid!")
    return 0


def print_config(config_path: str) -> int:
    """Parse configuration file and print it normalized."""
    try:
        document = ConfigLoader().load_file(config_path)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if document.items:
        print(display_all(document.items))
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="nginx-config",
        description="Parse nginx-style directives and print them normalized",
    )

    parser.add_argument(
        "config",
        nargs="?",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to configuration file (default: {DEFAULT_CONFIG_PATH})",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and exit",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    config_path = Path(args.config)
    if not config_path.exists():
        print(f"Configuration file not found: {config_path}", file=sys.stderr)
        return 1

    log_config = LogConfig.for_verbosity(debug=args.debug, verbose=args.verbose, quiet=args.quiet)

    if args.no_color:
        log_config.console_colors = False

    if args.log_file:
        log_config.file_enabled = True
        log_config.file_path = args.log_file

    setup_logging(log_config)

    if args.validate:
        return validate_config(str(config_path))

    return print_config(str(config_path))


if __name__ == "__main__":
    sys.exit(main())
