"""
Pytest configuration and fixtures.
"""

import logging
from pathlib import Path

import pytest


EXAMPLE_CONFIG = """\
# example site
listen 127.0.0.1:8080 default_server ssl backlog=511;
listen unix:/var/run/app.sock;
error_page 500 502 503 =503 /50x.html;
error_page 404 /errors/$status.html;
root "/var/www/my site";
internal;
"""


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers installed by setup_logging during a test."""
    yield
    logger = logging.getLogger("nginx_config")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()


@pytest.fixture
def example_config_path(tmp_path: Path) -> Path:
    """Path to a small valid config file."""
    path = tmp_path / "site.conf"
    path.write_text(EXAMPLE_CONFIG)
    return path


@pytest.fixture
def broken_config_path(tmp_path: Path) -> Path:
    """Path to a config file with an invalid listen option."""
    path = tmp_path / "broken.conf"
    path.write_text("listen 80 ipv6only=maybe;\n")
    return path
