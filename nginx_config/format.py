"""
Render parsed items back to configuration text.
"""

from typing import Iterable

from .ast import Alias, ErrorPage, Internal, Item, Keep, Listen, Redirect, Replace, Root
from .value import Value


class Formatter:
    """Accumulates the words of one directive and renders it."""

    def __init__(self) -> None:
        self.words: list[str] = []

    def write(self, word: str) -> None:
        self.words.append(word)

    def write_value(self, value: Value) -> None:
        self.write(value.display())

    def flag(self, name: str, enabled: bool) -> None:
        if enabled:
            self.write(name)

    def option(self, name: str, value: object) -> None:
        if value is not None:
            self.write(f"{name}={value}")

    def finish(self) -> str:
        return " ".join(self.words) + ";"


def _write_error_page(f: Formatter, item: ErrorPage) -> None:
    for code in item.codes:
        f.write(str(code))
    response = item.response_code
    if isinstance(response, Keep):
        f.write("=")
    elif isinstance(response, (Redirect, Replace)):
        f.write(f"={response.code}")
    f.write_value(item.uri)


def _write_listen(f: Formatter, item: Listen) -> None:
    f.write(item.address.display())
    f.flag("default_server", item.default_server)
    f.flag("ssl", item.ssl)
    if item.ext is not None:
        f.write(item.ext.value)
    f.flag("proxy_protocol", item.proxy_protocol)
    f.option("setfib", item.setfib)
    f.option("fastopen", item.fastopen)
    f.option("backlog", item.backlog)
    f.option("rcvbuf", item.rcvbuf)
    f.option("sndbuf", item.sndbuf)
    f.flag("deferred", item.deferred)
    f.flag("bind", item.bind)
    if item.ipv6only is not None:
        f.write("ipv6only=on" if item.ipv6only else "ipv6only=off")
    f.flag("reuseport", item.reuseport)


def display(item: Item) -> str:
    """
    Render one item as a single directive line.

    Examples:
        ErrorPage([500, 502], Replace(503), ...)  -> "error_page 500 502 =503 /50x.html;"
        Root(Value([Literal("/var/www")]))        -> "root /var/www;"
    """
    f = Formatter()
    f.write(item.directive)

    if isinstance(item, (Root, Alias)):
        f.write_value(item.value)
    elif isinstance(item, ErrorPage):
        _write_error_page(f, item)
    elif isinstance(item, Listen):
        _write_listen(f, item)
    elif not isinstance(item, Internal):
        raise TypeError(f"Cannot display {type(item).__name__}")

    return f.finish()


def display_all(items: Iterable[Item]) -> str:
    """Render items one per line."""
    return "\n".join(display(item) for item in items)
