"""
AST nodes for parsed directives.

Each directive becomes one Item subclass. Positions point at the directive
keyword and, like value positions, are ignored when comparing nodes.
"""

from dataclasses import dataclass, field
from enum import Enum
from ipaddress import IPv4Address, IPv6Address
from pathlib import PurePosixPath
from typing import ClassVar

from .tokenizer import Pos
from .value import Value


class HttpExt(Enum):
    """Protocol extension enabled on a listening socket."""
    HTTP2 = "http2"
    SPDY = "spdy"


# error_page response codes

@dataclass(frozen=True)
class Keep:
    """`=` without a code: keep the code returned by the target."""


@dataclass(frozen=True)
class Target:
    """No `=code` argument: respond with the original error code."""


@dataclass(frozen=True)
class Redirect:
    """`=301` and friends: redirect to the uri with this code."""
    code: int


@dataclass(frozen=True)
class Replace:
    """`=200` and friends: serve the uri with this code."""
    code: int


ErrorPageResponse = Keep | Target | Redirect | Replace


# listen addresses

@dataclass(frozen=True)
class Unix:
    """`unix:/path/to/socket`"""
    path: PurePosixPath

    def display(self) -> str:
        return f"unix:{self.path}"


@dataclass(frozen=True)
class StarPort:
    """`*:80`"""
    port: int

    def display(self) -> str:
        return f"*:{self.port}"


@dataclass(frozen=True)
class Port:
    """`80`"""
    port: int

    def display(self) -> str:
        return str(self.port)


@dataclass(frozen=True)
class Ip:
    """`127.0.0.1:8080`, `[::1]:443`, `127.0.0.1`"""
    host: IPv4Address | IPv6Address
    port: int | None = None

    def display(self) -> str:
        host = f"[{self.host}]" if self.host.version == 6 else str(self.host)
        if self.port is None:
            return host
        return f"{host}:{self.port}"


Address = Unix | StarPort | Port | Ip


# directives

@dataclass
class Item:
    """Base class for all parsed directives."""
    directive: ClassVar[str] = ""


@dataclass
class Root(Item):
    directive: ClassVar[str] = "root"

    value: Value
    position: Pos | None = field(default=None, compare=False)


@dataclass
class Alias(Item):
    directive: ClassVar[str] = "alias"

    value: Value
    position: Pos | None = field(default=None, compare=False)


@dataclass
class Internal(Item):
    directive: ClassVar[str] = "internal"

    position: Pos | None = field(default=None, compare=False)


@dataclass
class ErrorPage(Item):
    """
    error_page directive.

    Examples:
        error_page 404 /404.html;           -> codes=[404], response_code=Target()
        error_page 500 502 =503 /50x.html;  -> codes=[500, 502], response_code=Replace(503)
        error_page 404 =301 /moved;         -> codes=[404], response_code=Redirect(301)
        error_page 404 = /fallback;         -> codes=[404], response_code=Keep()
    """
    directive: ClassVar[str] = "error_page"

    codes: list[int]
    response_code: ErrorPageResponse
    uri: Value
    position: Pos | None = field(default=None, compare=False)


@dataclass
class Listen(Item):
    """
    listen directive.

    Boolean flags default to off, optional settings to None (server default).
    """
    directive: ClassVar[str] = "listen"

    address: Address
    default_server: bool = False
    ssl: bool = False
    ext: HttpExt | None = None
    proxy_protocol: bool = False
    setfib: int | None = None
    fastopen: int | None = None
    backlog: int | None = None
    rcvbuf: int | None = None
    sndbuf: int | None = None
    deferred: bool = False
    bind: bool = False
    ipv6only: bool | None = None
    reuseport: bool = False
    position: Pos | None = field(default=None, compare=False)
