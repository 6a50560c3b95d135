"""Connection URLs for the development server.

Builds the local and LAN URLs printed in the connection instructions.
Terminal variants carry Rich markup, browser and config variants are plain.
"""

from __future__ import annotations

import ipaddress
import socket

from pydantic import BaseModel, ConfigDict, Field
from rich.markup import escape

from xdl_web.observability import get_logger

logger = get_logger(__name__)

UNSPECIFIED_HOSTS = frozenset({"0.0.0.0", "::"})

# Any routable address works, no packets are sent for a UDP connect
_PROBE_ADDRESS = ("10.255.255.255", 1)

_PRIVATE_NETWORKS = (
    ipaddress.ip_network("10.0.0.0/8"),
    ipaddress.ip_network("172.16.0.0/12"),
    ipaddress.ip_network("192.168.0.0/16"),
)


class Urls(BaseModel):
    """URLs a developer can open the running app at.

    Attributes:
        local_url_for_terminal: Local URL with the port highlighted.
        local_url_for_browser: Local URL to open in a browser.
        lan_url_for_terminal: LAN URL with the port highlighted, if any.
        lan_url_for_config: Bare LAN address for dev server config, if any.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    local_url_for_terminal: str = Field(..., min_length=1)
    local_url_for_browser: str = Field(..., min_length=1)
    lan_url_for_terminal: str | None = None
    lan_url_for_config: str | None = None


def _format_url(
    protocol: str, hostname: str, port: int, pathname: str, *, markup: bool = False
) -> str:
    if ":" in hostname:
        hostname = f"[{hostname}]"
    if not markup:
        return f"{protocol}://{hostname}:{port}{pathname}"
    return f"{protocol}://{escape(hostname)}:[bold]{port}[/bold]{escape(pathname)}"


def is_private_ipv4(address: str) -> bool:
    """Return True if address is a private (RFC 1918) IPv4 address."""
    try:
        ip = ipaddress.ip_address(address)
    except ValueError:
        return False
    if ip.version != 4:
        return False
    return any(ip in network for network in _PRIVATE_NETWORKS)


def get_lan_address() -> str | None:
    """Return the IPv4 address of the interface used for outbound traffic.

    Returns:
        The address, or None if it could not be determined.
    """
    try:
        with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
            sock.connect(_PROBE_ADDRESS)
            address: str = sock.getsockname()[0]
    except OSError as e:
        logger.debug("lan_address_lookup_failed", error=str(e))
        return None
    return address


def prepare_urls(protocol: str, host: str, port: int, pathname: str = "/") -> Urls:
    """Build the local and LAN URLs for a server.

    Unspecified hosts (``0.0.0.0`` and ``::``) are shown as ``localhost``
    and, when the machine has a private LAN address, also get LAN URLs.
    Public addresses are never advertised.

    Args:
        protocol: URL scheme, ``http`` or ``https``.
        host: Host the server binds to.
        port: Port the server listens on.
        pathname: Public path the app is served under.

    Returns:
        Urls for the terminal, the browser and dev server configuration.

    Example:
        >>> prepare_urls("http", "localhost", 19006).local_url_for_browser
        'http://localhost:19006/'
    """
    lan_url_for_config: str | None = None
    lan_url_for_terminal: str | None = None

    if host in UNSPECIFIED_HOSTS:
        pretty_host = "localhost"
        lan_address = get_lan_address()
        if lan_address and is_private_ipv4(lan_address):
            lan_url_for_config = lan_address
            lan_url_for_terminal = _format_url(protocol, lan_address, port, pathname, markup=True)
    else:
        pretty_host = host

    return Urls(
        local_url_for_terminal=_format_url(protocol, pretty_host, port, pathname, markup=True),
        local_url_for_browser=_format_url(protocol, pretty_host, port, pathname),
        lan_url_for_terminal=lan_url_for_terminal,
        lan_url_for_config=lan_url_for_config,
    )
