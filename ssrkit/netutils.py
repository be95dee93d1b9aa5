"""Network helpers: hostname validation, address resolution and comparison."""

from __future__ import annotations

import ipaddress
import logging
import re
import socket
import time
from dataclasses import dataclass

INET_SIZE = 4
INET6_SIZE = 16

SO_REUSEPORT = getattr(socket, "SO_REUSEPORT", 15)

_VALID_LABEL_BYTES = frozenset(
    b"-0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ_abcdefghijklmnopqrstuvwxyz"
)
_MAX_RESOLVE_ATTEMPTS = 7
_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SockAddr:
    """A socket address: family, textual host and port number."""

    family: int
    host: str
    port: int = 0

    @property
    def packed(self) -> bytes:
        """The address in network byte order (4 or 16 bytes)."""
        return ipaddress.ip_address(self.host).packed

    def to_tuple(self) -> tuple[str, int]:
        """The ``(host, port)`` pair accepted by socket methods."""
        return (self.host, self.port)


def _sign(a, b) -> int:
    return (a > b) - (a < b)


def _parse_ip(host: str | None):
    if host is None:
        return None
    try:
        return ipaddress.ip_address(host)
    except ValueError:
        return None


def _atoi(value) -> int:
    match = _LEADING_INT.match(str(value))
    return int(match.group(1)) if match else 0


def validate_hostname(hostname: str | bytes | None) -> bool:
    """True if ``hostname`` is a syntactically valid DNS name."""
    if hostname is None:
        return False
    data = hostname.encode("utf-8") if isinstance(hostname, str) else bytes(hostname)
    if not 1 <= len(data) <= 255:
        return False
    if data.startswith(b"."):
        return False
    if data.endswith(b"."):
        data = data[:-1]
    return all(_valid_label(label) for label in data.split(b"."))


def _valid_label(label: bytes) -> bool:
    if not 1 <= len(label) <= 63:
        return False
    if label.startswith(b"-") or label.endswith(b"-"):
        return False
    return all(byte in _VALID_LABEL_BYTES for byte in label)


def get_sockaddr(host: str, port: str | int | None = None, block: bool = False,
                 ipv6_first: bool = False) -> SockAddr:
    """Turn ``host`` and ``port`` into a socket address.

    IP literals are used directly. Names are resolved, retrying with a
    growing delay when ``block`` is set, and an address of the preferred
    family is chosen if there is one. Raises ``socket.gaierror`` when the
    name cannot be resolved and ``OSError`` when no usable address is found.
    """
    ip = _parse_ip(host)
    if ip is not None:
        family = socket.AF_INET if ip.version == 4 else socket.AF_INET6
        number = _atoi(port) & 0xFFFF if port is not None else 0
        return SockAddr(family, host, number)

    results = None
    error: socket.gaierror | None = None
    for attempt in range(1, _MAX_RESOLVE_ATTEMPTS + 1):
        try:
            results = socket.getaddrinfo(host, port, socket.AF_UNSPEC, socket.SOCK_STREAM)
            break
        except socket.gaierror as exc:
            error = exc
            if not block:
                break
            delay = 2 ** attempt
            time.sleep(delay)
            log.error("failed to resolve server name, wait %d seconds", delay)

    if results is None:
        log.error("getaddrinfo: %s", error)
        raise error

    prefer = socket.AF_INET6 if ipv6_first else socket.AF_INET
    chosen = next((entry for entry in results if entry[0] == prefer), None)
    if chosen is None and results:
        chosen = results[0]
    if chosen is None or chosen[0] not in (socket.AF_INET, socket.AF_INET6):
        log.error("failed to resolve remote addr")
        raise OSError("failed to resolve remote addr")
    sockaddr = chosen[4]
    return SockAddr(chosen[0], sockaddr[0], sockaddr[1])


def sockaddr_cmp(addr1: SockAddr, addr2: SockAddr) -> int:
    """Order two addresses by family, port and address; returns -1, 0 or 1."""
    if addr1.family != addr2.family:
        return _sign(int(addr1.family), int(addr2.family))
    if addr1.family in (socket.AF_INET, socket.AF_INET6):
        if addr1.port != addr2.port:
            return _sign(addr1.port, addr2.port)
        return _sign(addr1.packed, addr2.packed)
    return _sign(addr1.to_tuple(), addr2.to_tuple())


def sockaddr_cmp_addr(addr1: SockAddr, addr2: SockAddr) -> int:
    """Order two addresses by family and address, ignoring the port."""
    if addr1.family != addr2.family:
        return _sign(int(addr1.family), int(addr2.family))
    if addr1.family in (socket.AF_INET, socket.AF_INET6):
        return _sign(addr1.packed, addr2.packed)
    return _sign(addr1.to_tuple(), addr2.to_tuple())


def bind_to_address(sock: socket.socket, host: str | None) -> None:
    """Bind ``sock`` to the IP literal ``host`` on an ephemeral port.

    Raises ValueError if ``host`` is not an IP address and OSError if the
    bind fails.
    """
    if _parse_ip(host) is None:
        raise ValueError(f"not an IP address: {host!r}")
    sock.bind((host, 0))


def set_reuseport(sock: socket.socket) -> None:
    """Enable SO_REUSEPORT on ``sock``."""
    sock.setsockopt(socket.SOL_SOCKET, SO_REUSEPORT, 1)