"""Server configuration data model and its limits."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

MAX_PORT_NUM = 1024
MAX_REMOTE_NUM = 10
MAX_CONF_SIZE = 128 * 1024
MAX_DNS_NUM = 4
MAX_CONNECT_TIMEOUT = 10
MAX_REQUEST_TIMEOUT = 60
MIN_UDP_TIMEOUT = 10


class Mode(enum.IntEnum):
    """Which transports a server relays."""

    TCP_ONLY = 0
    TCP_AND_UDP = 1
    UDP_ONLY = 3


@dataclass
class RemoteAddr:
    """A host and port pair, both kept as given."""

    host: str | None = None
    port: str | None = None


@dataclass
class PortPassword:
    """A per-port password entry."""

    port: str
    password: str


@dataclass
class Config:
    """Settings read from a configuration file."""

    remote_addrs: list[RemoteAddr] = field(default_factory=list)
    port_passwords: list[PortPassword] = field(default_factory=list)
    remote_port: str | None = None
    local_addr: str | None = None
    local_port: str | None = None
    password: str | None = None
    protocol: str | None = None
    protocol_param: str | None = None
    method: str | None = None
    obfs: str | None = None
    obfs_param: str | None = None
    timeout: str | None = None
    user: str | None = None
    auth: bool = False
    fast_open: bool = False
    nofile: int = 0
    nameserver: str | None = None
    tunnel_address: str | None = None
    mode: Mode = Mode.TCP_ONLY
    mtu: int = 0
    mptcp: bool = False
    ipv6_first: bool = False

    def __post_init__(self) -> None:
        self.remote_addrs = list(self.remote_addrs)
        self.port_passwords = list(self.port_passwords)
        if len(self.remote_addrs) > MAX_REMOTE_NUM:
            raise ValueError(
                f"too many remote addresses: {len(self.remote_addrs)} > {MAX_REMOTE_NUM}"
            )
        if len(self.port_passwords) > MAX_PORT_NUM:
            raise ValueError(
                f"too many port passwords: {len(self.port_passwords)} > {MAX_PORT_NUM}"
            )
        self.mode = Mode(self.mode)