"""Asynchronous-style DNS resolution of host names to socket addresses."""

from __future__ import annotations

import enum
import logging
import socket
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Callable, Iterable, Sequence

import dns.exception
import dns.resolver

from .netutils import SockAddr

log = logging.getLogger(__name__)

Lookup = Callable[[str, str], Iterable[str]]
Callback = Callable[["SockAddr | None"], object]


class ResolveMode(enum.IntEnum):
    """Which address families are queried and which one is preferred."""

    IPV4_ONLY = 0
    IPV6_ONLY = 1
    IPV4_FIRST = 2
    IPV6_FIRST = 3


def choose_address(responses: Sequence[SockAddr], mode: ResolveMode) -> SockAddr | None:
    """Pick the best address from ``responses`` for ``mode``.

    The preferred family wins when present; otherwise the first response
    is used. Returns None when there are no responses.
    """
    preferred = {
        ResolveMode.IPV4_FIRST: socket.AF_INET,
        ResolveMode.IPV6_FIRST: socket.AF_INET6,
    }.get(ResolveMode(mode))
    if preferred is not None:
        for address in responses:
            if address.family == preferred:
                return address
    return responses[0] if responses else None


@dataclass
class QueryHandle:
    """A pending query started by :meth:`Resolver.query`."""

    hostname: str
    port: int
    cancelled: threading.Event = field(default_factory=threading.Event)
    future: Future | None = None


class Resolver:
    """Resolves names with A and AAAA queries and picks one address.

    ``nameservers`` replaces the system configuration when given. A single
    loopback nameserver makes queries go out from that loopback address.
    ``lookup(hostname, rdtype)`` may be supplied to replace the DNS query
    itself; it returns address strings and raises on failure.
    """

    def __init__(self, nameservers: Sequence[str] | None = None,
                 ipv6_first: bool = False, mode: ResolveMode | None = None,
                 lookup: Lookup | None = None, max_workers: int = 4) -> None:
        if mode is None:
            mode = ResolveMode.IPV6_FIRST if ipv6_first else ResolveMode.IPV4_FIRST
        self.mode = ResolveMode(mode)
        self.nameservers = list(nameservers) if nameservers is not None else None
        self._source: str | None = None
        if self.nameservers is not None and len(self.nameservers) == 1:
            server = self.nameservers[0]
            if server.startswith("127.0.0.1") or server.startswith("::1"):
                log.info("bind UDP resolver to %s", server)
                self._source = server
        self._lookup = lookup if lookup is not None else self._dns_lookup
        self._dns: dns.resolver.Resolver | None = None
        self._executor = ThreadPoolExecutor(max_workers=max_workers)
        self._closed = False
        self._lock = threading.Lock()

    def __enter__(self) -> Resolver:
        return self

    def __exit__(self, *exc_info) -> None:
        self.shutdown()

    def _dns_resolver(self) -> dns.resolver.Resolver:
        with self._lock:
            if self._dns is None:
                if self.nameservers is None:
                    self._dns = dns.resolver.Resolver(configure=True)
                else:
                    self._dns = dns.resolver.Resolver(configure=False)
                    self._dns.nameservers = list(self.nameservers)
            return self._dns

    def _dns_lookup(self, hostname: str, rdtype: str) -> list[str]:
        answer = self._dns_resolver().resolve(hostname, rdtype, source=self._source)
        return [record.address for record in answer]

    def _collect(self, hostname: str, rdtype: str, family: int,
                 port: int) -> list[SockAddr]:
        try:
            addresses = list(self._lookup(hostname, rdtype))
        except (dns.exception.DNSException, OSError) as exc:
            label = "IPv4" if family == socket.AF_INET else "IPv6"
            log.info("%s resolv: %s", label, exc)
            return []
        return [SockAddr(family, address, port) for address in addresses]

    def resolve(self, hostname: str, port: int = 0) -> SockAddr | None:
        """Resolve ``hostname`` now; returns the chosen address or None."""
        responses: list[SockAddr] = []
        if self.mode is not ResolveMode.IPV6_ONLY:
            responses += self._collect(hostname, "A", socket.AF_INET, port)
        if self.mode is not ResolveMode.IPV4_ONLY:
            responses += self._collect(hostname, "AAAA", socket.AF_INET6, port)
        return choose_address(responses, self.mode)

    def query(self, hostname: str, port: int, callback: Callback) -> QueryHandle:
        """Resolve in the background and call ``callback`` with the result.

        The callback is not called if the query is cancelled first.
        Raises RuntimeError after :meth:`shutdown`.
        """
        if self._closed:
            raise RuntimeError("resolver is shut down")
        handle = QueryHandle(hostname, port)

        def run() -> None:
            if handle.cancelled.is_set():
                return
            address = self.resolve(hostname, port)
            if not handle.cancelled.is_set():
                callback(address)

        handle.future = self._executor.submit(run)
        return handle

    def cancel(self, handle: QueryHandle) -> None:
        """Stop ``handle`` from delivering its result."""
        handle.cancelled.set()
        if handle.future is not None:
            handle.future.cancel()

    def shutdown(self) -> None:
        """Stop accepting queries and drop those not yet started."""
        self._closed = True
        self._executor.shutdown(wait=False, cancel_futures=True)