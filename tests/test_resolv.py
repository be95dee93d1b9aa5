import socket
import threading

import pytest

from ssrkit.netutils import SockAddr
from ssrkit.resolv import ResolveMode, Resolver, choose_address

V4 = SockAddr(socket.AF_INET, "192.0.2.1", 80)
V4B = SockAddr(socket.AF_INET, "192.0.2.2", 80)
V6 = SockAddr(socket.AF_INET6, "2001:db8::1", 80)


def fake_lookup(table):
    calls = []

    def lookup(hostname, rdtype):
        calls.append((hostname, rdtype))
        result = table.get((hostname, rdtype))
        if result is None:
            raise OSError("no answer")
        return result

    return lookup, calls


def test_choose_ipv4_first_prefers_v4():
    assert choose_address([V6, V4, V4B], ResolveMode.IPV4_FIRST) == V4


def test_choose_ipv6_first_prefers_v6():
    assert choose_address([V4, V4B, V6], ResolveMode.IPV6_FIRST) == V6


def test_choose_falls_back_to_first():
    assert choose_address([V6], ResolveMode.IPV4_FIRST) == V6
    assert choose_address([V4, V6], ResolveMode.IPV4_ONLY) == V4


def test_choose_empty_is_none():
    assert choose_address([], ResolveMode.IPV6_FIRST) is None


def test_default_mode_follows_ipv6_first():
    with Resolver(lookup=lambda h, t: []) as r:
        assert r.mode is ResolveMode.IPV4_FIRST
    with Resolver(ipv6_first=True, lookup=lambda h, t: []) as r:
        assert r.mode is ResolveMode.IPV6_FIRST


def test_resolve_prefers_ipv4():
    lookup, calls = fake_lookup({
        ("host.test", "A"): ["192.0.2.1"],
        ("host.test", "AAAA"): ["2001:db8::1"],
    })
    with Resolver(lookup=lookup) as r:
        assert r.resolve("host.test", 80) == V4
    assert calls == [("host.test", "A"), ("host.test", "AAAA")]


def test_resolve_prefers_ipv6():
    lookup, _ = fake_lookup({
        ("host.test", "A"): ["192.0.2.1"],
        ("host.test", "AAAA"): ["2001:db8::1"],
    })
    with Resolver(ipv6_first=True, lookup=lookup) as r:
        assert r.resolve("host.test", 80) == V6


def test_resolve_uses_other_family_when_one_fails():
    lookup, _ = fake_lookup({("host.test", "AAAA"): ["2001:db8::1"]})
    with Resolver(lookup=lookup) as r:
        assert r.resolve("host.test", 80) == V6


def test_resolve_all_fail_returns_none():
    lookup, _ = fake_lookup({})
    with Resolver(lookup=lookup) as r:
        assert r.resolve("missing.test", 80) is None


def test_ipv4_only_skips_aaaa():
    lookup, calls = fake_lookup({("host.test", "A"): ["192.0.2.1"]})
    with Resolver(mode=ResolveMode.IPV4_ONLY, lookup=lookup) as r:
        assert r.resolve("host.test", 80) == V4
    assert [rdtype for _, rdtype in calls] == ["A"]


def test_ipv6_only_skips_a():
    lookup, calls = fake_lookup({("host.test", "AAAA"): ["2001:db8::1"]})
    with Resolver(mode=ResolveMode.IPV6_ONLY, lookup=lookup) as r:
        assert r.resolve("host.test", 80) == V6
    assert [rdtype for _, rdtype in calls] == ["AAAA"]


def test_query_delivers_result():
    lookup, _ = fake_lookup({("host.test", "A"): ["192.0.2.1"]})
    done = threading.Event()
    results = []

    def callback(address):
        results.append(address)
        done.set()

    with Resolver(lookup=lookup) as r:
        r.query("host.test", 80, callback)
        assert done.wait(5)
    assert results == [V4]


def test_cancel_suppresses_callback():
    release = threading.Event()
    started = threading.Event()

    def lookup(hostname, rdtype):
        started.set()
        release.wait(5)
        return ["192.0.2.1"] if rdtype == "A" else []

    results = []
    r = Resolver(lookup=lookup, max_workers=1)
    handle = r.query("host.test", 80, results.append)
    assert started.wait(5)
    r.cancel(handle)
    release.set()
    handle.future.result(timeout=5)
    r.shutdown()
    assert results == []
    assert handle.cancelled.is_set()


def test_query_after_shutdown_raises():
    r = Resolver(lookup=lambda h, t: [])
    r.shutdown()
    with pytest.raises(RuntimeError):
        r.query("host.test", 80, lambda address: None)