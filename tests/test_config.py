import pytest

from ssrkit.config import (
    MAX_PORT_NUM,
    MAX_REMOTE_NUM,
    Config,
    Mode,
    PortPassword,
    RemoteAddr,
)


def test_defaults_are_empty():
    cfg = Config()
    assert cfg.remote_addrs == []
    assert cfg.port_passwords == []
    assert cfg.password is None
    assert cfg.mode is Mode.TCP_ONLY
    assert cfg.mtu == 0


def test_default_lists_are_independent():
    a = Config()
    b = Config()
    a.remote_addrs.append(RemoteAddr("example.com", "8388"))
    assert b.remote_addrs == []


def test_mode_is_coerced_from_int():
    assert Config(mode=3).mode is Mode.UDP_ONLY
    assert Config(mode=1).mode is Mode.TCP_AND_UDP


def test_invalid_mode_rejected():
    with pytest.raises(ValueError):
        Config(mode=2)


def test_remote_limit():
    remotes = [RemoteAddr("example.com", str(p)) for p in range(MAX_REMOTE_NUM)]
    assert len(Config(remote_addrs=remotes).remote_addrs) == MAX_REMOTE_NUM
    with pytest.raises(ValueError, match="remote"):
        Config(remote_addrs=remotes + [RemoteAddr("example.com", "1")])


def test_port_password_limit():
    password = "password"
    entries = [PortPassword(str(p), password) for p in range(MAX_PORT_NUM + 1)]
    with pytest.raises(ValueError, match="port passwords"):
        Config(port_passwords=entries)
    assert len(Config(port_passwords=entries[:-1]).port_passwords) == MAX_PORT_NUM


def test_fields_kept_as_given():
    password = "password"
    cfg = Config(
        remote_addrs=(RemoteAddr("example.com", "8388"),),
        password=password,
        method="aes-256-cfb",
        ipv6_first=True,
    )
    assert cfg.remote_addrs == [RemoteAddr("example.com", "8388")]
    assert cfg.password == password
    assert cfg.method == "aes-256-cfb"
    assert cfg.ipv6_first is True