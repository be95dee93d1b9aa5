# ssrkit

Components for building a ShadowsocksR-style proxy server in Python.

## Contents

- `ssrkit.jsonparse.parse(text, settings=None)` parses JSON text or bytes
  and returns an `ssrkit.jsonvalue.JsonValue` tree. A leading UTF-8 BOM is
  skipped. If you pass `ssrkit.jsonlex.JsonSettings(enable_comments=True)`,
  `//` and `/* */` comments are accepted. `JsonSettings(max_memory=...)`
  sets a limit on the estimated memory of the result. A failure raises
  `ssrkit.jsonlex.JsonParseError`, which is a `ValueError` and carries
  `line` and `column` where they are known.
- `ssrkit.jsonvalue.JsonValue` and `JsonType` describe the values that
  `parse` returns. A `JsonValue` can be indexed by position or by key. A
  missed lookup gives a value of type `NONE`; it does not raise. You can
  take `len()` of a value and iterate over it (array items, or
  `(name, value)` pairs of an object). `str`, `int`, `float` and `bool`
  fall back to an empty value when the type does not match. `to_python()`
  turns the tree into plain Python objects, and when a key repeats, the
  first one wins.
- `ssrkit.jsonlex.Scanner` is the token reader that the parser uses. It
  offers `skip_whitespace`, `skip_comment`, `read_string`, `read_number`
  and `read_literal`, plus the helpers `strip_bom` and `hex_value`.
- `ssrkit.config` is the server configuration model: `Config`,
  `RemoteAddr`, `PortPassword` and the `Mode` enum (`TCP_ONLY`,
  `TCP_AND_UDP`, `UDP_ONLY`). It also defines limits such as
  `MAX_REMOTE_NUM` and `MAX_PORT_NUM`, and `Config` raises `ValueError`
  when either is exceeded.
- `ssrkit.rule` holds forwarding rules that search host names with a
  regular expression. `Rule` provides `accept_arg`, `init` and `matches`.
  `RuleList` provides `add`, `lookup` (the first match) and `remove`.
  `RuleError` is raised for a bad pattern or a second pattern argument.
- `ssrkit.netutils` contains the network helpers:
  - `validate_hostname` checks host names.
  - `get_sockaddr` turns an IP literal into an address, or resolves a name,
    with optional retries and an IPv6-first preference.
  - `SockAddr` is the address type, and `sockaddr_cmp` and
    `sockaddr_cmp_addr` compare two of them.
  - `bind_to_address` and `set_reuseport` prepare sockets.
- `ssrkit.resolv.Resolver` queries A and AAAA records through dnspython.
  It can use custom nameservers, or a `lookup` callable that you supply.
  - `resolve(hostname, port)` answers at once.
  - `query(hostname, port, callback)` runs on a thread pool and calls the
    callback with the chosen address. `cancel(handle)` stops a query before
    it delivers.
  - `shutdown()` closes the resolver. It can also be used as a context
    manager.
  - `choose_address` and `ResolveMode` choose the address of the preferred
    family.
- `ssrkit.obfsutil` provides `get_head_size` to size an address header,
  and `XorShift128Plus`, a 64-bit xorshift128+ generator with a `next()`
  method.
- `ssrkit.linkedlist.LinkedList` is an ordered container that stores
  copies of its items. Its operations are `add_back`, `add_front`,
  `delete_node`, `delete_at`, `modify_at`, `have_same`, `have_same_cmp`,
  `foreach`, `sort` and `clear`.

## What it does not do

This package is a set of library components only. It does not include:

- a proxy server or client;
- a command-line program;
- the obfuscation or protocol plugins themselves;
- any encryption.

`Config` is a data model. Nothing in the package reads a configuration
file into it, so build it from parsed JSON yourself.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Examples

```python
from ssrkit.jsonparse import parse
from ssrkit.jsonlex import JsonSettings

value = parse('{"server_port": 8388, /* comment */ "method": "aes-256-cfb"}',
              JsonSettings(enable_comments=True))
assert int(value["server_port"]) == 8388
assert value.to_python()["method"] == "aes-256-cfb"
```

```python
from ssrkit.rule import Rule, RuleList

rules = RuleList()
rule = Rule()
rule.accept_arg(r"^.*\.example\.com$")
rule.init()
rules.add(rule)
assert rules.lookup("www.example.com") is rule
```

```python
from ssrkit.netutils import validate_hostname

assert validate_hostname("example.com")
assert not validate_hostname("-bad.example.com")
```