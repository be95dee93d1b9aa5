"""Building blocks for a ShadowsocksR-style proxy server: JSON parsing, config model, rules, network helpers and DNS resolution."""

__version__ = "0.1.0"