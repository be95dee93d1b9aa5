"""Regular-expression rules matched against host names."""

from __future__ import annotations

import re
from typing import Iterator


class RuleError(Exception):
    """Raised when a rule is misconfigured or its pattern cannot compile."""


class Rule:
    """A single pattern, compiled on first use and searched anywhere in a name."""

    def __init__(self, pattern: str | None = None) -> None:
        self.pattern = pattern
        self._compiled: re.Pattern[str] | None = None

    def __repr__(self) -> str:
        return f"Rule({self.pattern!r})"

    def accept_arg(self, arg: str) -> None:
        """Take ``arg`` as the pattern; a rule accepts only one argument."""
        if self.pattern is not None:
            raise RuleError(f"Unexpected table rule argument: {arg}")
        self.pattern = arg

    def init(self) -> None:
        """Compile the pattern if not already compiled."""
        if self._compiled is not None:
            return
        if self.pattern is None:
            raise RuleError("rule has no pattern")
        try:
            self._compiled = re.compile(self.pattern)
        except re.error as exc:
            raise RuleError(
                f"regex compilation failed at offset {exc.pos}: {exc.msg}"
            ) from exc

    def matches(self, name: str | bytes | None) -> bool:
        """True if the pattern is found in ``name`` (None counts as empty)."""
        self.init()
        if name is None:
            name = ""
        elif isinstance(name, (bytes, bytearray)):
            name = bytes(name).decode("latin-1")
        return self._compiled.search(name) is not None


class RuleList:
    """Rules kept in insertion order; lookups return the first match."""

    def __init__(self) -> None:
        self._rules: list[Rule] = []

    def add(self, rule: Rule) -> None:
        """Append ``rule``."""
        self._rules.append(rule)

    def lookup(self, name: str | bytes | None) -> Rule | None:
        """The first rule matching ``name``, or None."""
        for rule in self._rules:
            if rule.matches(name):
                return rule
        return None

    def remove(self, rule: Rule) -> None:
        """Remove ``rule``; raises ValueError if it is not in the list."""
        for position, candidate in enumerate(self._rules):
            if candidate is rule:
                del self._rules[position]
                return
        raise ValueError(f"{rule!r} is not in the list")

    def __len__(self) -> int:
        return len(self._rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(list(self._rules))