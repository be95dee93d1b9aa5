"""Parse JSON text into :class:`JsonValue` trees."""

from __future__ import annotations

from .jsonlex import JsonParseError, JsonSettings, Scanner
from .jsonvalue import JsonType, JsonValue

# Memory estimates used for the ``max_memory`` limit: one value record,
# one array slot and one object member entry.
_VALUE_SIZE = 40
_POINTER_SIZE = 8
_MEMBER_SIZE = 24

_DIGITS = "0123456789"
_CONTAINERS = (JsonType.OBJECT, JsonType.ARRAY)


def _byte_length(text: str) -> int:
    try:
        return len(text.encode("utf-8", "surrogateescape"))
    except UnicodeEncodeError:
        return len(text.encode("utf-8", "surrogatepass"))


class _MemoryBudget:
    """Tracks estimated memory use against an optional limit."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        self.used = 0
        self.deferred = 0

    def charge(self, size: int) -> None:
        self.used += size
        if self.limit and self.used > self.limit:
            raise JsonParseError("Memory allocation failure")

    def defer(self, size: int) -> None:
        self.deferred += size

    def settle(self) -> None:
        pending, self.deferred = self.deferred, 0
        self.charge(pending)


def _peek(scanner: Scanner) -> str:
    return scanner.text[scanner.pos] if scanner.pos < len(scanner.text) else ""


def _skip(scanner: Scanner) -> None:
    while True:
        scanner.skip_whitespace()
        if not scanner.skip_comment():
            return


def _read_value(scanner: Scanner, budget: _MemoryBudget) -> JsonValue:
    char = _peek(scanner)
    if char == "{":
        budget.charge(_VALUE_SIZE)
        scanner.pos += 1
        return JsonValue(JsonType.OBJECT, [])
    if char == "[":
        budget.charge(_VALUE_SIZE)
        scanner.pos += 1
        return JsonValue(JsonType.ARRAY, [])
    if char == '"':
        budget.charge(_VALUE_SIZE)
        text = scanner.read_string()
        budget.defer(_byte_length(text) + 1)
        return JsonValue(JsonType.STRING, text)
    if char and char in "tfn":
        value = scanner.read_literal()
        budget.charge(_VALUE_SIZE)
        return value
    if char and (char in _DIGITS or char == "-"):
        budget.charge(_VALUE_SIZE)
        return scanner.read_number()
    raise scanner.error(f"Unexpected {char} when seeking value")


def parse(text: str | bytes, settings: JsonSettings | None = None) -> JsonValue:
    """Parse a complete JSON document.

    Raises :class:`JsonParseError` on malformed input or when the
    estimated memory exceeds ``settings.max_memory``.
    """
    scanner = Scanner(text, settings)
    budget = _MemoryBudget(scanner.settings.max_memory)
    stack: list[JsonValue] = []
    root: JsonValue | None = None
    need_comma = False

    while True:
        _skip(scanner)
        char = _peek(scanner)
        top = stack[-1] if stack else None

        if root is not None and top is None:
            if char in ("", "\0"):
                break
            raise scanner.error(f"Trailing garbage: `{char}`")

        if top is not None and top.type is JsonType.OBJECT:
            if char == "}":
                scanner.pos += 1
                stack.pop()
                need_comma = True
                continue
            if char == "," and need_comma:
                scanner.pos += 1
                need_comma = False
                continue
            if char != '"':
                raise scanner.error(f"Unexpected `{char}` in object")
            if need_comma:
                raise scanner.error('Expected , before "')
            key = scanner.read_string()
            _skip(scanner)
            char = _peek(scanner)
            if char == "]":
                raise scanner.error("Unexpected ]")
            if char != ":":
                raise scanner.error(f"Expected : before {char}")
            scanner.pos += 1
            _skip(scanner)
            if _peek(scanner) == "]":
                raise scanner.error("Unexpected ]")
            value = _read_value(scanner, budget)
            top.value.append((key, value))
            budget.defer(_MEMBER_SIZE + _byte_length(key) + 1)
        else:
            if char == "]":
                if top is None:
                    raise scanner.error("Unexpected ]")
                scanner.pos += 1
                stack.pop()
                need_comma = True
                continue
            if need_comma:
                if char == ",":
                    scanner.pos += 1
                    need_comma = False
                    continue
                raise scanner.error(f"Expected , before {char}")
            value = _read_value(scanner, budget)
            if top is None:
                root = value
            else:
                top.value.append(value)
                budget.defer(_POINTER_SIZE)

        if value.type in _CONTAINERS:
            stack.append(value)
            need_comma = False
        else:
            need_comma = True

    budget.settle()
    return root