"""Parsed JSON values with lenient, type-tolerant accessors."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Any, Iterator


class JsonType(enum.Enum):
    """Kind of a parsed JSON value."""

    NONE = 0
    OBJECT = 1
    ARRAY = 2
    INTEGER = 3
    DOUBLE = 4
    STRING = 5
    BOOLEAN = 6
    NULL = 7


@dataclass
class JsonValue:
    """A parsed JSON value.

    ``value`` holds, by type:
    OBJECT  -> list of ``(name, JsonValue)`` pairs in document order,
    ARRAY   -> list of ``JsonValue``,
    INTEGER -> int, DOUBLE -> float, STRING -> str, BOOLEAN -> bool,
    NULL and NONE -> None.

    Accessors never raise on a type mismatch; they fall back to an empty
    value of the requested kind, and lookups that miss return a value of
    type NONE.
    """

    type: JsonType = JsonType.NONE
    value: Any = None

    def __getitem__(self, key: int | str) -> JsonValue:
        if isinstance(key, str):
            if self.type is JsonType.OBJECT:
                for name, item in self.value:
                    if name == key:
                        return item
            return _NONE
        if isinstance(key, int) and not isinstance(key, bool):
            if self.type is JsonType.ARRAY and 0 <= key < len(self.value):
                return self.value[key]
        return _NONE

    def __len__(self) -> int:
        if self.type in (JsonType.OBJECT, JsonType.ARRAY, JsonType.STRING):
            return len(self.value)
        return 0

    def __iter__(self) -> Iterator[Any]:
        """Iterate array items, or ``(name, value)`` pairs of an object."""
        if self.type in (JsonType.OBJECT, JsonType.ARRAY):
            return iter(list(self.value))
        return iter(())

    def __str__(self) -> str:
        return self.value if self.type is JsonType.STRING else ""

    def __int__(self) -> int:
        if self.type is JsonType.INTEGER:
            return self.value
        if self.type is JsonType.DOUBLE:
            return int(self.value)
        return 0

    def __float__(self) -> float:
        if self.type in (JsonType.INTEGER, JsonType.DOUBLE):
            return float(self.value)
        return 0.0

    def __bool__(self) -> bool:
        return self.type is JsonType.BOOLEAN and bool(self.value)

    def to_python(self) -> Any:
        """Convert to plain Python objects; the first of duplicate keys wins."""
        if self.type is JsonType.OBJECT:
            result: dict[str, Any] = {}
            for name, item in self.value:
                if name not in result:
                    result[name] = item.to_python()
            return result
        if self.type is JsonType.ARRAY:
            return [item.to_python() for item in self.value]
        if self.type in (JsonType.NULL, JsonType.NONE):
            return None
        if self.type is JsonType.BOOLEAN:
            return bool(self.value)
        return self.value


_NONE = JsonValue(JsonType.NONE)