"""An ordered sequence with the operations of a singly linked list."""

from __future__ import annotations

import copy
from typing import Any, Callable, Iterable, Iterator


class LinkedList:
    """Ordered container storing copies of the items added to it."""

    def __init__(self, items: Iterable[Any] = ()) -> None:
        self._items: list[Any] = [copy.copy(item) for item in items]

    def add_back(self, data: Any) -> None:
        """Append a copy of ``data``."""
        self._items.append(copy.copy(data))

    def add_front(self, data: Any) -> None:
        """Prepend a copy of ``data``."""
        self._items.insert(0, copy.copy(data))

    def delete_node(self, data: Any, match: Callable[[Any, Any], Any]) -> bool:
        """Remove the first item for which ``match(item, data)`` holds."""
        for position, item in enumerate(self._items):
            if match(item, data):
                del self._items[position]
                return True
        return False

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._items):
            raise IndexError(f"index {index} out of range")

    def delete_at(self, index: int) -> None:
        """Remove the item at ``index``; raises IndexError if out of range."""
        self._check_index(index)
        del self._items[index]

    def modify_at(self, index: int, data: Any) -> None:
        """Replace the item at ``index``; raises IndexError if out of range."""
        self._check_index(index)
        self._items[index] = copy.copy(data)

    def have_same(self, data: Any, match: Callable[[Any, Any], Any]) -> bool:
        """True if ``match(item, data)`` holds for some item."""
        return any(match(item, data) for item in self._items)

    def have_same_cmp(self, data: Any) -> bool:
        """True if some stored item is not equal to ``data``."""
        return any(item != data for item in self._items)

    def foreach(self, func: Callable[[Any], Any]) -> None:
        """Call ``func`` on every item in order."""
        for item in self._items:
            func(item)

    def sort(self, greater: Callable[[Any, Any], Any]) -> None:
        """Selection sort; ``greater(a, b)`` is true when ``b`` should precede ``a``."""
        items = self._items
        for i in range(len(items)):
            smallest = i
            for j in range(i + 1, len(items)):
                if greater(items[smallest], items[j]):
                    smallest = j
            if smallest != i:
                items[i], items[smallest] = items[smallest], items[i]

    def clear(self) -> None:
        """Remove all items."""
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)