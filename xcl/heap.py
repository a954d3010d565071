"""Binary min-heap ordered by a three-way comparison function."""

from __future__ import annotations

from typing import Any, Callable, Iterable, List

Compare = Callable[[Any, Any], int]


class Heap:
    """A binary heap; the item that compares lowest is on top."""

    def __init__(self, compare: Compare) -> None:
        if compare is None:
            raise TypeError("a comparison function is required")
        self._compare = compare
        self._items: List[Any] = []

    def _less(self, a: Any, b: Any) -> bool:
        return self._compare(a, b) < 0

    def _sift_up(self, i: int) -> None:
        items = self._items
        while i > 0:
            par = (i - 1) // 2
            if not self._less(items[i], items[par]):
                break
            items[i], items[par] = items[par], items[i]
            i = par

    def _sift_down(self, i: int) -> None:
        items = self._items
        size = len(items)
        while True:
            left = 2 * i + 1
            right = left + 1
            if left >= size:
                break
            j = left
            if right < size and self._less(items[right], items[left]):
                j = right
            if self._less(items[i], items[j]):
                break
            items[i], items[j] = items[j], items[i]
            i = j

    def push(self, item: Any) -> None:
        self._items.append(item)
        self._sift_up(len(self._items) - 1)

    def pop(self) -> Any:
        """Remove and return the top item; IndexError if the heap is empty."""
        if not self._items:
            raise IndexError("pop from an empty heap")
        top = self._items[0]
        last = self._items.pop()
        if self._items:
            self._items[0] = last
            self._sift_down(0)
        return top

    def top(self) -> Any:
        """Return the top item without removing it."""
        if not self._items:
            raise IndexError("top of an empty heap")
        return self._items[0]

    def build(self, items: Iterable[Any]) -> None:
        """Replace the contents with ``items`` and restore heap order."""
        self._items = list(items)
        for i in range(1, len(self._items)):
            self._sift_up(i)

    def clear(self) -> None:
        self._items.clear()

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)