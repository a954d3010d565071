"""Pool of reference-counted handle entries, allocated in fixed-size spans."""

from __future__ import annotations

from collections import deque
from typing import Any, Callable, Deque, List, Optional

DEFAULT_SPAN_SIZE = 128
MAX_RECYCLED_SPANS = 1 << 15

Destructor = Callable[[Any], Any]


class HandleEntry:
    """A slot holding an object, its destructor and a reference count."""

    __slots__ = ("obj", "destructor", "refs", "name", "_span", "_in_use")

    def __init__(self, span: Optional[_Span] = None) -> None:
        self.obj: Any = None
        self.destructor: Optional[Destructor] = None
        self.refs = 0
        self.name: Optional[str] = None
        self._span = span
        self._in_use = False

    def reset(self, obj: Any, destructor: Optional[Destructor] = None) -> None:
        """Point the entry at ``obj`` with a single reference."""
        self.obj = obj
        self.destructor = destructor
        self.refs = 1
        self.name = None

    def delete_object(self) -> None:
        """Run the destructor on the object and forget it."""
        if self.destructor is not None:
            self.destructor(self.obj)
        self.obj = None
        self.destructor = None
        self.name = None

    def close(self) -> bool:
        """Drop one reference; destroy the object and return True on the last."""
        self.refs -= 1
        if self.refs > 0:
            return False
        self.delete_object()
        return True


class _Span:
    __slots__ = ("owner", "free", "usage")

    def __init__(self, owner: HandlePool, size: int) -> None:
        self.owner = owner
        self.free: List[HandleEntry] = [HandleEntry(self) for _ in range(size)]
        self.usage = 0


class HandlePool:
    """Hands out entries from spans that still have room and keeps empty
    spans for reuse, up to ``max_recycled`` of them."""

    def __init__(self, span_size: int = DEFAULT_SPAN_SIZE, max_recycled: int = MAX_RECYCLED_SPANS) -> None:
        if span_size < 1:
            raise ValueError("span size must be at least 1")
        if max_recycled < 0:
            raise ValueError("max_recycled must not be negative")
        self._span_size = span_size
        self._max_recycled = max_recycled
        self._avail: List[_Span] = []
        self._recycled: Deque[_Span] = deque()

    def alloc(self) -> HandleEntry:
        if not self._avail:
            span = self._recycled.popleft() if self._recycled else _Span(self, self._span_size)
            self._avail.append(span)
        span = self._avail[0]
        entry = span.free.pop()
        span.usage += 1
        entry._in_use = True
        if not span.free:
            self._avail.pop(0)
        return entry

    def recycle(self, entry: Optional[HandleEntry]) -> None:
        """Return ``entry`` to its span; None is ignored."""
        if entry is None:
            return
        span = entry._span
        if span is None or span.owner is not self:
            raise ValueError("entry does not belong to this pool")
        if not entry._in_use:
            raise ValueError("entry is already recycled")
        entry._in_use = False
        span.free.append(entry)
        span.usage -= 1
        if span.usage == 0:
            if any(s is span for s in self._avail):
                self._avail.remove(span)
            if len(self._recycled) < self._max_recycled:
                self._recycled.append(span)
        elif span.usage == self._span_size - 1:
            self._avail.append(span)

    def available_spans(self) -> int:
        """Number of partly used spans that still have free entries."""
        return len(self._avail)

    def recycled_spans(self) -> int:
        """Number of empty spans kept for reuse."""
        return len(self._recycled)