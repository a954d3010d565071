"""Doubly linked list of caller-owned nodes around a sentinel header."""

from __future__ import annotations

from functools import cmp_to_key
from typing import Any, Callable, Iterator, List, Optional


class ListNode:
    """A list node carrying a value; it belongs to at most one list at a time."""

    __slots__ = ("value", "prev", "next", "_owner")

    def __init__(self, value: Any = None) -> None:
        self.value = value
        self.prev: Optional[ListNode] = None
        self.next: Optional[ListNode] = None
        self._owner: Optional[LinkedList] = None

    @property
    def linked(self) -> bool:
        """Whether the node currently sits in a list."""
        return self._owner is not None

    def __repr__(self) -> str:
        return f"ListNode({self.value!r})"


def _link(first: ListNode, second: ListNode) -> None:
    first.next = second
    second.prev = first


class LinkedList:
    """Circular doubly linked list; positions are nodes, ``None`` is the end."""

    def __init__(self) -> None:
        self._header = ListNode()
        _link(self._header, self._header)
        self._size = 0

    def _position(self, pos: Optional[ListNode]) -> ListNode:
        if pos is None:
            return self._header
        if pos._owner is not self:
            raise ValueError("position is not a node of this list")
        return pos

    def _attach(self, before: ListNode, node: ListNode) -> None:
        if node._owner is not None:
            raise ValueError("node is already in a list")
        _link(before.prev, node)
        _link(node, before)
        node._owner = self
        self._size += 1

    def _detach(self, node: ListNode) -> None:
        if node._owner is not self:
            raise ValueError("node is not in this list")
        _link(node.prev, node.next)
        node.prev = node.next = None
        node._owner = None
        self._size -= 1

    def first(self) -> Optional[ListNode]:
        """The first node, or None if the list is empty."""
        return None if not self._size else self._header.next

    def add_front(self, node: ListNode) -> None:
        self._attach(self._header.next, node)

    def add_back(self, node: ListNode) -> None:
        self._attach(self._header, node)

    def pop_front(self) -> ListNode:
        """Remove and return the first node; IndexError if empty."""
        if not self._size:
            raise IndexError("pop from an empty list")
        node = self._header.next
        self._detach(node)
        return node

    def pop_back(self) -> ListNode:
        """Remove and return the last node; IndexError if empty."""
        if not self._size:
            raise IndexError("pop from an empty list")
        node = self._header.prev
        self._detach(node)
        return node

    def insert(self, pos: Optional[ListNode], node: ListNode) -> None:
        """Insert ``node`` before ``pos`` (at the end when ``pos`` is None)."""
        self._attach(self._position(pos), node)

    def erase(self, node: ListNode) -> None:
        self._detach(node)

    def splice_all(self, pos: Optional[ListNode], source: LinkedList) -> None:
        """Move every node of ``source`` before ``pos``, emptying ``source``."""
        if source is self:
            raise ValueError("cannot splice a list into itself")
        target = self._position(pos)
        if not source._size:
            return
        moved = list(source)
        for node in moved:
            node._owner = self
        _link(target.prev, moved[0])
        _link(moved[-1], target)
        self._size += source._size
        _link(source._header, source._header)
        source._size = 0

    def splice(self, pos: Optional[ListNode], source: LinkedList, node: ListNode) -> None:
        """Move ``node`` from ``source`` to just before ``pos``."""
        if node is pos:
            raise ValueError("cannot splice a node before itself")
        target = self._position(pos)
        source._detach(node)
        self._attach(target, node)

    def sort(self, compare: Callable[[Any, Any], int]) -> None:
        """Stable sort of the nodes by a three-way comparison of their values."""
        nodes = sorted(self, key=cmp_to_key(lambda a, b: compare(a.value, b.value)))
        prev = self._header
        for node in nodes:
            _link(prev, node)
            prev = node
        _link(prev, self._header)

    def swap(self, other: LinkedList) -> None:
        """Exchange the contents of two lists."""
        if other is self:
            return
        self._header, other._header = other._header, self._header
        self._size, other._size = other._size, self._size
        for node in self:
            node._owner = self
        for node in other:
            node._owner = other

    def traverse(self, handler: Callable[[ListNode], Any]) -> None:
        """Call ``handler`` on each node; the current node may be erased."""
        for node in self:
            handler(node)

    def values(self) -> List[Any]:
        return [node.value for node in self]

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._size > 0

    def __iter__(self) -> Iterator[ListNode]:
        node = self._header.next
        while node is not self._header:
            nxt = node.next
            yield node
            node = nxt