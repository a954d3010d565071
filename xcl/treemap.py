"""Ordered map and set built on the red-black tree."""

from __future__ import annotations

from typing import Any, Callable, Iterator, List, Optional, Tuple

from xcl.rb import RbNode, RbTree

Compare = Callable[[Any, Any], int]


def _default_compare(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


class _TreeCore:
    def __init__(self, compare: Optional[Compare] = None) -> None:
        self._compare = compare or _default_compare
        self._tree = RbTree()
        self._size = 0

    def _find(self, key: Any) -> Optional[RbNode]:
        node = self._tree.root()
        while node is not None:
            c = self._compare(key, node.key)
            if c == 0:
                return node
            node = node.left if c < 0 else node.right
        return None

    def _bound(self, key: Any, strict: bool) -> Optional[RbNode]:
        result = None
        node = self._tree.root()
        while node is not None:
            c = self._compare(node.key, key)
            if c > 0 or (c == 0 and not strict):
                result = node
                node = node.left
            else:
                node = node.right
        return result

    def _range(self, key: Any) -> Iterator[RbNode]:
        node = self._bound(key, strict=False)
        stop = self._bound(key, strict=True)
        while node is not None and node is not stop:
            yield node
            node = self._tree.next(node)

    def _insert(self, key: Any, value: Any, unique: bool) -> bool:
        parent = None
        left = False
        node = self._tree.root()
        while node is not None:
            c = self._compare(key, node.key)
            if c == 0 and unique:
                return False
            parent = node
            left = c < 0
            node = node.left if left else node.right
        self._tree.insert(RbNode(key, value), parent, left)
        self._size += 1
        return True

    def _remove(self, key: Any) -> bool:
        node = self._find(key)
        if node is None:
            return False
        self._tree.remove(node)
        self._size -= 1
        return True

    def _check_same_kind(self, other: Any) -> None:
        if type(other) is not type(self):
            raise TypeError(f"expected {type(self).__name__}")

    def _clear(self) -> None:
        self._tree = RbTree()
        self._size = 0

    def _move_from(self, other: Any) -> None:
        self._check_same_kind(other)
        if other is self:
            return
        if self._size:
            raise ValueError("target container is not empty")
        self._tree, self._size, self._compare = other._tree, other._size, other._compare
        other._tree = RbTree()
        other._size = 0

    def _swap(self, other: Any) -> None:
        self._check_same_kind(other)
        self._tree, other._tree = other._tree, self._tree
        self._size, other._size = other._size, self._size
        self._compare, other._compare = other._compare, self._compare

    def _verify(self) -> None:
        self._tree.verify()
        count = 0
        prev = None
        for node in self._tree.nodes():
            if prev is not None and self._compare(prev.key, node.key) > 0:
                raise ValueError("keys out of order")
            prev = node
            count += 1
        if count != self._size:
            raise ValueError("size does not match node count")


class SortedMap(_TreeCore):
    """Map kept in key order; may hold equal keys when added non-uniquely."""

    def __init__(self, compare: Optional[Compare] = None) -> None:
        super().__init__(compare)

    def add(self, key: Any, value: Any = None, unique: bool = True) -> bool:
        """Insert a pair; with ``unique`` an existing key refuses it (returns False)."""
        return self._insert(key, value, unique)

    def get(self, key: Any, default: Any = None) -> Any:
        node = self._find(key)
        return default if node is None else node.value

    def remove(self, key: Any) -> bool:
        """Remove one pair with ``key``; return whether one was found."""
        return self._remove(key)

    def equal_range(self, key: Any) -> List[Tuple[Any, Any]]:
        """All pairs whose key compares equal to ``key``, in order."""
        return [(node.key, node.value) for node in self._range(key)]

    def items(self) -> Iterator[Tuple[Any, Any]]:
        return ((node.key, node.value) for node in self._tree.nodes())

    def keys(self) -> Iterator[Any]:
        return (node.key for node in self._tree.nodes())

    def clear(self) -> None:
        self._clear()

    def copy(self) -> SortedMap:
        duplicate = SortedMap(self._compare)
        for key, value in self.items():
            duplicate._insert(key, value, False)
        return duplicate

    def move_from(self, other: SortedMap) -> None:
        """Take over the contents of ``other``; this map must be empty."""
        self._move_from(other)

    def swap(self, other: SortedMap) -> None:
        self._swap(other)

    def verify(self) -> None:
        """Check tree balance, key order and size; raise ValueError on a violation."""
        self._verify()

    def __getitem__(self, key: Any) -> Any:
        node = self._find(key)
        if node is None:
            raise KeyError(key)
        return node.value

    def __contains__(self, key: Any) -> bool:
        return self._find(key) is not None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        return self.keys()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortedMap):
            return NotImplemented
        return self._size == other._size and list(self.items()) == list(other.items())


class SortedSet(_TreeCore):
    """Set kept in order; may hold equal items when added non-uniquely."""

    def __init__(self, compare: Optional[Compare] = None) -> None:
        super().__init__(compare)

    def add(self, item: Any, unique: bool = True) -> bool:
        return self._insert(item, None, unique)

    def remove(self, item: Any) -> bool:
        return self._remove(item)

    def equal_range(self, item: Any) -> List[Any]:
        return [node.key for node in self._range(item)]

    def clear(self) -> None:
        self._clear()

    def copy(self) -> SortedSet:
        duplicate = SortedSet(self._compare)
        for item in self:
            duplicate._insert(item, None, False)
        return duplicate

    def move_from(self, other: SortedSet) -> None:
        """Take over the contents of ``other``; this set must be empty."""
        self._move_from(other)

    def swap(self, other: SortedSet) -> None:
        self._swap(other)

    def verify(self) -> None:
        """Check tree balance, item order and size; raise ValueError on a violation."""
        self._verify()

    def __contains__(self, item: Any) -> bool:
        return self._find(item) is not None

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        return (node.key for node in self._tree.nodes())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SortedSet):
            return NotImplemented
        return self._size == other._size and list(self) == list(other)