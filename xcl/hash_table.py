"""Chained hash table with bucket-ordered iteration, plus map and set views."""

from __future__ import annotations

from operator import itemgetter
from typing import Any, Callable, Iterator, List, Optional, Tuple

Hasher = Callable[[Any], int]
Equal = Callable[[Any, Any], bool]

_INITIAL_CAPACITY = 8
_HASH_MASK = (1 << 64) - 1


class _Entry:
    __slots__ = ("hash", "item", "next")

    def __init__(self, hash_value: int = 0, item: Any = None) -> None:
        self.hash = hash_value
        self.item = item
        self.next: Optional[_Entry] = None


def _default_equal(a: Any, b: Any) -> bool:
    return a == b


class HashTable:
    """Hash table whose entries form one chain; each bucket points at the
    entry just before its first member."""

    def __init__(
        self,
        hasher: Optional[Hasher] = None,
        equal: Optional[Equal] = None,
        key_of: Optional[Callable[[Any], Any]] = None,
    ) -> None:
        self._hasher = hasher or hash
        self._equal = equal or _default_equal
        self._key_of = key_of or (lambda item: item)
        self._header = _Entry()
        self._capacity = _INITIAL_CAPACITY
        self._buckets: List[Optional[_Entry]] = [None] * self._capacity
        self._size = 0

    def _hash(self, key: Any) -> int:
        return self._hasher(key) & _HASH_MASK

    def _bucket(self, entry: _Entry) -> int:
        return entry.hash & (self._capacity - 1)

    def _push(self, entry: _Entry) -> None:
        bucket = self._bucket(entry)
        top = self._buckets[bucket]
        if top is not None:
            entry.next = top.next
            top.next = entry
        else:
            entry.next = self._header.next
            self._header.next = entry
            self._buckets[bucket] = self._header
            if entry.next is not None:
                self._buckets[self._bucket(entry.next)] = entry
        self._size += 1

    def _rehash(self) -> None:
        entry = self._header.next
        self._header.next = None
        self._capacity <<= 1
        self._buckets = [None] * self._capacity
        self._size = 0
        while entry is not None:
            nxt = entry.next
            self._push(entry)
            entry = nxt

    def _locate(self, key: Any) -> Optional[_Entry]:
        """Return the entry preceding the one holding ``key``."""
        bucket = self._hash(key) & (self._capacity - 1)
        prev = self._buckets[bucket]
        if prev is None:
            return None
        entry = prev.next
        while entry is not None and self._bucket(entry) == bucket:
            if self._equal(key, self._key_of(entry.item)):
                return prev
            prev, entry = entry, entry.next
        return None

    def _remove_after(self, prev: _Entry) -> None:
        entry = prev.next
        assert entry is not None
        bucket = self._bucket(entry)
        nxt = entry.next
        if (prev is self._header or self._bucket(prev) != bucket) and (
            nxt is None or self._bucket(nxt) != bucket
        ):
            self._buckets[bucket] = None
        if nxt is not None and self._bucket(nxt) != bucket:
            self._buckets[self._bucket(nxt)] = prev
        prev.next = nxt
        self._size -= 1

    def add(self, item: Any, unique: bool = False) -> bool:
        """Insert ``item``; with ``unique`` an item with an equal key is refused.

        Returns True if the item was inserted.
        """
        key = self._key_of(item)
        if unique and self._locate(key) is not None:
            return False
        if self._size >= (self._capacity >> 2) * 3:
            self._rehash()
        self._push(_Entry(self._hash(key), item))
        return True

    def find(self, key: Any) -> Any:
        """Return the stored item with ``key``, or None."""
        prev = self._locate(key)
        return None if prev is None else prev.next.item

    def remove(self, key: Any) -> bool:
        """Remove one item with ``key``; return whether one was found."""
        prev = self._locate(key)
        if prev is None:
            return False
        self._remove_after(prev)
        return True

    def clear(self) -> None:
        self._header.next = None
        self._buckets = [None] * self._capacity
        self._size = 0

    def capacity(self) -> int:
        """Current number of buckets."""
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        entry = self._header.next
        while entry is not None:
            yield entry.item
            entry = entry.next

    def __contains__(self, key: Any) -> bool:
        return self._locate(key) is not None


class HashMap:
    """Key/value map; adding an existing key leaves the old value in place."""

    def __init__(self, hasher: Optional[Hasher] = None, equal: Optional[Equal] = None) -> None:
        self._table = HashTable(hasher, equal, itemgetter(0))

    def add(self, key: Any, value: Any) -> bool:
        """Insert ``key`` with ``value``; False if the key is already present."""
        return self._table.add((key, value), unique=True)

    def get(self, key: Any, default: Any = None) -> Any:
        pair = self._table.find(key)
        return default if pair is None else pair[1]

    def remove(self, key: Any) -> bool:
        return self._table.remove(key)

    def items(self) -> Iterator[Tuple[Any, Any]]:
        return iter(self._table)

    def clear(self) -> None:
        self._table.clear()

    def __getitem__(self, key: Any) -> Any:
        pair = self._table.find(key)
        if pair is None:
            raise KeyError(key)
        return pair[1]

    def __contains__(self, key: Any) -> bool:
        return key in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[Any]:
        return (key for key, _ in self._table)


class HashSet:
    """Set of unique items."""

    def __init__(self, hasher: Optional[Hasher] = None, equal: Optional[Equal] = None) -> None:
        self._table = HashTable(hasher, equal)

    def add(self, item: Any) -> bool:
        """Insert ``item``; False if an equal item is already present."""
        return self._table.add(item, unique=True)

    def remove(self, item: Any) -> bool:
        return self._table.remove(item)

    def clear(self) -> None:
        self._table.clear()

    def __contains__(self, item: Any) -> bool:
        return item in self._table

    def __len__(self) -> int:
        return len(self._table)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._table)