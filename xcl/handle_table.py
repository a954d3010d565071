"""Table that maps integer handles, and optional names, to shared objects."""

from __future__ import annotations

from typing import Any, Callable, Optional

from xcl.handle_pool import HandleEntry, HandlePool
from xcl.hash_table import HashMap
from xcl.treemap import SortedMap

NAME_LIMIT = 64
_ID_MASK = (1 << 62) - 1


def _make_handle(handle_id: int) -> int:
    return handle_id << 2


def _handle_id(handle: int) -> int:
    return handle >> 2


class HandleTable:
    """Hands out handles for objects; clones share one reference-counted entry.

    When a named object is closed by name, its remaining handles go stale and
    are dropped the next time they are used.
    """

    def __init__(self, pool: Optional[HandlePool] = None) -> None:
        self._pool = pool if pool is not None else HandlePool()
        self._handles = HashMap()
        self._names = SortedMap()
        self._id_gen = 0

    def _gen_id(self) -> int:
        self._id_gen += 1
        handle_id = self._id_gen & _ID_MASK
        if not handle_id:
            self._id_gen += 1
            handle_id = self._id_gen & _ID_MASK
        return handle_id

    def map(self, obj: Any, destructor: Optional[Callable[[Any], Any]] = None, name: Optional[str] = None) -> int:
        """Register ``obj`` and return a new handle for it.

        Raises ValueError for a None object, a name of 64 bytes or more, or
        a name already in use.
        """
        if obj is None:
            raise ValueError("cannot map None")
        if name and len(name.encode()) >= NAME_LIMIT:
            raise ValueError("handle name is too long")
        entry = self._pool.alloc()
        entry.reset(obj, destructor)
        handle_id = self._gen_id()
        self._handles.add(handle_id, entry)
        if name:
            if not self._names.add(name, entry, True):
                self._handles.remove(handle_id)
                self._pool.recycle(entry)
                raise ValueError(f"name {name!r} is already mapped")
            entry.name = name
        return _make_handle(handle_id)

    def _entry_by_handle(self, handle: int) -> Optional[HandleEntry]:
        handle_id = _handle_id(handle)
        entry = self._handles.get(handle_id)
        if entry is None:
            return None
        if entry.obj is not None:
            return entry
        self._handles.remove(handle_id)
        entry.refs -= 1
        if not entry.refs:
            self._pool.recycle(entry)
        return None

    def _entry_by_name(self, name: Optional[str]) -> Optional[HandleEntry]:
        if not name:
            return None
        return self._names.get(name)

    def _close_id(self, handle_id: int, entry: HandleEntry) -> None:
        if entry.obj is None:
            entry.refs -= 1
            if not entry.refs:
                self._pool.recycle(entry)
        else:
            name = entry.name
            if entry.close():
                if name is not None:
                    self._names.remove(name)
                self._pool.recycle(entry)
        self._handles.remove(handle_id)

    def close(self, handle: int) -> None:
        """Release ``handle``; the object is destroyed with its last handle."""
        handle_id = _handle_id(handle)
        entry = self._handles.get(handle_id)
        if entry is not None:
            self._close_id(handle_id, entry)

    def get(self, handle: int) -> Any:
        """The object behind ``handle``, or None."""
        entry = self._entry_by_handle(handle)
        return None if entry is None else entry.obj

    def _clone_entry(self, entry: Optional[HandleEntry]) -> Optional[int]:
        if entry is None:
            return None
        handle_id = self._gen_id()
        self._handles.add(handle_id, entry)
        entry.refs += 1
        return _make_handle(handle_id)

    def clone(self, handle: int) -> Optional[int]:
        """A new handle to the same object, or None if ``handle`` is invalid."""
        return self._clone_entry(self._entry_by_handle(handle))

    def clone_by_name(self, name: str) -> Optional[int]:
        """A new handle to the object registered as ``name``, or None."""
        return self._clone_entry(self._entry_by_name(name))

    def contains(self, name: str) -> bool:
        return self._entry_by_name(name) is not None

    def close_by_name(self, name: str) -> None:
        """Destroy the named object at once; its handles become stale."""
        entry = self._entry_by_name(name)
        if entry is not None:
            entry.delete_object()
            self._names.remove(name)

    def clear(self) -> None:
        """Close every handle."""
        for handle_id, entry in list(self._handles.items()):
            self._close_id(handle_id, entry)

    def __len__(self) -> int:
        return len(self._handles)