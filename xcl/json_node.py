"""Tree of JSON values with ordered, case-insensitively named children."""

from __future__ import annotations

import dataclasses
import string
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, List, Optional

_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)
_UINT32_MASK = 0xFFFFFFFF


class JsonType(Enum):
    """Kind of value a node holds."""

    FALSE = 0
    TRUE = 1
    NULL = 2
    INT = 3
    DOUBLE = 4
    STRING = 5
    ARRAY = 6
    OBJECT = 7


def _names_match(stored: Optional[str], wanted: Optional[str]) -> bool:
    if stored is None or wanted is None:
        return stored is None and wanted is None
    return stored.translate(_ASCII_LOWER) == wanted.translate(_ASCII_LOWER)


@dataclass(eq=False)
class JsonNode:
    """A JSON value.

    Numbers keep their magnitude in ``value_int``/``value_double`` and their
    sign in ``sign``. Arrays and objects hold their members in ``children``;
    object members carry their key in ``name``. A reference node shares the
    members of the node it refers to.
    """

    type: JsonType = JsonType.NULL
    value_int: int = 0
    value_double: float = 0.0
    value_string: Optional[str] = None
    sign: int = 1
    name: Optional[str] = None
    children: List["JsonNode"] = field(default_factory=list)
    is_reference: bool = False

    def _index_of(self, name: Optional[str]) -> Optional[int]:
        for index, child in enumerate(self.children):
            if _names_match(child.name, name):
                return index
        return None

    def _clamp(self, index: int) -> Optional[int]:
        index = max(index, 0)
        return index if index < len(self.children) else None

    def item(self, index: int) -> Optional[JsonNode]:
        """The member at ``index``, or None past the end."""
        pos = self._clamp(index)
        return None if pos is None else self.children[pos]

    def get_item(self, name: str) -> Optional[JsonNode]:
        """The first member whose key matches ``name`` ignoring ASCII case."""
        pos = self._index_of(name)
        return None if pos is None else self.children[pos]

    def append(self, item: Optional[JsonNode]) -> None:
        if item is not None:
            self.children.append(item)

    def prepend(self, item: Optional[JsonNode]) -> None:
        if item is not None:
            self.children.insert(0, item)

    def add_to_object(self, name: str, item: Optional[JsonNode]) -> None:
        """Append ``item`` under the key ``name``."""
        if item is None:
            return
        item.name = name
        self.children.append(item)

    def add_reference_to_array(self, item: JsonNode) -> None:
        self.append(_reference(item))

    def add_reference_to_object(self, name: str, item: JsonNode) -> None:
        self.add_to_object(name, _reference(item))

    def detach(self, index: int) -> Optional[JsonNode]:
        """Remove and return the member at ``index``, or None."""
        pos = self._clamp(index)
        return None if pos is None else self.children.pop(pos)

    def detach_by_name(self, name: str) -> Optional[JsonNode]:
        pos = self._index_of(name)
        return None if pos is None else self.children.pop(pos)

    def delete(self, index: int) -> None:
        self.detach(index)

    def delete_by_name(self, name: str) -> None:
        self.detach_by_name(name)

    def replace(self, index: int, item: JsonNode) -> None:
        """Put ``item`` in place of the member at ``index`` if there is one."""
        pos = self._clamp(index)
        if pos is not None:
            self.children[pos] = item

    def replace_by_name(self, name: str, item: JsonNode) -> None:
        pos = self._index_of(name)
        if pos is not None:
            item.name = name
            self.children[pos] = item

    def replace_add(self, name: str, item: JsonNode) -> None:
        """Drop any member called ``name`` and append ``item`` under it."""
        if self.get_item(name) is not None:
            self.delete_by_name(name)
        self.add_to_object(name, item)

    def _typed(self, name: str, kind: JsonType) -> Optional[JsonNode]:
        item = self.get_item(name)
        if item is None or item.is_reference or item.type is not kind:
            return None
        return item

    def get_int(self, name: str, default: int = 0) -> int:
        item = self._typed(name, JsonType.INT)
        return default if item is None else item.value_int * item.sign

    def get_str(self, name: str, default: Optional[str] = None) -> Optional[str]:
        item = self._typed(name, JsonType.STRING)
        return default if item is None else item.value_string

    def get_double(self, name: str, default: float = 0.0) -> float:
        item = self._typed(name, JsonType.DOUBLE)
        return default if item is None else item.value_double * item.sign

    def add_int(self, name: str, value: int) -> JsonNode:
        item = create_int(abs(value), 1 if value >= 0 else -1)
        self.add_to_object(name, item)
        return item

    def add_str(self, name: str, value: str) -> JsonNode:
        item = create_string(value)
        self.add_to_object(name, item)
        return item

    def add_double(self, name: str, value: float) -> JsonNode:
        item = create_double(value, 1) if value >= 0 else create_double(-value, -1)
        self.add_to_object(name, item)
        return item

    def check_items(self, *args: str) -> Optional[str]:
        """The first of ``args`` that is not a member, or None if all are."""
        for name in args:
            if self.get_item(name) is None:
                return name
        return None

    def __len__(self) -> int:
        return len(self.children)

    def __iter__(self) -> Iterator[JsonNode]:
        return iter(self.children)


def _reference(item: JsonNode) -> JsonNode:
    return dataclasses.replace(item, name=None, is_reference=True)


def create_null() -> JsonNode:
    return JsonNode(JsonType.NULL)


def create_bool(value: bool) -> JsonNode:
    return JsonNode(JsonType.TRUE if value else JsonType.FALSE)


def create_int(value: int, sign: int = 1) -> JsonNode:
    return JsonNode(JsonType.INT, value_int=int(value), value_double=float(value), sign=sign)


def create_double(value: float, sign: int = 1) -> JsonNode:
    return JsonNode(JsonType.DOUBLE, value_int=int(value), value_double=float(value), sign=sign)


def create_string(value: str) -> JsonNode:
    return JsonNode(JsonType.STRING, value_string=value)


def create_array() -> JsonNode:
    return JsonNode(JsonType.ARRAY)


def create_object() -> JsonNode:
    return JsonNode(JsonType.OBJECT)


def create_int_array(numbers: Iterable[int], sign: int = 1) -> JsonNode:
    """An array of number nodes built from 32-bit unsigned views of ``numbers``."""
    array = create_array()
    array.children = [create_double(n & _UINT32_MASK, sign) for n in numbers]
    return array


def create_double_array(numbers: Iterable[float]) -> JsonNode:
    array = create_array()
    array.children = [create_double(n, -1) for n in numbers]
    return array


def create_string_array(strings: Iterable[str]) -> JsonNode:
    array = create_array()
    array.children = [create_string(s) for s in strings]
    return array