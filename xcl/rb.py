"""Intrusive red-black tree with in-order navigation."""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterator, Optional


class RbColor(Enum):
    """Colour of a red-black tree node."""

    RED = 0
    BLACK = 1


class RbNode:
    """A tree node carrying a key and a value."""

    __slots__ = ("key", "value", "left", "right", "parent", "color")

    def __init__(self, key: Any, value: Any = None) -> None:
        self.key = key
        self.value = value
        self.left: Optional[RbNode] = None
        self.right: Optional[RbNode] = None
        self.parent: Optional[RbNode] = None
        self.color = RbColor.RED

    def __repr__(self) -> str:
        return f"RbNode({self.key!r}, {self.value!r}, {self.color.name})"


def _is_black(node: Optional[RbNode]) -> bool:
    return node is None or node.color is RbColor.BLACK


def _leftmost(node: RbNode) -> RbNode:
    while node.left is not None:
        node = node.left
    return node


def _rightmost(node: RbNode) -> RbNode:
    while node.right is not None:
        node = node.right
    return node


class RbTree:
    """Red-black tree whose callers choose where each node is attached.

    The tree does not compare keys; ``insert`` receives the parent found by
    the caller's own search and the side to attach on.
    """

    def __init__(self) -> None:
        self._root: Optional[RbNode] = None
        self._leftmost: Optional[RbNode] = None
        self._rightmost: Optional[RbNode] = None

    def root(self) -> Optional[RbNode]:
        return self._root

    def minimum(self) -> Optional[RbNode]:
        """The leftmost node, or None if the tree is empty."""
        return self._leftmost

    def maximum(self) -> Optional[RbNode]:
        """The rightmost node, or None if the tree is empty."""
        return self._rightmost

    def is_empty(self) -> bool:
        return self._root is None

    def _replace_child(self, parent: Optional[RbNode], old: RbNode, new: Optional[RbNode]) -> None:
        if parent is None:
            self._root = new
        elif parent.left is old:
            parent.left = new
        else:
            parent.right = new

    def _rotate_left(self, node: RbNode) -> None:
        r = node.right
        assert r is not None
        node.right = r.left
        if r.left is not None:
            r.left.parent = node
        parent = node.parent
        self._replace_child(parent, node, r)
        r.parent = parent
        r.left = node
        node.parent = r

    def _rotate_right(self, node: RbNode) -> None:
        l = node.left
        assert l is not None
        node.left = l.right
        if l.right is not None:
            l.right.parent = node
        parent = node.parent
        self._replace_child(parent, node, l)
        l.parent = parent
        l.right = node
        node.parent = l

    def insert(self, node: RbNode, parent: Optional[RbNode], left: bool) -> None:
        """Attach ``node`` as the left or right child of ``parent`` and rebalance.

        A ``parent`` of None makes ``node`` the root of an empty tree.
        """
        if parent is None:
            if self._root is not None:
                raise ValueError("tree already has a root")
        elif (parent.left if left else parent.right) is not None:
            raise ValueError("child slot is already occupied")
        node.left = node.right = None
        node.parent = parent
        if parent is None:
            self._root = self._leftmost = self._rightmost = node
            node.color = RbColor.BLACK
            return
        if left:
            parent.left = node
            if parent is self._leftmost:
                self._leftmost = node
        else:
            parent.right = node
            if parent is self._rightmost:
                self._rightmost = node
        self._insert_fixup(node)

    def _insert_fixup(self, node: RbNode) -> None:
        node.color = RbColor.RED
        while (par := node.parent) is not None and par.color is RbColor.RED:
            grand = par.parent
            assert grand is not None
            is_left = par.left is node
            uncle = grand.right if par is grand.left else grand.left
            if uncle is not None and uncle.color is RbColor.RED:
                uncle.color = RbColor.BLACK
                par.color = RbColor.BLACK
                grand.color = RbColor.RED
                node = grand
                continue
            if is_left != (par is grand.left):
                if is_left:
                    self._rotate_right(par)
                else:
                    self._rotate_left(par)
                node = par
                par = node.parent
                assert par is not None
            if par is grand.left:
                self._rotate_right(grand)
            else:
                self._rotate_left(grand)
            par.color = RbColor.BLACK
            grand.color = RbColor.RED
            break
        assert self._root is not None
        self._root.color = RbColor.BLACK

    def remove(self, node: RbNode) -> RbNode:
        """Detach ``node`` from the tree, rebalance, and return it."""
        x = node
        if node.left is None:
            y = node.right
        elif node.right is None:
            y = node.left
        else:
            x = _rightmost(node.left)
            y = x.left
        par = node.parent
        if x is not node:
            assert node.right is not None and node.left is not None
            x.right = node.right
            node.right.parent = x
            if x is node.left:
                z = x
            else:
                x.left = node.left
                node.left.parent = x
                z = x.parent
                assert z is not None
                z.right = y
                if y is not None:
                    y.parent = z
            self._replace_child(par, node, x)
            x.parent = par
            node.color, x.color = x.color, node.color
        else:
            z = par
            if y is not None:
                y.parent = z
            self._replace_child(par, node, y)
            if node is self._leftmost:
                self._leftmost = _leftmost(y) if node.right is not None and y else z
            if node is self._rightmost:
                self._rightmost = _rightmost(y) if node.left is not None and y else z
        if node.color is RbColor.BLACK:
            self._remove_fixup(y, z)
        node.left = node.right = node.parent = None
        return node

    def _remove_fixup(self, node: Optional[RbNode], par: Optional[RbNode]) -> None:
        while _is_black(node) and par is not None:
            is_left = node is par.left
            sibling = par.right if is_left else par.left
            assert sibling is not None
            if sibling.color is RbColor.RED:
                sibling.color = RbColor.BLACK
                par.color = RbColor.RED
                if is_left:
                    self._rotate_left(par)
                else:
                    self._rotate_right(par)
                sibling = par.right if is_left else par.left
                assert sibling is not None
            if _is_black(sibling.left) and _is_black(sibling.right):
                sibling.color = RbColor.RED
                node = par
                par = node.parent
                continue
            if is_left and _is_black(sibling.right):
                assert sibling.left is not None
                sibling.left.color = RbColor.BLACK
                sibling.color = RbColor.RED
                self._rotate_right(sibling)
                sibling = par.right
            elif not is_left and _is_black(sibling.left):
                assert sibling.right is not None
                sibling.right.color = RbColor.BLACK
                sibling.color = RbColor.RED
                self._rotate_left(sibling)
                sibling = par.left
            assert sibling is not None
            sibling.color = par.color
            par.color = RbColor.BLACK
            if is_left:
                assert sibling.right is not None
                sibling.right.color = RbColor.BLACK
                self._rotate_left(par)
            else:
                assert sibling.left is not None
                sibling.left.color = RbColor.BLACK
                self._rotate_right(par)
            break
        if node is not None:
            node.color = RbColor.BLACK

    def next(self, node: Optional[RbNode]) -> Optional[RbNode]:
        """In-order successor; None past the last node."""
        if node is None or node is self._rightmost:
            return None
        if node.right is not None:
            return _leftmost(node.right)
        par = node.parent
        while par is not None and par.left is not node:
            node = par
            par = node.parent
        return par

    def prev(self, node: Optional[RbNode]) -> Optional[RbNode]:
        """In-order predecessor.

        None (the end position) steps back to the maximum; the minimum
        stays where it is.
        """
        if node is None:
            return self._rightmost
        if node is self._leftmost:
            return node
        if node.left is not None:
            return _rightmost(node.left)
        par = node.parent
        while par is not None and par.right is not node:
            node = par
            par = node.parent
        return par

    def nodes(self) -> Iterator[RbNode]:
        """Iterate over the nodes in order."""
        node = self._leftmost
        while node is not None:
            nxt = self.next(node)
            yield node
            node = nxt

    def verify(self) -> None:
        """Check the red-black invariants; raise ValueError on a violation."""
        root = self._root
        if root is None:
            if self._leftmost is not None or self._rightmost is not None:
                raise ValueError("empty tree has extreme nodes")
            return
        if root.parent is not None:
            raise ValueError("root has a parent")
        if root.color is not RbColor.BLACK:
            raise ValueError("root is not black")
        if self._leftmost is not _leftmost(root):
            raise ValueError("leftmost node is stale")
        if self._rightmost is not _rightmost(root):
            raise ValueError("rightmost node is stale")
        self._black_height(root)

    def _black_height(self, node: Optional[RbNode]) -> int:
        if node is None:
            return 1
        for child in (node.left, node.right):
            if child is not None:
                if child.parent is not node:
                    raise ValueError("broken parent link")
                if node.color is RbColor.RED and child.color is RbColor.RED:
                    raise ValueError("red node has a red child")
        left = self._black_height(node.left)
        right = self._black_height(node.right)
        if left != right:
            raise ValueError("unequal black heights")
        return left + (1 if node.color is RbColor.BLACK else 0)