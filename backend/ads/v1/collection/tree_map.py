"""
Ordered map backed by an AVL tree.

Keys are kept sorted, so besides the Map operations TreeMap answers
ordered queries (first, last, floor, ceiling) in O(log n).
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Tuple, TypeVar

from ...errors import EmptyCollectionError, KeyNotComparableError
from .map import _MISSING, Map

logger = logging.getLogger(__name__)

K = TypeVar("K")
V = TypeVar("V")


class _Node:
    __slots__ = ("key", "value", "left", "right", "height")

    def __init__(self, key, value):
        self.key = key
        self.value = value
        self.left: Optional[_Node] = None
        self.right: Optional[_Node] = None
        self.height = 1


def _height(node: Optional[_Node]) -> int:
    return node.height if node is not None else 0


def _update(node: _Node) -> None:
    node.height = 1 + max(_height(node.left), _height(node.right))


def _rotate_right(node: _Node) -> _Node:
    pivot = node.left
    node.left = pivot.right
    pivot.right = node
    _update(node)
    _update(pivot)
    return pivot


def _rotate_left(node: _Node) -> _Node:
    pivot = node.right
    node.right = pivot.left
    pivot.left = node
    _update(node)
    _update(pivot)
    return pivot


def _rebalance(node: _Node) -> _Node:
    _update(node)
    balance = _height(node.left) - _height(node.right)

    if balance > 1:
        if _height(node.left.left) < _height(node.left.right):
            node.left = _rotate_left(node.left)
        logger.debug("Rotating right at key %r", node.key)
        return _rotate_right(node)

    if balance < -1:
        if _height(node.right.right) < _height(node.right.left):
            node.right = _rotate_right(node.right)
        logger.debug("Rotating left at key %r", node.key)
        return _rotate_left(node)

    return node


def _pop_min(node: _Node) -> Tuple[Optional[_Node], _Node]:
    """Detach the leftmost node; return (new subtree root, detached node)."""
    if node.left is None:
        return node.right, node
    node.left, smallest = _pop_min(node.left)
    return _rebalance(node), smallest


def _pop_max(node: _Node) -> Tuple[Optional[_Node], _Node]:
    """Detach the rightmost node; return (new subtree root, detached node)."""
    if node.right is None:
        return node.left, node
    node.right, largest = _pop_max(node.right)
    return _rebalance(node), largest


class TreeMap(Map[K, V]):
    """
    Self-balancing ordered map.

    Every Map operation runs in O(log n). Iteration yields keys in ascending
    order. Mutating the map while iterating over it raises RuntimeError on
    the iterator's next step.

    Keys must be mutually orderable with ``<``; a key that is not raises
    KeyNotComparableError and leaves the map unchanged.

    Example:
        >>> m = TreeMap([(3, "c"), (1, "a")])
        >>> m.insert(2, "b")
        >>> m.insert(2, "B")
        'b'
        >>> list(m.items())
        [(1, 'a'), (2, 'B'), (3, 'c')]
    """

    def __init__(self, items: Optional[Iterable[Tuple[K, V]]] = None):
        self._root: Optional[_Node] = None
        self._size = 0
        self._version = 0
        if items is not None:
            for key, value in items:
                self.insert(key, value)

    # Comparison

    @staticmethod
    def _compare(key: Any, other: Any) -> int:
        try:
            if key < other:
                return -1
            if other < key:
                return 1
            if key == other:
                return 0
        except TypeError as e:
            raise KeyNotComparableError(key, other) from e
        # Unordered but unequal, e.g. NaN
        raise KeyNotComparableError(key, other)

    # Map operations

    def _find(self, key, default=_MISSING):
        node = self._root
        while node is not None:
            c = self._compare(key, node.key)
            if c == 0:
                return node.value
            node = node.left if c < 0 else node.right
        return default

    def get(self, key: K) -> Optional[V]:
        return self._find(key, None)

    def insert(self, key: K, value: V) -> Optional[V]:
        if self._root is None:
            # Reject keys that cannot even be ordered against themselves
            self._compare(key, key)
        self._root, previous = self._insert(self._root, key, value)
        if previous is _MISSING:
            self._size += 1
            self._version += 1
            return None
        return previous

    def _insert(self, node: Optional[_Node], key, value) -> Tuple[_Node, Any]:
        if node is None:
            return _Node(key, value), _MISSING

        c = self._compare(key, node.key)
        if c == 0:
            previous = node.value
            node.value = value
            return node, previous

        if c < 0:
            node.left, previous = self._insert(node.left, key, value)
        else:
            node.right, previous = self._insert(node.right, key, value)

        if previous is not _MISSING:
            return node, previous
        return _rebalance(node), previous

    def erase(self, key: K) -> Optional[V]:
        self._root, removed = self._erase(self._root, key)
        if removed is _MISSING:
            return None
        self._size -= 1
        self._version += 1
        return removed

    def _erase(self, node: Optional[_Node], key) -> Tuple[Optional[_Node], Any]:
        if node is None:
            return None, _MISSING

        c = self._compare(key, node.key)
        if c < 0:
            node.left, removed = self._erase(node.left, key)
        elif c > 0:
            node.right, removed = self._erase(node.right, key)
        else:
            removed = node.value
            if node.left is None:
                return node.right, removed
            if node.right is None:
                return node.left, removed
            right, successor = _pop_min(node.right)
            successor.left = node.left
            successor.right = right
            node = successor

        if removed is _MISSING:
            return node, removed
        return _rebalance(node), removed

    def __len__(self) -> int:
        return self._size

    def clear(self) -> None:
        self._root = None
        self._size = 0
        self._version += 1

    # Ordered queries

    def first(self) -> Optional[Tuple[K, V]]:
        """Entry with the smallest key, or None when empty."""
        node = self._root
        if node is None:
            return None
        while node.left is not None:
            node = node.left
        return node.key, node.value

    def last(self) -> Optional[Tuple[K, V]]:
        """Entry with the largest key, or None when empty."""
        node = self._root
        if node is None:
            return None
        while node.right is not None:
            node = node.right
        return node.key, node.value

    def floor(self, key: K) -> Optional[Tuple[K, V]]:
        """Entry with the greatest key <= key, or None."""
        node = self._root
        best = None
        while node is not None:
            c = self._compare(key, node.key)
            if c == 0:
                return node.key, node.value
            if c < 0:
                node = node.left
            else:
                best = node
                node = node.right
        return (best.key, best.value) if best is not None else None

    def ceiling(self, key: K) -> Optional[Tuple[K, V]]:
        """Entry with the smallest key >= key, or None."""
        node = self._root
        best = None
        while node is not None:
            c = self._compare(key, node.key)
            if c == 0:
                return node.key, node.value
            if c > 0:
                node = node.right
            else:
                best = node
                node = node.left
        return (best.key, best.value) if best is not None else None

    def pop_first(self) -> Tuple[K, V]:
        """Remove and return the entry with the smallest key."""
        if self._root is None:
            raise EmptyCollectionError("pop_first() on an empty TreeMap")
        self._root, node = _pop_min(self._root)
        self._size -= 1
        self._version += 1
        return node.key, node.value

    def pop_last(self) -> Tuple[K, V]:
        """Remove and return the entry with the largest key."""
        if self._root is None:
            raise EmptyCollectionError("pop_last() on an empty TreeMap")
        self._root, node = _pop_max(self._root)
        self._size -= 1
        self._version += 1
        return node.key, node.value

    @property
    def height(self) -> int:
        """Height of the underlying tree (0 when empty)."""
        return _height(self._root)

    # Iteration

    def _nodes(self) -> Iterator[_Node]:
        version = self._version
        stack: List[_Node] = []
        node = self._root
        while stack or node is not None:
            while node is not None:
                stack.append(node)
                node = node.left
            node = stack.pop()
            yield node
            if version != self._version:
                raise RuntimeError("TreeMap changed size during iteration")
            node = node.right

    def __iter__(self) -> Iterator[K]:
        for node in self._nodes():
            yield node.key

    def keys(self) -> Iterator[K]:
        return iter(self)

    def values(self) -> Iterator[V]:
        for node in self._nodes():
            yield node.value

    def items(self) -> Iterator[Tuple[K, V]]:
        for node in self._nodes():
            yield node.key, node.value

    def to_dict(self) -> Dict[K, V]:
        """Convert to a plain dict in ascending key order."""
        return dict(self.items())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TreeMap):
            return NotImplemented
        return len(self) == len(other) and list(self.items()) == list(other.items())

    __hash__ = None

    def __repr__(self) -> str:
        body = ", ".join(f"{k!r}: {v!r}" for k, v in self.items())
        return f"TreeMap({{{body}}})"
