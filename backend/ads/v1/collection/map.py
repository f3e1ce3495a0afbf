"""
Map interface.

A Map associates totally ordered keys with values. The three primitive
operations report what was there before, so callers never need a separate
lookup to learn whether a key existed.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, Optional, TypeVar

K = TypeVar("K")
V = TypeVar("V")

_MISSING = object()


class Map(ABC, Generic[K, V]):
    """
    Abstract ordered-key map.

    Subclasses implement get, insert, erase, __len__ and the private hook
    ``_find(key, default)``, which returns the stored value or ``default``
    when key is absent (``default`` is a sentinel, never None, so a stored
    None is still found). Everything else (``in``, item access, is_empty)
    is derived from those.

    A stored value of None is allowed; use ``key in m`` to tell it apart
    from a missing key.
    """

    @abstractmethod
    def get(self, key: K) -> Optional[V]:
        """Return the value for key, or None if absent."""

    @abstractmethod
    def erase(self, key: K) -> Optional[V]:
        """Remove key and return its value, or None if absent."""

    @abstractmethod
    def insert(self, key: K, value: V) -> Optional[V]:
        """Store value under key and return the previous value, or None."""

    @abstractmethod
    def _find(self, key: K, default=_MISSING):
        """Return the stored value, or default when key is absent."""

    @abstractmethod
    def __len__(self) -> int:
        ...

    def is_empty(self) -> bool:
        return len(self) == 0

    def __contains__(self, key: object) -> bool:
        return self._find(key, _MISSING) is not _MISSING

    def __getitem__(self, key: K) -> V:
        value = self._find(key, _MISSING)
        if value is _MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: K, value: V) -> None:
        self.insert(key, value)

    def __delitem__(self, key: K) -> None:
        if key not in self:
            raise KeyError(key)
        self.erase(key)
