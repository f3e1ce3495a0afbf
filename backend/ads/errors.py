"""
Exception hierarchy for ads.

Every error derives from AdsError and also from the builtin exception a
caller would naturally expect, so ``except ValueError`` keeps working.
"""

from __future__ import annotations


class AdsError(Exception):
    """Base class for all ads errors."""


class ConfigError(AdsError):
    """Settings could not be loaded or failed validation."""


class NegativeValueError(AdsError, ValueError):
    """An unsigned operation received a negative argument."""

    def __init__(self, value: int, name: str = "value"):
        self.value = value
        self.name = name
        super().__init__(f"{name} must be non-negative, got {value}")


class IntegerOverflowError(AdsError, OverflowError):
    """A value does not fit the configured integer width."""

    def __init__(self, value: int, bits: int):
        self.value = value
        self.bits = bits
        super().__init__(f"{value} does not fit in {bits} unsigned bits")


class KeyNotComparableError(AdsError, TypeError):
    """A key cannot be ordered against the keys already stored."""

    def __init__(self, key, other):
        self.key = key
        self.other = other
        super().__init__(
            f"key {key!r} ({type(key).__name__}) is not comparable with "
            f"{other!r} ({type(other).__name__})"
        )


class EmptyCollectionError(AdsError, KeyError):
    """An operation needs at least one element but the collection is empty."""

    def __str__(self) -> str:
        return self.args[0] if self.args else "collection is empty"
