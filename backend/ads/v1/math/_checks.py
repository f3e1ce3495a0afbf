"""Argument checks shared by the math functions."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from ...config import get_settings
from ...errors import IntegerOverflowError, NegativeValueError

logger = logging.getLogger(__name__)


def check_unsigned(value: int, name: str = "value") -> int:
    """
    Validate a single unsigned integer argument.

    Raises:
        TypeError: If value is not an int (bool is rejected too).
        NegativeValueError: If value is negative.
        IntegerOverflowError: If value exceeds the configured width.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    if value < 0:
        raise NegativeValueError(value, name)
    check_width(value)
    return value


def check_unsigned_many(elems: Iterable[int]) -> List[int]:
    """Validate every element and return them as a list."""
    return [check_unsigned(e, f"elems[{i}]") for i, e in enumerate(elems)]


def check_width(value: int, bits: Optional[int] = None) -> int:
    """Raise IntegerOverflowError if value does not fit the integer width."""
    if bits is None:
        bits = get_settings().integer_bits
    if bits is not None and value.bit_length() > bits:
        logger.debug("Rejecting %d: wider than %d bits", value, bits)
        raise IntegerOverflowError(value, bits)
    return value
