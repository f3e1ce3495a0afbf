"""
Least common multiple.

Built on the binary GCD from gcd.py.
"""

from __future__ import annotations

from typing import Sequence

from ._checks import check_unsigned_many, check_width
from .gcd import gcd


def lcm_many(elems: Sequence[int]) -> int:
    """
    Find the LCM of every element.

    Examples:
        >>> lcm_many([42, 8, 144])
        1008
        >>> lcm_many([1, 2, 3, 4, 5])
        60

    Corner cases: an empty sequence gives 0, a single element gives itself,
    and any zero element makes the result 0.

    Raises:
        TypeError: If an element is not an int.
        NegativeValueError: If an element is negative.
        IntegerOverflowError: If an element, or the result, exceeds
            Settings.integer_bits.
    """
    values = check_unsigned_many(elems)

    if not values:
        return 0
    if len(values) == 1:
        return values[0]
    if 0 in values:
        return 0

    acc = values[0]
    for value in values[1:]:
        acc = check_width(acc // gcd(acc, value) * value)
    return acc


def lcm(lhs: int, rhs: int) -> int:
    """
    Find the LCM of a pair of numbers.

    ``lcm(0, 0)`` is 0.

        >>> lcm(105, 25)
        525
    """
    return lcm_many((lhs, rhs))
