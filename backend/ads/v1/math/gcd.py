"""
Greatest common divisor.

Stein's binary algorithm for plain GCD, Euclid's algorithm for the
extended form (its quotients give the Bezout coefficients directly).
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from ._checks import check_unsigned, check_unsigned_many


class ExtendedGcd(NamedTuple):
    """Result of extended_gcd: ``x * lhs + y * rhs == gcd``."""

    gcd: int
    x: int
    y: int


def _trailing_zeros(n: int) -> int:
    # n must be positive
    return (n & -n).bit_length() - 1


def _stein(lhs: int, rhs: int) -> int:
    if lhs == 0 or rhs == 0:
        return lhs | rhs

    # common factor of 2
    shift = _trailing_zeros(lhs | rhs)

    rhs >>= _trailing_zeros(rhs)
    while lhs > 0:
        lhs >>= _trailing_zeros(lhs)
        if rhs > lhs:
            lhs, rhs = rhs, lhs
        lhs -= rhs

    return rhs << shift


def gcd_many(elems: Sequence[int]) -> int:
    """
    Find the GCD of every element.

    Examples:
        >>> gcd_many([42, 8, 144])
        2
        >>> gcd_many([89, 144, 233, 377, 610])
        1
        >>> gcd_many([25, 105, 235, 100])
        5

    Corner cases: an empty sequence gives 0, a single element gives itself,
    and zeros are ignored (all zeros give 0).

    Time complexity is O(K * N^2) for K numbers of at most N bits.

    Raises:
        TypeError: If an element is not an int.
        NegativeValueError: If an element is negative.
        IntegerOverflowError: If an element exceeds Settings.integer_bits.
    """
    values = check_unsigned_many(elems)

    if not values:
        return 0
    if len(values) == 1:
        return values[0]

    acc = 0
    for value in values:
        acc = _stein(acc, value)
        if acc == 1:
            break
    return acc


def gcd(lhs: int, rhs: int) -> int:
    """
    Find the GCD of a pair of numbers.

    ``gcd(0, 0)`` is 0. See gcd_many for the algorithm and errors.

        >>> gcd(42, 144)
        6
    """
    return gcd_many((lhs, rhs))


def extended_gcd(lhs: int, rhs: int) -> ExtendedGcd:
    """
    Find the GCD of a pair together with Bezout coefficients.

    Returns ``(gcd, x, y)`` such that ``x * lhs + y * rhs == gcd``.

        >>> extended_gcd(30, 20)
        ExtendedGcd(gcd=10, x=1, y=-1)
        >>> extended_gcd(0, 0)
        ExtendedGcd(gcd=0, x=1, y=0)

    Time complexity is O(log(min(lhs, rhs))).
    """
    check_unsigned(lhs, "lhs")
    check_unsigned(rhs, "rhs")

    x, x1 = 1, 0
    y, y1 = 0, 1
    a, b = lhs, rhs

    while b > 0:
        q = a // b
        x, x1 = x1, x - q * x1
        y, y1 = y1, y - q * y1
        a, b = b, a - q * b

    return ExtendedGcd(a, x, y)
