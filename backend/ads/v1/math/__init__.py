"""
Number theory helpers.

GCD and LCM over non-negative integers.
"""

from .gcd import ExtendedGcd, extended_gcd, gcd, gcd_many
from .lcm import lcm, lcm_many

__all__ = [
    "ExtendedGcd",
    "extended_gcd",
    "gcd",
    "gcd_many",
    "lcm",
    "lcm_many",
]
