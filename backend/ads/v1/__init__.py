"""
Version 1 of the ads API.

Import from here to pin code to the v1 surface:

    from backend.ads.v1 import gcd, TreeMap
"""

from . import collection, math
from .collection import Map, TreeMap
from .math import ExtendedGcd, extended_gcd, gcd, gcd_many, lcm, lcm_many

__all__ = [
    "collection",
    "math",
    # Collections
    "Map",
    "TreeMap",
    # Math
    "ExtendedGcd",
    "extended_gcd",
    "gcd",
    "gcd_many",
    "lcm",
    "lcm_many",
]
