"""
Collections.

Map is the abstract interface; TreeMap is an AVL-balanced implementation.
"""

from .map import Map
from .tree_map import TreeMap

__all__ = ["Map", "TreeMap"]
