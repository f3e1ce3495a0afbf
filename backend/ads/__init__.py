"""
ads: generic algorithms and data structures.

This package provides reusable, tested building blocks: number theory
helpers (GCD, LCM) and ordered collections. The public API is versioned;
everything here is re-exported from ads.v1.
"""

from .config import Settings, configure, get_settings, load_settings, reset_settings
from .logging_config import get_logger, setup_logging
from .errors import (
    AdsError,
    ConfigError,
    EmptyCollectionError,
    IntegerOverflowError,
    KeyNotComparableError,
    NegativeValueError,
)
from .v1 import (
    ExtendedGcd,
    Map,
    TreeMap,
    extended_gcd,
    gcd,
    gcd_many,
    lcm,
    lcm_many,
)

__version__ = "0.1.0"
__all__ = [
    # Math
    "ExtendedGcd",
    "extended_gcd",
    "gcd",
    "gcd_many",
    "lcm",
    "lcm_many",
    # Collections
    "Map",
    "TreeMap",
    # Settings
    "Settings",
    "configure",
    "get_settings",
    "load_settings",
    "reset_settings",
    # Logging
    "get_logger",
    "setup_logging",
    # Errors
    "AdsError",
    "ConfigError",
    "EmptyCollectionError",
    "IntegerOverflowError",
    "KeyNotComparableError",
    "NegativeValueError",
]
