"""
Shared fixtures.
"""

import pytest

from backend.ads.config import reset_settings


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test with default settings and restore them afterwards."""
    reset_settings()
    yield
    reset_settings()
