"""
Pytest configuration and shared fixtures for Homebase tests.

Test Categories:
- unit: Fast tests of the pure drift/outreach/streak engines
- api: Tests that go through the FastAPI app with TestClient

Run categories:
- pytest -m unit              # Engine tests only
- pytest -m "not api"         # Skip HTTP tests
- pytest                      # All tests
"""
from datetime import datetime
from zoneinfo import ZoneInfo

import pytest


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "unit: Fast unit tests")
    config.addinivalue_line("markers", "api: Tests through the HTTP layer")


@pytest.fixture
def tz():
    """Fixed timezone so day boundaries don't depend on the machine running the tests."""
    return ZoneInfo("America/New_York")


@pytest.fixture
def now(tz):
    """Fixed 'current instant': mid-afternoon so both earlier and later same-day times exist."""
    return datetime(2026, 3, 15, 15, 30, tzinfo=tz)
