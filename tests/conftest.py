"""
Shared test configuration and fixtures for all tests.
Provides a controllable clock, in-memory storage and sample entries.
"""

import asyncio
import time
from datetime import datetime, timedelta

import numpy as np
import pytest

from bodyweight.database.adapters import MemoryAdapter
from bodyweight.database.weight_store import WeightRecordStore
from bodyweight.models import DailyDataPoint, WeightEntry
from bodyweight.utils import epoch_millis


# =============================================================================
# PYTEST CONFIGURATION
# =============================================================================

def pytest_configure(config):
    """Register custom markers for test categorization."""
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "critical: marks tests guarding the one-entry-per-day rule"
    )


# =============================================================================
# COMMON FIXTURES
# =============================================================================

class FakeClock:
    """Callable clock the store reads instead of datetime.now."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


@pytest.fixture
def run():
    """Run a coroutine to completion."""
    return asyncio.run


@pytest.fixture
def numpy_random_seed():
    """Set a consistent numpy random seed for reproducible tests."""
    np.random.seed(42)
    yield
    np.random.seed()


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 1, 1, 8, 0, 0))


@pytest.fixture
def memory_adapter():
    return MemoryAdapter()


@pytest.fixture
def store(memory_adapter, clock):
    return WeightRecordStore(memory_adapter, clock=clock)


@pytest.fixture
def sample_entries():
    """Five consecutive days, 100 -> 103, written each morning."""
    weights = [100.0, 102.0, 101.0, 105.0, 103.0]
    entries = []
    for i, weight in enumerate(weights):
        written = datetime(2024, 1, 1 + i, 7, 30)
        entries.append(WeightEntry(
            date=f"2024-01-{1 + i:02d}",
            weight=weight,
            timestamp=epoch_millis(written),
        ))
    return entries


@pytest.fixture
def workout_days():
    """Eight days, three of which had a workout with positive volume."""
    return [
        DailyDataPoint(date="2024-01-01", has_workout=True, volume=1200.0),
        DailyDataPoint(date="2024-01-02", has_workout=False, volume=0.0),
        DailyDataPoint(date="2024-01-03", has_workout=True, volume=0.0),
        DailyDataPoint(date="2024-01-04", has_workout=False, volume=0.0, has_food=True),
        DailyDataPoint(date="2024-01-05", has_workout=True, volume=1500.0),
        DailyDataPoint(date="2024-01-06", has_workout=False, volume=300.0),
        DailyDataPoint(date="2024-01-07", has_workout=False, volume=0.0),
        DailyDataPoint(date="2024-01-08", has_workout=True, volume=900.0),
    ]


@pytest.fixture
def fixed_offset_tz(monkeypatch):
    """Run the test with local time at UTC-5 (POSIX TZ string, no tz database needed)."""
    if not hasattr(time, "tzset"):
        pytest.skip("time.tzset not available on this platform")
    monkeypatch.setenv("TZ", "EST+05")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
