"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import random
from typing import Iterator

import pytest

from price_cache.adapters.metrics_collector import InMemoryMetricsCollector
from price_cache.adapters.mock_service import MockPriceService
from price_cache.caching.transparent_cache import TransparentCache


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def clock() -> FakeClock:
    """Create a fake clock for freshness tests."""
    return FakeClock()


@pytest.fixture
def sample_prices() -> dict:
    """Fixed prices returned exactly by the mock service."""
    return {"AAPL": 187.0, "MSFT": 402.0, "JPM": 170.0}


@pytest.fixture
def mock_service(sample_prices) -> Iterator[MockPriceService]:
    """Create mock price service; stalled calls are released on teardown."""
    service = MockPriceService(seed=42, prices=sample_prices)
    yield service
    service.release_stalled()


@pytest.fixture
def metrics_collector() -> InMemoryMetricsCollector:
    """Create metrics collector for testing."""
    return InMemoryMetricsCollector()


@pytest.fixture
def cache(mock_service, clock) -> Iterator[TransparentCache]:
    """Create a cache with a 60s freshness window over the mock service."""
    cache = TransparentCache(mock_service, max_age=60.0, clock=clock)
    yield cache
    cache.close()
