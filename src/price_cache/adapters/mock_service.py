"""
Mock Price Service.

A fake price service for development and testing. Generates deterministic
prices that drift slightly on every call, can simulate latency, failures
and calls that never return, and counts every call it receives.
"""

from __future__ import annotations

import hashlib
import random
import threading
import time
from collections import Counter
from typing import Dict, Iterable, Optional


class MockPriceService:
    """Fake price service for development and testing."""

    # Reference prices; unknown item codes get a stable derived price
    MOCK_PRICES: Dict[str, float] = {
        "AAPL": 187.0,
        "MSFT": 402.0,
        "GOOGL": 141.0,
        "AMZN": 155.0,
        "JPM": 170.0,
        "SAP": 151.0,
        "BTC": 43000.0,
        "ETH": 2300.0,
        "EURUSD": 1.09,
    }

    def __init__(
        self,
        seed: int = 42,
        prices: Optional[Dict[str, float]] = None,
        latency_seconds: float = 0.0,
        failing_codes: Iterable[str] = (),
        stalled_codes: Iterable[str] = (),
    ) -> None:
        """
        Initialize mock service.

        Args:
            seed: Random seed for reproducible drift
            prices: Fixed prices returned exactly, without drift
            latency_seconds: Delay added to every call
            failing_codes: Item codes whose lookups raise
            stalled_codes: Item codes whose lookups block until release_stalled()
        """
        self._rng = random.Random(seed)
        self._fixed_prices = dict(prices or {})
        self.latency_seconds = latency_seconds
        self.failing_codes = set(failing_codes)
        self.stalled_codes = set(stalled_codes)
        self._calls: Counter = Counter()
        self._lock = threading.Lock()
        self._release = threading.Event()

    def get_price_for(self, item_code: str) -> float:
        """Get a mock price for an item code."""
        with self._lock:
            self._calls[item_code] += 1

        if self.latency_seconds > 0:
            time.sleep(self.latency_seconds)

        if item_code in self.stalled_codes:
            self._release.wait()

        if item_code in self.failing_codes:
            raise ConnectionError(f"price service unavailable for {item_code}")

        with self._lock:
            if item_code in self._fixed_prices:
                return self._fixed_prices[item_code]
            drift = self._rng.uniform(-0.01, 0.01)
        return round(self._base_price(item_code) * (1 + drift), 4)

    def set_price(self, item_code: str, price: float) -> None:
        """Fix the price returned for an item code from now on."""
        with self._lock:
            self._fixed_prices[item_code] = price

    def release_stalled(self) -> None:
        """Let every stalled call return."""
        self._release.set()

    @property
    def call_count(self) -> int:
        """Total number of calls received."""
        with self._lock:
            return sum(self._calls.values())

    def calls_for(self, item_code: str) -> int:
        """Number of calls received for one item code."""
        with self._lock:
            return self._calls[item_code]

    def _base_price(self, item_code: str) -> float:
        if item_code in self.MOCK_PRICES:
            return self.MOCK_PRICES[item_code]
        digest = hashlib.sha256(item_code.encode()).hexdigest()[:8]
        return 10.0 + int(digest, 16) % 49000 / 100
