"""
Unit Tests for MockPriceService.
"""

from __future__ import annotations

import threading

import pytest

from price_cache.adapters.mock_service import MockPriceService
from price_cache.interfaces.price_service import PriceService


class TestMockPriceService:
    """Test cases for the fake price service."""

    def test_implements_protocol(self) -> None:
        assert isinstance(MockPriceService(), PriceService)

    def test_fixed_prices_returned_exactly(self) -> None:
        service = MockPriceService(prices={"A": 1.0})
        assert service.get_price_for("A") == 1.0

    def test_reference_prices_drift_within_one_percent(self) -> None:
        service = MockPriceService(seed=7)

        price = service.get_price_for("AAPL")

        assert 187.0 * 0.99 <= price <= 187.0 * 1.01

    def test_same_seed_same_prices(self) -> None:
        first = MockPriceService(seed=1)
        second = MockPriceService(seed=1)

        assert first.get_price_for("UNKNOWN") == second.get_price_for("UNKNOWN")

    def test_unknown_codes_get_positive_price(self) -> None:
        assert MockPriceService().get_price_for("XYZ") > 0

    def test_failing_codes_raise(self) -> None:
        service = MockPriceService(failing_codes=["BAD"])

        with pytest.raises(ConnectionError):
            service.get_price_for("BAD")

    def test_counts_calls(self) -> None:
        service = MockPriceService(failing_codes=["BAD"])
        service.get_price_for("A")
        service.get_price_for("A")
        with pytest.raises(ConnectionError):
            service.get_price_for("BAD")

        assert service.calls_for("A") == 2
        assert service.calls_for("BAD") == 1
        assert service.call_count == 3

    def test_stalled_codes_block_until_released(self) -> None:
        service = MockPriceService(prices={"S": 3.0}, stalled_codes=["S"])
        results: list = []
        worker = threading.Thread(target=lambda: results.append(service.get_price_for("S")))

        worker.start()
        worker.join(timeout=0.1)
        assert worker.is_alive()

        service.release_stalled()
        worker.join(timeout=2.0)
        assert results == [3.0]
