"""
Unit Tests for bounded service calls.

Test Aspects Covered:
    ✅ Timeout surfaces as a LookupFailed variant
    ✅ Batches fail fast on a stalled lookup
    ✅ Late answers from abandoned calls are still cached
    ✅ Large batches and stalled calls do not delay healthy lookups
"""

from __future__ import annotations

import time

import pytest

from price_cache.adapters.mock_service import MockPriceService
from price_cache.caching.transparent_cache import TransparentCache
from price_cache.domain.exceptions import BatchFailed, LookupFailed, LookupTimeout


@pytest.fixture
def fast_timeout_cache(mock_service, clock, metrics_collector):
    """Cache whose service calls give up after 100ms."""
    cache = TransparentCache(
        mock_service,
        max_age=60,
        lookup_timeout=0.1,
        metrics_collector=metrics_collector,
        clock=clock,
    )
    yield cache
    cache.close()


class TestLookupTimeout:
    """Stalled service calls."""

    def test_stalled_lookup_raises_timeout(
        self, fast_timeout_cache, mock_service
    ) -> None:
        """
        SCENARIO: Service never answers
        EXPECTED: LookupTimeout after the configured timeout
        """
        mock_service.stalled_codes.add("AAPL")

        started = time.monotonic()
        with pytest.raises(LookupTimeout) as exc_info:
            fast_timeout_cache.get_price_for("AAPL")
        elapsed = time.monotonic() - started

        assert exc_info.value.key == "AAPL"
        assert exc_info.value.timeout == 0.1
        assert isinstance(exc_info.value.cause, TimeoutError)
        assert elapsed < 1.0

    def test_timeout_is_a_lookup_failure(
        self, fast_timeout_cache, mock_service
    ) -> None:
        mock_service.stalled_codes.add("AAPL")

        with pytest.raises(LookupFailed):
            fast_timeout_cache.get_price_for("AAPL")

    def test_timeout_leaves_cache_untouched(
        self, fast_timeout_cache, mock_service
    ) -> None:
        mock_service.stalled_codes.add("AAPL")

        with pytest.raises(LookupTimeout):
            fast_timeout_cache.get_price_for("AAPL")

        assert fast_timeout_cache.peek("AAPL") is None

    def test_timeout_counted(
        self, fast_timeout_cache, mock_service, metrics_collector
    ) -> None:
        mock_service.stalled_codes.add("AAPL")

        with pytest.raises(LookupTimeout):
            fast_timeout_cache.get_price_for("AAPL")

        stats = fast_timeout_cache.get_stats()
        assert stats.timeouts == 1
        assert stats.lookup_failures == 1
        assert metrics_collector.get_metrics()["price_cache.lookup_timeout"]["total"] == 1

    def test_late_answer_is_cached(self, fast_timeout_cache, mock_service) -> None:
        """
        SCENARIO: Timed-out call eventually succeeds
        EXPECTED: Its price is installed for later readers
        """
        mock_service.stalled_codes.add("AAPL")
        with pytest.raises(LookupTimeout):
            fast_timeout_cache.get_price_for("AAPL")

        mock_service.release_stalled()

        deadline = time.monotonic() + 3.0
        while fast_timeout_cache.peek("AAPL") is None and time.monotonic() < deadline:
            time.sleep(0.01)
        assert fast_timeout_cache.peek("AAPL").price == 187.0
        assert fast_timeout_cache.get_price_for("AAPL") == 187.0
        assert mock_service.calls_for("AAPL") == 1

    def test_service_timeout_error_is_not_our_timeout(self, clock) -> None:
        """A TimeoutError raised by the service is an ordinary failure."""

        class TimingOutService:
            def get_price_for(self, item_code: str) -> float:
                raise TimeoutError("upstream gateway timeout")

        with TransparentCache(TimingOutService(), max_age=60, clock=clock) as cache:
            with pytest.raises(LookupFailed) as exc_info:
                cache.get_price_for("AAPL")

        assert not isinstance(exc_info.value, LookupTimeout)


class TestBatchTimeout:
    """Stalled lookups inside a batch."""

    def test_stalled_lookup_fails_batch(
        self, fast_timeout_cache, mock_service
    ) -> None:
        """
        SCENARIO: One item code stalls, the others answer
        EXPECTED: BatchFailed wrapping LookupTimeout, without waiting for the stall
        """
        mock_service.stalled_codes.add("MSFT")

        started = time.monotonic()
        with pytest.raises(BatchFailed) as exc_info:
            fast_timeout_cache.get_prices_for("AAPL", "MSFT", "JPM")
        elapsed = time.monotonic() - started

        assert isinstance(exc_info.value.cause, LookupTimeout)
        assert exc_info.value.key == "MSFT"
        assert elapsed < 1.0


class TestTimeoutScope:
    """The timeout bounds each call from the moment it starts."""

    def test_large_batch_with_healthy_latency(self, clock) -> None:
        """
        SCENARIO: 40 item codes, each answering in 0.3s under a 0.5s timeout
        EXPECTED: Every price returned; no lookup waits behind another
        """
        service = MockPriceService(latency_seconds=0.3)
        item_codes = [f"K{i}" for i in range(40)]

        with TransparentCache(
            service, max_age=60, lookup_timeout=0.5, clock=clock
        ) as cache:
            prices = cache.get_prices_for(*item_codes)

        assert len(prices) == 40
        assert service.call_count == 40

    def test_stalled_calls_do_not_starve_later_lookups(
        self, fast_timeout_cache, mock_service
    ) -> None:
        """
        SCENARIO: 40 stalled lookups time out and stay blocked in the service
        EXPECTED: A later lookup for a healthy item code still succeeds
        """
        stalled = [f"S{i}" for i in range(40)]
        mock_service.stalled_codes.update(stalled)

        with pytest.raises(BatchFailed):
            fast_timeout_cache.get_prices_for(*stalled)
        for item_code in stalled[:3]:
            with pytest.raises(LookupTimeout):
                fast_timeout_cache.get_price_for(item_code)

        assert fast_timeout_cache.get_price_for("AAPL") == 187.0
