"""
Transparent Cache - Read-through Price Cache with Concurrent Batch Lookups.

Wraps any PriceService so that prices fetched within the last ``max_age``
seconds are served from memory instead of calling the service again.

Design Notes:
    - Decorator/Wrapper pattern around the price service
    - The store lock is never held while the service is called
    - Every service call runs on its own daemon thread and is bounded by
      ``lookup_timeout`` from the moment it starts; a timed-out call
      is abandoned, not cancelled, and its late price is still cached
    - Batches fan out one task per item code and fail on the first error
    - Concurrent misses for one item code each call the service unless
      ``single_flight`` is enabled
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, as_completed, wait
from datetime import timedelta
from enum import Enum
from functools import partial
from typing import TYPE_CHECKING, Callable, Dict, List, Optional, Union

from price_cache.caching.price_store import CacheStats, PriceStore
from price_cache.domain.entities import PriceEntry
from price_cache.domain.exceptions import (
    BatchFailed,
    CacheClosed,
    LookupFailed,
    LookupTimeout,
)
from price_cache.interfaces.metrics_collector import MetricsCollector
from price_cache.interfaces.price_service import PriceService

if TYPE_CHECKING:
    from price_cache.config.models import PriceCacheConfig

logger = logging.getLogger(__name__)

DEFAULT_LOOKUP_TIMEOUT_SECONDS = 2.0


class ResultOrder(str, Enum):
    """Order of prices returned by a batch lookup."""

    COMPLETION = "completion"  # Order in which lookups finished
    REQUEST = "request"  # Order of the requested item codes


class TransparentCache:
    """
    Read-through cache in front of a PriceService.

    Usage:
        service = MockPriceService()
        cache = TransparentCache(service, max_age=timedelta(minutes=1))

        # First call: cache miss, fetches from the service
        price = cache.get_price_for("AAPL")

        # Within a minute: cache hit, no service call
        price = cache.get_price_for("AAPL")

        # Several at once, looked up concurrently
        prices = cache.get_prices_for("AAPL", "MSFT", "JPM")
    """

    def __init__(
        self,
        service: PriceService,
        max_age: Union[float, timedelta],
        *,
        lookup_timeout: Optional[float] = DEFAULT_LOOKUP_TIMEOUT_SECONDS,
        single_flight: bool = False,
        result_order: ResultOrder = ResultOrder.COMPLETION,
        metrics_collector: Optional[MetricsCollector] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """
        Initialize the cache.

        Args:
            service: Underlying price service to wrap
            max_age: Freshness window, seconds or timedelta (0 disables caching)
            lookup_timeout: Upper bound in seconds for one service call
                (None waits indefinitely)
            single_flight: Collapse concurrent misses for one item code
                into a single service call
            result_order: Order of prices returned by get_prices_for
            metrics_collector: Optional metrics collector for tracking
            clock: Monotonic time source

        Raises:
            ValueError: If max_age is negative or lookup_timeout is not positive
        """
        if isinstance(max_age, timedelta):
            max_age = max_age.total_seconds()
        if lookup_timeout is not None and lookup_timeout <= 0:
            raise ValueError(
                f"lookup_timeout must be positive or None, got {lookup_timeout}"
            )

        self.service = service
        self.lookup_timeout = lookup_timeout
        self.single_flight = single_flight
        self.result_order = ResultOrder(result_order)
        self.metrics = metrics_collector
        self._clock = clock
        self._store = PriceStore(max_age)

        self._closed = False

        # Single-flight bookkeeping: one shared future per item code in flight
        self._inflight: Dict[str, Future] = {}
        self._inflight_lock = threading.Lock()

    @classmethod
    def from_config(
        cls,
        service: PriceService,
        config: PriceCacheConfig,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> TransparentCache:
        """
        Build a cache from a validated configuration.

        Args:
            service: Underlying price service to wrap
            config: Loaded configuration
            metrics_collector: Optional metrics collector

        Returns:
            Configured cache
        """
        return cls(
            service,
            max_age=config.cache.max_age_seconds,
            lookup_timeout=config.lookup.timeout_seconds,
            single_flight=config.cache.single_flight,
            result_order=ResultOrder(config.cache.result_order),
            metrics_collector=metrics_collector,
        )

    @property
    def max_age(self) -> float:
        """Freshness window in seconds."""
        return self._store.max_age

    def get_price_for(self, item_code: str) -> float:
        """
        Get the price for an item, from the cache or the service.

        A fresh cached price is returned without calling the service.
        Otherwise the service is called and its answer replaces the cached
        entry. A failed call leaves the cache untouched.

        Args:
            item_code: Identifier of the item

        Returns:
            The item's price

        Raises:
            LookupFailed: If the service failed for this item
            LookupTimeout: If the service did not answer in time
        """
        entry = self._store.get_fresh(item_code, self._clock())
        if entry is not None:
            self._record_count("price_cache.hit")
            return entry.price

        self._record_count("price_cache.miss")
        if self.single_flight:
            return self._fetch_shared(item_code)
        return self._fetch(item_code)

    def get_prices_for(self, *item_codes: str) -> List[float]:
        """
        Get prices for several items at once.

        One lookup per item code runs concurrently; some may be served from
        the cache, others from the service. The first failure fails the
        whole batch immediately. Lookups still in flight are left to finish
        in the background and still warm the cache.

        Args:
            *item_codes: Identifiers of the items

        Returns:
            One price per item code, in completion order unless the cache
            was built with ResultOrder.REQUEST

        Raises:
            BatchFailed: On the first failed lookup, wrapping its LookupFailed
        """
        if not item_codes:
            return []

        started = time.perf_counter()
        outcome = "failed"
        executor = ThreadPoolExecutor(
            max_workers=len(item_codes),
            thread_name_prefix="price-batch",
        )
        try:
            positions = {
                executor.submit(self.get_price_for, item_code): position
                for position, item_code in enumerate(item_codes)
            }
            prices = self._collect(positions)
            outcome = "ok"
            return prices
        finally:
            # Stragglers keep running; their results only land in the store
            executor.shutdown(wait=False)
            self._record_timing(
                "price_cache.batch_seconds",
                time.perf_counter() - started,
                tags={"outcome": outcome},
            )

    def peek(self, item_code: str) -> Optional[PriceEntry]:
        """
        Get the cached entry for an item without refreshing it.

        Args:
            item_code: Identifier of the item

        Returns:
            The stored entry (fresh or stale), or None
        """
        return self._store.peek(item_code)

    def get_stats(self) -> CacheStats:
        """Get a copy of the cache statistics."""
        return self._store.get_stats()

    def close(self) -> None:
        """Stop calling the service; cached prices can still be read."""
        self._closed = True

    def __enter__(self) -> TransparentCache:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _collect(self, positions: Dict[Future, int]) -> List[float]:
        """Gather batch results, raising on the first failure."""
        completed: List[float] = []
        by_position: Dict[int, float] = {}

        for future in as_completed(positions):
            try:
                price = future.result()
            except LookupFailed as e:
                logger.warning(f"Batch lookup failed fast: {e}")
                raise BatchFailed(e) from e
            completed.append(price)
            by_position[positions[future]] = price

        if self.result_order is ResultOrder.REQUEST:
            return [by_position[position] for position in range(len(positions))]
        return completed

    def _fetch(self, item_code: str) -> float:
        """Call the service and install the result."""
        started = time.perf_counter()
        try:
            price = self._call_service(item_code)
        except LookupTimeout:
            self._store.record_failure(timed_out=True)
            self._record_count("price_cache.lookup_timeout")
            raise
        except LookupFailed:
            self._store.record_failure()
            self._record_count("price_cache.lookup_failed")
            raise
        finally:
            self._record_timing(
                "price_cache.lookup_seconds", time.perf_counter() - started
            )

        self._store.put(item_code, price, self._clock())
        return price

    def _fetch_shared(self, item_code: str) -> float:
        """Fetch through a single in-flight call per item code."""
        with self._inflight_lock:
            shared = self._inflight.get(item_code)
            leader = shared is None
            if leader:
                shared = Future()
                self._inflight[item_code] = shared

        if not leader:
            logger.debug(f"Joining in-flight lookup: {item_code}")
            return shared.result()

        try:
            # A previous leader may have refreshed the entry since our miss
            entry = self._store.peek(item_code)
            if entry is not None and entry.is_fresh(self._clock(), self.max_age):
                price = entry.price
            else:
                price = self._fetch(item_code)
        except Exception as e:
            shared.set_exception(e)
            raise
        else:
            shared.set_result(price)
            return price
        finally:
            with self._inflight_lock:
                self._inflight.pop(item_code, None)

    def _start_lookup(self, item_code: str) -> Future:
        """
        Run one service call on its own daemon thread.

        The call starts immediately, so the caller's timeout measures the
        call itself. A stalled call only ties up its own thread.
        """
        future: Future = Future()
        future.set_running_or_notify_cancel()

        def run() -> None:
            try:
                price = self.service.get_price_for(item_code)
            except Exception as e:
                future.set_exception(e)
            else:
                future.set_result(price)

        threading.Thread(
            target=run,
            name=f"price-lookup-{item_code}",
            daemon=True,
        ).start()
        return future

    def _call_service(self, item_code: str) -> float:
        """Call the service, bounded by the lookup timeout."""
        if self._closed:
            raise CacheClosed(item_code)

        if self.lookup_timeout is None:
            try:
                return self.service.get_price_for(item_code)
            except Exception as e:
                logger.warning(f"Price lookup failed for {item_code}: {e}")
                raise LookupFailed(item_code, e) from e

        future = self._start_lookup(item_code)
        done, _ = wait([future], timeout=self.lookup_timeout)
        if not done:
            logger.warning(
                f"Price lookup for {item_code} timed out after {self.lookup_timeout}s"
            )
            future.add_done_callback(partial(self._install_late_result, item_code))
            raise LookupTimeout(item_code, self.lookup_timeout)

        try:
            return future.result()
        except Exception as e:
            logger.warning(f"Price lookup failed for {item_code}: {e}")
            raise LookupFailed(item_code, e) from e

    def _install_late_result(self, item_code: str, future: Future) -> None:
        """Cache the price of a call that finished after its caller gave up."""
        if future.cancelled() or future.exception() is not None:
            logger.debug(f"Abandoned lookup for {item_code} did not succeed")
            return
        self._store.put(item_code, future.result(), self._clock())
        logger.info(f"Late price for {item_code} installed after timeout")

    def _record_count(self, name: str) -> None:
        if self.metrics:
            self.metrics.record_count(name, 1)

    def _record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        if self.metrics:
            self.metrics.record_timing(name, duration_seconds, tags=tags)
