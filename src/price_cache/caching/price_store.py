"""
Price Store - Lock-guarded Mapping of Item Codes to Price Entries.

Design Notes:
    - One coarse lock around the dict; never held across a service call
    - Entries are frozen, so handing one out is a snapshot
    - Time-based staleness only: no size bound, no LRU, no deletion
    - Statistics tracked under the same lock
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Dict, List, Optional

from price_cache.domain.entities import PriceEntry

logger = logging.getLogger(__name__)


@dataclass
class CacheStats:
    """Cache statistics."""

    hits: int = 0
    misses: int = 0
    stale_refreshes: int = 0
    lookup_failures: int = 0
    timeouts: int = 0
    current_entries: int = 0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0


class PriceStore:
    """
    Thread-safe store of the most recent price per item code.

    A lookup either returns a fresh entry or reports a miss; stale entries
    stay in place until a successful refresh replaces them.
    """

    def __init__(self, max_age: float) -> None:
        """
        Initialize the store.

        Args:
            max_age: Freshness window in seconds (0 disables caching)

        Raises:
            ValueError: If max_age is negative
        """
        if max_age < 0:
            raise ValueError(f"max_age must be non-negative, got {max_age}")
        self._max_age = float(max_age)
        self._entries: Dict[str, PriceEntry] = {}
        self._lock = threading.Lock()
        self._stats = CacheStats()

    @property
    def max_age(self) -> float:
        """Freshness window in seconds."""
        return self._max_age

    def get_fresh(self, key: str, now: float) -> Optional[PriceEntry]:
        """
        Get the entry for a key if it is still fresh.

        Args:
            key: Item code
            now: Current clock reading

        Returns:
            Fresh entry, or None if absent or stale
        """
        with self._lock:
            entry = self._entries.get(key)

            if entry is None:
                self._stats.misses += 1
                logger.debug(f"Cache MISS: {key}")
                return None

            if not entry.is_fresh(now, self._max_age):
                self._stats.misses += 1
                self._stats.stale_refreshes += 1
                logger.debug(f"Cache STALE: {key}")
                return None

            self._stats.hits += 1
            logger.debug(f"Cache HIT: {key}")
            return entry

    def peek(self, key: str) -> Optional[PriceEntry]:
        """Get the stored entry regardless of freshness, without touching stats."""
        with self._lock:
            return self._entries.get(key)

    def put(self, key: str, price: float, now: float) -> PriceEntry:
        """
        Install a new entry, replacing any previous one.

        Args:
            key: Item code
            price: Price returned by the service
            now: Clock reading the entry's freshness is measured from

        Returns:
            The installed entry
        """
        entry = PriceEntry(price=price, created_at=now)
        with self._lock:
            self._entries[key] = entry
        logger.debug(f"Cache SET: {key} = {price}")
        return entry

    def record_failure(self, timed_out: bool = False) -> None:
        """Count a failed lookup."""
        with self._lock:
            self._stats.lookup_failures += 1
            if timed_out:
                self._stats.timeouts += 1

    def get_stats(self) -> CacheStats:
        """Get a copy of the cache statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                stale_refreshes=self._stats.stale_refreshes,
                lookup_failures=self._stats.lookup_failures,
                timeouts=self._stats.timeouts,
                current_entries=len(self._entries),
            )

    def keys(self) -> List[str]:
        """Snapshot of the cached item codes."""
        with self._lock:
            return list(self._entries)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._entries
