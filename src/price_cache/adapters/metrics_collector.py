"""
In-Memory Metrics Collector.

Keeps the cache's counters as running totals and its timings as individual
samples, so tests and diagnostics can read hit rates and lookup latency
without an external metrics backend.
"""

from __future__ import annotations

from collections import Counter, defaultdict
from threading import Lock
from typing import Any, DefaultDict, Dict, List, Optional, Tuple

HIT = "price_cache.hit"
MISS = "price_cache.miss"

TimingSample = Tuple[float, Dict[str, str]]


class InMemoryMetricsCollector:
    """Thread-safe in-memory counters and timing samples."""

    def __init__(self) -> None:
        self._counts: Counter = Counter()
        self._timings: DefaultDict[str, List[TimingSample]] = defaultdict(list)
        self._lock = Lock()

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Add to a counter. Counters are totals, so tags are not kept."""
        with self._lock:
            self._counts[name] += value

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Keep one timing sample with its tags."""
        with self._lock:
            self._timings[name].append((duration_seconds, dict(tags or {})))

    def count(self, name: str) -> int:
        with self._lock:
            return self._counts[name]

    def timings(self, name: str) -> List[TimingSample]:
        with self._lock:
            return list(self._timings.get(name, []))

    def hit_rate(self) -> float:
        """Share of cache reads answered without calling the service."""
        with self._lock:
            hits, misses = self._counts[HIT], self._counts[MISS]
        total = hits + misses
        return hits / total if total else 0.0

    def get_metrics(self) -> Dict[str, Any]:
        """
        Summarize everything recorded.

        Counters map to ``{"total": n}``; timings map to
        ``{"count": samples, "total": seconds, "max": seconds}``.
        """
        with self._lock:
            summary: Dict[str, Any] = {
                name: {"total": total} for name, total in self._counts.items()
            }
            for name, samples in self._timings.items():
                durations = [duration for duration, _ in samples]
                summary[name] = {
                    "count": len(durations),
                    "total": sum(durations),
                    "max": max(durations),
                }
            return summary

    def clear(self) -> None:
        with self._lock:
            self._counts.clear()
            self._timings.clear()
