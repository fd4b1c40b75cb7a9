"""
Price Cache - Transparent Read-Through Cache for Price Lookups.

Sits in front of an expensive, latency-bound price service and remembers
the prices it returns, so repeated lookups inside a freshness window do
not hit the service again. Batches of item codes are resolved concurrently
with all-or-nothing error semantics.

Architecture:
    - Ports & Adapters (PriceService protocol, pluggable services)
    - Thread-safe store guarded by a single lock
    - Fan-out over a thread pool with fail-fast aggregation
    - Configuration-driven behavior via YAML

Main Components:
    - domain: PriceEntry and the exception hierarchy
    - interfaces: Protocols for the price service and metrics
    - caching: PriceStore and TransparentCache
    - adapters: Mock price service, in-memory metrics
    - config: Configuration models and loaders

Example:
    >>> from price_cache import TransparentCache
    >>> from price_cache.adapters import MockPriceService
    >>> cache = TransparentCache(MockPriceService(), max_age=30.0)
    >>> prices = cache.get_prices_for("AAPL", "MSFT")
    >>> print(f"Fetched {len(prices)} prices")

"""

import logging

from price_cache.caching.transparent_cache import ResultOrder, TransparentCache
from price_cache.domain.exceptions import (
    BatchFailed,
    CacheClosed,
    LookupFailed,
    LookupTimeout,
    PriceCacheError,
)

__version__ = "0.1.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Price Cache.

    Call this at application startup to see log messages.
    Cache hits and misses are logged at DEBUG.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import price_cache
        >>> price_cache.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    logging.getLogger("price_cache").setLevel(level)


__all__ = [
    "BatchFailed",
    "CacheClosed",
    "LookupFailed",
    "LookupTimeout",
    "PriceCacheError",
    "ResultOrder",
    "TransparentCache",
    "configure_logging",
]
