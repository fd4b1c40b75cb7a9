"""
Caching Layer.

Provides the read-through price cache:
    - PriceStore: Lock-guarded item code -> PriceEntry mapping
    - TransparentCache: Read-through lookups and concurrent batches
    - CacheStats: Statistics tracking for cache operations
"""

from price_cache.caching.price_store import CacheStats, PriceStore
from price_cache.caching.transparent_cache import ResultOrder, TransparentCache

__all__ = [
    "CacheStats",
    "PriceStore",
    "ResultOrder",
    "TransparentCache",
]
