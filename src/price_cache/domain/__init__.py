"""
Domain Layer - Cache Entries and Errors.

Entities:
    - PriceEntry: An immutable cached price with its creation time

Exceptions:
    - PriceCacheError: Base class for all cache errors
    - LookupFailed: The price service failed for one item code
    - LookupTimeout: The price service did not answer in time
    - CacheClosed: A miss arrived after the cache was closed
    - BatchFailed: A batch lookup failed on its first error

Design Principles:
    - Immutable entries (frozen dataclasses)
    - No infrastructure dependencies
"""

from price_cache.domain.entities import PriceEntry
from price_cache.domain.exceptions import (
    BatchFailed,
    CacheClosed,
    LookupFailed,
    LookupTimeout,
    PriceCacheError,
)

__all__ = [
    "BatchFailed",
    "CacheClosed",
    "LookupFailed",
    "LookupTimeout",
    "PriceCacheError",
    "PriceEntry",
]
