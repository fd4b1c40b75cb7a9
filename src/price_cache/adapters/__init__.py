"""
Adapters Package - Infrastructure Implementations.

Concrete implementations of the protocols in the interfaces package.

Services:
    - MockPriceService: Fake prices for development/testing

Metrics:
    - InMemoryMetricsCollector: Simple in-memory collection
"""

from price_cache.adapters.metrics_collector import InMemoryMetricsCollector
from price_cache.adapters.mock_service import MockPriceService

__all__ = [
    "InMemoryMetricsCollector",
    "MockPriceService",
]
