"""
Interfaces Layer - Abstract Protocols for Dependencies.

Protocols:
    - PriceService: The expensive upstream lookup the cache wraps
    - MetricsCollector: Optional metrics sink

Design Principles:
    - Use typing.Protocol (not ABC) for Pythonic interfaces
    - Small, focused interfaces
"""

from price_cache.interfaces.metrics_collector import MetricsCollector
from price_cache.interfaces.price_service import PriceService

__all__ = ["MetricsCollector", "PriceService"]
