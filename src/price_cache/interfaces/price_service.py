"""
Price Service Protocol.

Defines the upstream lookup the cache sits in front of. Calls are assumed
to be expensive (they take time). The cache makes no assumption about
idempotence, ordering or rate limits: every call is independent and is
never retried.

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - Failures are signalled by raising any exception
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class PriceService(Protocol):
    """Abstract interface for price lookups."""

    def get_price_for(self, item_code: str) -> float:
        """
        Get the current price for an item.

        Args:
            item_code: Identifier of the item

        Returns:
            The item's price

        Raises:
            Exception: Any error means the lookup failed
        """
        ...
