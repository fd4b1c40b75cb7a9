"""
Core Domain Entities.

A PriceEntry is produced only by a successful lookup and is never mutated;
a refresh installs a new entry in its place.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PriceEntry:
    """A cached price together with the clock reading at which it was fetched."""

    price: float
    created_at: float

    def expires_at(self, max_age: float) -> float:
        """Clock reading from which this entry is stale."""
        return self.created_at + max_age

    def is_fresh(self, now: float, max_age: float) -> bool:
        """
        Check whether the entry may still be served.

        Args:
            now: Current clock reading
            max_age: Freshness window in seconds

        Returns:
            True if ``now`` is strictly before the expiry time
        """
        return now < self.expires_at(max_age)
