"""
Exception hierarchy for price lookups.

Timeouts are a kind of lookup failure, so callers that only care about
"did the lookup work" can catch LookupFailed alone.
"""

from __future__ import annotations


class PriceCacheError(Exception):
    """Base class for all price cache errors."""
    pass


class LookupFailed(PriceCacheError):
    """Raised when the price service fails for an item code."""

    def __init__(self, key: str, cause: BaseException) -> None:
        self.key = key
        self.cause = cause
        super().__init__(f"getting price for {key!r} from service: {cause}")


class LookupTimeout(LookupFailed):
    """Raised when the price service does not answer within the lookup timeout."""

    def __init__(self, key: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(
            key, TimeoutError(f"deadline of {timeout:.2f}s exceeded")
        )


class BatchFailed(PriceCacheError):
    """
    Raised when any lookup of a batch fails.

    Carries the first failure observed. Other lookups of the same batch may
    have failed too; the reported key is not necessarily the only one.
    """

    def __init__(self, cause: LookupFailed) -> None:
        self.cause = cause
        super().__init__(f"batch lookup failed: {cause}")

    @property
    def key(self) -> str:
        """Item code of the first observed failure."""
        return self.cause.key


class CacheClosed(LookupFailed):
    """Raised when a miss needs the service after the cache was closed."""

    def __init__(self, key: str) -> None:
        super().__init__(key, RuntimeError("cache is closed"))
