"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic. Unknown keys
are rejected so a misspelt setting never silently falls back to a default.
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class CacheSettings(BaseModel):
    """Freshness and batching behavior."""

    model_config = ConfigDict(extra="forbid")

    max_age_seconds: float = Field(default=60.0, ge=0)
    single_flight: bool = False
    result_order: Literal["completion", "request"] = "completion"


class LookupSettings(BaseModel):
    """Bound on a single price service call; null waits indefinitely."""

    model_config = ConfigDict(extra="forbid")

    timeout_seconds: Optional[float] = Field(default=2.0, gt=0)


class PriceCacheConfig(BaseModel):
    """Root configuration object."""

    model_config = ConfigDict(extra="forbid")

    version: str = "1.0"
    cache: CacheSettings = Field(default_factory=CacheSettings)
    lookup: LookupSettings = Field(default_factory=LookupSettings)
