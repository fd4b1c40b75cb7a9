"""
Configuration Package - Models and Loaders.

    - Pydantic models for type-safe configuration
    - Layered YAML loading: file, profile (config/profiles/<name>.yaml),
      explicit overrides

Configuration Structure:
    - PriceCacheConfig: Root configuration object
    - CacheSettings: Freshness window, single-flight, result order
    - LookupSettings: Service call timeout
"""

from price_cache.config.loader import (
    config_from_layers,
    load_config,
    merge_settings,
    read_settings,
)
from price_cache.config.models import CacheSettings, LookupSettings, PriceCacheConfig

__all__ = [
    "CacheSettings",
    "LookupSettings",
    "PriceCacheConfig",
    "config_from_layers",
    "load_config",
    "merge_settings",
    "read_settings",
]
