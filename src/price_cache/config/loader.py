"""
Configuration Loader - YAML Files, Profiles and Overrides.

Settings may sit at the top level of a YAML file or under a ``price_cache``
section, so the cache can share an application's config file. Layers are
applied in order (file, profile, explicit overrides) and the merged result
is validated once against PriceCacheConfig.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from price_cache.config.models import PriceCacheConfig

logger = logging.getLogger(__name__)

SECTION = "price_cache"
PROFILES_DIR = Path("config") / "profiles"


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    overrides: Optional[Mapping[str, Any]] = None,
    base_path: Optional[Path] = None,
) -> PriceCacheConfig:
    """
    Load cache settings from YAML.

    Args:
        config_path: Settings file, relative paths resolved against base_path
        profile: Name of a file in ``config/profiles`` layered on top
        overrides: Settings applied last, e.g. from the command line
        base_path: Directory holding the settings and ``config/profiles``

    Returns:
        Validated PriceCacheConfig object

    Raises:
        FileNotFoundError: If the settings file or profile doesn't exist
        ValueError: If a file does not hold a mapping
        ValidationError: If the merged settings are invalid
    """
    root = base_path or Path(".")
    path = Path(config_path)
    if not path.is_absolute():
        path = root / path

    layers = [read_settings(path)]

    if profile:
        profile_path = root / PROFILES_DIR / f"{profile}.yaml"
        if not profile_path.exists():
            raise FileNotFoundError(f"Profile not found: {profile}")
        logger.info(f"Applying price cache profile '{profile}'")
        layers.append(read_settings(profile_path))

    if overrides:
        layers.append(dict(overrides))

    return config_from_layers(*layers)


def config_from_layers(*layers: Mapping[str, Any]) -> PriceCacheConfig:
    """Merge settings layers, later ones winning, and validate the result."""
    merged: Dict[str, Any] = {}
    for layer in layers:
        merged = merge_settings(merged, layer)
    return PriceCacheConfig.model_validate(merged)


def merge_settings(
    base: Mapping[str, Any],
    overlay: Mapping[str, Any],
) -> Dict[str, Any]:
    """Recursively merge overlay into a copy of base."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = merge_settings(current, value)
        else:
            merged[key] = value
    return merged


def read_settings(path: Path) -> Dict[str, Any]:
    """Read one YAML file, unwrapping the ``price_cache`` section if present."""
    with open(path, encoding="utf-8") as f:
        document = yaml.safe_load(f)

    if document is None:
        return {}
    if not isinstance(document, dict):
        raise ValueError(
            f"{path}: expected a mapping of settings, got {type(document).__name__}"
        )
    section = document.get(SECTION, document)
    return section or {}
