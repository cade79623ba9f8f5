"""Configuration module using Pydantic Settings.

Usage:
    from hexfront.config import CacheSettings

    settings = CacheSettings(update_interval_ms=60_000)
"""

from hexfront.config.settings import (
    INVALIDATION_COOLDOWN_MS,
    SNAPSHOT_UPDATE_INTERVAL_MS,
    CacheSettings,
    DiffSettings,
    ViewportSettings,
)

__all__ = [
    "CacheSettings",
    "ViewportSettings",
    "DiffSettings",
    "SNAPSHOT_UPDATE_INTERVAL_MS",
    "INVALIDATION_COOLDOWN_MS",
]
