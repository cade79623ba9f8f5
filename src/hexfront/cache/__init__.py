"""Snapshot cache with time-window validity and rate-limited invalidation."""

from hexfront.cache.limiter import CooldownLimiter
from hexfront.cache.snapshot_cache import (
    CacheDebugInfo,
    CacheEntry,
    InvalidateListener,
    SnapshotCache,
    format_duration,
)

__all__ = [
    "SnapshotCache",
    "CacheEntry",
    "CacheDebugInfo",
    "InvalidateListener",
    "CooldownLimiter",
    "format_duration",
]
