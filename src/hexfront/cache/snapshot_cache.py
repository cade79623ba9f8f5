"""In-memory cache for the latest snapshot.

An entry is valid while the snapshot itself is younger than the upstream
update interval. How long ago it was cached locally does not matter.

Usage:
    cache = SnapshotCache(clock=clock)
    unsubscribe = cache.on_invalidate(schedule_refetch)

    cache.set_latest(snapshot)
    snapshot = cache.get_latest()   # None once expired

    push_channel.subscribe(cache.invalidate)
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hexfront.cache.limiter import CooldownLimiter
from hexfront.config.settings import INVALIDATION_COOLDOWN_MS, SNAPSHOT_UPDATE_INTERVAL_MS
from hexfront.core.models import Snapshot
from hexfront.core.types import Clock, system_clock_ms

if TYPE_CHECKING:
    from hexfront.config import CacheSettings

logger = logging.getLogger(__name__)

InvalidateListener = Callable[[], None]


@dataclass(frozen=True, slots=True)
class CacheEntry:
    """A cached snapshot. Replaced or discarded, never mutated."""

    snapshot: Snapshot
    cached_at: int


@dataclass(frozen=True, slots=True)
class CacheDebugInfo:
    """Cache status for diagnostics. Ages are in milliseconds."""

    has_cached: bool
    is_valid: bool
    snapshot: Snapshot | None
    cache_age_ms: int
    snapshot_age_ms: int


class SnapshotCache:
    """Holds the most recent snapshot with time-window validity.

    ``invalidate`` clears the entry and notifies listeners, at most once per
    cooldown window; calls inside the window are dropped.

    Args:
        update_interval_ms: Validity window measured from snapshot.created_at.
        invalidation_cooldown_ms: Minimum gap between effective invalidations.
        clock: Epoch-millisecond clock.
    """

    def __init__(
        self,
        update_interval_ms: int = SNAPSHOT_UPDATE_INTERVAL_MS,
        invalidation_cooldown_ms: int = INVALIDATION_COOLDOWN_MS,
        clock: Clock | None = None,
    ) -> None:
        if update_interval_ms <= 0:
            raise ValueError(f"update_interval_ms must be > 0, got {update_interval_ms}")
        self._update_interval_ms = update_interval_ms
        self._clock = clock or system_clock_ms
        self._limiter = CooldownLimiter(invalidation_cooldown_ms, self._clock)
        self._entry: CacheEntry | None = None
        self._listeners: list[InvalidateListener] = []

    @classmethod
    def from_settings(cls, settings: CacheSettings, clock: Clock | None = None) -> SnapshotCache:
        return cls(
            update_interval_ms=settings.update_interval_ms,
            invalidation_cooldown_ms=settings.invalidation_cooldown_ms,
            clock=clock,
        )

    def _is_valid(self, entry: CacheEntry, now: int) -> bool:
        return now - entry.snapshot.created_at_ms < self._update_interval_ms

    def get_latest(self) -> Snapshot | None:
        """Cached snapshot if still valid; expired entries are evicted."""
        entry = self._entry
        if entry is None:
            return None
        if not self._is_valid(entry, self._clock()):
            logger.debug("Cached snapshot %s expired; evicting", entry.snapshot.id)
            self._entry = None
            return None
        return entry.snapshot

    def set_latest(self, snapshot: Snapshot) -> None:
        """Cache ``snapshot``, replacing any previous entry."""
        self._entry = CacheEntry(snapshot=snapshot, cached_at=self._clock())
        logger.info("Cached snapshot %s (%d entities)", snapshot.id, len(snapshot.entities))

    def invalidate(self) -> bool:
        """Clear the entry and notify listeners, unless still cooling down.

        Returns:
            True if the invalidation took effect, False if it was coalesced.
        """
        if not self._limiter.try_acquire():
            logger.debug("Invalidation within cooldown; dropped")
            return False
        self._entry = None
        logger.info("Snapshot cache invalidated")
        for listener in list(self._listeners):
            listener()
        return True

    def clear(self) -> None:
        """Drop the entry without notifying listeners or touching the cooldown."""
        self._entry = None

    def on_invalidate(self, listener: InvalidateListener) -> Callable[[], None]:
        """Register a listener for effective invalidations.

        Returns:
            Zero-argument callable that unregisters the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def debug_info(self) -> CacheDebugInfo:
        entry = self._entry
        if entry is None:
            return CacheDebugInfo(
                has_cached=False, is_valid=False, snapshot=None, cache_age_ms=0, snapshot_age_ms=0
            )
        now = self._clock()
        return CacheDebugInfo(
            has_cached=True,
            is_valid=self._is_valid(entry, now),
            snapshot=entry.snapshot,
            cache_age_ms=now - entry.cached_at,
            snapshot_age_ms=now - entry.snapshot.created_at_ms,
        )

    @property
    def update_interval_ms(self) -> int:
        return self._update_interval_ms

    @property
    def listener_count(self) -> int:
        return len(self._listeners)


def format_duration(ms: int) -> str:
    """Human-readable duration: ``1h 5m``, ``2m 30s`` or ``45s``."""
    seconds = ms // 1000
    minutes = seconds // 60
    hours = minutes // 60
    if hours > 0:
        return f"{hours}h {minutes % 60}m"
    if minutes > 0:
        return f"{minutes}m {seconds % 60}s"
    return f"{seconds}s"
