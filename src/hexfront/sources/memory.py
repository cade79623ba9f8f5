"""In-memory collaborator implementations.

Suitable for tests, demos and single-process use. Not persistent.

Usage:
    source = InMemorySnapshotSource(max_snapshots=500, clock=clock)
    source.record(snapshot)

    channel = InMemoryPushChannel()
    channel.subscribe(cache.invalidate)
    channel.publish()
"""

from __future__ import annotations

from collections.abc import Callable, Mapping

from hexfront.core.models import Snapshot
from hexfront.core.types import Clock, system_clock_ms


class InMemorySnapshotSource:
    """Bounded snapshot history held in memory.

    Args:
        max_snapshots: Oldest snapshots are evicted beyond this count.
        clock: Epoch-millisecond clock used for ``fetch_since`` windows.
    """

    def __init__(self, max_snapshots: int = 1000, clock: Clock | None = None) -> None:
        if max_snapshots < 1:
            raise ValueError(f"max_snapshots must be >= 1, got {max_snapshots}")
        self._max_snapshots = max_snapshots
        self._clock = clock or system_clock_ms
        self._snapshots: dict[str, Snapshot] = {}
        self._fetch_count = 0

    def record(self, snapshot: Snapshot) -> None:
        """Store a snapshot, evicting the oldest if over the limit."""
        self._snapshots[snapshot.id] = snapshot
        while len(self._snapshots) > self._max_snapshots:
            oldest = min(self._snapshots.values(), key=lambda s: s.created_at_ms)
            del self._snapshots[oldest.id]

    def get(self, snapshot_id: str) -> Snapshot | None:
        return self._snapshots.get(snapshot_id)

    async def fetch_latest(self) -> Snapshot | None:
        self._fetch_count += 1
        if not self._snapshots:
            return None
        return max(self._snapshots.values(), key=lambda s: s.created_at_ms)

    async def fetch_since(self, duration_ms: int) -> list[Snapshot]:
        cutoff = self._clock() - duration_ms
        recent = [s for s in self._snapshots.values() if s.created_at_ms >= cutoff]
        return sorted(recent, key=lambda s: s.created_at_ms)

    def clear(self) -> None:
        self._snapshots.clear()

    @property
    def snapshot_count(self) -> int:
        return len(self._snapshots)

    @property
    def fetch_count(self) -> int:
        """Number of fetch_latest calls served."""
        return self._fetch_count


class InMemoryPushChannel:
    """Synchronous fan-out of zero-argument notifications."""

    def __init__(self) -> None:
        self._subscribers: list[Callable[[], None]] = []

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def publish(self) -> None:
        """Notify every subscriber once."""
        for callback in list(self._subscribers):
            callback()

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)


class InMemoryPreferenceStore:
    """Keeps the last saved visibility flags."""

    def __init__(self, initial: Mapping[str, bool] | None = None) -> None:
        self._saved: dict[str, bool] | None = dict(initial) if initial is not None else None

    def load(self) -> Mapping[str, bool] | None:
        return dict(self._saved) if self._saved is not None else None

    def save(self, preferences: Mapping[str, bool]) -> None:
        self._saved = dict(preferences)
