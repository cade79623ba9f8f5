"""Tests for the snapshot cache.

Critical Invariants:
- A snapshot exactly one update interval old is expired; 1 ms younger is valid
- Validity depends on the snapshot's own timestamp, not on when it was cached
- Invalidations inside the cooldown are dropped: one clear, one notification
"""

from datetime import timedelta

import pytest

from hexfront.cache import SnapshotCache, format_duration
from hexfront.config import CacheSettings

INTERVAL = 15 * 60 * 1000


@pytest.fixture
def cache(clock) -> SnapshotCache:
    return SnapshotCache(clock=clock)


def test_empty_cache(cache: SnapshotCache) -> None:
    assert cache.get_latest() is None
    assert not cache.debug_info().has_cached


def test_fresh_snapshot_is_served(cache: SnapshotCache, make_snapshot) -> None:
    snapshot = make_snapshot("s1")
    cache.set_latest(snapshot)
    assert cache.get_latest() is snapshot


def test_validity_boundary(cache: SnapshotCache, make_snapshot) -> None:
    younger = make_snapshot("young", age=timedelta(milliseconds=INTERVAL - 1))
    cache.set_latest(younger)
    assert cache.get_latest() is younger

    exact = make_snapshot("exact", age=timedelta(milliseconds=INTERVAL))
    cache.set_latest(exact)
    assert cache.get_latest() is None


def test_validity_ignores_cache_time(cache: SnapshotCache, clock, make_snapshot) -> None:
    """Caching an old snapshot just now does not make it valid."""
    cache.set_latest(make_snapshot("old", age=timedelta(minutes=20)))
    assert cache.get_latest() is None


def test_entry_expires_as_time_passes(cache: SnapshotCache, clock, make_snapshot) -> None:
    cache.set_latest(make_snapshot("s1"))
    clock.advance(INTERVAL - 1)
    assert cache.get_latest() is not None

    clock.advance(1)
    assert cache.get_latest() is None
    assert not cache.debug_info().has_cached


def test_invalidation_storm_coalesces(cache: SnapshotCache, clock, make_snapshot) -> None:
    """Five invalidations within two seconds: one clear, one notification."""
    notified: list[int] = []
    cache.on_invalidate(lambda: notified.append(clock()))
    cache.set_latest(make_snapshot("s1"))

    results = []
    for _ in range(5):
        results.append(cache.invalidate())
        clock.advance(400)

    assert results == [True, False, False, False, False]
    assert len(notified) == 1
    assert cache.get_latest() is None

    cache.set_latest(make_snapshot("s2"))
    clock.advance(3_000)
    assert cache.invalidate() is True
    assert len(notified) == 2


def test_dropped_invalidation_keeps_entry(cache: SnapshotCache, clock, make_snapshot) -> None:
    cache.invalidate()
    snapshot = make_snapshot("s1")
    cache.set_latest(snapshot)
    clock.advance(1_000)

    assert cache.invalidate() is False
    assert cache.get_latest() is snapshot


def test_unsubscribe(cache: SnapshotCache) -> None:
    calls: list[str] = []
    unsubscribe = cache.on_invalidate(lambda: calls.append("a"))
    cache.on_invalidate(lambda: calls.append("b"))
    assert cache.listener_count == 2

    unsubscribe()
    unsubscribe()
    cache.invalidate()

    assert calls == ["b"]
    assert cache.listener_count == 1


def test_listener_may_unsubscribe_during_notify(cache: SnapshotCache) -> None:
    calls: list[str] = []

    def once() -> None:
        calls.append("once")
        unsubscribe()

    unsubscribe = cache.on_invalidate(once)
    cache.on_invalidate(lambda: calls.append("other"))

    cache.invalidate()

    assert calls == ["once", "other"]


def test_clear_does_not_notify(cache: SnapshotCache, make_snapshot) -> None:
    calls: list[str] = []
    cache.on_invalidate(lambda: calls.append("x"))
    cache.set_latest(make_snapshot("s1"))

    cache.clear()

    assert cache.get_latest() is None
    assert calls == []
    assert cache.invalidate() is True


def test_debug_info(cache: SnapshotCache, clock, make_snapshot) -> None:
    cache.set_latest(make_snapshot("s1", age=timedelta(minutes=5)))
    clock.advance(60_000)

    info = cache.debug_info()

    assert info.has_cached
    assert info.is_valid
    assert info.snapshot is not None and info.snapshot.id == "s1"
    assert info.cache_age_ms == 60_000
    assert info.snapshot_age_ms == 6 * 60_000


def test_from_settings(clock) -> None:
    cache = SnapshotCache.from_settings(CacheSettings(update_interval_ms=1_000), clock=clock)
    assert cache.update_interval_ms == 1_000


def test_invalid_interval() -> None:
    with pytest.raises(ValueError):
        SnapshotCache(update_interval_ms=0)


@pytest.mark.parametrize(
    ("ms", "expected"),
    [(45_000, "45s"), (150_000, "2m 30s"), (3_900_000, "1h 5m"), (999, "0s")],
)
def test_format_duration(ms, expected) -> None:
    assert format_duration(ms) == expected
