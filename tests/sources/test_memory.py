"""Tests for in-memory collaborators.

Why these tests exist:
- The engine trusts fetch_since to return history oldest first
- Bounded history must evict the oldest snapshot, not the last recorded
"""

from datetime import timedelta

import pytest

from hexfront.sources import (
    InMemoryPreferenceStore,
    InMemoryPushChannel,
    InMemorySnapshotSource,
    PreferenceStore,
    PushChannel,
    SnapshotSource,
)


def test_implementations_satisfy_protocols() -> None:
    assert isinstance(InMemorySnapshotSource(), SnapshotSource)
    assert isinstance(InMemoryPushChannel(), PushChannel)
    assert isinstance(InMemoryPreferenceStore(), PreferenceStore)


@pytest.mark.asyncio
async def test_fetch_latest(clock, make_snapshot) -> None:
    source = InMemorySnapshotSource(clock=clock)
    assert await source.fetch_latest() is None

    source.record(make_snapshot("new"))
    source.record(make_snapshot("old", age=timedelta(hours=1)))

    latest = await source.fetch_latest()
    assert latest is not None and latest.id == "new"
    assert source.fetch_count == 2


@pytest.mark.asyncio
async def test_fetch_since_is_oldest_first(clock, make_snapshot) -> None:
    source = InMemorySnapshotSource(clock=clock)
    for name, hours in [("c", 0), ("a", 5), ("b", 2), ("ancient", 48)]:
        source.record(make_snapshot(name, age=timedelta(hours=hours)))

    history = await source.fetch_since(6 * 60 * 60 * 1000)

    assert [s.id for s in history] == ["a", "b", "c"]


def test_bounded_history_evicts_oldest(make_snapshot) -> None:
    source = InMemorySnapshotSource(max_snapshots=2)
    source.record(make_snapshot("mid", age=timedelta(hours=1)))
    source.record(make_snapshot("new"))
    source.record(make_snapshot("old", age=timedelta(hours=2)))

    assert source.snapshot_count == 2
    assert source.get("old") is None
    assert source.get("mid") is not None

    source.clear()
    assert source.snapshot_count == 0


def test_invalid_history_size() -> None:
    with pytest.raises(ValueError):
        InMemorySnapshotSource(max_snapshots=0)


def test_push_channel_fan_out() -> None:
    channel = InMemoryPushChannel()
    calls: list[str] = []
    unsubscribe = channel.subscribe(lambda: calls.append("a"))
    channel.subscribe(lambda: calls.append("b"))

    channel.publish()
    unsubscribe()
    channel.publish()

    assert calls == ["a", "b", "b"]
    assert channel.subscriber_count == 1


def test_preference_store_copies() -> None:
    store = InMemoryPreferenceStore()
    assert store.load() is None

    prefs = {"resources": True}
    store.save(prefs)
    prefs["resources"] = False

    assert store.load() == {"resources": True}
