"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta

import pytest

from hexfront.core import (
    Entity,
    Faction,
    KindTag,
    MapFlag,
    Snapshot,
    derive_entity_id,
    epoch_ms,
)

NOW = datetime(2024, 6, 1, 12, 0, tzinfo=UTC)


class FakeClock:
    """Epoch-millisecond clock advanced by hand."""

    def __init__(self, now_ms: int) -> None:
        self.now = now_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FakeClock:
    """Clock frozen at NOW."""
    return FakeClock(epoch_ms(NOW))


@pytest.fixture
def make_entity():
    """Factory for entities with stable derived ids."""

    def _make(
        region: str = "KalokaiHex",
        x: float = 0.1,
        y: float = 0.2,
        owner: Faction = Faction.COLONIAL,
        kind: KindTag = KindTag.TOWN_BASE_1,
        flags: MapFlag = MapFlag.NONE,
    ) -> Entity:
        return Entity(
            id=derive_entity_id(region, x, y),
            owner=owner,
            region=region,
            x=x,
            y=y,
            kind=kind,
            flags=flags,
        )

    return _make


@pytest.fixture
def make_snapshot():
    """Factory for snapshots created ``age`` before NOW."""

    def _make(snapshot_id: str, *entities: Entity, age: timedelta = timedelta(0)) -> Snapshot:
        return Snapshot(id=snapshot_id, created_at=NOW - age, entities=tuple(entities))

    return _make
