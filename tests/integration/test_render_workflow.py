"""End-to-end: raw upstream map items through to rendered frames.

Why these tests exist:
- Ingestion, projection, visibility, diff and culling only matter together
- The asyncio frame scheduler must drive real redraws without manual flushes
"""

import asyncio
from datetime import timedelta

import pytest

from hexfront import (
    AsyncioFrameScheduler,
    DiffPeriod,
    Entity,
    Faction,
    InMemoryPushChannel,
    InMemorySnapshotSource,
    RenderFrame,
    Snapshot,
    TerritoryEngine,
    count_victory_towns,
    grid_bounds,
)

RAW_WEEK_AGO = {
    "KalokaiHex": [
        {"x": 0.1, "y": 0.2, "teamId": "COLONIALS", "iconType": 56, "flags": 1},
        {"x": 0.7, "y": 0.4, "teamId": "NONE", "iconType": 20},
    ],
    "DeadLandsHex": [
        {"x": 0.5, "y": 0.5, "teamId": "WARDENS", "iconType": 45, "flags": 0x21},
    ],
}

RAW_LATEST = {
    "KalokaiHex": [
        {"x": 0.1, "y": 0.2, "teamId": "WARDENS", "iconType": 56, "flags": 1},
        {"x": 0.7, "y": 0.4, "teamId": "NONE", "iconType": 20},
    ],
    "DeadLandsHex": [
        {"x": 0.5, "y": 0.5, "teamId": "WARDENS", "iconType": 45, "flags": 0x21},
        {"x": 0.3, "y": 0.3, "teamId": "COLONIALS", "iconType": 999},
    ],
    "AtlantisHex": [
        {"x": 0.5, "y": 0.5, "teamId": "WARDENS", "iconType": 27},
    ],
}


def ingest(snapshot_id: str, created_at, raw: dict[str, list[dict]]) -> Snapshot:
    entities = tuple(
        Entity.from_map_item(region, item) for region, items in raw.items() for item in items
    )
    return Snapshot(id=snapshot_id, created_at=created_at, war_number=120, entities=entities)


class RecordingRenderer:
    def __init__(self) -> None:
        self.frames: list[RenderFrame] = []

    def render(self, frame: RenderFrame) -> None:
        self.frames.append(frame)


@pytest.mark.asyncio
async def test_full_render_cycle(clock, now) -> None:
    source = InMemorySnapshotSource(clock=clock)
    source.record(ingest("week-ago", now - timedelta(days=7, hours=1), RAW_WEEK_AGO))
    source.record(ingest("latest", now, RAW_LATEST))
    renderer = RecordingRenderer()
    channel = InMemoryPushChannel()
    engine = TerritoryEngine(
        source,
        renderer,
        frame_scheduler=AsyncioFrameScheduler(frame_interval=0.001),
        padding=64.0,
        clock=clock,
    )
    engine.attach(channel)

    latest = await engine.refresh()
    diff = await engine.refresh_diff(DiffPeriod.WEEKLY)
    engine.on_pan(grid_bounds())
    await asyncio.sleep(0.05)

    assert latest is not None
    assert count_victory_towns(latest).warden == 2

    frame = renderer.frames[-1]
    # Resource field hidden by default, unknown kind never shown, unknown region dropped
    assert {m.entity.region for m in frame.markers} == {"KalokaiHex", "DeadLandsHex"}
    assert len(frame.markers) == 2

    assert diff is not None
    assert [c.entity_id for c in frame.changes] == ["KalokaiHex-0.1000-0.2000"]
    assert frame.changes[0].previous_owner is Faction.COLONIAL

    engine.toggle_layer("resources")
    await asyncio.sleep(0.05)
    assert len(renderer.frames[-1].markers) == 3

    channel.publish()
    await engine.wait_idle()
    await asyncio.sleep(0.05)
    assert source.fetch_count >= 2
    assert renderer.frames[-1].snapshot_id == "latest"

    engine.close()
    assert channel.subscriber_count == 0
