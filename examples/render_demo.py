"""Territory rendering walkthrough.

Demonstrates:
- Ingesting raw map items into snapshots
- Cached refresh and period diffs
- Viewport culling driven by the asyncio frame scheduler
- Layer toggling with persisted preferences
- Push invalidation with cooldown
"""

import asyncio
import logging
from datetime import UTC, datetime, timedelta

from hexfront import (
    AsyncioFrameScheduler,
    DiffPeriod,
    InMemoryPreferenceStore,
    InMemoryPushChannel,
    InMemorySnapshotSource,
    RenderFrame,
    TerritoryEngine,
    count_victory_towns,
    frame_of,
    get_region,
    grid_bounds,
)

from .sample_data import RAW_MAP_ITEMS, ingest


class ConsoleRenderer:
    """Prints a one-line summary per frame."""

    def render(self, frame: RenderFrame) -> None:
        if not frame.has_data:
            print("  [frame] no data")
            return
        regions = sorted({m.entity.region for m in frame.markers})
        print(
            f"  [frame] {frame.snapshot_id}: {len(frame.markers)} markers in {regions}, "
            f"{len(frame.changes)} changes"
        )
        for change in frame.changes:
            print(
                f"          {change.entity_id}: "
                f"{change.previous_owner.value} -> {change.new_owner.value}"
            )


async def main() -> None:
    now = datetime.now(UTC)
    source = InMemorySnapshotSource()
    source.record(
        ingest(
            "day-1",
            now - timedelta(days=1, hours=2),
            RAW_MAP_ITEMS,
            overrides={"KalokaiHex-0.1000-0.2000": "COLONIALS"},
        )
    )
    source.record(ingest("latest", now - timedelta(minutes=3), RAW_MAP_ITEMS))

    channel = InMemoryPushChannel()
    preferences = InMemoryPreferenceStore()
    engine = TerritoryEngine(
        source,
        ConsoleRenderer(),
        frame_scheduler=AsyncioFrameScheduler(),
        padding=64.0,
        preferences=preferences,
    )
    engine.attach(channel)

    print("1. Refresh and daily diff over the whole map")
    latest = await engine.refresh()
    await engine.refresh_diff(DiffPeriod.DAILY)
    engine.on_pan(grid_bounds())
    await asyncio.sleep(0.05)

    if latest is not None:
        counts = count_victory_towns(latest)
        print(f"   Victory towns: Colonial {counts.colonial}, Warden {counts.warden}")

    print("2. Zoom into Kalokai (several events, one redraw)")
    kalokai = frame_of(get_region("Kalokai"))
    for padding in (400.0, 200.0, 0.0):
        engine.on_zoom_end(kalokai.expanded(padding))
    await asyncio.sleep(0.05)

    print("3. Show resources")
    engine.toggle_layer("resources")
    await asyncio.sleep(0.05)
    print(f"   Saved preference: resources={preferences.load()['resources']}")

    print("4. Push storm (only the first notification refetches)")
    for _ in range(5):
        channel.publish()
    await engine.wait_idle()
    await asyncio.sleep(0.05)
    print(f"   Upstream fetches so far: {source.fetch_count}")

    engine.close()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    asyncio.run(main())
