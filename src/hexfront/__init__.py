"""Hexfront: territory snapshots on a hex-tiled world map.

Usage:
    from hexfront import (
        DiffPeriod, InMemorySnapshotSource, ManualFrameScheduler, TerritoryEngine,
        frame_of, get_region,
    )

    source = InMemorySnapshotSource()
    source.record(snapshot)

    scheduler = ManualFrameScheduler()
    engine = TerritoryEngine(source, renderer, frame_scheduler=scheduler)

    await engine.refresh()
    await engine.refresh_diff(DiffPeriod.DAILY)
    engine.on_pan(frame_of(get_region("Kalokai")).expanded(200))
    scheduler.flush()   # renderer.render(RenderFrame(...)) runs here
"""

__version__ = "0.1.0"

# Cache
from hexfront.cache import (
    CacheDebugInfo,
    CooldownLimiter,
    SnapshotCache,
    format_duration,
)

# Core primitives
from hexfront.core import (
    ChangeRecord,
    Clock,
    Entity,
    Faction,
    KindTag,
    MapFlag,
    ProjectedEntity,
    Snapshot,
    derive_entity_id,
)

# Diff
from hexfront.diff import (
    DiffPeriod,
    TerritoryDiff,
    VictoryCounts,
    compute_territory_diff,
    count_victory_towns,
    diff_snapshots,
    select_baseline,
)

# Pipeline
from hexfront.pipeline import (
    RenderFrame,
    RetryPolicy,
    TerritoryEngine,
)

# Sources
from hexfront.sources import (
    InMemoryPreferenceStore,
    InMemoryPushChannel,
    InMemorySnapshotSource,
    PreferenceStore,
    PushChannel,
    Renderer,
    SnapshotSource,
)

# Spatial frame
from hexfront.spatial import (
    DEFAULT_LAYOUT,
    DEFAULT_REGIONS,
    Frame,
    HexLayout,
    HexRegion,
    RegionTable,
    frame_of,
    get_region,
    grid_bounds,
    project_entities,
    project_point,
)

# Viewport
from hexfront.viewport import (
    AsyncioFrameScheduler,
    FrameScheduler,
    ManualFrameScheduler,
    ViewportCuller,
    cull,
)

# Visibility
from hexfront.visibility import (
    DisplayState,
    LayerTree,
    VisibilityNode,
    VisibilityState,
)

__all__ = [
    # Version
    "__version__",
    # Core
    "Clock",
    "Entity",
    "Snapshot",
    "ChangeRecord",
    "ProjectedEntity",
    "Faction",
    "KindTag",
    "MapFlag",
    "derive_entity_id",
    # Spatial
    "HexRegion",
    "RegionTable",
    "HexLayout",
    "Frame",
    "DEFAULT_LAYOUT",
    "DEFAULT_REGIONS",
    "frame_of",
    "get_region",
    "grid_bounds",
    "project_point",
    "project_entities",
    # Viewport
    "cull",
    "ViewportCuller",
    "FrameScheduler",
    "ManualFrameScheduler",
    "AsyncioFrameScheduler",
    # Visibility
    "LayerTree",
    "VisibilityNode",
    "VisibilityState",
    "DisplayState",
    # Diff
    "DiffPeriod",
    "TerritoryDiff",
    "VictoryCounts",
    "diff_snapshots",
    "select_baseline",
    "compute_territory_diff",
    "count_victory_towns",
    # Cache
    "SnapshotCache",
    "CacheDebugInfo",
    "CooldownLimiter",
    "format_duration",
    # Sources
    "SnapshotSource",
    "PushChannel",
    "Renderer",
    "PreferenceStore",
    "InMemorySnapshotSource",
    "InMemoryPushChannel",
    "InMemoryPreferenceStore",
    # Pipeline
    "TerritoryEngine",
    "RenderFrame",
    "RetryPolicy",
]
