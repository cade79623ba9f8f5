"""Territory engine: wires cache, diff, visibility, projection and culling.

Data flows one way per redraw:
    cache -> visibility filter -> projection -> culling -> renderer
with the active period diff attached to every frame.

Usage:
    engine = TerritoryEngine(source, renderer, frame_scheduler=AsyncioFrameScheduler())
    engine.attach(push_channel)

    await engine.refresh()
    await engine.refresh_diff(DiffPeriod.DAILY)
    engine.on_pan(viewport)
    engine.toggle_layer("resources")
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING

import tenacity

from hexfront.cache.snapshot_cache import SnapshotCache
from hexfront.core.models import ProjectedEntity, Snapshot
from hexfront.core.types import Clock
from hexfront.diff.engine import compute_territory_diff
from hexfront.diff.models import DiffPeriod, TerritoryDiff
from hexfront.pipeline.models import RenderFrame, RetryPolicy
from hexfront.spatial.frame import DEFAULT_LAYOUT, Frame, HexLayout, project_entities
from hexfront.spatial.regions import DEFAULT_REGIONS, RegionTable
from hexfront.viewport.culler import ViewportCuller
from hexfront.viewport.frames import AsyncioFrameScheduler, FrameScheduler
from hexfront.visibility.state import VisibilityState
from hexfront.visibility.tree import LayerTree

if TYPE_CHECKING:
    from hexfront.config import CacheSettings, DiffSettings, ViewportSettings
    from hexfront.sources.protocol import PreferenceStore, PushChannel, Renderer, SnapshotSource

logger = logging.getLogger(__name__)

DEFAULT_DIFF_LOOKBACK_MS = 6 * 60 * 60 * 1000


class TerritoryEngine:
    """Single owner of the render pipeline state.

    Args:
        source: Snapshot source collaborator.
        renderer: Receives a RenderFrame after every culling pass.
        cache: Snapshot cache. Defaults to a fresh SnapshotCache on ``clock``.
        visibility: Visibility state. Defaults to the default taxonomy,
            overlaid with ``preferences`` if given.
        frame_scheduler: Frame scheduler for culling. Defaults to asyncio.
        padding: Culling padding in draw-space units.
        layout: Grid layout constants.
        regions: Region table used for projection.
        retry_policy: Retry policy for ``fetch_latest``.
        preferences: Optional store for visibility flags.
        default_period: Period used by ``refresh_diff`` when none is given.
        diff_lookback_ms: Extra history fetched beyond the period.
        clock: Epoch-millisecond clock shared with the default cache.
    """

    def __init__(
        self,
        source: SnapshotSource,
        renderer: Renderer,
        *,
        cache: SnapshotCache | None = None,
        visibility: VisibilityState | None = None,
        frame_scheduler: FrameScheduler | None = None,
        padding: float = 0.0,
        layout: HexLayout = DEFAULT_LAYOUT,
        regions: RegionTable = DEFAULT_REGIONS,
        retry_policy: RetryPolicy | None = None,
        preferences: PreferenceStore | None = None,
        default_period: DiffPeriod = DiffPeriod.DAILY,
        diff_lookback_ms: int = DEFAULT_DIFF_LOOKBACK_MS,
        clock: Clock | None = None,
    ) -> None:
        self._source = source
        self._renderer = renderer
        self._cache = cache if cache is not None else SnapshotCache(clock=clock)
        self._preferences = preferences
        if visibility is None:
            saved = preferences.load() if preferences is not None else None
            visibility = VisibilityState.from_preferences(LayerTree.from_taxonomy(), saved)
        self._visibility = visibility
        self._layout = layout
        self._regions = regions
        self._retry_policy = retry_policy or RetryPolicy()
        self._default_period = default_period
        self._diff_lookback_ms = diff_lookback_ms

        self._culler: ViewportCuller[ProjectedEntity] = ViewportCuller(
            frame_scheduler or AsyncioFrameScheduler(), padding=padding, on_result=self._emit
        )
        self._disabled_regions: frozenset[str] = frozenset()
        self._frame_snapshot: Snapshot | None = None
        self._diff: TerritoryDiff | None = None
        self._tasks: set[asyncio.Task[Snapshot | None]] = set()
        self._fetch_task: asyncio.Future[Snapshot | None] | None = None
        self._closed = False
        self._unsubscribers: list[Callable[[], None]] = [
            self._cache.on_invalidate(self._on_invalidated)
        ]

    @classmethod
    def from_settings(
        cls,
        source: SnapshotSource,
        renderer: Renderer,
        *,
        cache_settings: CacheSettings,
        viewport_settings: ViewportSettings,
        diff_settings: DiffSettings,
        clock: Clock | None = None,
        **kwargs: object,
    ) -> TerritoryEngine:
        """Build an engine from typed settings. Extra kwargs go to __init__."""
        return cls(
            source,
            renderer,
            cache=SnapshotCache.from_settings(cache_settings, clock=clock),
            frame_scheduler=AsyncioFrameScheduler(viewport_settings.frame_interval_s),
            padding=viewport_settings.padding,
            default_period=DiffPeriod(diff_settings.default_period),
            diff_lookback_ms=diff_settings.lookback_ms,
            clock=clock,
            **kwargs,  # type: ignore[arg-type]
        )

    # --- Snapshots ---

    async def refresh(self) -> Snapshot | None:
        """Current snapshot from the cache, fetching when missing or expired."""
        snapshot = self._cache.get_latest()
        if snapshot is None:
            if self._fetch_task is None or self._fetch_task.done():
                self._fetch_task = asyncio.ensure_future(self._fetch_and_cache())
            snapshot = await asyncio.shield(self._fetch_task)
        self._rebuild_candidates()
        self._culler.trigger()
        return snapshot

    async def refresh_diff(self, period: DiffPeriod | None = None) -> TerritoryDiff | None:
        """Recompute the period diff for the current snapshot.

        Returns:
            The diff, or None when there is no current snapshot or no
            snapshot old enough to serve as a baseline.
        """
        period = period or self._default_period
        latest = await self.refresh()
        if latest is None:
            self._diff = None
            return None
        history = await self._source.fetch_since(period.duration_ms + self._diff_lookback_ms)
        self._diff = compute_territory_diff(latest, history, period)
        if self._diff is None:
            logger.debug("No %s baseline older than %s", period.value, latest.created_at)
        self._culler.trigger()
        return self._diff

    async def _fetch_and_cache(self) -> Snapshot | None:
        """Single in-flight fetch shared by every concurrent refresh."""
        fetched = await self._fetch_latest()
        if fetched is None:
            return None
        self._cache.set_latest(fetched)
        snapshot = self._cache.get_latest()
        if snapshot is None:
            logger.warning("Fetched snapshot %s is older than the update interval", fetched.id)
        return snapshot

    async def _fetch_latest(self) -> Snapshot | None:
        """Fetch with the configured retry policy."""
        policy = self._retry_policy
        if policy.max_attempts <= 1:
            return await self._source.fetch_latest()

        try:
            return await self._fetch_retrying(policy)
        except tenacity.RetryError as e:
            last_error = e.last_attempt.exception()
            if policy.on_exhausted == "fail":
                raise RuntimeError(
                    f"Snapshot source unavailable after {policy.max_attempts} attempts: "
                    f"{last_error!r}"
                ) from last_error
            logger.warning(
                "Giving up on snapshot fetch after %d attempts (last error: %r); no data",
                policy.max_attempts,
                last_error,
            )
            return None

    async def _fetch_retrying(self, policy: RetryPolicy) -> Snapshot | None:
        async for attempt in self._build_retryer(policy):
            with attempt:
                return await self._source.fetch_latest()
        return None  # pragma: no cover

    def _build_retryer(self, policy: RetryPolicy) -> tenacity.AsyncRetrying:
        """Tenacity retryer for ``fetch_latest``. Each failed attempt is logged at DEBUG."""
        wait: tenacity.wait.wait_base
        if policy.backoff == "linear":
            wait = tenacity.wait_incrementing(start=policy.base_delay, increment=policy.base_delay)
        elif policy.backoff == "exponential":
            wait = tenacity.wait_exponential(multiplier=policy.base_delay, min=policy.base_delay)
        else:
            wait = tenacity.wait_none()

        return tenacity.AsyncRetrying(
            stop=tenacity.stop_after_attempt(policy.max_attempts),
            wait=wait,
            before_sleep=tenacity.before_sleep_log(logger, logging.DEBUG),
            reraise=False,
        )

    # --- Invalidation ---

    def attach(self, channel: PushChannel) -> Callable[[], None]:
        """Invalidate the cache on every push notification (rate-limited by the cache)."""
        unsubscribe = channel.subscribe(self._cache.invalidate)
        self._unsubscribers.append(unsubscribe)
        return unsubscribe

    def _on_invalidated(self) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("Cache invalidated outside an event loop; refetch on next refresh")
            return
        task = loop.create_task(self.refresh())
        self._tasks.add(task)
        task.add_done_callback(self._on_background_done)

    def _on_background_done(self, task: asyncio.Task[Snapshot | None]) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logger.warning("Background refresh after invalidation failed: %r", error)

    async def wait_idle(self) -> None:
        """Wait for background refreshes started by invalidations.

        Failures are logged by the refresh task itself and not raised here.
        """
        while self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def close(self) -> None:
        """Unsubscribe everywhere, cancel background work and stop rendering."""
        self._closed = True
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        for task in self._tasks:
            task.cancel()
        if self._fetch_task is not None and not self._fetch_task.done():
            self._fetch_task.cancel()

    @property
    def closed(self) -> bool:
        return self._closed

    # --- Viewport and layers ---

    def on_pan(self, viewport: Frame) -> None:
        self._culler.on_pan(viewport)

    def on_zoom_end(self, viewport: Frame) -> None:
        self._culler.on_zoom_end(viewport)

    def toggle_layer(self, node_id: str) -> bool:
        """Toggle a visibility node, persist flags and re-cull. Returns the new flag."""
        value = self._visibility.toggle(node_id)
        if self._preferences is not None:
            self._preferences.save(self._visibility.as_preferences())
        self._rebuild_candidates()
        self._culler.trigger()
        return value

    def set_disabled_regions(self, region_ids: Iterable[str]) -> None:
        """Exclude entities in these regions from rendering."""
        self._disabled_regions = frozenset(region_ids)
        self._rebuild_candidates()
        self._culler.trigger()

    def _rebuild_candidates(self) -> None:
        snapshot = self._cache.get_latest()
        self._frame_snapshot = snapshot
        if snapshot is None:
            self._culler.set_candidates([])
            return
        entities = [
            entity
            for entity in self._visibility.filter_by_visibility(snapshot.entities)
            if entity.region not in self._disabled_regions
        ]
        self._culler.set_candidates(
            project_entities(entities, layout=self._layout, regions=self._regions)
        )

    def _emit(self, visible: list[ProjectedEntity]) -> None:
        if self._closed:
            logger.debug("Engine closed; dropping frame with %d markers", len(visible))
            return
        snapshot = self._frame_snapshot
        diff = self._diff
        if diff is not None and (snapshot is None or diff.latest_id != snapshot.id):
            diff = None
        self._renderer.render(
            RenderFrame(
                snapshot_id=snapshot.id if snapshot is not None else None,
                markers=tuple(visible),
                changes=tuple(diff.changes) if diff is not None else (),
                display_states=self._visibility.display_states(),
                period=diff.period if diff is not None else None,
            )
        )

    # --- Accessors ---

    @property
    def cache(self) -> SnapshotCache:
        return self._cache

    @property
    def visibility(self) -> VisibilityState:
        return self._visibility

    @property
    def culler(self) -> ViewportCuller[ProjectedEntity]:
        return self._culler

    @property
    def current_diff(self) -> TerritoryDiff | None:
        return self._diff
