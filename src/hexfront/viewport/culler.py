"""Viewport culling with per-frame coalescing.

Usage:
    visible = cull(markers, viewport, padding=64.0)

    # Event-driven: any number of pan/zoom events per frame, one recompute
    culler = ViewportCuller(AsyncioFrameScheduler(), padding=64.0, on_result=render)
    culler.set_candidates(markers)
    culler.on_pan(viewport)
    culler.on_zoom_end(viewport)
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import TYPE_CHECKING, Generic, Protocol, TypeVar

from hexfront.spatial.frame import Frame
from hexfront.viewport.frames import FrameScheduler

if TYPE_CHECKING:
    from hexfront.config import ViewportSettings

logger = logging.getLogger(__name__)


class HasLatLng(Protocol):
    """Anything with a draw-space position."""

    @property
    def lat(self) -> float: ...

    @property
    def lng(self) -> float: ...


P = TypeVar("P", bound=HasLatLng)


def cull(points: Iterable[P], viewport: Frame, padding: float = 0.0) -> list[P]:
    """Points inside ``viewport`` grown by ``padding`` on all sides.

    Closed interval: a point exactly on the padded edge is visible.
    Input order is preserved.

    Raises:
        ValueError: If padding is negative.
    """
    if padding < 0:
        raise ValueError(f"padding must be >= 0, got {padding}")
    area = viewport.expanded(padding)
    return [point for point in points if area.contains(point.lat, point.lng)]


class ViewportCuller(Generic[P]):
    """Recomputes the visible subset at most once per rendering frame.

    Pan and zoom-end events record the newest viewport and schedule a
    recomputation. While one is pending, further events only replace the
    viewport (last writer wins); nothing is queued. The pending flag is cleared
    after the recomputation has run.

    Holds no entity set of its own beyond the candidate list handed in by
    ``set_candidates``.

    Args:
        scheduler: Frame scheduler deciding when the recomputation runs.
        padding: Draw-space margin around the viewport.
        on_result: Called with the visible subset after every recomputation.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        padding: float = 0.0,
        on_result: Callable[[list[P]], None] | None = None,
    ) -> None:
        if padding < 0:
            raise ValueError(f"padding must be >= 0, got {padding}")
        self._scheduler = scheduler
        self._padding = padding
        self._on_result = on_result
        self._candidates: Sequence[P] = ()
        self._viewport: Frame | None = None
        self._pending = False
        self._visible: list[P] = []
        self._recompute_count = 0

    @classmethod
    def from_settings(
        cls,
        scheduler: FrameScheduler,
        settings: ViewportSettings,
        on_result: Callable[[list[P]], None] | None = None,
    ) -> ViewportCuller[P]:
        return cls(scheduler, padding=settings.padding, on_result=on_result)

    def set_candidates(self, candidates: Sequence[P]) -> None:
        """Replace the candidate list (already visibility-filtered and projected)."""
        self._candidates = candidates

    def on_pan(self, viewport: Frame) -> None:
        self.trigger(viewport)

    def on_zoom_end(self, viewport: Frame) -> None:
        self.trigger(viewport)

    def trigger(self, viewport: Frame | None = None) -> bool:
        """Request a recomputation on the next frame.

        Args:
            viewport: New viewport; None keeps the current one.

        Returns:
            True if a new frame was scheduled, False if one was already pending.
        """
        if viewport is not None:
            self._viewport = viewport
        if self._pending:
            logger.debug("Cull already scheduled for next frame; trigger coalesced")
            return False
        self._pending = True
        self._scheduler.request_frame(self._run)
        return True

    def recompute(self) -> list[P]:
        """Run culling now against the current candidates and viewport."""
        if self._viewport is None:
            visible: list[P] = []
        else:
            visible = cull(self._candidates, self._viewport, self._padding)
        self._visible = visible
        self._recompute_count += 1
        if self._on_result is not None:
            self._on_result(visible)
        return visible

    def _run(self) -> None:
        try:
            self.recompute()
        finally:
            self._pending = False

    @property
    def visible(self) -> list[P]:
        """Result of the most recent recomputation."""
        return list(self._visible)

    @property
    def viewport(self) -> Frame | None:
        return self._viewport

    @property
    def padding(self) -> float:
        return self._padding

    @property
    def is_pending(self) -> bool:
        return self._pending

    @property
    def recompute_count(self) -> int:
        return self._recompute_count
