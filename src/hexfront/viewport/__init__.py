"""Viewport culling and frame scheduling."""

from hexfront.viewport.culler import HasLatLng, ViewportCuller, cull
from hexfront.viewport.frames import (
    AsyncioFrameScheduler,
    FrameScheduler,
    ManualFrameScheduler,
)

__all__ = [
    "cull",
    "ViewportCuller",
    "HasLatLng",
    # Schedulers
    "FrameScheduler",
    "ManualFrameScheduler",
    "AsyncioFrameScheduler",
]
