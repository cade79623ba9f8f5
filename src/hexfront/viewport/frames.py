"""Frame schedulers: run a callback on the next rendering frame.

The culler only needs "call this once, soon". The scheduler decides what
"soon" means: the next asyncio tick after a frame interval, or an explicit
flush in tests and headless runs.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from typing import Protocol, runtime_checkable


@runtime_checkable
class FrameScheduler(Protocol):
    """Protocol for deferring work to the next rendering frame."""

    def request_frame(self, callback: Callable[[], None]) -> None:
        """Run ``callback`` once on the next frame."""
        ...


class ManualFrameScheduler:
    """Frame scheduler driven by explicit ``flush()`` calls.

    Usage:
        frames = ManualFrameScheduler()
        culler = ViewportCuller(frames, on_result=render)
        culler.on_pan(bounds)
        frames.flush()  # runs the pending recomputation
    """

    def __init__(self) -> None:
        self._pending: list[Callable[[], None]] = []

    def request_frame(self, callback: Callable[[], None]) -> None:
        self._pending.append(callback)

    def flush(self) -> int:
        """Run every callback requested before this call. Returns how many ran."""
        callbacks, self._pending = self._pending, []
        for callback in callbacks:
            callback()
        return len(callbacks)

    @property
    def pending_count(self) -> int:
        return len(self._pending)


class AsyncioFrameScheduler:
    """Frame scheduler on the running asyncio loop.

    Args:
        frame_interval: Seconds until the frame callback runs (default 1/60).
        loop: Loop to schedule on. Defaults to the running loop at request time.
    """

    def __init__(
        self,
        frame_interval: float = 1 / 60,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._frame_interval = frame_interval
        self._loop = loop

    def request_frame(self, callback: Callable[[], None]) -> None:
        loop = self._loop or asyncio.get_running_loop()
        loop.call_later(self._frame_interval, callback)
