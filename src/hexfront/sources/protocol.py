"""Protocols for the engine's external collaborators.

These protocols define the boundaries to snapshot ingestion, push
notifications, rendering and preference persistence. Implementations live
outside the engine; in-memory versions for tests and demos are in
hexfront.sources.memory.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from hexfront.core.models import Snapshot
    from hexfront.pipeline.models import RenderFrame


@runtime_checkable
class SnapshotSource(Protocol):
    """Protocol for fetching snapshots from upstream storage.

    Example implementations:
        - InMemorySnapshotSource: Bounded history in memory (tests, demos)
        - A database-backed source querying a snapshots table

    Usage:
        latest = await source.fetch_latest()
        history = await source.fetch_since(7 * 24 * 3600 * 1000)
    """

    async def fetch_latest(self) -> Snapshot | None:
        """Most recent snapshot, or None if none exist."""
        ...

    async def fetch_since(self, duration_ms: int) -> list[Snapshot]:
        """Snapshots created within the last ``duration_ms``.

        Args:
            duration_ms: Size of the look-back window.

        Returns:
            Snapshots ordered oldest first.
        """
        ...


@runtime_checkable
class PushChannel(Protocol):
    """Protocol for zero-argument "something changed" notifications."""

    def subscribe(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register ``callback``. Returns an unsubscribe callable."""
        ...


@runtime_checkable
class Renderer(Protocol):
    """Protocol for the drawing surface. Owns all drawing concerns."""

    def render(self, frame: RenderFrame) -> None:
        """Draw one redraw cycle's worth of state."""
        ...


@runtime_checkable
class PreferenceStore(Protocol):
    """Protocol for persisting visibility flags across sessions."""

    def load(self) -> Mapping[str, bool] | None:
        """Previously saved flags by node id, or None."""
        ...

    def save(self, preferences: Mapping[str, bool]) -> None:
        """Persist flags by node id."""
        ...
