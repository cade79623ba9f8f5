"""Pipeline models: retry configuration and per-redraw render payload."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Literal

from hexfront.core.models import ChangeRecord, ProjectedEntity
from hexfront.diff.models import DiffPeriod
from hexfront.visibility.state import DisplayState


@dataclass(frozen=True, slots=True)
class RetryPolicy:
    """Configuration for retrying failed snapshot fetches.

    Useful for sources backed by a remote store with transient failures.
    """

    max_attempts: int = 1
    """Maximum attempts (1 = no retry). Default: no retry."""

    backoff: Literal["none", "linear", "exponential"] = "none"
    """Backoff strategy between retries."""

    base_delay: float = 0.1
    """Base delay in seconds for backoff calculation."""

    on_exhausted: Literal["fail", "skip"] = "fail"
    """What to do when retries are exhausted: raise, or behave as if no snapshot exists."""


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """Everything the renderer needs for one redraw cycle.

    Attributes:
        snapshot_id: Snapshot the markers come from; None means no data.
        markers: Visible, projected entities.
        changes: Change records of the active diff period.
        display_states: Tri-state of every visibility node.
        period: Active diff period, if a diff has been computed.
    """

    snapshot_id: str | None
    markers: tuple[ProjectedEntity, ...] = ()
    changes: tuple[ChangeRecord, ...] = ()
    display_states: Mapping[str, DisplayState] = field(default_factory=dict)
    period: DiffPeriod | None = None

    @property
    def has_data(self) -> bool:
        return self.snapshot_id is not None

    @property
    def changed_ids(self) -> frozenset[str]:
        return frozenset(change.entity_id for change in self.changes)
