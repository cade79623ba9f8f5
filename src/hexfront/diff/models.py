"""Diff periods and period diff results."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any

from hexfront.core.models import ChangeRecord


class DiffPeriod(Enum):
    """Look-back period for territory change reports."""

    DAILY = "daily"
    WEEKLY = "weekly"

    @property
    def duration(self) -> timedelta:
        if self is DiffPeriod.WEEKLY:
            return timedelta(days=7)
        return timedelta(days=1)

    @property
    def duration_ms(self) -> int:
        return self.duration // timedelta(milliseconds=1)


@dataclass(slots=True)
class TerritoryDiff:
    """Ownership changes over one period.

    Attributes:
        period: Period the baseline was selected for.
        generated_at: created_at of the latest snapshot.
        baseline_id: Id of the older snapshot.
        latest_id: Id of the newer snapshot.
        changes: Change records sorted by entity id.
    """

    period: DiffPeriod
    generated_at: datetime
    baseline_id: str
    latest_id: str
    changes: list[ChangeRecord] = field(default_factory=list)

    @property
    def changed_ids(self) -> frozenset[str]:
        return frozenset(change.entity_id for change in self.changes)

    def is_empty(self) -> bool:
        return not self.changes

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "period": self.period.value,
            "generated_at": self.generated_at.isoformat(),
            "baseline_id": self.baseline_id,
            "latest_id": self.latest_id,
            "changes": [change.to_dict() for change in self.changes],
        }
