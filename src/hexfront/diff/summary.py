"""Ownership summaries of a single snapshot."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass

from hexfront.core.enums import Faction, MapFlag
from hexfront.core.models import Snapshot


@dataclass(frozen=True, slots=True)
class VictoryCounts:
    """Victory towns per side. Scorched towns count for nobody."""

    colonial: int = 0
    warden: int = 0
    neutral: int = 0
    scorched: int = 0

    @property
    def total(self) -> int:
        return self.colonial + self.warden + self.neutral + self.scorched


def count_victory_towns(snapshot: Snapshot) -> VictoryCounts:
    """Count victory-flagged entities by owner."""
    counts: Counter[str] = Counter()
    for entity in snapshot.entities:
        if not entity.has_flag(MapFlag.VICTORY_BASE):
            continue
        if entity.has_flag(MapFlag.SCORCHED):
            counts["scorched"] += 1
        elif entity.owner is Faction.COLONIAL:
            counts["colonial"] += 1
        elif entity.owner is Faction.WARDEN:
            counts["warden"] += 1
        else:
            counts["neutral"] += 1
    return VictoryCounts(**counts)


def owner_counts(snapshot: Snapshot) -> Counter[Faction]:
    """Number of entities held by each faction."""
    return Counter(entity.owner for entity in snapshot.entities)
