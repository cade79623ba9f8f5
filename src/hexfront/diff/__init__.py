"""Snapshot diffing and ownership summaries."""

from hexfront.diff.engine import (
    compute_territory_diff,
    diff_snapshots,
    index_entities,
    select_baseline,
)
from hexfront.diff.models import DiffPeriod, TerritoryDiff
from hexfront.diff.summary import VictoryCounts, count_victory_towns, owner_counts

__all__ = [
    # Engine
    "diff_snapshots",
    "index_entities",
    "select_baseline",
    "compute_territory_diff",
    # Models
    "DiffPeriod",
    "TerritoryDiff",
    # Summary
    "VictoryCounts",
    "count_victory_towns",
    "owner_counts",
]
