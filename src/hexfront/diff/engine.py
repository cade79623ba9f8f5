"""Snapshot diff engine.

Compares two snapshots by entity id and reports ownership changes. Entities
only in the newer snapshot (appeared) and only in the older one (gone) are
not changes.

Usage:
    changes = diff_snapshots(older, newer)

    baseline = select_baseline(history, latest.created_at, DiffPeriod.DAILY)
    report = compute_territory_diff(latest, history, DiffPeriod.WEEKLY)
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime

from hexfront.core.models import ChangeRecord, Entity, Snapshot
from hexfront.diff.models import DiffPeriod, TerritoryDiff


def index_entities(entities: Iterable[Entity]) -> dict[str, Entity]:
    """Entities keyed by id. A repeated id keeps the last occurrence."""
    return {entity.id: entity for entity in entities}


def diff_snapshots(older: Snapshot, newer: Snapshot) -> list[ChangeRecord]:
    """Ownership changes from ``older`` to ``newer``.

    The result is sorted by entity id, so it does not depend on entity order in
    either snapshot. Treat it as a set.
    """
    previous = index_entities(older.entities)
    current = index_entities(newer.entities)

    changes: list[ChangeRecord] = []
    for entity_id in sorted(current):
        before = previous.get(entity_id)
        if before is None:
            continue
        after = current[entity_id]
        if before.owner is not after.owner:
            changes.append(
                ChangeRecord(
                    entity_id=entity_id,
                    previous_owner=before.owner,
                    new_owner=after.owner,
                    observed_at=newer.created_at,
                    snapshot_id=newer.id,
                )
            )
    return changes


def select_baseline(
    history: Iterable[Snapshot], reference: datetime, period: DiffPeriod
) -> Snapshot | None:
    """Newest snapshot created strictly before ``reference - period``.

    Approximate by nature: the gap to ``reference`` is at least one period
    but can be longer when history is sparse.
    """
    cutoff = reference - period.duration
    best: Snapshot | None = None
    for snapshot in history:
        if snapshot.created_at < cutoff and (best is None or snapshot.created_at > best.created_at):
            best = snapshot
    return best


def compute_territory_diff(
    latest: Snapshot, history: Iterable[Snapshot], period: DiffPeriod
) -> TerritoryDiff | None:
    """Period diff of ``latest`` against its baseline, or None without one."""
    baseline = select_baseline(history, latest.created_at, period)
    if baseline is None:
        return None
    return TerritoryDiff(
        period=period,
        generated_at=latest.created_at,
        baseline_id=baseline.id,
        latest_id=latest.id,
        changes=diff_snapshots(baseline, latest),
    )
