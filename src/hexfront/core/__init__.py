"""Core primitives: enums, value objects and clock helpers.

Architecture Note:
    core/ holds immutable data and pure helpers only. Stateful owners live in
    cache/, visibility/ and viewport/.
"""

from hexfront.core.enums import ICON_KINDS, Faction, KindTag, MapFlag
from hexfront.core.models import (
    ChangeRecord,
    Entity,
    ProjectedEntity,
    Snapshot,
    derive_entity_id,
)
from hexfront.core.types import Clock, epoch_ms, from_epoch_ms, system_clock_ms

__all__ = [
    # Types
    "Clock",
    "epoch_ms",
    "from_epoch_ms",
    "system_clock_ms",
    # Enums
    "Faction",
    "KindTag",
    "MapFlag",
    "ICON_KINDS",
    # Models
    "Entity",
    "Snapshot",
    "ChangeRecord",
    "ProjectedEntity",
    "derive_entity_id",
]
