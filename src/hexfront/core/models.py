"""Value objects flowing through the engine.

Entities and snapshots are immutable and recreated on every ingestion.
Identity across snapshots is by ``Entity.id``, never by reference.

Usage:
    entity = Entity.from_map_item("KalokaiHex", {"x": 0.1, "y": 0.2, "teamId": "WARDENS",
                                                 "iconType": 56, "flags": 1})
    snapshot = Snapshot(id="s1", created_at=now, war_number=120, day_of_war=3,
                        entities=(entity,))
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from hexfront.core.enums import Faction, KindTag, MapFlag
from hexfront.core.types import epoch_ms


def derive_entity_id(region: str, x: float, y: float) -> str:
    """Stable entity id from region and normalized position.

    Four decimal places, so the same upstream feature gets the same id in
    every snapshot.
    """
    return f"{region}-{x:.4f}-{y:.4f}"


def _parse_timestamp(value: str | datetime) -> datetime:
    moment = value if isinstance(value, datetime) else datetime.fromisoformat(value)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


@dataclass(frozen=True, slots=True)
class Entity:
    """A point feature inside one region.

    Attributes:
        id: Stable id, see derive_entity_id.
        owner: Owning faction.
        region: Id of the HexRegion containing the entity.
        x: Normalized horizontal position in [0, 1] (0 = west edge).
        y: Normalized vertical position in [0, 1] (0 = top edge).
        kind: Classification used for visibility filtering.
        flags: Upstream flag bitmask.
    """

    id: str
    owner: Faction
    region: str
    x: float
    y: float
    kind: KindTag = KindTag.UNKNOWN
    flags: MapFlag = MapFlag.NONE

    @classmethod
    def from_map_item(cls, region: str, item: dict[str, Any]) -> Entity:
        """Build an entity from a raw upstream map item.

        Expects keys ``x``, ``y``, ``teamId``, ``iconType`` and optionally ``flags``.
        """
        x = float(item["x"])
        y = float(item["y"])
        return cls(
            id=derive_entity_id(region, x, y),
            owner=Faction.from_team_id(item.get("teamId")),
            region=region,
            x=x,
            y=y,
            kind=KindTag.from_icon(int(item["iconType"])),
            flags=MapFlag(int(item.get("flags", 0))),
        )

    def has_flag(self, flag: MapFlag) -> bool:
        return bool(self.flags & flag)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "owner": self.owner.value,
            "region": self.region,
            "x": self.x,
            "y": self.y,
            "kind": self.kind.value,
            "flags": int(self.flags),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Entity:
        """Create from dictionary (for deserialization)."""
        return cls(
            id=data["id"],
            owner=Faction(data["owner"]),
            region=data["region"],
            x=float(data["x"]),
            y=float(data["y"]),
            kind=KindTag(data.get("kind", KindTag.UNKNOWN.value)),
            flags=MapFlag(int(data.get("flags", 0))),
        )


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Immutable, timestamped capture of every entity at one instant.

    Attributes:
        id: Snapshot identifier assigned by ingestion.
        created_at: When the upstream state was captured (timezone-aware).
        war_number: War cycle number.
        day_of_war: Day within the war cycle.
        entities: All entities in the snapshot.
    """

    id: str
    created_at: datetime
    war_number: int = 0
    day_of_war: int = 0
    entities: tuple[Entity, ...] = field(default_factory=tuple)

    @property
    def created_at_ms(self) -> int:
        """created_at as integer epoch milliseconds."""
        return epoch_ms(self.created_at)

    def to_dict(self) -> dict[str, Any]:
        """Convert to JSON-serializable dictionary."""
        return {
            "id": self.id,
            "created_at": self.created_at.isoformat(),
            "war_number": self.war_number,
            "day_of_war": self.day_of_war,
            "entities": [entity.to_dict() for entity in self.entities],
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Snapshot:
        """Create from dictionary.

        No schema validation: a missing ``entities`` key or a malformed entity
        raises from here and is the ingestion layer's problem.
        """
        return cls(
            id=str(data["id"]),
            created_at=_parse_timestamp(data["created_at"]),
            war_number=int(data.get("war_number", 0)),
            day_of_war=int(data.get("day_of_war", 0)),
            entities=tuple(Entity.from_dict(item) for item in data["entities"]),
        )


@dataclass(frozen=True, slots=True)
class ChangeRecord:
    """Ownership change of one entity between two snapshots.

    Attributes:
        entity_id: Id of the entity whose owner changed.
        previous_owner: Owner in the older snapshot.
        new_owner: Owner in the newer snapshot.
        observed_at: created_at of the newer snapshot.
        snapshot_id: Id of the newer snapshot.
    """

    entity_id: str
    previous_owner: Faction
    new_owner: Faction
    observed_at: datetime
    snapshot_id: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "entity_id": self.entity_id,
            "previous_owner": self.previous_owner.value,
            "new_owner": self.new_owner.value,
            "observed_at": self.observed_at.isoformat(),
            "snapshot_id": self.snapshot_id,
        }


@dataclass(frozen=True, slots=True)
class ProjectedEntity:
    """An entity placed in draw-space."""

    entity: Entity
    lat: float
    lng: float
