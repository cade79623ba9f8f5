"""Sample upstream map items and an ingestion helper for the demos."""

from datetime import datetime

from hexfront import Entity, Snapshot

RAW_MAP_ITEMS: dict[str, list[dict]] = {
    "KalokaiHex": [
        {"x": 0.1, "y": 0.2, "teamId": "WARDENS", "iconType": 56, "flags": 0x01},
        {"x": 0.62, "y": 0.41, "teamId": "NONE", "iconType": 20},
        {"x": 0.45, "y": 0.8, "teamId": "COLONIALS", "iconType": 17},
    ],
    "DeadLandsHex": [
        {"x": 0.5, "y": 0.5, "teamId": "WARDENS", "iconType": 45, "flags": 0x21},
        {"x": 0.31, "y": 0.27, "teamId": "COLONIALS", "iconType": 29},
    ],
    "BasinSionnachHex": [
        {"x": 0.5, "y": 0.5, "teamId": "WARDENS", "iconType": 56, "flags": 0x03},
    ],
}


def ingest(
    snapshot_id: str,
    created_at: datetime,
    raw: dict[str, list[dict]],
    overrides: dict[str, str] | None = None,
) -> Snapshot:
    """Build a snapshot from raw items. ``overrides`` maps entity id -> teamId."""
    overrides = overrides or {}
    entities = []
    for region, items in raw.items():
        for item in items:
            entity = Entity.from_map_item(region, item)
            if entity.id in overrides:
                entity = Entity.from_map_item(region, {**item, "teamId": overrides[entity.id]})
            entities.append(entity)
    return Snapshot(id=snapshot_id, created_at=created_at, war_number=120, entities=tuple(entities))
