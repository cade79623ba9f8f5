"""Tests for core value objects and enums.

Why these tests exist:
- Entity ids are the only identity across snapshots; formatting must be stable
- Unknown upstream values must resolve to UNKNOWN instead of raising
- Serialized snapshots are what the ingestion layer stores
"""

from datetime import UTC, datetime

import pytest

from hexfront.core import (
    ICON_KINDS,
    Entity,
    Faction,
    KindTag,
    MapFlag,
    Snapshot,
    derive_entity_id,
    epoch_ms,
    from_epoch_ms,
)


def test_derive_entity_id_uses_four_decimals() -> None:
    assert derive_entity_id("KalokaiHex", 0.1, 0.2) == "KalokaiHex-0.1000-0.2000"
    assert derive_entity_id("X", 0.5, 1) == "X-0.5000-1.0000"


def test_from_map_item_maps_all_fields() -> None:
    entity = Entity.from_map_item(
        "KalokaiHex", {"x": 0.1, "y": 0.2, "teamId": "WARDENS", "iconType": 56, "flags": 1}
    )

    assert entity.id == "KalokaiHex-0.1000-0.2000"
    assert entity.owner is Faction.WARDEN
    assert entity.region == "KalokaiHex"
    assert entity.kind is KindTag.TOWN_BASE_1
    assert entity.has_flag(MapFlag.VICTORY_BASE)
    assert not entity.has_flag(MapFlag.SCORCHED)


@pytest.mark.parametrize(
    ("team_id", "expected"),
    [
        ("COLONIALS", Faction.COLONIAL),
        ("WARDENS", Faction.WARDEN),
        ("NONE", Faction.NEUTRAL),
        (None, Faction.NEUTRAL),
    ],
)
def test_team_id_mapping(team_id, expected) -> None:
    assert Faction.from_team_id(team_id) is expected


def test_unknown_upstream_values_resolve_to_unknown() -> None:
    """Unrecognized kinds and owners must not raise."""
    assert KindTag.from_icon(999) is KindTag.UNKNOWN
    assert KindTag("Not_A_Tag") is KindTag.UNKNOWN
    assert Faction("Pirates") is Faction.UNKNOWN

    entity = Entity.from_map_item("KalokaiHex", {"x": 0.5, "y": 0.5, "iconType": 999})
    assert entity.kind is KindTag.UNKNOWN
    assert entity.owner is Faction.NEUTRAL
    assert entity.flags == MapFlag.NONE


def test_icon_table_covers_every_known_tag() -> None:
    assert KindTag.UNKNOWN not in KindTag.known()
    assert set(ICON_KINDS.values()) == set(KindTag.known())
    assert len(ICON_KINDS) == len(KindTag.known())


def test_combined_flags() -> None:
    entity = Entity.from_map_item(
        "KalokaiHex", {"x": 0.5, "y": 0.5, "teamId": "COLONIALS", "iconType": 56, "flags": 0x11}
    )
    assert entity.has_flag(MapFlag.VICTORY_BASE)
    assert entity.has_flag(MapFlag.SCORCHED)
    assert not entity.has_flag(MapFlag.HOME_BASE)


def test_snapshot_serialization_round_trip(make_entity, make_snapshot) -> None:
    snapshot = make_snapshot(
        "s1",
        make_entity(),
        make_entity(x=0.3, owner=Faction.WARDEN, kind=KindTag.REFINERY, flags=MapFlag.BUILD_SITE),
    )

    data = snapshot.to_dict()
    assert data["entities"][1]["kind"] == "Refinery"
    assert data["entities"][1]["flags"] == 0x04

    restored = Snapshot.from_dict(data)
    assert restored == snapshot


def test_snapshot_from_dict_requires_entities() -> None:
    with pytest.raises(KeyError):
        Snapshot.from_dict({"id": "s1", "created_at": "2024-06-01T12:00:00+00:00"})


def test_snapshot_naive_timestamp_is_utc() -> None:
    snapshot = Snapshot.from_dict({"id": "s1", "created_at": "2024-06-01T12:00:00", "entities": []})
    assert snapshot.created_at == datetime(2024, 6, 1, 12, tzinfo=UTC)


def test_epoch_ms_is_exact() -> None:
    moment = datetime(1970, 1, 1, 0, 0, 0, 1000, tzinfo=UTC)
    assert epoch_ms(moment) == 1
    assert from_epoch_ms(epoch_ms(datetime(2024, 6, 1, tzinfo=UTC))) == datetime(
        2024, 6, 1, tzinfo=UTC
    )
