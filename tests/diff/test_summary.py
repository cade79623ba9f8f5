"""Tests for victory town counts."""

from hexfront.core import Faction, KindTag, MapFlag
from hexfront.diff import VictoryCounts, count_victory_towns, owner_counts


def test_count_victory_towns(make_entity, make_snapshot) -> None:
    victory = MapFlag.VICTORY_BASE
    snapshot = make_snapshot(
        "s1",
        make_entity(x=0.1, owner=Faction.COLONIAL, flags=victory),
        make_entity(x=0.2, owner=Faction.WARDEN, flags=victory | MapFlag.TOWN_CLAIMED),
        make_entity(x=0.3, owner=Faction.WARDEN, flags=victory | MapFlag.SCORCHED),
        make_entity(x=0.4, owner=Faction.NEUTRAL, flags=victory),
        make_entity(x=0.5, owner=Faction.COLONIAL, kind=KindTag.REFINERY),
    )

    counts = count_victory_towns(snapshot)

    assert counts == VictoryCounts(colonial=1, warden=1, neutral=1, scorched=1)
    assert counts.total == 4


def test_empty_snapshot_counts_nothing(make_snapshot) -> None:
    assert count_victory_towns(make_snapshot("s1")) == VictoryCounts()


def test_owner_counts(make_entity, make_snapshot) -> None:
    snapshot = make_snapshot(
        "s1",
        make_entity(x=0.1),
        make_entity(x=0.2),
        make_entity(x=0.3, owner=Faction.WARDEN),
    )
    counts = owner_counts(snapshot)
    assert counts[Faction.COLONIAL] == 2
    assert counts[Faction.WARDEN] == 1
    assert counts[Faction.NEUTRAL] == 0
