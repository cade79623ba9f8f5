"""Tests for the fixed region table.

Why these tests exist:
- Projection trusts the table; a malformed row silently misplaces every marker
- Lookups accept both API ids and short names
"""

import pytest

from hexfront.spatial import DEFAULT_REGIONS, ROW_WIDTHS, HexRegion, RegionTable, get_region


def test_table_matches_row_widths() -> None:
    assert len(DEFAULT_REGIONS) == sum(ROW_WIDTHS) == 43
    for row, width in enumerate(ROW_WIDTHS, start=1):
        assert [r.col for r in DEFAULT_REGIONS.in_row(row)] == list(range(width))


def test_lookup_by_id_and_short_name() -> None:
    kalokai = get_region("KalokaiHex")
    assert kalokai is not None
    assert get_region("Kalokai") is kalokai
    assert (kalokai.row, kalokai.col) == (13, 0)
    assert kalokai.short_name == "Kalokai"


def test_region_without_hex_suffix() -> None:
    marban = get_region("MarbanHollow")
    assert marban is not None
    assert marban.short_name == "MarbanHollow"


def test_unknown_region() -> None:
    assert get_region("AtlantisHex") is None
    assert "AtlantisHex" not in DEFAULT_REGIONS
    assert 42 not in DEFAULT_REGIONS
    assert "Kalokai" in DEFAULT_REGIONS


@pytest.mark.parametrize(
    ("regions", "row_widths", "match"),
    [
        ([HexRegion("AHex", 1, 0, "A"), HexRegion("AHex", 2, 0, "A")], (1, 1), "Duplicate"),
        ([HexRegion("AHex", 1, 0, "A")], (1, 1), "Row 2"),
        ([HexRegion("AHex", 1, 1, "A")], (1,), "Row 1"),
        ([HexRegion("AHex", 1, 0, "A"), HexRegion("BHex", 3, 0, "B")], (1,), "outside"),
    ],
    ids=["duplicate", "missing-row", "bad-column", "row-out-of-range"],
)
def test_invalid_table_rejected(regions, row_widths, match) -> None:
    with pytest.raises(ValueError, match=match):
        RegionTable(regions, row_widths)
