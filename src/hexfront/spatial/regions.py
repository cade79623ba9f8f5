"""Fixed table of hex regions arranged in a diamond grid.

Rows are 1-based from the top; columns are 0-based within a row. The table is
defined once at import and never mutated.

Usage:
    region = get_region("Kalokai")        # short name
    region = get_region("KalokaiHex")     # API id
    for region in DEFAULT_REGIONS.in_row(5):
        ...
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

ROW_WIDTHS: tuple[int, ...] = (1, 2, 3, 4, 5, 4, 5, 4, 5, 4, 3, 2, 1)


@dataclass(frozen=True, slots=True)
class HexRegion:
    """One tile of the world map."""

    id: str
    row: int
    col: int
    display_name: str

    @property
    def short_name(self) -> str:
        """Id without the trailing ``Hex`` marker."""
        return self.id.removesuffix("Hex")


REGIONS: tuple[HexRegion, ...] = (
    HexRegion("BasinSionnachHex", 1, 0, "Basin Sionnach"),
    HexRegion("SpeakingWoodsHex", 2, 0, "Speaking Woods"),
    HexRegion("HowlCountyHex", 2, 1, "Howl County"),
    HexRegion("CallumsCapeHex", 3, 0, "Callum's Cape"),
    HexRegion("ReachingTrailHex", 3, 1, "Reaching Trail"),
    HexRegion("ClansheadValleyHex", 3, 2, "Clanshead Valley"),
    HexRegion("NevishLineHex", 4, 0, "Nevish Line"),
    HexRegion("MooringCountyHex", 4, 1, "The Moors"),
    HexRegion("ViperPitHex", 4, 2, "Viper Pit"),
    HexRegion("MorgensCrossingHex", 4, 3, "Morgen's Crossing"),
    HexRegion("OarbreakerHex", 5, 0, "Oarbreaker"),
    HexRegion("StonecradleHex", 5, 1, "Stonecradle"),
    HexRegion("CallahansPassageHex", 5, 2, "Callahan's Passage"),
    HexRegion("WeatheredExpanseHex", 5, 3, "Weathered Expanse"),
    HexRegion("GodcroftsHex", 5, 4, "Godcrofts"),
    HexRegion("FarranacCoastHex", 6, 0, "Farranac Coast"),
    HexRegion("LinnMercyHex", 6, 1, "Linn of Mercy"),
    HexRegion("MarbanHollow", 6, 2, "Marban Hollow"),
    HexRegion("StlicanShelfHex", 6, 3, "Stlican Shelf"),
    HexRegion("FishermansRowHex", 7, 0, "Fisherman's Row"),
    HexRegion("KingsCageHex", 7, 1, "King's Cage"),
    HexRegion("DeadLandsHex", 7, 2, "Deadlands"),
    HexRegion("ClahstraHex", 7, 3, "The Clahstra"),
    HexRegion("TempestIslandHex", 7, 4, "Tempest Island"),
    HexRegion("WestgateHex", 8, 0, "Westgate"),
    HexRegion("LochMorHex", 8, 1, "Loch Mór"),
    HexRegion("DrownedValeHex", 8, 2, "Drowned Vale"),
    HexRegion("EndlessShoreHex", 8, 3, "Endless Shore"),
    HexRegion("StemaLandingHex", 9, 0, "Stema Landing"),
    HexRegion("SableportHex", 9, 1, "Sableport"),
    HexRegion("UmbralWildwoodHex", 9, 2, "Umbral Wildwood"),
    HexRegion("AllodsBightHex", 9, 3, "Allod's Bight"),
    HexRegion("TheFingersHex", 9, 4, "The Fingers"),
    HexRegion("OriginHex", 10, 0, "Origin"),
    HexRegion("HeartlandsHex", 10, 1, "Heartlands"),
    HexRegion("ShackledChasmHex", 10, 2, "Shackled Chasm"),
    HexRegion("ReaversPassHex", 10, 3, "Reaver's Pass"),
    HexRegion("AshFieldsHex", 11, 0, "Ash Fields"),
    HexRegion("GreatMarchHex", 11, 1, "Great March"),
    HexRegion("TerminusHex", 11, 2, "Terminus"),
    HexRegion("RedRiverHex", 12, 0, "Red River"),
    HexRegion("AcrithiaHex", 12, 1, "Acrithia"),
    HexRegion("KalokaiHex", 13, 0, "Kalokai"),
)


class RegionTable:
    """Read-only index over a validated set of regions.

    Args:
        regions: Region definitions.
        row_widths: Expected number of regions in each row (1-based rows).

    Raises:
        ValueError: If ids collide, a row has the wrong number of regions, or
            columns within a row are not exactly 0..width-1.
    """

    def __init__(self, regions: Iterable[HexRegion], row_widths: tuple[int, ...]) -> None:
        self._regions = tuple(regions)
        self._row_widths = row_widths
        self._by_name: dict[str, HexRegion] = {}
        self._rows: dict[int, list[HexRegion]] = {}

        for region in self._regions:
            for name in {region.id, region.short_name}:
                if name in self._by_name:
                    raise ValueError(f"Duplicate region name: {name}")
                self._by_name[name] = region
            self._rows.setdefault(region.row, []).append(region)

        if set(self._rows) - set(range(1, len(row_widths) + 1)):
            raise ValueError(f"Regions reference rows outside 1..{len(row_widths)}")
        for row, width in enumerate(row_widths, start=1):
            cols = sorted(r.col for r in self._rows.get(row, []))
            if cols != list(range(width)):
                raise ValueError(f"Row {row} expects columns 0..{width - 1}, got {cols}")
            self._rows[row].sort(key=lambda r: r.col)

    def get(self, name: str) -> HexRegion | None:
        """Look up a region by id or short name."""
        return self._by_name.get(name)

    def in_row(self, row: int) -> list[HexRegion]:
        """Regions of one row ordered west to east."""
        return list(self._rows.get(row, []))

    @property
    def row_widths(self) -> tuple[int, ...]:
        return self._row_widths

    def __iter__(self) -> Iterator[HexRegion]:
        return iter(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name in self._by_name


DEFAULT_REGIONS = RegionTable(REGIONS, ROW_WIDTHS)


def get_region(name: str) -> HexRegion | None:
    """Look up a region of the default table by id or short name."""
    return DEFAULT_REGIONS.get(name)
