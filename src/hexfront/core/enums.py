"""Closed enumerations for owners, entity kinds and entity flags.

Unknown upstream values never raise: they resolve to an explicit UNKNOWN
variant so downstream filtering can exclude them by type.
"""

from __future__ import annotations

from enum import Enum, IntFlag


class Faction(Enum):
    """Owning faction of an entity."""

    COLONIAL = "Colonial"
    WARDEN = "Warden"
    NEUTRAL = "Neutral"
    UNKNOWN = "Unknown"

    @classmethod
    def _missing_(cls, value: object) -> Faction:
        return cls.UNKNOWN

    @classmethod
    def from_team_id(cls, team_id: str | None) -> Faction:
        """Map an upstream team id (COLONIALS, WARDENS, NONE) to a Faction."""
        if team_id == "COLONIALS":
            return cls.COLONIAL
        if team_id == "WARDENS":
            return cls.WARDEN
        return cls.NEUTRAL


class KindTag(Enum):
    """Classification of a map entity, one per upstream icon type."""

    # Bases
    TOWN_BASE_1 = "Town_Base_1"
    TOWN_BASE_2 = "Town_Base_2"
    TOWN_BASE_3 = "Town_Base_3"
    RELIC_BASE_1 = "Relic_Base_1"
    KEEP = "Keep"
    FORT = "Fort"
    FORWARD_BASE_1 = "Forward_Base_1"
    GARRISON_STATION = "Garrison_Station"
    HOSPITAL = "Hospital"
    TROOP_SHIP = "Troop_Ship"
    # Construction
    VEHICLE_FACTORY = "Vehicle_Factory"
    SHIPYARD = "Shipyard"
    CONSTRUCTION_YARD = "Construction_Yard"
    # Economy
    REFINERY = "Refinery"
    FACTORY = "Factory"
    MASS_PRODUCTION_FACTORY = "Mass_Production_Factory"
    # Storage
    SEAPORT = "Seaport"
    STORAGE_FACILITY = "Storage_Facility"
    # Resource fields
    SALVAGE_FIELD = "Salvage_Field"
    COMPONENT_FIELD = "Component_Field"
    FUEL_FIELD = "Fuel_Field"
    SULFUR_FIELD = "Sulfur_Field"
    COAL_FIELD = "Coal_Field"
    OIL_FIELD = "Oil_Field"
    # Resource mines
    SALVAGE_MINE = "Salvage_Mine"
    COMPONENT_MINE = "Component_Mine"
    SULFUR_MINE = "Sulfur_Mine"
    OIL_RIG = "Oil_Rig"
    # Emplacements
    STORM_CANNON = "Storm_Cannon"
    COASTAL_GUN = "Coastal_Gun"
    MORTAR_HOUSE = "Mortar_House"
    # Rockets
    ROCKET_SITE = "Rocket_Site"
    ROCKET_SITE_WITH_ROCKET = "Rocket_Site_With_Rocket"
    ROCKET_TARGET = "Rocket_Target"
    ROCKET_GROUND_ZERO = "Rocket_Ground_Zero"
    # Utility
    SOUL_FACTORY = "Soul_Factory"
    INTEL_CENTER = "Intel_Center"
    WEATHER_STATION = "Weather_Station"
    TECH_CENTER = "Tech_Center"
    OBSERVATION_TOWER = "Observation_Tower"
    WORLD_MAP_TENT = "World_Map_Tent"
    TRAVEL_TENT = "Travel_Tent"
    TRAINING_AREA = "Training_Area"

    UNKNOWN = "Unknown"
    """Fallback for unrecognized kinds. Never mapped to a visibility leaf."""

    @classmethod
    def _missing_(cls, value: object) -> KindTag:
        return cls.UNKNOWN

    @classmethod
    def from_icon(cls, icon_type: int) -> KindTag:
        """Resolve an upstream integer icon type."""
        return ICON_KINDS.get(icon_type, cls.UNKNOWN)

    @classmethod
    def known(cls) -> tuple[KindTag, ...]:
        """All tags except UNKNOWN, in declaration order."""
        return tuple(tag for tag in cls if tag is not cls.UNKNOWN)


class MapFlag(IntFlag):
    """Entity flag bitmask as delivered upstream."""

    NONE = 0
    VICTORY_BASE = 0x01
    HOME_BASE = 0x02
    BUILD_SITE = 0x04
    SCORCHED = 0x10
    TOWN_CLAIMED = 0x20


ICON_KINDS: dict[int, KindTag] = {
    56: KindTag.TOWN_BASE_1,
    57: KindTag.TOWN_BASE_2,
    58: KindTag.TOWN_BASE_3,
    45: KindTag.RELIC_BASE_1,
    27: KindTag.KEEP,
    29: KindTag.FORT,
    8: KindTag.FORWARD_BASE_1,
    35: KindTag.GARRISON_STATION,
    11: KindTag.HOSPITAL,
    30: KindTag.TROOP_SHIP,
    12: KindTag.VEHICLE_FACTORY,
    18: KindTag.SHIPYARD,
    39: KindTag.CONSTRUCTION_YARD,
    17: KindTag.REFINERY,
    34: KindTag.FACTORY,
    51: KindTag.MASS_PRODUCTION_FACTORY,
    52: KindTag.SEAPORT,
    33: KindTag.STORAGE_FACILITY,
    20: KindTag.SALVAGE_FIELD,
    21: KindTag.COMPONENT_FIELD,
    22: KindTag.FUEL_FIELD,
    23: KindTag.SULFUR_FIELD,
    61: KindTag.COAL_FIELD,
    62: KindTag.OIL_FIELD,
    38: KindTag.SALVAGE_MINE,
    40: KindTag.COMPONENT_MINE,
    32: KindTag.SULFUR_MINE,
    75: KindTag.OIL_RIG,
    59: KindTag.STORM_CANNON,
    53: KindTag.COASTAL_GUN,
    84: KindTag.MORTAR_HOUSE,
    37: KindTag.ROCKET_SITE,
    72: KindTag.ROCKET_SITE_WITH_ROCKET,
    70: KindTag.ROCKET_TARGET,
    71: KindTag.ROCKET_GROUND_ZERO,
    54: KindTag.SOUL_FACTORY,
    60: KindTag.INTEL_CENTER,
    83: KindTag.WEATHER_STATION,
    19: KindTag.TECH_CENTER,
    28: KindTag.OBSERVATION_TOWER,
    24: KindTag.WORLD_MAP_TENT,
    25: KindTag.TRAVEL_TENT,
    26: KindTag.TRAINING_AREA,
}
"""Upstream icon type integer -> KindTag."""
