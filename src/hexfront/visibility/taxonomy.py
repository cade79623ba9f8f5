"""Fixed tag taxonomy the visibility tree is built from.

Node ids come from path position: category labels are lower-cased and
dash-joined, leaves append the tag value. Changing a label or moving a tag
changes ids and invalidates persisted preferences for that branch.
"""

from __future__ import annotations

from dataclasses import dataclass

from hexfront.core.enums import KindTag


@dataclass(frozen=True, slots=True)
class Category:
    """A named group in the taxonomy.

    Attributes:
        label: Human-readable name; also the source of the node id segment.
        tags: Kind tags that become direct leaf children.
        groups: Nested categories, placed after the direct leaves.
    """

    label: str
    tags: tuple[KindTag, ...] = ()
    groups: tuple[Category, ...] = ()

    @property
    def key(self) -> str:
        return label_to_key(self.label)


def label_to_key(label: str) -> str:
    return "-".join(label.lower().split())


STRUCTURES = Category(
    "Structures",
    groups=(
        Category(
            "Bases",
            tags=(
                KindTag.TOWN_BASE_1,
                KindTag.TOWN_BASE_2,
                KindTag.TOWN_BASE_3,
                KindTag.RELIC_BASE_1,
                KindTag.KEEP,
                KindTag.FORT,
                KindTag.FORWARD_BASE_1,
                KindTag.GARRISON_STATION,
                KindTag.HOSPITAL,
                KindTag.TROOP_SHIP,
            ),
        ),
        Category(
            "Logistics",
            groups=(
                Category(
                    "Construction",
                    tags=(
                        KindTag.VEHICLE_FACTORY,
                        KindTag.SHIPYARD,
                        KindTag.CONSTRUCTION_YARD,
                    ),
                ),
                Category(
                    "Economy",
                    tags=(
                        KindTag.REFINERY,
                        KindTag.FACTORY,
                        KindTag.MASS_PRODUCTION_FACTORY,
                    ),
                ),
                Category("Storage", tags=(KindTag.SEAPORT, KindTag.STORAGE_FACILITY)),
            ),
        ),
        Category(
            "Emplacements",
            groups=(
                Category(
                    "Artillery",
                    tags=(KindTag.STORM_CANNON, KindTag.COASTAL_GUN, KindTag.MORTAR_HOUSE),
                ),
                Category(
                    "Rockets",
                    tags=(
                        KindTag.ROCKET_SITE,
                        KindTag.ROCKET_SITE_WITH_ROCKET,
                        KindTag.ROCKET_TARGET,
                        KindTag.ROCKET_GROUND_ZERO,
                    ),
                ),
            ),
        ),
        Category(
            "Utility",
            tags=(
                KindTag.SOUL_FACTORY,
                KindTag.INTEL_CENTER,
                KindTag.WEATHER_STATION,
                KindTag.TECH_CENTER,
                KindTag.OBSERVATION_TOWER,
                KindTag.WORLD_MAP_TENT,
                KindTag.TRAVEL_TENT,
                KindTag.TRAINING_AREA,
            ),
        ),
    ),
)

RESOURCES = Category(
    "Resources",
    tags=(
        KindTag.SALVAGE_FIELD,
        KindTag.COMPONENT_FIELD,
        KindTag.FUEL_FIELD,
        KindTag.SULFUR_FIELD,
        KindTag.COAL_FIELD,
        KindTag.OIL_FIELD,
        KindTag.SALVAGE_MINE,
        KindTag.COMPONENT_MINE,
        KindTag.SULFUR_MINE,
        KindTag.OIL_RIG,
    ),
)

DEFAULT_TAXONOMY: tuple[Category, ...] = (STRUCTURES, RESOURCES)

DEFAULT_OFF_ROOTS: frozenset[str] = frozenset({RESOURCES.key})
"""Root branches that start hidden."""
