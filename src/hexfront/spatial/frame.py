"""Hex spatial frame: region tiles and points in the shared draw-space.

Draw-space uses (lat, lng) with north numerically larger than south. Each
row of the diamond grid is centered against the widest row; rows stack
top-to-bottom starting with row 1.

Usage:
    frame = frame_of(get_region("Kalokai"))
    lat, lng = project_point("KalokaiHex", 0.25, 0.75)
    markers = project_entities(snapshot.entities)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass

from hexfront.core.models import Entity, ProjectedEntity
from hexfront.spatial.regions import DEFAULT_REGIONS, ROW_WIDTHS, HexRegion, RegionTable

logger = logging.getLogger(__name__)

WORLD_EXTENT_X = 109_200.0
WORLD_EXTENT_Y = 94_500.0
"""Half-extents of the game world in world units."""


@dataclass(frozen=True, slots=True)
class HexLayout:
    """Layout constants for the tiled grid.

    Attributes:
        tile_width: Width of one tile frame.
        tile_height: Height of one tile frame.
        horizontal_spacing: Distance between west edges of neighbours in a row.
        vertical_spacing: Distance between tops of consecutive rows.
        row_widths: Number of tiles per row, top to bottom.
    """

    tile_width: float = 512.0
    tile_height: float = 444.0
    horizontal_spacing: float = 770.0
    vertical_spacing: float = 221.0
    row_widths: tuple[int, ...] = ROW_WIDTHS

    def __post_init__(self) -> None:
        if self.tile_width <= 0 or self.tile_height <= 0:
            raise ValueError("Tile dimensions must be positive")
        if self.horizontal_spacing < self.tile_width:
            raise ValueError("horizontal_spacing must be >= tile_width (tiles in a row overlap)")
        if not self.row_widths or min(self.row_widths) < 1:
            raise ValueError("row_widths must be non-empty and positive")

    @property
    def max_row_width(self) -> int:
        return max(self.row_widths)

    @property
    def row_count(self) -> int:
        return len(self.row_widths)


DEFAULT_LAYOUT = HexLayout()


@dataclass(frozen=True, slots=True)
class Frame:
    """Axis-aligned rectangle in draw-space."""

    south: float
    west: float
    north: float
    east: float

    @property
    def width(self) -> float:
        return self.east - self.west

    @property
    def height(self) -> float:
        return self.north - self.south

    @property
    def center(self) -> tuple[float, float]:
        """(lat, lng) of the rectangle's center."""
        return (self.south + self.north) / 2, (self.west + self.east) / 2

    def contains(self, lat: float, lng: float) -> bool:
        """Closed-interval containment: points on the edge are inside."""
        return self.south <= lat <= self.north and self.west <= lng <= self.east

    def expanded(self, padding: float) -> Frame:
        """Frame grown by ``padding`` on all four sides."""
        return Frame(
            south=self.south - padding,
            west=self.west - padding,
            north=self.north + padding,
            east=self.east + padding,
        )

    def union(self, other: Frame) -> Frame:
        return Frame(
            south=min(self.south, other.south),
            west=min(self.west, other.west),
            north=max(self.north, other.north),
            east=max(self.east, other.east),
        )


def frame_of(region: HexRegion, layout: HexLayout = DEFAULT_LAYOUT) -> Frame:
    """Bounding frame of a region's tile.

    Raises:
        ValueError: If the region's row is outside the layout.
    """
    if not 1 <= region.row <= layout.row_count:
        raise ValueError(f"Region {region.id} row {region.row} outside layout")

    spacing = layout.horizontal_spacing
    tiles_in_row = layout.row_widths[region.row - 1]
    row_center_offset = (layout.max_row_width - tiles_in_row) * spacing / 2
    west = region.col * spacing + row_center_offset - layout.max_row_width * spacing / 2
    north = -(region.row - 1) * layout.vertical_spacing + layout.row_count * layout.vertical_spacing / 2

    return Frame(
        south=north - layout.tile_height,
        west=west,
        north=north,
        east=west + layout.tile_width,
    )


def grid_bounds(
    layout: HexLayout = DEFAULT_LAYOUT, regions: RegionTable = DEFAULT_REGIONS
) -> Frame:
    """Union of every region frame."""
    frames = [frame_of(region, layout) for region in regions]
    if not frames:
        raise ValueError("Region table is empty")
    bounds = frames[0]
    for frame in frames[1:]:
        bounds = bounds.union(frame)
    return bounds


def project_point(
    region: str | HexRegion,
    x: float,
    y: float,
    *,
    layout: HexLayout = DEFAULT_LAYOUT,
    regions: RegionTable = DEFAULT_REGIONS,
) -> tuple[float, float] | None:
    """Project a normalized in-region point to draw-space.

    Args:
        region: Region id, short name or HexRegion.
        x: Normalized horizontal position (0 = west).
        y: Normalized vertical position (0 = top, so it maps to north).

    Returns:
        (lat, lng), or None when the region is unknown. Callers drop the
        point; it is never an error.
    """
    resolved = regions.get(region) if isinstance(region, str) else region
    if resolved is None:
        return None
    frame = frame_of(resolved, layout)
    lng = frame.west + x * frame.width
    lat = frame.north - y * frame.height
    return lat, lng


def project_entity(
    entity: Entity,
    *,
    layout: HexLayout = DEFAULT_LAYOUT,
    regions: RegionTable = DEFAULT_REGIONS,
) -> ProjectedEntity | None:
    """Place an entity in draw-space, or None if its region is unknown."""
    point = project_point(entity.region, entity.x, entity.y, layout=layout, regions=regions)
    if point is None:
        return None
    return ProjectedEntity(entity=entity, lat=point[0], lng=point[1])


def project_entities(
    entities: Iterable[Entity],
    *,
    layout: HexLayout = DEFAULT_LAYOUT,
    regions: RegionTable = DEFAULT_REGIONS,
) -> list[ProjectedEntity]:
    """Project many entities, dropping those in unknown regions."""
    projected: list[ProjectedEntity] = []
    dropped: dict[str, int] = {}
    for entity in entities:
        placed = project_entity(entity, layout=layout, regions=regions)
        if placed is None:
            dropped[entity.region] = dropped.get(entity.region, 0) + 1
            continue
        projected.append(placed)
    for region, count in dropped.items():
        logger.debug("Dropped %d entities in unknown region %s", count, region)
    return projected


def normalize_world_point(x: float, y: float) -> tuple[float, float]:
    """Map game-world units to the normalized [0, 1] range."""
    return (
        (x + WORLD_EXTENT_X) / (2 * WORLD_EXTENT_X),
        (y + WORLD_EXTENT_Y) / (2 * WORLD_EXTENT_Y),
    )
