"""Hex spatial frame: region table, tile frames and point projection."""

from hexfront.spatial.frame import (
    DEFAULT_LAYOUT,
    Frame,
    HexLayout,
    frame_of,
    grid_bounds,
    normalize_world_point,
    project_entities,
    project_entity,
    project_point,
)
from hexfront.spatial.quantize import (
    COORDINATE_PRECISION,
    quantize_coordinate,
    quantize_entity,
    quantize_snapshot,
)
from hexfront.spatial.regions import (
    DEFAULT_REGIONS,
    REGIONS,
    ROW_WIDTHS,
    HexRegion,
    RegionTable,
    get_region,
)

__all__ = [
    # Regions
    "HexRegion",
    "RegionTable",
    "REGIONS",
    "ROW_WIDTHS",
    "DEFAULT_REGIONS",
    "get_region",
    # Frames
    "Frame",
    "HexLayout",
    "DEFAULT_LAYOUT",
    "frame_of",
    "grid_bounds",
    "project_point",
    "project_entity",
    "project_entities",
    "normalize_world_point",
    # Quantization
    "COORDINATE_PRECISION",
    "quantize_coordinate",
    "quantize_entity",
    "quantize_snapshot",
]
