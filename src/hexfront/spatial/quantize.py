"""Coordinate quantization for snapshot payloads.

Two decimal places is roughly 1 km at world scale, fine for territory markers.
Entity ids are derived before quantization and are left untouched.
"""

from __future__ import annotations

from dataclasses import replace

from hexfront.core.models import Entity, Snapshot

COORDINATE_PRECISION = 2


def quantize_coordinate(value: float, precision: int = COORDINATE_PRECISION) -> float:
    """Round a normalized coordinate to ``precision`` decimal places."""
    return round(value, precision)


def quantize_entity(entity: Entity, precision: int = COORDINATE_PRECISION) -> Entity:
    return replace(
        entity,
        x=quantize_coordinate(entity.x, precision),
        y=quantize_coordinate(entity.y, precision),
    )


def quantize_snapshot(snapshot: Snapshot, precision: int = COORDINATE_PRECISION) -> Snapshot:
    """Copy of the snapshot with every entity position quantized."""
    return replace(
        snapshot,
        entities=tuple(quantize_entity(entity, precision) for entity in snapshot.entities),
    )
