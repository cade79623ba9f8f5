"""Tests for coordinate quantization."""

from hexfront.spatial import quantize_coordinate, quantize_entity, quantize_snapshot


def test_quantize_coordinate() -> None:
    assert quantize_coordinate(0.123) == 0.12
    assert quantize_coordinate(0.987, precision=1) == 1.0


def test_quantize_entity_keeps_id(make_entity) -> None:
    entity = make_entity(x=0.1234, y=0.5678)
    quantized = quantize_entity(entity)

    assert quantized.id == entity.id == "KalokaiHex-0.1234-0.5678"
    assert (quantized.x, quantized.y) == (0.12, 0.57)


def test_quantize_snapshot(make_entity, make_snapshot) -> None:
    snapshot = make_snapshot("s1", make_entity(x=0.111), make_entity(x=0.999))
    quantized = quantize_snapshot(snapshot)

    assert [e.x for e in quantized.entities] == [0.11, 1.0]
    assert quantized.id == snapshot.id
    assert snapshot.entities[0].x == 0.111
