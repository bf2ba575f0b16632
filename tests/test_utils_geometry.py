"""Tests for geometry helpers and the orientation enumerator."""

from __future__ import annotations

import pytest

from boxpack.core.utils_geometry import (
    FreeSpace,
    boxes_overlap,
    footprint_coverage,
    generate_orientations,
    is_fully_contained,
    ranges_overlap,
    rotation_text,
    round_half_up,
    volume_utilization,
)
from boxpack.models.result import PackedItem


def _packed(min_corner, dims, item_id="p", **kwargs) -> PackedItem:
    position = tuple(min_corner[axis] + dims[axis] / 2 for axis in range(3))
    return PackedItem(
        id=item_id,
        name=item_id,
        width=dims[0],
        height=dims[1],
        depth=dims[2],
        position=position,
        **kwargs,
    )


def test_ranges_overlap_excludes_touching_ends():
    assert ranges_overlap(0, 10, 5, 15)
    assert ranges_overlap(0, 10, 2, 3)
    assert not ranges_overlap(0, 10, 10, 20)
    assert not ranges_overlap(10, 20, 0, 10)


def test_boxes_overlap_with_tolerance():
    assert boxes_overlap((0, 0, 0), (10, 10, 10), (5, 5, 5), (10, 10, 10))
    assert not boxes_overlap((0, 0, 0), (10, 10, 10), (10, 0, 0), (10, 10, 10))
    # Overlap thinner than the tolerance is ignored.
    assert not boxes_overlap((0, 0, 0), (10, 10, 10), (9.9995, 0, 0), (10, 10, 10), tolerance=0.001)
    assert boxes_overlap((0, 0, 0), (10, 10, 10), (9.99, 0, 0), (10, 10, 10), tolerance=0.001)


def test_is_fully_contained():
    outer = FreeSpace(0, 0, 0, 10, 10, 10)
    assert is_fully_contained(FreeSpace(1, 1, 1, 5, 5, 5), outer)
    assert is_fully_contained(FreeSpace(0, 0, 0, 10.005, 10, 10), outer)
    assert not is_fully_contained(FreeSpace(5, 0, 0, 6, 10, 10), outer)


def test_fixed_item_has_single_orientation(make_item):
    orientations = generate_orientations(make_item(1, 2, 3, allow_rotation=False))
    assert len(orientations) == 1
    assert orientations[0].dimensions == (1.0, 2.0, 3.0)
    assert orientations[0].rotation == (0, 0, 0)


def test_rotatable_item_orientation_order(make_item):
    orientations = generate_orientations(make_item(1, 2, 3))
    assert [(o.dimensions, o.rotation) for o in orientations] == [
        ((1.0, 2.0, 3.0), (0, 0, 0)),
        ((1.0, 3.0, 2.0), (90, 0, 0)),
        ((3.0, 2.0, 1.0), (0, 90, 0)),
        ((2.0, 1.0, 3.0), (0, 0, 90)),
        ((3.0, 1.0, 2.0), (90, 90, 0)),
        ((2.0, 3.0, 1.0), (90, 0, 90)),
    ]


def test_cube_still_yields_six_orientations(make_item):
    orientations = generate_orientations(make_item(4, 4, 4))
    assert len(orientations) == 6
    assert {o.dimensions for o in orientations} == {(4.0, 4.0, 4.0)}


@pytest.mark.parametrize(
    "rotation, expected",
    [
        ((0, 0, 0), ""),
        ((90, 0, 0), "rotated 90° around X-axis"),
        ((90, 90, 0), "rotated 90° around X-axis and 90° around Y-axis"),
        ((90, 0, 90), "rotated 90° around X-axis and 90° around Z-axis"),
    ],
)
def test_rotation_text(rotation, expected):
    assert rotation_text(rotation) == expected


def test_round_half_up():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2
    assert round_half_up(0) == 0


def test_volume_utilization_is_clamped():
    assert volume_utilization(50, 200) == 25.0
    assert volume_utilization(300, 200) == 100.0
    assert volume_utilization(10, 0) == 0.0


def test_footprint_coverage_counts_overlapping_projections_once():
    items = [
        _packed((0, 0, 0), (10, 10, 10), "a"),
        _packed((0, 10, 0), (10, 10, 10), "b"),  # stacked, same footprint
        _packed((10, 0, 0), (10, 5, 5), "c"),
    ]
    # (100 + 50) / (20 * 20)
    assert footprint_coverage(items, 20, 20) == pytest.approx(37.5)
    assert footprint_coverage([], 20, 20) == 0.0
