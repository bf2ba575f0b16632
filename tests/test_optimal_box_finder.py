"""Tests for the smallest-box search."""

from __future__ import annotations

import logging

import pytest

from boxpack.core.optimal_box_finder import (
    estimate_initial_box,
    find_optimal_box,
    max_item_dimensions,
)
from boxpack.models.box import BoxDimensions
from boxpack.models.config import BoxSearchConfig, PackingConfig
from boxpack.models.item import OptimizeOptions


def test_no_items_returns_zero_box():
    result = find_optimal_box([])
    assert result.success is False
    assert result.box_dimensions == BoxDimensions.empty()
    assert result.packed_items == []
    assert result.packing_instructions == []


def test_five_cubes_all_fit(make_item):
    items = [make_item(10, 10, 10, item_id=f"c{i}") for i in range(5)]
    result = find_optimal_box(items)

    assert result.unpacked_items == []
    assert len(result.packed_items) == 5
    assert result.box_dimensions.volume >= 5000


def test_single_item_box_is_at_least_item_sized(make_item):
    result = find_optimal_box([make_item(30, 10, 20)])
    assert result.all_packed
    assert sorted(result.box_dimensions.dimensions)[-1] >= 30


def test_fixed_tall_item_keeps_box_tall(make_item):
    result = find_optimal_box([make_item(5, 40, 5, allow_rotation=False, quantity=2)])
    assert result.all_packed
    assert result.box_dimensions.height >= 40
    assert all(p.rotation == (0, 0, 0) for p in result.packed_items)


def test_options_apply_to_the_search(make_item):
    items = [make_item(5, 40, 5)]
    result = find_optimal_box(items, OptimizeOptions(allow_rotation=False))
    assert result.all_packed
    assert result.box_dimensions.height >= 40
    assert items[0].allow_rotation is True


def test_result_box_matches_reported_dimensions(make_item):
    items = [make_item(12, 8, 20, quantity=6), make_item(25, 5, 25, quantity=2)]
    result = find_optimal_box(items)
    box = result.box_dimensions
    assert result.all_packed
    assert result.utilization_percentage == pytest.approx(
        100 * sum(i.total_volume for i in items) / box.volume
    )
    for packed in result.packed_items:
        for axis, limit in enumerate(box.dimensions):
            assert packed.max_corner[axis] <= limit + 1e-6


def test_search_is_deterministic(make_item):
    items = [make_item(12, 8, 20, quantity=3), make_item(9, 9, 9, quantity=4)]
    first = find_optimal_box(items)
    second = find_optimal_box(items)
    assert first.box_dimensions == second.box_dimensions
    assert first.packed_items == second.packed_items


def test_max_item_dimensions_respects_rotation(make_item):
    items = [make_item(5, 40, 5, allow_rotation=False), make_item(30, 2, 3)]
    assert max_item_dimensions(items) == (30.0, 40.0, 30.0)


def test_initial_box_is_flattened(make_item):
    items = [make_item(10, 10, 10, item_id=f"c{i}") for i in range(5)]
    assert estimate_initial_box(items).dimensions == (21.0, 15.0, 23.0)


def test_fallback_box_when_growth_is_disabled(make_item, caplog):
    items = [make_item(10, 10, 10, item_id=f"c{i}") for i in range(5)]
    config = PackingConfig(search=BoxSearchConfig(max_growth_attempts=0))

    with caplog.at_level(logging.WARNING, logger="boxpack"):
        result = find_optimal_box(items, config=config)

    assert result.all_packed
    assert result.box_dimensions.width >= 24
    assert "fallback" in caplog.text
