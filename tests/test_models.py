"""Tests for the box, item, result and config models."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from boxpack.models.box import BoxDimensions
from boxpack.models.config import (
    DEFAULT_CONFIG,
    BoxSearchConfig,
    PackingConfig,
    ScoringWeights,
    load_packing_config,
)
from boxpack.models.item import DEFAULT_COLORS, Item, OptimizeOptions
from boxpack.models.result import PackedItem, PackingResult

BUNDLED_CONFIG = Path(__file__).resolve().parent.parent / "boxpack" / "config" / "packing.json"


# ---------------------------------------------------------------------------
# BoxDimensions
# ---------------------------------------------------------------------------


def test_box_rejects_non_positive_dimensions():
    with pytest.raises(ValueError, match="height must be positive"):
        BoxDimensions(width=10, height=0, depth=10)
    with pytest.raises(ValueError, match="width must be positive"):
        BoxDimensions(width=-1, height=10, depth=10)
    with pytest.raises(ValueError, match="depth must be positive"):
        BoxDimensions(width=10, height=10, depth=float("nan"))


def test_empty_box_is_allowed():
    box = BoxDimensions.empty()
    assert box.is_empty
    assert box.dimensions == (0.0, 0.0, 0.0)


def test_box_scaled_rounds_to_whole_centimetres():
    box = BoxDimensions(width=21, height=15, depth=23)
    assert box.scaled(1.1, 1.1, 1.1).dimensions == (24.0, 17.0, 26.0)
    assert box.scaled(0.98, 0.98, 0.98, rounding="floor").dimensions == (20.0, 14.0, 22.0)
    assert BoxDimensions(1, 1, 1).scaled(0.5, 0.5, 0.5, rounding="floor").dimensions == (1.0, 1.0, 1.0)


def test_box_from_dict_reports_missing_dimension():
    with pytest.raises(ValueError, match="depth"):
        BoxDimensions.from_dict({"width": 10, "height": 10})
    with pytest.raises(ValueError, match="numeric"):
        BoxDimensions.from_dict({"width": "wide", "height": 10, "depth": 10})


# ---------------------------------------------------------------------------
# Item
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"width": 0}, "width must be positive"),
        ({"quantity": 0}, "quantity must be at least 1"),
        ({"quantity": 1.5}, "whole number"),
        ({"weight": -1}, "weight must be a finite non-negative number"),
        ({"max_stack": "yes"}, "max_stack"),
        ({"width": float("nan")}, "width must be positive"),
        ({"depth": float("inf")}, "depth must be positive"),
        ({"quantity": float("inf")}, "whole number"),
        ({"quantity": float("nan")}, "whole number"),
        ({"weight": float("nan")}, "weight must be a finite non-negative number"),
    ],
)
def test_item_validation(kwargs, message):
    values = {"id": "a", "name": "A", "width": 1, "height": 1, "depth": 1}
    values.update(kwargs)
    with pytest.raises(ValueError, match=message):
        Item(**values)


@pytest.mark.parametrize(
    "max_stack, expected",
    [(True, True), (False, False), (0, False), (1, False), (2, True), (5, True)],
)
def test_can_be_stacked_handles_legacy_numbers(make_item, max_stack, expected):
    assert make_item(1, 1, 1, max_stack=max_stack).can_be_stacked is expected


def test_with_options_returns_copy(make_item):
    item = make_item(1, 2, 3, allow_rotation=True, max_stack=True)
    overridden = item.with_options(OptimizeOptions(allow_rotation=False, allow_stacking=False))

    assert overridden.allow_rotation is False
    assert overridden.max_stack is False
    assert item.allow_rotation is True
    assert item.max_stack is True
    assert item.with_options(None) is item
    assert item.with_options(OptimizeOptions()) is item


def test_item_from_dict_accepts_front_end_keys():
    item = Item.from_dict(
        {"width": 10, "height": 5, "depth": 2, "maxStack": 3, "allowRotation": False},
        index=11,
    )
    assert item.id == "item-12"
    assert item.name == "Item 12"
    assert item.color == DEFAULT_COLORS[1]
    assert item.max_stack == 3
    assert item.can_be_stacked
    assert item.allow_rotation is False
    assert item.quantity == 1


def test_item_from_dict_rejects_missing_dimension():
    with pytest.raises(ValueError, match="height"):
        Item.from_dict({"width": 10, "depth": 2})


def test_options_from_dict():
    options = OptimizeOptions.from_dict({"allowRotation": False})
    assert options == OptimizeOptions(allow_rotation=False, allow_stacking=None)


# ---------------------------------------------------------------------------
# PackedItem / PackingResult
# ---------------------------------------------------------------------------


def test_packed_item_corners():
    packed = PackedItem(
        id="a-0", name="A", width=4, height=2, depth=6, position=(2.0, 1.0, 3.0)
    )
    assert packed.min_corner == (0.0, 0.0, 0.0)
    assert packed.max_corner == (4.0, 2.0, 6.0)
    assert packed.top == 2.0


def test_empty_result_stats():
    result = PackingResult.empty()
    assert result.success is False
    assert result.packed_count == 0
    assert result.unpacked_count == 0
    assert result.empty_space_percentage == 100.0
    assert result.to_dict()["box_dimensions"]["volume"] == 0


# ---------------------------------------------------------------------------
# PackingConfig
# ---------------------------------------------------------------------------


def test_bundled_config_matches_defaults():
    assert load_packing_config(BUNDLED_CONFIG) == DEFAULT_CONFIG


def test_partial_config_keeps_defaults():
    config = PackingConfig.from_dict(
        {"min_support_ratio": 0.5, "scoring": {"gap_threshold": 5}, "search": {"shrink_factors": [0.95]}}
    )
    assert config.min_support_ratio == 0.5
    assert config.scoring.gap_threshold == 5.0
    assert config.scoring.floor_bonus == DEFAULT_CONFIG.scoring.floor_bonus
    assert config.search.shrink_factors == (0.95,)
    assert config.max_spaces == 35


def test_config_rejects_unknown_keys():
    with pytest.raises(ValueError, match="unknown PackingConfig keys"):
        PackingConfig.from_dict({"max_space": 10})
    with pytest.raises(ValueError, match="unknown ScoringWeights keys"):
        PackingConfig.from_dict({"scoring": {"floor": 1}})


@pytest.mark.parametrize(
    "factory",
    [
        lambda: PackingConfig(min_support_ratio=0),
        lambda: PackingConfig(max_spaces=0),
        lambda: PackingConfig(collision_tolerance=-0.1),
        lambda: ScoringWeights(corner_bonus=30000),
        lambda: BoxSearchConfig(growth_factor=1.0),
        lambda: BoxSearchConfig(shrink_factors=(1.2,)),
        lambda: BoxSearchConfig(aspect_variations=((1.0, 1.0),)),
    ],
)
def test_invalid_config_values(factory):
    with pytest.raises(ValueError):
        factory()


def test_load_packing_config_propagates_json_errors(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(json.JSONDecodeError):
        load_packing_config(path)
