"""
Feasibility checks for a candidate placement: collision with placed items and
gravity support for placements above the floor.
"""

from __future__ import annotations

from typing import Sequence

from boxpack.core.utils_geometry import FreeSpace, Vector3, boxes_overlap
from boxpack.models.config import DEFAULT_CONFIG
from boxpack.models.result import PackedItem


def check_collision(
    origin: Vector3,
    dims: Vector3,
    packed_items: Sequence[PackedItem],
    tolerance: float = DEFAULT_CONFIG.collision_tolerance,
) -> bool:
    """
    Return True if a cuboid at ``origin`` (minimum corner) with extents
    ``dims`` would overlap any packed item. Items that merely share a face are
    not reported as colliding.
    """
    for item in packed_items:
        if boxes_overlap(origin, dims, item.min_corner, item.dimensions, tolerance):
            return True
    return False


def support_overlap_area(space: FreeSpace, item: PackedItem) -> float:
    """Area of the x-z overlap between the space's base and the item's top face."""
    return footprint_overlap_area(space.x, space.z, space.width, space.depth, item)


def has_support(
    space: FreeSpace,
    packed_items: Sequence[PackedItem],
    tolerance: float = DEFAULT_CONFIG.support_tolerance,
    min_ratio: float = DEFAULT_CONFIG.min_support_ratio,
) -> bool:
    """
    Whether a free space may host a placement without floating.

    Floor-level spaces are always supported. A raised space needs a single
    stackable item whose top face sits at the space's base height (within
    ``tolerance``) and covers at least ``min_ratio`` of the space's base area.
    """
    if space.on_floor:
        return True

    required = min_ratio * space.base_area
    for item in packed_items:
        if not item.can_be_stacked:
            continue
        if abs(item.top - space.y) >= tolerance:
            continue
        if support_overlap_area(space, item) >= required:
            return True
    return False


def footprint_overlap_area(x: float, z: float, width: float, depth: float, item: PackedItem) -> float:
    """Area of the x-z overlap between a footprint and the item's top face."""
    min_x, _, min_z = item.min_corner
    max_x, _, max_z = item.max_corner
    overlap_width = min(max_x, x + width) - max(min_x, x)
    overlap_depth = min(max_z, z + depth) - max(min_z, z)
    if overlap_width <= 0 or overlap_depth <= 0:
        return 0.0
    return overlap_width * overlap_depth


def footprint_supported(
    origin: Vector3,
    dims: Vector3,
    packed_items: Sequence[PackedItem],
    tolerance: float = DEFAULT_CONFIG.support_tolerance,
    min_ratio: float = DEFAULT_CONFIG.min_support_ratio,
) -> bool:
    """
    Whether a cuboid at ``origin`` would rest on stackable items.

    Items whose top face sits at the cuboid's base height (within
    ``tolerance``) are the ones it rests on. None of them may be
    non-stackable, and together they must cover at least ``min_ratio`` of the
    cuboid's own footprint. Floor placements are always supported.
    """
    x, y, z = origin
    width, _, depth = dims
    if y == 0:
        return True

    supported = 0.0
    for item in packed_items:
        if abs(item.top - y) >= tolerance:
            continue
        area = footprint_overlap_area(x, z, width, depth, item)
        if area <= 0:
            continue
        if not item.can_be_stacked:
            return False
        supported += area
    return supported >= min_ratio * width * depth
