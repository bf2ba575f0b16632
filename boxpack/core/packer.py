"""
Greedy best-fit packing of items into a fixed shipping box.

Every unit of every item is placed at the best-scoring feasible
(free space, orientation) pair; units with no feasible placement are reported
as unpacked rather than raised as errors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, List, Optional, Sequence

from boxpack.core.constraints import (
    check_collision,
    footprint_supported,
    has_support,
    support_overlap_area,
)
from boxpack.core.placement_scorer import calculate_placement_score
from boxpack.core.space_manager import cleanup_spaces, split_space
from boxpack.core.utils_geometry import (
    FreeSpace,
    Orientation,
    footprint_coverage,
    generate_orientations,
    rotation_text,
    round_half_up,
    volume_utilization,
)
from boxpack.models.box import BoxDimensions
from boxpack.models.config import DEFAULT_CONFIG, PackingConfig
from boxpack.models.item import Item, OptimizeOptions
from boxpack.models.result import PackedItem, PackingResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Candidate:
    space_index: int
    anchor: FreeSpace
    orientation: Orientation
    score: float


def sort_for_packing(items: Sequence[Item]) -> List[Item]:
    """
    Order items largest volume first, then tallest, then widest footprint side.
    The sort is stable so equal items keep their input order.
    """
    return sorted(
        items,
        key=lambda item: (-item.volume, -item.height, -max(item.width, item.depth)),
    )


def _anchors(space: FreeSpace, packed_items: Sequence[PackedItem], config: PackingConfig) -> List[FreeSpace]:
    """
    Sub-spaces of ``space`` whose minimum corner is a candidate position.

    The space's own corner always comes first. A raised space also offers the
    corner of each stackable top face it overlaps, so an item can move onto
    that support when the space's corner sits over something else.
    """
    anchors = [space]
    if space.on_floor:
        return anchors

    seen = {(space.x, space.z)}
    for item in packed_items:
        if not item.can_be_stacked or abs(item.top - space.y) >= config.support_tolerance:
            continue
        if support_overlap_area(space, item) <= 0:
            continue
        min_x, _, min_z = item.min_corner
        x = max(space.x, min_x)
        z = max(space.z, min_z)
        if (x, z) in seen:
            continue
        seen.add((x, z))
        anchors.append(FreeSpace(x, space.y, z, space.max_x - x, space.height, space.max_z - z))
    return anchors


def _find_best_placement(
    item: Item,
    orientations: Sequence[Orientation],
    spaces: Sequence[FreeSpace],
    packed_items: Sequence[PackedItem],
    box: BoxDimensions,
    config: PackingConfig,
) -> Optional[_Candidate]:
    best: Optional[_Candidate] = None
    stackable = item.can_be_stacked

    for index, space in enumerate(spaces):
        if not space.on_floor:
            # Non-stackable items stay on the floor; others need a supporting top face.
            if not stackable:
                continue
            if not has_support(space, packed_items, config.support_tolerance, config.min_support_ratio):
                continue

        for anchor in _anchors(space, packed_items, config):
            origin = (anchor.x, anchor.y, anchor.z)
            for orientation in orientations:
                if not anchor.fits(orientation):
                    continue
                if (
                    anchor.x + orientation.width > box.width
                    or anchor.y + orientation.height > box.height
                    or anchor.z + orientation.depth > box.depth
                ):
                    continue
                if not anchor.on_floor and not footprint_supported(
                    origin,
                    orientation.dimensions,
                    packed_items,
                    config.support_tolerance,
                    config.min_support_ratio,
                ):
                    continue
                if check_collision(origin, orientation.dimensions, packed_items, config.collision_tolerance):
                    continue
                score = calculate_placement_score(anchor, orientation, box, packed_items, config)
                if best is None or score < best.score:
                    best = _Candidate(index, anchor, orientation, score)
    return best


def _instruction(step: int, name: str, space: FreeSpace, orientation: Orientation) -> str:
    text = rotation_text(orientation.rotation)
    suffix = f" {text}" if text else ""
    return (
        f"{step}. Place {name} at position "
        f"({round_half_up(space.x)}cm, {round_half_up(space.y)}cm, {round_half_up(space.z)}cm)"
        f"{suffix}."
    )


def _rotation_key(rotation: Sequence[int]) -> str:
    return "[" + ", ".join(str(angle) for angle in rotation) + "]"


def pack_items(
    box: BoxDimensions,
    items: Sequence[Item],
    options: Optional[OptimizeOptions] = None,
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    """
    Pack ``items`` into ``box`` and return the placement plan.

    ``options`` overrides every item's rotation/stacking flags. The caller's
    items are never modified. The result is deterministic for identical
    arguments, including item order.
    """
    config = config or DEFAULT_CONFIG
    prepared = sort_for_packing([item.with_options(options) for item in items])

    spaces: List[FreeSpace] = [FreeSpace(0.0, 0.0, 0.0, box.width, box.height, box.depth)]
    packed_items: List[PackedItem] = []
    unpacked_items: List[Item] = []
    instructions: List[str] = []
    orientation_usage: Dict[str, int] = {}
    packed_volume = 0.0

    for item in prepared:
        orientations = generate_orientations(item)
        for instance in range(item.quantity):
            best = _find_best_placement(item, orientations, spaces, packed_items, box, config)
            if best is None:
                logger.debug("No feasible placement for %s (unit %d)", item.id, instance)
                unpacked_items.append(replace(item, quantity=1))
                continue

            space = spaces[best.space_index]
            anchor = best.anchor
            orientation = best.orientation
            packed = PackedItem(
                id=f"{item.id}-{instance}",
                name=item.name,
                width=orientation.width,
                height=orientation.height,
                depth=orientation.depth,
                quantity=1,
                weight=item.weight,
                max_stack=item.max_stack,
                color=item.color,
                allow_rotation=item.allow_rotation,
                position=(
                    anchor.x + orientation.width / 2,
                    anchor.y + orientation.height / 2,
                    anchor.z + orientation.depth / 2,
                ),
                rotation=orientation.rotation,
            )
            packed_items.append(packed)
            packed_volume += item.volume
            instructions.append(_instruction(len(packed_items), item.name, anchor, orientation))
            key = _rotation_key(orientation.rotation)
            orientation_usage[key] = orientation_usage.get(key, 0) + 1
            logger.debug(
                "Placed %s at (%.2f, %.2f, %.2f) rotation %s score %.1f",
                packed.id,
                anchor.x,
                anchor.y,
                anchor.z,
                key,
                best.score,
            )

            children = split_space(space, anchor.x, anchor.y, anchor.z, orientation, config.min_space_size)
            spaces[best.space_index:best.space_index + 1] = children
            cleanup_spaces(spaces, config)

    return PackingResult(
        success=len(packed_items) > 0,
        packed_items=packed_items,
        unpacked_items=unpacked_items,
        utilization_percentage=volume_utilization(packed_volume, box.volume),
        packing_instructions=instructions,
        box_dimensions=box,
        floor_coverage_percentage=footprint_coverage(packed_items, box.width, box.depth),
        orientation_usage=orientation_usage,
    )


def try_packing_with_dimensions(
    items: Sequence[Item],
    box: BoxDimensions,
    options: Optional[OptimizeOptions] = None,
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    """Argument-order convenience wrapper around :func:`pack_items`."""
    return pack_items(box, items, options, config)
