"""
Search for the smallest box that holds every item.

The search seeds a box from the total item volume, grows it until the packer
places everything, then tries a few aspect-ratio variants and shrinks the
winner while it still fits. All candidate boxes are evaluated in a fixed
order, so the outcome is deterministic.
"""

from __future__ import annotations

import logging
import math
from typing import Optional, Sequence, Tuple

from boxpack.core.packer import pack_items
from boxpack.models.box import BoxDimensions
from boxpack.models.config import DEFAULT_CONFIG, BoxSearchConfig, PackingConfig
from boxpack.models.item import Item, OptimizeOptions
from boxpack.models.result import PackingResult

logger = logging.getLogger(__name__)


def max_item_dimensions(items: Sequence[Item]) -> Tuple[float, float, float]:
    """
    Largest extent each box axis must accommodate.

    Rotatable items may present any of their dimensions on any axis; fixed
    items only their own per-axis dimension.
    """
    max_width = max_height = max_depth = 0.0
    for item in items:
        if item.allow_rotation:
            longest = max(item.dimensions)
            max_width = max(max_width, longest)
            max_height = max(max_height, longest)
            max_depth = max(max_depth, longest)
        else:
            max_width = max(max_width, item.width)
            max_height = max(max_height, item.height)
            max_depth = max(max_depth, item.depth)
    return max_width, max_height, max_depth


def estimate_initial_box(
    items: Sequence[Item],
    search: BoxSearchConfig = DEFAULT_CONFIG.search,
) -> BoxDimensions:
    """
    First guess: a cube of the buffered total volume, no smaller than the
    largest item on each axis, flattened toward a wide, low shipping shape.
    """
    total_volume = sum(item.total_volume for item in items)
    max_width, max_height, max_depth = max_item_dimensions(items)
    side = (total_volume * search.buffer_factor) ** (1 / 3)

    width = max(side, max_width)
    height = max(side, max_height)
    depth = max(side, max_depth)

    ratio = search.target_height_ratio
    if height > width * ratio and max_height <= width * ratio:
        excess = height - width * ratio
        depth += excess * 0.7
        width += excess * 0.3
        height = width * ratio

    return BoxDimensions(width=math.ceil(width), height=math.ceil(height), depth=math.ceil(depth))


def _fallback_box(items: Sequence[Item], search: BoxSearchConfig) -> BoxDimensions:
    total_volume = sum(item.total_volume for item in items)
    max_width, max_height, max_depth = max_item_dimensions(items)
    side = (total_volume * search.fallback_buffer) ** (1 / 3)
    return BoxDimensions(
        width=max(math.ceil(side), math.ceil(max_width * 2)),
        height=max(math.ceil(side * search.target_height_ratio), math.ceil(max_height * 2)),
        depth=max(math.ceil(side), math.ceil(max_depth * 2)),
    )


def find_optimal_box(
    items: Sequence[Item],
    options: Optional[OptimizeOptions] = None,
    config: Optional[PackingConfig] = None,
) -> PackingResult:
    """
    Return the packing result for the smallest box found that fits all items.

    An empty item list short-circuits to an empty result with a zero box. If
    the growth loop never fits everything, an oversize fallback box is used
    and its result returned even if items remain unpacked.
    """
    if not items:
        return PackingResult.empty()

    config = config or DEFAULT_CONFIG
    search = config.search
    prepared = [item.with_options(options) for item in items]

    box = estimate_initial_box(prepared, search)
    result = pack_items(box, prepared, config=config)
    logger.debug("Initial box %s: %d unpacked", box.dimensions, result.unpacked_count)

    attempts = 0
    while not result.all_packed and attempts < search.max_growth_attempts:
        attempts += 1
        factor = search.growth_factor
        box = box.scaled(factor, factor, factor, rounding="ceil")
        result = pack_items(box, prepared, config=config)
        logger.debug("Growth %d box %s: %d unpacked", attempts, box.dimensions, result.unpacked_count)

    if not result.all_packed:
        box = _fallback_box(prepared, search)
        logger.warning("Box search did not converge; trying fallback box %s", box.dimensions)
        result = pack_items(box, prepared, config=config)
        if not result.all_packed:
            factor = search.fallback_growth
            box = box.scaled(factor, factor, factor, rounding="ceil")
            result = pack_items(box, prepared, config=config)
        return result

    result = _best_aspect_variant(result, prepared, config)
    result = _shrink(result, prepared, config)
    logger.info(
        "Chosen box %s (%.1f%% utilised)",
        result.box_dimensions.dimensions,
        result.utilization_percentage,
    )
    return result


def _is_better(candidate: PackingResult, best: PackingResult) -> bool:
    if not candidate.all_packed:
        return False
    candidate_volume = candidate.box_dimensions.volume
    best_volume = best.box_dimensions.volume
    if candidate_volume != best_volume:
        return candidate_volume < best_volume
    return candidate.utilization_percentage > best.utilization_percentage


def _best_aspect_variant(
    best: PackingResult,
    items: Sequence[Item],
    config: PackingConfig,
) -> PackingResult:
    base = best.box_dimensions
    for width_factor, height_factor, depth_factor in config.search.aspect_variations:
        box = base.scaled(width_factor, height_factor, depth_factor, rounding="ceil")
        if box == best.box_dimensions:
            continue
        candidate = pack_items(box, items, config=config)
        if _is_better(candidate, best):
            logger.debug("Aspect variant %s fits in less volume", box.dimensions)
            best = candidate
    return best


def _shrink(
    best: PackingResult,
    items: Sequence[Item],
    config: PackingConfig,
) -> PackingResult:
    for factor in config.search.shrink_factors:
        box = best.box_dimensions.scaled(factor, factor, factor, rounding="floor")
        if box == best.box_dimensions:
            continue
        candidate = pack_items(box, items, config=config)
        if not candidate.all_packed:
            logger.debug("Shrink to %s leaves items unpacked; keeping %s", box.dimensions, best.box_dimensions.dimensions)
            break
        best = candidate
    return best
