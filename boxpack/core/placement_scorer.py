"""
Heuristic cost of placing an orientation at the minimum corner of a free space.

Lower scores are better. The score is a sum of weighted terms; see
``ScoringWeights`` for the individual coefficients.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple

from boxpack.core.utils_geometry import FreeSpace, Orientation, ranges_overlap
from boxpack.models.box import BoxDimensions
from boxpack.models.config import DEFAULT_CONFIG, PackingConfig, ScoringWeights
from boxpack.models.result import PackedItem


def estimate_wasted_space_risk(
    origin: Tuple[float, float, float],
    dims: Tuple[float, float, float],
    box: BoxDimensions,
    weights: ScoringWeights = DEFAULT_CONFIG.scoring,
) -> float:
    """
    Penalty for leaving a gap narrower than ``weights.gap_threshold`` between
    the placement and a box wall. The gap above the floor weighs more.
    """
    threshold = weights.gap_threshold
    risk = 0.0
    for axis, limit in enumerate(box.dimensions):
        low_gap = origin[axis]
        high_gap = limit - (origin[axis] + dims[axis])
        if 0 < low_gap < threshold:
            factor = weights.vertical_gap_weight if axis == 1 else 1.0
            risk += (threshold - low_gap) * factor
        if 0 < high_gap < threshold:
            risk += threshold - high_gap
    return risk


def count_touching_walls(space: FreeSpace, orientation: Orientation, box: BoxDimensions) -> int:
    """Number of axes (0-3) on which the placement touches a box wall."""
    touching = 0
    for start, extent, limit in (
        (space.x, orientation.width, box.width),
        (space.y, orientation.height, box.height),
        (space.z, orientation.depth, box.depth),
    ):
        if start == 0 or start + extent == limit:
            touching += 1
    return touching


def contact_profile(
    origin: Tuple[float, float, float],
    dims: Tuple[float, float, float],
    packed_items: Sequence[PackedItem],
    tolerance: float = DEFAULT_CONFIG.touch_tolerance,
) -> Tuple[int, float]:
    """
    Return ``(touching_faces, min_distance)`` between a candidate cuboid and
    the packed items. A face counts when it coincides with a face of a packed
    item and the two overlap on the other two axes. ``min_distance`` is the
    smallest gap between the cuboid and any packed item (0 when they touch),
    ``inf`` when nothing is packed yet.
    """
    item_min = origin
    item_max = tuple(origin[axis] + dims[axis] for axis in range(3))
    touching = 0
    min_distance = math.inf

    for packed in packed_items:
        packed_min = packed.min_corner
        packed_max = packed.max_corner

        for axis in range(3):
            flush = (
                abs(item_min[axis] - packed_max[axis]) < tolerance
                or abs(item_max[axis] - packed_min[axis]) < tolerance
            )
            if not flush:
                continue
            others = [other for other in range(3) if other != axis]
            if all(
                ranges_overlap(item_min[o], item_max[o], packed_min[o], packed_max[o])
                for o in others
            ):
                touching += 1

        distance = math.sqrt(
            sum(
                max(0.0, packed_min[axis] - item_max[axis], item_min[axis] - packed_max[axis]) ** 2
                for axis in range(3)
            )
        )
        min_distance = min(min_distance, distance)

    return touching, min_distance


def calculate_placement_score(
    space: FreeSpace,
    orientation: Orientation,
    box: BoxDimensions,
    packed_items: Sequence[PackedItem],
    config: PackingConfig = DEFAULT_CONFIG,
) -> float:
    """
    Score placing ``orientation`` at the minimum corner of ``space``.
    """
    weights = config.scoring
    origin = (space.x, space.y, space.z)
    dims = orientation.dimensions
    score = 0.0

    # Support: floor first, then resting on another item, floating last.
    if space.on_floor:
        score -= weights.floor_bonus
    elif any(abs(space.y - packed.top) < config.support_tolerance for packed in packed_items):
        score -= weights.stacked_bonus
    else:
        score += weights.floating_penalty

    walls = count_touching_walls(space, orientation, box)
    if walls == 3:
        score -= weights.corner_bonus
    elif walls == 2:
        score -= weights.edge_bonus
    elif walls == 1:
        score -= weights.wall_bonus

    touching, min_distance = contact_profile(origin, dims, packed_items, config.touch_tolerance)
    score -= touching * weights.touching_face_bonus
    if touching == 0 and min_distance != math.inf:
        score += min_distance * weights.distance_penalty

    width_fit = space.width - orientation.width
    height_fit = space.height - orientation.height
    depth_fit = space.depth - orientation.depth
    score += width_fit * height_fit * depth_fit * weights.leftover_volume_penalty
    score += (width_fit + height_fit + depth_fit) * weights.leftover_extent_penalty

    score -= orientation.volume / space.volume * weights.volume_efficiency_bonus

    score += space.y * weights.height_penalty
    score += (space.x + space.z) * weights.horizontal_penalty

    score += estimate_wasted_space_risk(origin, dims, box, weights) * weights.gap_risk_penalty
    return score
