"""
Geometry helper utilities shared across the packing modules.

Coordinates follow the box convention: x along width, y along height (up),
z along depth, with the origin at the bottom-left-back corner.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from boxpack.models.item import Item
from boxpack.models.result import PackedItem

Vector3 = Tuple[float, float, float]
Rotation = Tuple[int, int, int]

# (source axis per target axis, rotation label); source axes index (width, height, depth).
ROTATION_PATTERNS: Tuple[Tuple[Tuple[int, int, int], Rotation], ...] = (
    ((0, 1, 2), (0, 0, 0)),
    ((0, 2, 1), (90, 0, 0)),
    ((2, 1, 0), (0, 90, 0)),
    ((1, 0, 2), (0, 0, 90)),
    ((2, 0, 1), (90, 90, 0)),
    ((1, 2, 0), (90, 0, 90)),
)

_AXIS_NAMES = ("X", "Y", "Z")


@dataclass(frozen=True)
class FreeSpace:
    """Axis-aligned empty region; ``(x, y, z)`` is its minimum corner."""

    x: float
    y: float
    z: float
    width: float
    height: float
    depth: float

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def max_z(self) -> float:
        return self.z + self.depth

    @property
    def base_area(self) -> float:
        return self.width * self.depth

    @property
    def on_floor(self) -> bool:
        return self.y == 0

    def fits(self, orientation: "Orientation") -> bool:
        return (
            orientation.width <= self.width
            and orientation.height <= self.height
            and orientation.depth <= self.depth
        )


@dataclass(frozen=True)
class Orientation:
    """Oriented extents of an item and the rotation that produced them."""

    width: float
    height: float
    depth: float
    rotation: Rotation

    @property
    def volume(self) -> float:
        return self.width * self.height * self.depth

    @property
    def dimensions(self) -> Vector3:
        return self.width, self.height, self.depth


def generate_orientations(item: Item) -> List[Orientation]:
    """
    Return the candidate orientations for an item in a fixed order.

    Items that may not rotate get their declared orientation only. Otherwise
    the six 90-degree rotation patterns are always produced, even when some of
    them coincide geometrically, so that the search order (and therefore
    tie-breaking) never depends on the item's measurements.
    """
    dims = item.dimensions
    if not item.allow_rotation:
        return [Orientation(dims[0], dims[1], dims[2], (0, 0, 0))]
    return [
        Orientation(dims[axes[0]], dims[axes[1]], dims[axes[2]], rotation)
        for axes, rotation in ROTATION_PATTERNS
    ]


def rotation_text(rotation: Sequence[int]) -> str:
    """Human-readable rotation, e.g. ``rotated 90° around X-axis``; empty when unrotated."""
    axes = [
        f"{angle}° around {name}-axis"
        for angle, name in zip(rotation, _AXIS_NAMES)
        if angle != 0
    ]
    if not axes:
        return ""
    return "rotated " + " and ".join(axes)


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def ranges_overlap(min1: float, max1: float, min2: float, max2: float) -> bool:
    """
    Determine if two open intervals on the same axis overlap; touching ends do not count.
    """
    return not (max1 <= min2 or min1 >= max2)


def boxes_overlap(
    a_origin: Vector3,
    a_dims: Vector3,
    b_origin: Vector3,
    b_dims: Vector3,
    tolerance: float = 0.0,
) -> bool:
    """
    Check whether two axis-aligned cuboids intersect.

    Each axis overlap is shrunk by ``tolerance`` on both sides, so cuboids
    sharing a face (or overlapping by less than the tolerance) do not collide.
    """
    for axis in range(3):
        a_min, a_max = a_origin[axis], a_origin[axis] + a_dims[axis]
        b_min, b_max = b_origin[axis], b_origin[axis] + b_dims[axis]
        if not (a_min < b_max - tolerance and a_max > b_min + tolerance):
            return False
    return True


def is_fully_contained(inner: FreeSpace, outer: FreeSpace, tolerance: float = 0.01) -> bool:
    """Check whether ``inner`` lies completely within ``outer`` (within tolerance)."""
    return (
        inner.x >= outer.x - tolerance
        and inner.y >= outer.y - tolerance
        and inner.z >= outer.z - tolerance
        and inner.max_x <= outer.max_x + tolerance
        and inner.max_y <= outer.max_y + tolerance
        and inner.max_z <= outer.max_z + tolerance
    )


def volume_utilization(used_volume: float, container_volume: float) -> float:
    """
    Volume utilisation expressed as a percentage, clamped to 0.0 - 100.0.
    """
    if container_volume <= 0:
        return 0.0
    return min(float(used_volume) / float(container_volume) * 100.0, 100.0)


def footprint_coverage(
    packed_items: Sequence[PackedItem],
    box_width: float,
    box_depth: float,
) -> float:
    """
    Percentage of the box floor (x-z plane) covered by the projection of the
    packed items, computed with a plane sweep over the x edges.
    """
    container_area = float(box_width * box_depth)
    if not packed_items or container_area <= 0:
        return 0.0

    x_edges: List[float] = []
    rects: List[Tuple[float, float, float, float]] = []
    for item in packed_items:
        x0, _, z0 = item.min_corner
        x1, _, z1 = item.max_corner
        x_edges.extend([x0, x1])
        rects.append((x0, x1, z0, z1))

    x_edges = sorted(set(x_edges))
    area = 0.0
    for x_start, x_end in zip(x_edges, x_edges[1:]):
        intervals = sorted((z0, z1) for x0, x1, z0, z1 in rects if x0 <= x_start and x1 >= x_end)
        if not intervals:
            continue
        area += (x_end - x_start) * _merged_length(intervals)

    area = min(area, container_area)
    return area / container_area * 100.0


def _merged_length(intervals: Iterable[Tuple[float, float]]) -> float:
    total = 0.0
    cur_start = cur_end = None
    for start, end in intervals:
        if cur_end is None or start > cur_end:
            if cur_end is not None:
                total += cur_end - cur_start
            cur_start, cur_end = start, end
        else:
            cur_end = max(cur_end, end)
    if cur_end is not None:
        total += cur_end - cur_start
    return total
