"""
Free-space bookkeeping: splitting a space around a placed item, merging
adjacent spaces and pruning the list between placements.
"""

from __future__ import annotations

from typing import List, Optional

from boxpack.core.utils_geometry import FreeSpace, Orientation, is_fully_contained
from boxpack.models.config import DEFAULT_CONFIG, PackingConfig


def split_space(
    space: FreeSpace,
    item_x: float,
    item_y: float,
    item_z: float,
    orientation: Orientation,
    min_size: float = DEFAULT_CONFIG.min_space_size,
) -> List[FreeSpace]:
    """
    Return the (up to six) sub-spaces of ``space`` left free around an item
    placed at ``(item_x, item_y, item_z)``, largest first.

    Each child spans the full parent on the two axes it was not cut on, so
    children overlap one another; collisions are resolved against placed
    items, not against other spaces.
    """
    item_max_x = item_x + orientation.width
    item_max_y = item_y + orientation.height
    item_max_z = item_z + orientation.depth
    candidates: List[FreeSpace] = []

    if space.max_x > item_max_x:
        candidates.append(
            FreeSpace(item_max_x, space.y, space.z, space.max_x - item_max_x, space.height, space.depth)
        )
    if item_x > space.x:
        candidates.append(
            FreeSpace(space.x, space.y, space.z, item_x - space.x, space.height, space.depth)
        )
    if space.max_y > item_max_y:
        candidates.append(
            FreeSpace(space.x, item_max_y, space.z, space.width, space.max_y - item_max_y, space.depth)
        )
    if item_y > space.y:
        candidates.append(
            FreeSpace(space.x, space.y, space.z, space.width, item_y - space.y, space.depth)
        )
    if space.max_z > item_max_z:
        candidates.append(
            FreeSpace(space.x, space.y, item_max_z, space.width, space.height, space.max_z - item_max_z)
        )
    if item_z > space.z:
        candidates.append(
            FreeSpace(space.x, space.y, space.z, space.width, space.height, item_z - space.z)
        )

    viable = [
        child
        for child in candidates
        if child.width >= min_size and child.height >= min_size and child.depth >= min_size
    ]
    viable.sort(key=lambda child: child.volume, reverse=True)
    return viable


def try_merge_spaces(
    first: FreeSpace,
    second: FreeSpace,
    tolerance: float = DEFAULT_CONFIG.space_tolerance,
) -> Optional[FreeSpace]:
    """
    Merge two spaces that share five faces and abut along one axis.

    Returns the combined space, or None when the pair cannot be merged.
    """

    def close(a: float, b: float) -> bool:
        return abs(a - b) < tolerance

    if (
        close(first.y, second.y)
        and close(first.z, second.z)
        and close(first.height, second.height)
        and close(first.depth, second.depth)
    ):
        if close(first.max_x, second.x):
            return FreeSpace(first.x, first.y, first.z, first.width + second.width, first.height, first.depth)
        if close(second.max_x, first.x):
            return FreeSpace(second.x, first.y, first.z, first.width + second.width, first.height, first.depth)

    if (
        close(first.x, second.x)
        and close(first.z, second.z)
        and close(first.width, second.width)
        and close(first.depth, second.depth)
    ):
        if close(first.max_y, second.y):
            return FreeSpace(first.x, first.y, first.z, first.width, first.height + second.height, first.depth)
        if close(second.max_y, first.y):
            return FreeSpace(first.x, second.y, first.z, first.width, first.height + second.height, first.depth)

    if (
        close(first.x, second.x)
        and close(first.y, second.y)
        and close(first.width, second.width)
        and close(first.height, second.height)
    ):
        if close(first.max_z, second.z):
            return FreeSpace(first.x, first.y, first.z, first.width, first.height, first.depth + second.depth)
        if close(second.max_z, first.z):
            return FreeSpace(first.x, first.y, second.z, first.width, first.height, first.depth + second.depth)

    return None


def cleanup_spaces(spaces: List[FreeSpace], config: PackingConfig = DEFAULT_CONFIG) -> None:
    """
    Prune ``spaces`` in place after a placement.

    Drops tiny and subsumed spaces, merges abutting pairs until none remain,
    caps the list at ``config.max_spaces`` (keeping the largest) and finally
    orders it floor first, then by height, then by distance from the origin
    corner.
    """
    if len(spaces) <= 1:
        return

    min_size = config.min_space_size
    spaces[:] = [
        space
        for space in spaces
        if space.width >= min_size
        and space.height >= min_size
        and space.depth >= min_size
        and space.volume >= config.min_space_volume
    ]

    for i in range(len(spaces) - 1, -1, -1):
        for j in range(len(spaces)):
            if i != j and is_fully_contained(spaces[i], spaces[j], config.space_tolerance):
                del spaces[i]
                break

    merged = True
    while merged:
        merged = False
        i = 0
        while i < len(spaces):
            j = i + 1
            while j < len(spaces):
                combined = try_merge_spaces(spaces[i], spaces[j], config.space_tolerance)
                if combined is not None:
                    spaces[i] = combined
                    del spaces[j]
                    merged = True
                else:
                    j += 1
            i += 1

    if len(spaces) > config.max_spaces:
        spaces.sort(key=lambda space: space.volume, reverse=True)
        del spaces[config.max_spaces:]

    spaces.sort(key=lambda space: (not space.on_floor, space.y, space.x + space.z))
