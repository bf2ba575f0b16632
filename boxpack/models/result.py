"""
Output models of a packing run: placed item instances and the overall result.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from boxpack.models.box import BoxDimensions
from boxpack.models.item import Item

Vector3 = Tuple[float, float, float]
Rotation = Tuple[int, int, int]


@dataclass(frozen=True)
class PackedItem(Item):
    """
    A single placed unit of an item.

    ``width``/``height``/``depth`` are the extents actually used (after
    rotation), ``position`` is the centre of the unit inside the box and
    ``rotation`` the cumulative rotation in degrees about X, Y and Z.
    """

    position: Vector3 = field(default=(0.0, 0.0, 0.0))
    rotation: Rotation = field(default=(0, 0, 0))

    @property
    def min_corner(self) -> Vector3:
        x, y, z = self.position
        return (x - self.width / 2, y - self.height / 2, z - self.depth / 2)

    @property
    def max_corner(self) -> Vector3:
        x, y, z = self.position
        return (x + self.width / 2, y + self.height / 2, z + self.depth / 2)

    @property
    def top(self) -> float:
        return self.position[1] + self.height / 2

    def to_dict(self) -> Dict[str, Any]:
        payload = super().to_dict()
        payload["position"] = list(self.position)
        payload["rotation"] = list(self.rotation)
        return payload


@dataclass
class PackingResult:
    success: bool
    packed_items: List[PackedItem]
    unpacked_items: List[Item]
    utilization_percentage: float
    packing_instructions: List[str]
    box_dimensions: BoxDimensions
    floor_coverage_percentage: float = 0.0
    orientation_usage: Dict[str, int] = field(default_factory=dict)

    @classmethod
    def empty(cls) -> "PackingResult":
        """Result used when there is nothing to pack."""
        return cls(
            success=False,
            packed_items=[],
            unpacked_items=[],
            utilization_percentage=0.0,
            packing_instructions=[],
            box_dimensions=BoxDimensions.empty(),
        )

    @property
    def packed_count(self) -> int:
        return len(self.packed_items)

    @property
    def unpacked_count(self) -> int:
        return sum(item.quantity for item in self.unpacked_items)

    @property
    def all_packed(self) -> bool:
        return not self.unpacked_items

    @property
    def empty_space_percentage(self) -> float:
        return 100.0 - self.utilization_percentage

    @property
    def box_volume(self) -> float:
        return self.box_dimensions.volume

    @property
    def packed_volume(self) -> float:
        return sum(item.volume for item in self.packed_items)

    @property
    def packed_weight(self) -> float:
        return sum(item.weight for item in self.packed_items)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "box_dimensions": self.box_dimensions.to_dict(),
            "box_volume": self.box_volume,
            "utilization_percentage": self.utilization_percentage,
            "empty_space_percentage": self.empty_space_percentage,
            "floor_coverage_percentage": self.floor_coverage_percentage,
            "packed_count": self.packed_count,
            "unpacked_count": self.unpacked_count,
            "packed_weight": self.packed_weight,
            "orientation_usage": dict(self.orientation_usage),
            "packed_items": [item.to_dict() for item in self.packed_items],
            "unpacked_items": [item.to_dict() for item in self.unpacked_items],
            "packing_instructions": list(self.packing_instructions),
        }
