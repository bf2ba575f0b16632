"""
Data model representing an item (a line of identical cartons) to be packed.

Dimensions are expressed in centimetres (cm) and weight in kilograms (kg).
Items are immutable; per-call overrides produce copies via
``dataclasses.replace`` so caller data is never modified.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Mapping, Optional, Tuple, Union

DEFAULT_COLORS: Tuple[str, ...] = (
    "#3B82F6",
    "#10B981",
    "#F59E0B",
    "#EF4444",
    "#8B5CF6",
    "#EC4899",
    "#06B6D4",
    "#F97316",
    "#84CC16",
    "#6366F1",
)

StackFlag = Union[bool, int]


def _require_positive(name: str, value: float) -> float:
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return value


def default_color(index: int) -> str:
    """Return the palette colour for the ``index``-th item (cycles)."""
    return DEFAULT_COLORS[index % len(DEFAULT_COLORS)]


@dataclass(frozen=True)
class Item:
    """Immutable description of an item line; ``quantity`` identical copies."""

    id: str
    name: str
    width: float
    height: float
    depth: float
    quantity: int = field(default=1)
    weight: float = field(default=1.0)
    max_stack: StackFlag = field(default=True)
    color: str = field(default=DEFAULT_COLORS[0])
    allow_rotation: bool = field(default=True)

    def __post_init__(self) -> None:
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "width", float(_require_positive("width", self.width)))
        object.__setattr__(self, "height", float(_require_positive("height", self.height)))
        object.__setattr__(self, "depth", float(_require_positive("depth", self.depth)))
        quantity = self.quantity
        if (
            isinstance(quantity, bool)
            or not isinstance(quantity, (int, float))
            or not math.isfinite(quantity)
            or int(quantity) != quantity
        ):
            raise ValueError(f"quantity must be a whole number, got {self.quantity!r}")
        if self.quantity < 1:
            raise ValueError(f"quantity must be at least 1, got {self.quantity!r}")
        object.__setattr__(self, "quantity", int(self.quantity))
        if not math.isfinite(self.weight) or self.weight < 0:
            raise ValueError(f"weight must be a finite non-negative number, got {self.weight!r}")
        object.__setattr__(self, "weight", float(self.weight))
        if not isinstance(self.max_stack, (bool, int)):
            raise ValueError(f"max_stack must be a bool or an int, got {self.max_stack!r}")

    @property
    def volume(self) -> float:
        """Return the volume of a single unit in cm^3."""
        return self.width * self.height * self.depth

    @property
    def total_volume(self) -> float:
        return self.volume * self.quantity

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        return self.width, self.height, self.depth

    @property
    def can_be_stacked(self) -> bool:
        """
        Whether other items may rest on top of this one.

        Booleans are taken as-is; legacy numeric stack limits count as
        stackable only when greater than one.
        """
        if isinstance(self.max_stack, bool):
            return self.max_stack
        return self.max_stack > 1

    def with_options(self, options: Optional["OptimizeOptions"]) -> "Item":
        """Return a copy with the global rotation/stacking overrides applied."""
        if options is None:
            return self
        changes: Dict[str, Any] = {}
        if options.allow_rotation is not None:
            changes["allow_rotation"] = options.allow_rotation
        if options.allow_stacking is not None:
            changes["max_stack"] = options.allow_stacking
        return replace(self, **changes) if changes else self

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "depth": self.depth,
            "quantity": self.quantity,
            "weight": self.weight,
            "max_stack": self.max_stack,
            "color": self.color,
            "allow_rotation": self.allow_rotation,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any], index: int = 0) -> "Item":
        """
        Instantiate from a raw dictionary.

        Both snake_case keys and the camelCase keys used by the front end
        (``maxStack``, ``allowRotation``) are accepted. Missing ids, names and
        colours are filled in from ``index``.
        """
        dims = {}
        for key in ("width", "height", "depth"):
            if key not in payload:
                raise ValueError(f"item {index} is missing dimension {key!r}")
            try:
                dims[key] = float(payload[key])
            except (TypeError, ValueError) as exc:
                raise ValueError(
                    f"item {index} {key} must be numeric, got {payload[key]!r}"
                ) from exc

        max_stack = payload.get("max_stack", payload.get("maxStack", True))
        allow_rotation = payload.get("allow_rotation", payload.get("allowRotation", True))
        return cls(
            id=str(payload.get("id", f"item-{index + 1}")),
            name=str(payload.get("name", f"Item {index + 1}")),
            quantity=payload.get("quantity", 1),
            weight=float(payload.get("weight", 1.0)),
            max_stack=max_stack,
            color=str(payload.get("color", default_color(index))),
            allow_rotation=bool(allow_rotation),
            **dims,
        )


@dataclass(frozen=True)
class OptimizeOptions:
    """Global overrides applied to every item before packing; ``None`` keeps the item's own flag."""

    allow_rotation: Optional[bool] = None
    allow_stacking: Optional[bool] = None

    def to_dict(self) -> Dict[str, Optional[bool]]:
        return {
            "allow_rotation": self.allow_rotation,
            "allow_stacking": self.allow_stacking,
        }

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "OptimizeOptions":
        allow_rotation = payload.get("allow_rotation", payload.get("allowRotation"))
        allow_stacking = payload.get("allow_stacking", payload.get("allowStacking"))
        return cls(
            allow_rotation=None if allow_rotation is None else bool(allow_rotation),
            allow_stacking=None if allow_stacking is None else bool(allow_stacking),
        )
