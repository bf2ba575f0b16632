"""
Data model representing the shipping box that items are packed into.

Dimensions are internal dimensions in centimetres (cm). Validation happens
eagerly so the packing core never sees a degenerate box.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, Tuple


def _require_positive(name: str, value: float) -> float:
    if not math.isfinite(value) or value <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return value


def _read_number(payload: Dict[str, float], key: str) -> float:
    if key not in payload:
        raise ValueError(f"box is missing dimension {key!r}")
    try:
        return float(payload[key])
    except (TypeError, ValueError) as exc:
        raise ValueError(f"box {key} must be numeric, got {payload[key]!r}") from exc


@dataclass(frozen=True)
class BoxDimensions:
    """Immutable box interior; x runs along width, y along height, z along depth."""

    width: float
    height: float
    depth: float

    def __post_init__(self) -> None:
        # The all-zero box is reserved for "no items" results.
        if self.width == self.height == self.depth == 0:
            object.__setattr__(self, "width", 0.0)
            object.__setattr__(self, "height", 0.0)
            object.__setattr__(self, "depth", 0.0)
            return
        object.__setattr__(self, "width", float(_require_positive("width", self.width)))
        object.__setattr__(self, "height", float(_require_positive("height", self.height)))
        object.__setattr__(self, "depth", float(_require_positive("depth", self.depth)))

    @classmethod
    def empty(cls) -> "BoxDimensions":
        return cls(width=0, height=0, depth=0)

    @property
    def is_empty(self) -> bool:
        return self.volume == 0

    @property
    def volume(self) -> float:
        """Return interior volume in cm^3."""
        return self.width * self.height * self.depth

    @property
    def dimensions(self) -> Tuple[float, float, float]:
        """Return (width, height, depth)."""
        return self.width, self.height, self.depth

    def scaled(
        self,
        width_factor: float,
        height_factor: float,
        depth_factor: float,
        rounding: str = "ceil",
    ) -> "BoxDimensions":
        """
        Return a new box with each axis multiplied by its factor.

        Results are snapped to whole centimetres: ``"ceil"`` rounds up (used
        when growing) and ``"floor"`` rounds down (used when shrinking). No
        axis ever drops below 1 cm.
        """
        if rounding not in {"ceil", "floor"}:
            raise ValueError("rounding must be 'ceil' or 'floor'")
        snap = math.ceil if rounding == "ceil" else math.floor
        return BoxDimensions(
            width=max(1, snap(self.width * width_factor)),
            height=max(1, snap(self.height * height_factor)),
            depth=max(1, snap(self.depth * depth_factor)),
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "width": self.width,
            "height": self.height,
            "depth": self.depth,
            "volume": self.volume,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, float]) -> "BoxDimensions":
        """Instantiate from a raw configuration dictionary."""
        return cls(
            width=_read_number(payload, "width"),
            height=_read_number(payload, "height"),
            depth=_read_number(payload, "depth"),
        )
