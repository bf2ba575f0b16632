"""
Tunable constants for the packing engine.

None of the numbers here are load-bearing invariants; they are the single
self-consistent set of tolerances and heuristic weights the engine uses. The
scoring weights keep the tier ordering floor > corner > edge > wall >
contact > fit > volume efficiency > position > gap risk.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Tuple, Type, TypeVar, Union

T = TypeVar("T")


def _require_non_negative(name: str, value: float) -> float:
    if value < 0:
        raise ValueError(f"{name} cannot be negative, got {value!r}")
    return value


def _require_ratio(name: str, value: float) -> float:
    if not 0 < value <= 1:
        raise ValueError(f"{name} must be in (0, 1], got {value!r}")
    return value


def _build(cls: Type[T], payload: Mapping[str, Any]) -> T:
    known = {f.name for f in fields(cls)}
    unknown = set(payload) - known
    if unknown:
        raise ValueError(f"unknown {cls.__name__} keys: {sorted(unknown)}")
    return cls(**payload)


@dataclass(frozen=True)
class ScoringWeights:
    """Weights of the additive placement score (lower total is better)."""

    floor_bonus: float = 20000.0
    stacked_bonus: float = 15000.0
    floating_penalty: float = 10000.0
    corner_bonus: float = 10000.0
    edge_bonus: float = 5000.0
    wall_bonus: float = 2000.0
    touching_face_bonus: float = 2000.0
    distance_penalty: float = 100.0
    leftover_volume_penalty: float = 3.0
    leftover_extent_penalty: float = 30.0
    volume_efficiency_bonus: float = 3000.0
    height_penalty: float = 150.0
    horizontal_penalty: float = 15.0
    gap_risk_penalty: float = 200.0
    vertical_gap_weight: float = 1.5
    gap_threshold: float = 15.0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = float(_require_non_negative(f.name, getattr(self, f.name)))
            object.__setattr__(self, f.name, value)
        if not (
            self.floor_bonus > self.corner_bonus > self.edge_bonus > self.wall_bonus
        ):
            raise ValueError(
                "scoring tiers must satisfy floor_bonus > corner_bonus > edge_bonus > wall_bonus"
            )


@dataclass(frozen=True)
class BoxSearchConfig:
    """Parameters of the optimal-box search loop."""

    buffer_factor: float = 1.3
    target_height_ratio: float = 0.7
    growth_factor: float = 1.1
    max_growth_attempts: int = 15
    aspect_variations: Tuple[Tuple[float, float, float], ...] = (
        (1.05, 0.95, 1.0),
        (0.95, 1.05, 1.0),
        (1.0, 0.95, 1.05),
        (1.0, 1.05, 0.95),
        (1.05, 1.0, 0.95),
        (0.95, 1.0, 1.05),
        (1.1, 0.9, 1.0),
        (1.0, 0.9, 1.1),
    )
    shrink_factors: Tuple[float, ...] = (0.98, 0.96, 0.94, 0.92, 0.90)
    fallback_buffer: float = 2.5
    fallback_growth: float = 1.5

    def __post_init__(self) -> None:
        if self.buffer_factor < 1:
            raise ValueError("buffer_factor must be at least 1")
        _require_ratio("target_height_ratio", self.target_height_ratio)
        if self.growth_factor <= 1:
            raise ValueError("growth_factor must be greater than 1")
        if int(self.max_growth_attempts) < 0:
            raise ValueError("max_growth_attempts cannot be negative")
        object.__setattr__(self, "max_growth_attempts", int(self.max_growth_attempts))
        variations = tuple(tuple(float(v) for v in variation) for variation in self.aspect_variations)
        for variation in variations:
            if len(variation) != 3 or any(v <= 0 for v in variation):
                raise ValueError(f"aspect variation must be three positive factors, got {variation!r}")
        object.__setattr__(self, "aspect_variations", variations)
        shrink = tuple(float(v) for v in self.shrink_factors)
        for factor in shrink:
            if not 0 < factor < 1:
                raise ValueError(f"shrink factors must be in (0, 1), got {factor!r}")
        object.__setattr__(self, "shrink_factors", shrink)
        if self.fallback_buffer < 1 or self.fallback_growth <= 1:
            raise ValueError("fallback_buffer must be >= 1 and fallback_growth > 1")


@dataclass(frozen=True)
class PackingConfig:
    """Tolerances, support policy, free-space limits and nested weights."""

    collision_tolerance: float = 0.001
    support_tolerance: float = 0.1
    min_support_ratio: float = 0.25
    touch_tolerance: float = 0.01
    space_tolerance: float = 0.01
    min_space_size: float = 0.5
    min_space_volume: float = 2.0
    max_spaces: int = 35
    scoring: ScoringWeights = field(default_factory=ScoringWeights)
    search: BoxSearchConfig = field(default_factory=BoxSearchConfig)

    def __post_init__(self) -> None:
        for name in (
            "collision_tolerance",
            "support_tolerance",
            "touch_tolerance",
            "space_tolerance",
            "min_space_size",
            "min_space_volume",
        ):
            object.__setattr__(self, name, float(_require_non_negative(name, getattr(self, name))))
        object.__setattr__(
            self, "min_support_ratio", float(_require_ratio("min_support_ratio", self.min_support_ratio))
        )
        if int(self.max_spaces) < 1:
            raise ValueError("max_spaces must be at least 1")
        object.__setattr__(self, "max_spaces", int(self.max_spaces))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "PackingConfig":
        """Build a config from a (possibly partial) mapping; omitted keys keep their defaults."""
        data = dict(payload)
        if "scoring" in data:
            data["scoring"] = _build(ScoringWeights, data["scoring"])
        if "search" in data:
            search = dict(data["search"])
            if "aspect_variations" in search:
                search["aspect_variations"] = tuple(tuple(v) for v in search["aspect_variations"])
            if "shrink_factors" in search:
                search["shrink_factors"] = tuple(search["shrink_factors"])
            data["search"] = _build(BoxSearchConfig, search)
        return _build(cls, data)


DEFAULT_CONFIG = PackingConfig()


def load_packing_config(path: Union[str, Path]) -> PackingConfig:
    """Read a JSON config file; I/O and JSON errors propagate to the caller."""
    with open(path, "r", encoding="utf-8") as file:
        return PackingConfig.from_dict(json.load(file))
