"""
Plain-text summary of a packing result for terminal output.
"""

from __future__ import annotations

from typing import Dict, List

from boxpack.models.item import Item
from boxpack.models.result import PackingResult


def _fmt(value: float) -> str:
    return f"{value:g}"


def _group_unpacked(items: List[Item]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for item in items:
        counts[item.name] = counts.get(item.name, 0) + item.quantity
    return counts


def summary_lines(result: PackingResult, title: str = "Packing Summary") -> List[str]:
    box = result.box_dimensions
    lines = [
        f"=== {title} ===",
        f"Box (W x H x D): {_fmt(box.width)} x {_fmt(box.height)} x {_fmt(box.depth)} cm"
        f" ({_fmt(box.volume)} cm3)",
        f"Items Packed: {result.packed_count}",
        f"Items Not Packed: {result.unpacked_count}",
        f"Space Utilisation: {result.utilization_percentage:.1f}%",
        f"Empty Space: {result.empty_space_percentage:.1f}%",
        f"Floor Coverage: {result.floor_coverage_percentage:.1f}%",
        f"Packed Weight: {result.packed_weight:.2f} kg",
    ]

    if result.packing_instructions:
        lines.append("")
        lines.append("Instructions:")
        lines.extend(result.packing_instructions)

    unpacked = _group_unpacked(result.unpacked_items)
    if unpacked:
        lines.append("")
        lines.append("Could not be packed:")
        lines.extend(f"- {name} x{count}" for name, count in unpacked.items())
    return lines


def format_summary(result: PackingResult, title: str = "Packing Summary") -> str:
    return "\n".join(summary_lines(result, title))
