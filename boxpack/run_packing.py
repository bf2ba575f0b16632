"""
Command-line script to run a packing job described in a JSON file.

A job holds an optional ``box`` (``width``/``height``/``depth``), a list of
``items`` and optional global ``options``. Without a box the smallest
fitting box is searched for.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

from boxpack.core.optimal_box_finder import find_optimal_box
from boxpack.core.packer import pack_items
from boxpack.logger import configure_logging
from boxpack.models.box import BoxDimensions
from boxpack.models.config import DEFAULT_CONFIG, PackingConfig, load_packing_config
from boxpack.models.item import Item, OptimizeOptions
from boxpack.models.result import PackingResult
from boxpack.report.summary import format_summary

logger = logging.getLogger(__name__)

BASE_DIR = Path(__file__).resolve().parent
CONFIG_DIR = BASE_DIR / "config"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "packing.json"

EXIT_OK = 0
EXIT_INVALID_JOB = 1
EXIT_UNPACKED = 2


def load_config(path: Path) -> dict:
    with open(path, "r", encoding="utf-8") as file:
        return json.load(file)


def parse_job(
    payload: Dict[str, Any],
) -> Tuple[Optional[BoxDimensions], List[Item], Optional[OptimizeOptions]]:
    """Turn a raw job mapping into models; raises ValueError on bad input."""
    raw_items = payload.get("items")
    if not isinstance(raw_items, list):
        raise ValueError("job must contain an 'items' list")
    items = [Item.from_dict(raw, index) for index, raw in enumerate(raw_items)]

    raw_box = payload.get("box")
    box = BoxDimensions.from_dict(raw_box) if raw_box else None

    raw_options = payload.get("options")
    options = OptimizeOptions.from_dict(raw_options) if raw_options else None
    return box, items, options


def run_job(payload: Dict[str, Any], config: PackingConfig = DEFAULT_CONFIG) -> PackingResult:
    box, items, options = parse_job(payload)
    if box is None:
        return find_optimal_box(items, options, config)
    return pack_items(box, items, options, config)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="boxpack-run",
        description="Plan how to pack items into a box, or find the smallest box that fits them.",
    )
    parser.add_argument("job", type=Path, help="JSON job file with 'items' and optional 'box'/'options'")
    parser.add_argument("--config", type=Path, default=None, help="JSON file with tuning constants (default: bundled packing.json)")
    parser.add_argument("--json", action="store_true", help="print the full result as JSON")
    parser.add_argument("--strict", action="store_true", help="exit with status 2 if anything is left unpacked")
    parser.add_argument("--log-level", default="WARNING", help="logging level (default: WARNING)")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        config = load_packing_config(args.config or DEFAULT_CONFIG_PATH)
        payload = load_config(args.job)
        result = run_job(payload, config)
    except (OSError, json.JSONDecodeError, ValueError) as exc:
        logger.error("Invalid packing job: %s", exc)
        return EXIT_INVALID_JOB

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
    else:
        title = "Packing Summary" if payload.get("box") else "Optimal Box Summary"
        print(format_summary(result, title))

    if args.strict and not result.all_packed:
        return EXIT_UNPACKED
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
