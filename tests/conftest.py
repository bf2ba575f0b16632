"""Shared fixtures for the packing engine tests."""

from __future__ import annotations

import logging

import pytest

from boxpack.models.box import BoxDimensions
from boxpack.models.item import Item


@pytest.fixture
def cube_box() -> BoxDimensions:
    """A 100 cm cube."""
    return BoxDimensions(width=100, height=100, depth=100)


@pytest.fixture
def make_item():
    """Factory for items with sensible defaults."""

    def _make(
        width: float,
        height: float,
        depth: float,
        quantity: int = 1,
        item_id: str = "item",
        name: str = "Item",
        **kwargs,
    ) -> Item:
        return Item(
            id=item_id,
            name=name,
            width=width,
            height=height,
            depth=depth,
            quantity=quantity,
            **kwargs,
        )

    return _make


@pytest.fixture(autouse=True)
def reset_boxpack_logger():
    """Undo any handler/level the CLI installs so tests stay independent."""
    yield
    logger = logging.getLogger("boxpack")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
