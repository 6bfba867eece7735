from __future__ import annotations

from typing import Optional

from beadgrid.core.geometry import cell_top_left
from beadgrid.core.grid import create
from beadgrid.models.pattern import Pattern


def make_pattern(
    width: int = 4,
    height: int = 4,
    *,
    cell: int = 10,
    stitch: str = "square",
    fill: Optional[str] = None,
    **extra,
) -> Pattern:
    return Pattern(
        width=width,
        height=height,
        cell=cell,
        stitch=stitch,
        grid=create(width, height, fill),
        **extra,
    )


def centre_of(pattern: Pattern, row: int, col: int) -> tuple[float, float]:
    """Logical pixel in the middle of a cell, honouring the row stagger."""
    x, y = cell_top_left(pattern.stitch, row, col, pattern.cell)
    return x + pattern.cell / 2, y + pattern.cell / 2


class BrokenStorage:
    """Key-value store whose every call fails, like a full or disabled disk."""

    def save_json(self, path, obj):
        raise OSError("No space left on device")

    def load_json(self, path):
        raise OSError("Storage disabled")


class MemoryStorage:
    def __init__(self) -> None:
        self.items: dict = {}

    def save_json(self, path, obj):
        self.items[path] = obj

    def load_json(self, path):
        if path not in self.items:
            raise KeyError(path)
        return self.items[path]
