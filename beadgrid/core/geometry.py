"""Grid <-> pixel mapping for both stitch geometries.

Rendering and hit testing both go through these functions so they can never
disagree. Everything here works in logical pixels; device-pixel scaling is
handled by the caller (see ``to_logical``).
"""

from __future__ import annotations

import math
from typing import Optional, Tuple

from .types import FIT_MIN_CELL, StitchType


def row_offset(stitch: StitchType, row: int, cell: float) -> float:
    """Horizontal shift of ``row``: odd peyote rows sit half a bead to the right."""
    if stitch == "peyote" and row % 2 == 1:
        return cell / 2
    return 0


def pattern_pixel_width(stitch: StitchType, width: int, cell: float) -> float:
    if stitch == "peyote":
        return width * cell + cell / 2
    return width * cell


def pattern_pixel_height(height: int, cell: float) -> float:
    return height * cell


def cell_top_left(stitch: StitchType, row: int, col: int, cell: float) -> Tuple[float, float]:
    return col * cell + row_offset(stitch, row, cell), row * cell


def pixel_to_cell(
    stitch: StitchType,
    px: float,
    py: float,
    cell: float,
    width: int,
    height: int,
) -> Optional[Tuple[int, int]]:
    """Return the ``(row, col)`` under a logical point, or ``None`` on a miss."""
    if cell <= 0:
        return None
    row = math.floor(py / cell)
    if row < 0 or row >= height:
        return None
    col = math.floor((px - row_offset(stitch, row, cell)) / cell)
    if col < 0 or col >= width:
        return None
    return row, col


def to_logical(x: float, y: float, device_pixel_ratio: float = 1.0) -> Tuple[float, float]:
    """Convert physical surface coordinates into logical pixels."""
    ratio = device_pixel_ratio or 1.0
    return x / ratio, y / ratio


def fit_cell(stitch: StitchType, width: int, available: float) -> int:
    """Largest cell size whose pattern fits into ``available`` logical pixels."""
    columns = width + 0.5 if stitch == "peyote" else width
    if columns <= 0:
        return FIT_MIN_CELL
    return max(FIT_MIN_CELL, math.floor(available / columns))


__all__ = [
    "row_offset",
    "pattern_pixel_width",
    "pattern_pixel_height",
    "cell_top_left",
    "pixel_to_cell",
    "to_logical",
    "fit_cell",
]
