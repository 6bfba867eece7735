from __future__ import annotations

from typing import Iterable, Optional

from ..models.pattern import Pattern
from . import grid as grid_ops
from .geometry import fit_cell
from .types import MAX_CELL, MAX_DIMENSION, MIN_CELL, MIN_DIMENSION, StitchType

ZOOM_STEP = 2


def clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, int(value)))


def resize_pattern(
    pattern: Pattern,
    width: Optional[int] = None,
    height: Optional[int] = None,
) -> Pattern:
    """Change dimensions without losing artwork in the overlapping area."""
    grid = pattern.grid
    new_width, new_height = pattern.width, pattern.height

    if width is not None:
        new_width = clamp(width, MIN_DIMENSION, MAX_DIMENSION)
    if height is not None:
        new_height = clamp(height, MIN_DIMENSION, MAX_DIMENSION)

    # rows from a lenient import may be ragged; every resize squares them up
    if width is not None or height is not None or not pattern.is_consistent():
        grid = grid_ops.resize_width(grid, new_width)
        grid = grid_ops.resize_height(grid, new_height, new_width)

    if new_width == pattern.width and new_height == pattern.height and grid == pattern.grid:
        return pattern
    return pattern.model_copy(update={"width": new_width, "height": new_height, "grid": grid})


def set_cell_size(pattern: Pattern, cell: int) -> Pattern:
    cell = clamp(cell, MIN_CELL, MAX_CELL)
    if cell == pattern.cell:
        return pattern
    return pattern.model_copy(update={"cell": cell})


def zoom(pattern: Pattern, steps: int) -> Pattern:
    return set_cell_size(pattern, pattern.cell + steps * ZOOM_STEP)


def fit_to_width(pattern: Pattern, available: float) -> Pattern:
    cell = fit_cell(pattern.stitch, pattern.width, available)
    if cell == pattern.cell:
        return pattern
    return pattern.model_copy(update={"cell": cell})


def set_stitch(pattern: Pattern, stitch: StitchType) -> Pattern:
    if stitch == pattern.stitch:
        return pattern
    return pattern.model_copy(update={"stitch": stitch})


def set_title(pattern: Pattern, title: str) -> Pattern:
    if title == pattern.title:
        return pattern
    return pattern.model_copy(update={"title": title})


def set_palette(pattern: Pattern, palette: Iterable[str]) -> Pattern:
    palette = list(palette)
    if palette == pattern.palette:
        return pattern
    return pattern.model_copy(update={"palette": palette})


def add_swatch(pattern: Pattern, color: str) -> Pattern:
    return pattern.model_copy(update={"palette": [*pattern.palette, color]})


def remove_swatch(pattern: Pattern, index: int) -> Pattern:
    if not 0 <= index < len(pattern.palette):
        raise IndexError(f"No swatch at position {index}")
    palette = list(pattern.palette)
    del palette[index]
    return pattern.model_copy(update={"palette": palette})


def clear_pattern(pattern: Pattern) -> Pattern:
    return pattern.model_copy(update={"grid": grid_ops.clear(pattern.width, pattern.height)})


__all__ = [
    "clamp",
    "resize_pattern",
    "set_cell_size",
    "zoom",
    "fit_to_width",
    "set_stitch",
    "set_title",
    "set_palette",
    "add_swatch",
    "remove_swatch",
    "clear_pattern",
]
