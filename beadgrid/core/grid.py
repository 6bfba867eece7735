"""Pure operations over a row-major grid of cell colors.

Every function returns a new grid (or the very same object when nothing
changed); input grids are never modified in place, so a reader holding an
older grid always sees a complete, consistent value.
"""

from __future__ import annotations

from typing import List

from .types import CellColor, Grid


def make_row(width: int, fill: CellColor = None) -> List[CellColor]:
    return [fill] * width


def create(width: int, height: int, fill: CellColor = None) -> Grid:
    return [make_row(width, fill) for _ in range(height)]


def clone(grid: Grid) -> Grid:
    # cells are immutable values, a row-level copy is a deep copy
    return [list(row) for row in grid]


def resize_width(grid: Grid, new_width: int) -> Grid:
    resized: Grid = []
    for row in grid:
        row = list(row[:new_width])
        if len(row) < new_width:
            row.extend(make_row(new_width - len(row)))
        resized.append(row)
    return resized


def resize_height(grid: Grid, new_height: int, width: int) -> Grid:
    resized = clone(grid[:new_height])
    while len(resized) < new_height:
        resized.append(make_row(width))
    return resized


def clear(width: int, height: int) -> Grid:
    return create(width, height)


def in_grid(grid: Grid, row: int, col: int) -> bool:
    """Bounds check against the grid's real extent, not declared dimensions."""
    return 0 <= row < len(grid) and 0 <= col < len(grid[row])


def get_cell(grid: Grid, row: int, col: int) -> CellColor:
    if not in_grid(grid, row, col):
        return None
    return grid[row][col]


def set_cell(grid: Grid, row: int, col: int, value: CellColor) -> Grid:
    if not in_grid(grid, row, col) or grid[row][col] == value:
        return grid
    updated = list(grid)
    new_row = list(grid[row])
    new_row[col] = value
    updated[row] = new_row
    return updated


__all__ = [
    "make_row",
    "create",
    "clone",
    "resize_width",
    "resize_height",
    "clear",
    "in_grid",
    "get_cell",
    "set_cell",
]
