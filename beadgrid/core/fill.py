from __future__ import annotations

import logging

from .grid import in_grid
from .types import CellColor, Grid

logger = logging.getLogger(__name__)

_NEIGHBOURS = ((1, 0), (-1, 0), (0, 1), (0, -1))


def flood_fill(grid: Grid, start_row: int, start_col: int, target_color: CellColor) -> Grid:
    """
    Replace the 4-connected region around ``(start_row, start_col)``.

    The seed's current value (``None`` included) is what a cell must equal to
    join the region. When the seed already holds ``target_color`` or lies
    outside the grid, the input grid is returned as-is.
    """
    if not in_grid(grid, start_row, start_col):
        return grid

    seed_color = grid[start_row][start_col]
    if seed_color == target_color:
        return grid

    filled = [list(row) for row in grid]
    stack = [(start_row, start_col)]
    visited = {(start_row, start_col)}
    changed = 0

    while stack:
        r, c = stack.pop()
        if filled[r][c] != seed_color:
            continue
        filled[r][c] = target_color
        changed += 1
        for dr, dc in _NEIGHBOURS:
            nr, nc = r + dr, c + dc
            if (nr, nc) in visited or not in_grid(filled, nr, nc):
                continue
            visited.add((nr, nc))
            stack.append((nr, nc))

    logger.debug("flood fill from (%d, %d) recoloured %d cells", start_row, start_col, changed)
    return filled


__all__ = ["flood_fill"]
