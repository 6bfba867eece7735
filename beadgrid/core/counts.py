from __future__ import annotations

from collections import Counter
from typing import List, Tuple

from .types import Grid


def count_colors(grid: Grid) -> List[Tuple[str, int]]:
    """Bead counts per colour, most used first. Empty cells are not counted."""
    counts: Counter[str] = Counter()
    for row in grid:
        for value in row:
            if value:
                counts[value] += 1
    # most_common keeps first-seen order among equal counts
    return counts.most_common()


def build_color_legend(grid: Grid) -> List[dict]:
    """Return the colour counts enriched with their share of placed beads."""
    counts = count_colors(grid)
    total = sum(count for _, count in counts) or 1
    return [
        {
            "color": color,
            "count": count,
            "percent": round(count / total * 100, 2),
        }
        for color, count in counts
    ]


__all__ = ["count_colors", "build_color_legend"]
