"""Common lightweight type aliases used across the editor."""

from typing import List, Literal, Optional

StitchType = Literal["square", "peyote"]
ToolName = Literal["pencil", "eraser", "eyedropper", "fill"]

# ``None`` is the one and only "no bead" value.
CellColor = Optional[str]
Grid = List[List[CellColor]]

TOOLS = ("pencil", "eraser", "eyedropper", "fill")
CONTINUOUS_TOOLS = frozenset({"pencil", "eraser"})

MIN_DIMENSION = 2
MAX_DIMENSION = 200
MIN_CELL = 6
MAX_CELL = 48
FIT_MIN_CELL = 8

__all__ = [
    "StitchType",
    "ToolName",
    "CellColor",
    "Grid",
    "TOOLS",
    "CONTINUOUS_TOOLS",
    "MIN_DIMENSION",
    "MAX_DIMENSION",
    "MIN_CELL",
    "MAX_CELL",
    "FIT_MIN_CELL",
]
