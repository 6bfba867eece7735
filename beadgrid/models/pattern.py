from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..core import grid as grid_ops
from ..core.types import StitchType

DEFAULT_TITLE = "Untitled Pattern"
DEFAULT_WIDTH = 32
DEFAULT_HEIGHT = 10
DEFAULT_CELL = 22
DEFAULT_STITCH: StitchType = "peyote"

DEFAULT_PALETTE = [
    "#000000",
    "#ffffff",
    "#ff007a",
    "#ffca3a",
    "#8aff00",
    "#57e1ff",
    "#7b61ff",
    "#ff9b00",
    "#b6ffea",
    "#ffd6e0",
]


class Pattern(BaseModel):
    """A bead pattern. Instances are never mutated; edits produce a new value."""

    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_TITLE
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    cell: int = DEFAULT_CELL
    stitch: StitchType = DEFAULT_STITCH
    grid: List[List[Optional[str]]] = Field(
        default_factory=lambda: grid_ops.create(DEFAULT_WIDTH, DEFAULT_HEIGHT)
    )
    palette: List[str] = Field(default_factory=lambda: list(DEFAULT_PALETTE))

    @classmethod
    def default(cls) -> "Pattern":
        return cls()

    def is_consistent(self) -> bool:
        """True when ``width``/``height`` describe the grid's actual shape."""
        if len(self.grid) != self.height:
            return False
        return all(len(row) == self.width for row in self.grid)

    def with_grid(self, grid: List[List[Optional[str]]]) -> "Pattern":
        if grid is self.grid:
            return self
        return self.model_copy(update={"grid": grid})
