"""
Pointer-driven editing of a pattern.

A gesture is a two-state machine: ``Idle`` until a pointer goes down, then
``Dragging`` until that same pointer goes up or is cancelled. The tool and
colour active at pointer-down are frozen into the ``Dragging`` state, so
changing the selection mid-stroke does not affect the stroke in progress.

Pencil and eraser are continuous (they follow the pointer across cells);
eyedropper and fill act once, at pointer-down.
"""

from __future__ import annotations

import logging
import dataclasses
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from ..models.pattern import Pattern
from . import grid as grid_ops
from .fill import flood_fill
from .geometry import pixel_to_cell
from .types import CONTINUOUS_TOOLS, TOOLS, CellColor

logger = logging.getLogger(__name__)

DEFAULT_TOOL = "pencil"
DEFAULT_COLOR = "#ff007a"

Observer = Callable[[Pattern, Pattern], None]


@dataclass(frozen=True)
class Idle:
    name: str = "idle"


@dataclass(frozen=True)
class Dragging:
    pointer_id: int
    tool: str
    color: str
    last_cell: Optional[Tuple[int, int]] = None
    name: str = "dragging"


GestureState = Union[Idle, Dragging]
IDLE = Idle()


class EditorController:
    def __init__(
        self,
        pattern: Optional[Pattern] = None,
        *,
        tool: str = DEFAULT_TOOL,
        color: str = DEFAULT_COLOR,
    ) -> None:
        self.pattern = pattern if pattern is not None else Pattern.default()
        self.tool = self._check_tool(tool)
        self.color = color
        self.state: GestureState = IDLE
        self._observers: List[Observer] = []

    # ------------------------------------------------------------------
    #  selection
    # ------------------------------------------------------------------

    @staticmethod
    def _check_tool(tool: str) -> str:
        if tool not in TOOLS:
            raise ValueError(f"Unknown tool: {tool!r}")
        return tool

    def select_tool(self, tool: str) -> None:
        self.tool = self._check_tool(tool)

    def select_color(self, color: str) -> None:
        self.color = color

    # ------------------------------------------------------------------
    #  pattern replacement + observers
    # ------------------------------------------------------------------

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def replace(self, pattern: Pattern) -> bool:
        """Publish ``pattern`` as the current value. Returns False if nothing changed."""
        if pattern is self.pattern or pattern == self.pattern:
            return False
        old, self.pattern = self.pattern, pattern
        for observer in list(self._observers):
            try:
                observer(old, pattern)
            except Exception:
                logger.exception("Pattern observer %r failed", observer)
        return True

    def load(self, pattern: Pattern) -> bool:
        """Swap in a whole new pattern (import); any gesture in progress ends."""
        self.state = IDLE
        return self.replace(pattern)

    # ------------------------------------------------------------------
    #  pointer events (logical pixel coordinates)
    # ------------------------------------------------------------------

    def hit_test(self, x: float, y: float) -> Optional[Tuple[int, int]]:
        p = self.pattern
        return pixel_to_cell(p.stitch, x, y, p.cell, p.width, p.height)

    @property
    def dragging(self) -> bool:
        return isinstance(self.state, Dragging)

    def pointer_down(self, x: float, y: float, pointer_id: int = 0) -> bool:
        if self.dragging:
            # the captured pointer owns the gesture until it is released
            return False
        hit = self.hit_test(x, y)
        self.state = Dragging(pointer_id=pointer_id, tool=self.tool, color=self.color, last_cell=hit)
        if hit is None:
            return False
        return self._apply(self.state.tool, self.state.color, *hit)

    def pointer_move(self, x: float, y: float, pointer_id: int = 0) -> bool:
        state = self.state
        if not isinstance(state, Dragging) or state.pointer_id != pointer_id:
            return False
        if state.tool not in CONTINUOUS_TOOLS:
            return False
        hit = self.hit_test(x, y)
        if hit is None or hit == state.last_cell:
            return False
        self.state = dataclasses.replace(state, last_cell=hit)
        return self._apply(state.tool, state.color, *hit)

    def pointer_up(self, pointer_id: int = 0) -> None:
        state = self.state
        if isinstance(state, Dragging) and state.pointer_id == pointer_id:
            self.state = IDLE

    pointer_cancel = pointer_up

    # ------------------------------------------------------------------
    #  tool dispatch
    # ------------------------------------------------------------------

    def _apply(self, tool: str, color: CellColor, row: int, col: int) -> bool:
        grid = self.pattern.grid
        if tool == "pencil":
            return self.replace(self.pattern.with_grid(grid_ops.set_cell(grid, row, col, color)))
        if tool == "eraser":
            return self.replace(self.pattern.with_grid(grid_ops.set_cell(grid, row, col, None)))
        if tool == "eyedropper":
            picked = grid_ops.get_cell(grid, row, col)
            if picked:
                self.color = picked
            return False
        if tool == "fill":
            return self.replace(self.pattern.with_grid(flood_fill(grid, row, col, color)))
        raise ValueError(f"Unknown tool: {tool!r}")


__all__ = ["EditorController", "Idle", "Dragging", "IDLE", "DEFAULT_TOOL", "DEFAULT_COLOR"]
