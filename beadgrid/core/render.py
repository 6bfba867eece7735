import io
import logging
import math
from functools import lru_cache
from typing import Optional, Tuple

from PIL import Image, ImageColor, ImageDraw

from ..models.pattern import Pattern
from .geometry import cell_top_left, pattern_pixel_height, pattern_pixel_width
from .grid import get_cell

logger = logging.getLogger(__name__)

BACKGROUND = (255, 255, 255)
GRID_LINE = (229, 231, 235)  # #e5e7eb

# Pattern fields whose change requires a repaint.
VISUAL_FIELDS = ("grid", "cell", "width", "height", "stitch")


# =====================================================================
#  Surface
# =====================================================================


class ScaledSurface:
    """
    Drawing surface addressed in logical pixels.

    The device pixel ratio is applied here once; callers never see physical
    coordinates.
    """

    def __init__(self, logical_width: float, logical_height: float, device_pixel_ratio: float = 1.0):
        self.ratio = device_pixel_ratio if device_pixel_ratio and device_pixel_ratio > 0 else 1.0
        size = (
            max(1, math.floor(logical_width * self.ratio)),
            max(1, math.floor(logical_height * self.ratio)),
        )
        self.image = Image.new("RGB", size, BACKGROUND)
        self._draw = ImageDraw.Draw(self.image)

    def fill_rect(self, x: float, y: float, w: float, h: float, color) -> None:
        r = self.ratio
        x0, y0 = math.floor(x * r), math.floor(y * r)
        x1, y1 = math.ceil((x + w) * r) - 1, math.ceil((y + h) * r) - 1
        if x1 < x0 or y1 < y0:
            return
        self._draw.rectangle([x0, y0, x1, y1], fill=color)

    def stroke_rect(self, x: float, y: float, w: float, h: float, color) -> None:
        r = self.ratio
        x0, y0 = math.floor(x * r), math.floor(y * r)
        x1, y1 = x0 + round(w * r), y0 + round(h * r)
        self._draw.rectangle([x0, y0, x1, y1], outline=color, width=max(1, round(r)))


@lru_cache(maxsize=512)
def _parse_color(value: str) -> Optional[Tuple[int, int, int]]:
    try:
        return ImageColor.getrgb(value)[:3]
    except ValueError:
        logger.debug("Unrenderable cell colour %r, drawing as empty", value)
        return None


# =====================================================================
#  Rendering
# =====================================================================


def render(pattern: Pattern, device_pixel_ratio: float = 1.0) -> Image.Image:
    """Paint the whole pattern: background, cell outlines, then inset bead fills."""
    stitch, cell = pattern.stitch, pattern.cell
    logical_w = pattern_pixel_width(stitch, pattern.width, cell)
    logical_h = pattern_pixel_height(pattern.height, cell)

    surface = ScaledSurface(logical_w, logical_h, device_pixel_ratio)
    surface.fill_rect(0, 0, logical_w, logical_h, BACKGROUND)

    for r in range(pattern.height):
        for c in range(pattern.width):
            x, y = cell_top_left(stitch, r, c, cell)
            surface.stroke_rect(x, y, cell, cell, GRID_LINE)

            value = get_cell(pattern.grid, r, c)
            if not value:
                continue
            rgb = _parse_color(value)
            if rgb is None:
                continue
            surface.fill_rect(x + 1, y + 1, cell - 1, cell - 1, rgb)

    return surface.image


def render_png(pattern: Pattern, device_pixel_ratio: float = 1.0) -> bytes:
    buf = io.BytesIO()
    render(pattern, device_pixel_ratio).save(buf, format="PNG")
    return buf.getvalue()


# =====================================================================
#  Reactive view
# =====================================================================


def needs_redraw(old: Optional[Pattern], new: Pattern) -> bool:
    if old is None:
        return True
    return any(getattr(old, name) != getattr(new, name) for name in VISUAL_FIELDS)


class PatternView:
    """Keeps the last rendered frame and repaints it lazily when marked dirty."""

    def __init__(self, pattern: Pattern, device_pixel_ratio: float = 1.0) -> None:
        self.pattern = pattern
        self.device_pixel_ratio = device_pixel_ratio
        self.dirty = True
        self.repaints = 0
        self._image: Optional[Image.Image] = None

    def observe(self, old: Optional[Pattern], new: Pattern) -> None:
        self.pattern = new
        if needs_redraw(old, new):
            self.dirty = True

    def set_device_pixel_ratio(self, ratio: float) -> None:
        if ratio != self.device_pixel_ratio:
            self.device_pixel_ratio = ratio
            self.dirty = True

    def frame(self) -> Image.Image:
        if self.dirty or self._image is None:
            self._image = render(self.pattern, self.device_pixel_ratio)
            self.repaints += 1
            self.dirty = False
        return self._image
