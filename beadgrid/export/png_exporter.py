import io
from typing import Optional

from PIL import Image

from ..core.render import render_png
from ..models.pattern import Pattern


def export_png(pattern: Pattern, device_pixel_ratio: float = 1.0, frame: Optional[Image.Image] = None) -> bytes:
    """PNG snapshot of the pattern; ``frame`` reuses an already rendered surface."""
    if frame is None:
        return render_png(pattern, device_pixel_ratio=device_pixel_ratio)
    buf = io.BytesIO()
    frame.save(buf, format="PNG")
    return buf.getvalue()
