import io
import logging
from pathlib import Path

from reportlab.lib.colors import HexColor
from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from ..core.counts import build_color_legend
from ..core.render import render
from ..models.pattern import Pattern

logger = logging.getLogger(__name__)

FONT_CANDIDATES = [
    Path("assets/fonts/DejaVuSans.ttf"),
    Path("/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf"),
    Path("/usr/local/share/fonts/DejaVuSans.ttf"),
]
FONT_NAME = "DejaVuSans"
SWATCH = 8


def _ensure_font() -> str:
    try:
        pdfmetrics.getFont(FONT_NAME)
        return FONT_NAME
    except KeyError:
        pass

    for candidate in FONT_CANDIDATES:
        if candidate.exists():
            try:
                pdfmetrics.registerFont(TTFont(FONT_NAME, str(candidate)))
                return FONT_NAME
            except Exception as exc:  # fallback to built-in fonts if file is broken
                logger.warning("Failed to register font %s: %s", candidate, exc)
                continue
    return "Helvetica"


def _swatch_fill(color: str):
    try:
        return HexColor(color)
    except ValueError:
        return None


def export_pdf(pattern: Pattern, device_pixel_ratio: float = 2.0) -> bytes:
    """
    Printable bead chart: the rendered grid on the left, bead counts on the right.

    The grid is rendered at ``device_pixel_ratio`` so it stays sharp when the
    page scales it down.
    """

    buffer = io.BytesIO()

    page_w, page_h = landscape(A4)
    c = canvas.Canvas(buffer, pagesize=(page_w, page_h))

    # -----------------------------------------------------------------
    # 1) Title
    # -----------------------------------------------------------------
    font_name = _ensure_font()
    c.setFont(font_name, 20)
    c.drawString(20 * mm, page_h - 20 * mm, pattern.title or "Bead Pattern")

    # -----------------------------------------------------------------
    # 2) Chart image
    # -----------------------------------------------------------------
    chart_block_w = page_w * 0.65
    chart_block_h = page_h - 50 * mm
    chart_top_y = page_h - 30 * mm
    chart_left_x = 20 * mm

    img = render(pattern, device_pixel_ratio=device_pixel_ratio)
    img_w, img_h = img.size
    scale = min(chart_block_w / img_w, chart_block_h / img_h, 1.0)
    draw_w = img_w * scale
    draw_h = img_h * scale
    c.drawImage(
        ImageReader(img),
        chart_left_x,
        chart_top_y - draw_h,
        width=draw_w,
        height=draw_h,
        preserveAspectRatio=True,
        anchor="sw",
    )

    # -----------------------------------------------------------------
    # 3) Bead counts
    # -----------------------------------------------------------------
    legend = build_color_legend(pattern.grid)
    c.setFont(font_name, 11)

    legend_x = page_w * 0.7
    legend_y = page_h - 30 * mm
    c.drawString(legend_x, legend_y + 10, "Beads:")

    for entry in legend:
        legend_y -= 12
        if legend_y < 15 * mm:
            c.showPage()
            legend_y = page_h - 20 * mm
            c.setFont(font_name, 11)
        fill = _swatch_fill(entry["color"])
        if fill is not None:
            c.setFillColor(fill)
            c.rect(legend_x, legend_y - 1, SWATCH, SWATCH, stroke=1, fill=1)
            c.setFillColorRGB(0, 0, 0)
        c.drawString(legend_x + SWATCH + 4, legend_y, f"{entry['color']}  {entry['count']} ({entry['percent']}%)")

    # -----------------------------------------------------------------
    # 4) Pattern information
    # -----------------------------------------------------------------
    total_beads = sum(entry["count"] for entry in legend)
    c.setFont(font_name, 10)
    c.drawString(
        20 * mm,
        20 * mm,
        f"Grid: {pattern.width} × {pattern.height} beads · Stitch: {pattern.stitch}"
        f" · Colors: {len(legend)} · Beads: {total_beads}",
    )

    c.showPage()
    c.save()

    return buffer.getvalue()
