from __future__ import annotations

import io

import numpy as np
from PIL import Image

from beadgrid.core.grid import set_cell
from beadgrid.core.render import GRID_LINE, PatternView, render, render_png
from beadgrid.models.pattern import Pattern
from tests.utils import make_pattern

WHITE = (255, 255, 255)
RED = (255, 0, 0)


def _pixel(image, x, y):
    return tuple(int(v) for v in np.array(image)[y, x])


def test_square_layout_outlines_and_inset_fill():
    pattern = make_pattern()
    pattern = pattern.with_grid(set_cell(pattern.grid, 0, 0, "#ff0000"))
    image = render(pattern)

    assert image.size == (40, 40)
    assert _pixel(image, 0, 0) == GRID_LINE
    assert _pixel(image, 10, 5) == GRID_LINE
    assert _pixel(image, 1, 1) == RED
    assert _pixel(image, 5, 5) == RED
    assert _pixel(image, 9, 9) == RED
    assert _pixel(image, 15, 15) == WHITE


def test_peyote_rows_are_shifted_by_half_a_cell():
    pattern = make_pattern(stitch="peyote")
    pattern = pattern.with_grid(set_cell(pattern.grid, 1, 0, "#ff0000"))
    image = render(pattern)

    assert image.size == (45, 40)
    assert _pixel(image, 10, 15) == RED
    assert _pixel(image, 2, 15) == WHITE
    assert _pixel(image, 5, 15) == GRID_LINE


def test_device_pixel_ratio_scales_the_surface_only():
    pattern = make_pattern()
    pattern = pattern.with_grid(set_cell(pattern.grid, 0, 0, "#ff0000"))
    image = render(pattern, device_pixel_ratio=2)

    assert image.size == (80, 80)
    assert _pixel(image, 10, 10) == RED
    assert _pixel(image, 30, 30) == WHITE


def test_rendering_is_idempotent():
    pattern = make_pattern(stitch="peyote", cell=11)
    pattern = pattern.with_grid(set_cell(pattern.grid, 3, 2, "#7b61ff"))
    first = np.array(render(pattern))
    second = np.array(render(pattern))
    assert np.array_equal(first, second)


def test_unparseable_colour_is_drawn_as_empty():
    pattern = make_pattern()
    pattern = pattern.with_grid(set_cell(pattern.grid, 0, 0, "not-a-colour"))
    assert _pixel(render(pattern), 5, 5) == WHITE


def test_empty_grid_renders_without_error():
    image = render(Pattern(width=4, height=0, cell=10, stitch="square", grid=[]))
    assert image.size == (40, 1)

    declared_but_missing = Pattern(width=3, height=2, cell=10, stitch="square", grid=[])
    assert _pixel(render(declared_but_missing), 5, 5) == WHITE


def test_png_snapshot_decodes():
    png = render_png(make_pattern())
    assert png.startswith(b"\x89PNG")
    assert Image.open(io.BytesIO(png)).size == (40, 40)


def test_view_repaints_only_for_visual_changes():
    pattern = make_pattern()
    view = PatternView(pattern)
    view.frame()
    view.frame()
    assert view.repaints == 1

    retitled = pattern.model_copy(update={"title": "Bracelet"})
    view.observe(pattern, retitled)
    view.frame()
    assert view.repaints == 1

    painted = retitled.with_grid(set_cell(retitled.grid, 0, 0, "#ff0000"))
    view.observe(retitled, painted)
    assert view.dirty
    assert _pixel(view.frame(), 5, 5) == RED
    assert view.repaints == 2
