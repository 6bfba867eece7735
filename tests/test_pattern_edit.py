from __future__ import annotations

import pytest

from beadgrid.core import pattern_edit
from beadgrid.core.grid import set_cell
from beadgrid.models.pattern import DEFAULT_PALETTE, Pattern
from tests.utils import make_pattern


def test_default_pattern_is_consistent():
    pattern = Pattern.default()
    assert (pattern.width, pattern.height, pattern.cell, pattern.stitch) == (32, 10, 22, "peyote")
    assert pattern.palette == DEFAULT_PALETTE
    assert pattern.is_consistent()


def test_resize_preserves_artwork_and_shape():
    pattern = make_pattern()
    pattern = pattern.with_grid(set_cell(pattern.grid, 1, 1, "#ff0000"))

    bigger = pattern_edit.resize_pattern(pattern, width=6, height=5)
    assert (bigger.width, bigger.height) == (6, 5)
    assert bigger.is_consistent()
    assert bigger.grid[1][1] == "#ff0000"

    smaller = pattern_edit.resize_pattern(bigger, width=2, height=2)
    assert smaller.is_consistent()
    assert smaller.grid == [[None, None], [None, "#ff0000"]]


@pytest.mark.parametrize("requested,expected", [(0, 2), (1, 2), (201, 200), (10_000, 200)])
def test_resize_clamps_out_of_range_input(requested, expected):
    resized = pattern_edit.resize_pattern(make_pattern(), width=requested, height=requested)
    assert resized.width == expected
    assert resized.height == expected
    assert resized.is_consistent()


def test_resize_repairs_an_inconsistent_import():
    pattern = Pattern(width=3, height=2, grid=[["a"]])
    repaired = pattern_edit.resize_pattern(pattern, width=3, height=2)
    assert repaired.grid == [["a", None, None], [None, None, None]]


def test_height_only_resize_squares_up_ragged_rows():
    pattern = Pattern(width=3, height=2, grid=[["a"], ["b", "c", "d", "e"]])
    taller = pattern_edit.resize_pattern(pattern, height=3)
    assert taller.is_consistent()
    assert taller.grid == [["a", None, None], ["b", "c", "d"], [None, None, None]]


def test_cell_size_and_zoom_are_clamped():
    pattern = make_pattern(cell=10)
    assert pattern_edit.set_cell_size(pattern, 100).cell == 48
    assert pattern_edit.set_cell_size(pattern, 1).cell == 6
    assert pattern_edit.zoom(pattern, 1).cell == 12
    assert pattern_edit.zoom(pattern, -3).cell == 6


def test_fit_to_width_sizes_cells_for_the_available_space():
    assert pattern_edit.fit_to_width(make_pattern(width=10, stitch="peyote"), 315).cell == 30


def test_clear_keeps_everything_but_the_beads():
    pattern = make_pattern(title="Cuff", stitch="peyote", palette=["#111111"])
    pattern = pattern.with_grid(set_cell(pattern.grid, 0, 0, "#ff0000"))
    cleared = pattern_edit.clear_pattern(pattern)
    assert all(cell is None for row in cleared.grid for cell in row)
    assert (cleared.title, cleared.stitch, cleared.cell, cleared.palette) == ("Cuff", "peyote", 10, ["#111111"])


def test_palette_edits_keep_order_and_allow_duplicates():
    pattern = make_pattern(palette=["#000000"])
    pattern = pattern_edit.add_swatch(pattern, "#ffffff")
    pattern = pattern_edit.add_swatch(pattern, "#000000")
    assert pattern.palette == ["#000000", "#ffffff", "#000000"]
    assert pattern_edit.remove_swatch(pattern, 1).palette == ["#000000", "#000000"]
    with pytest.raises(IndexError):
        pattern_edit.remove_swatch(pattern, 3)


def test_unchanged_edits_return_the_same_value():
    pattern = make_pattern()
    assert pattern_edit.set_title(pattern, pattern.title) is pattern
    assert pattern_edit.set_stitch(pattern, "square") is pattern
    assert pattern_edit.resize_pattern(pattern, width=4) is pattern
