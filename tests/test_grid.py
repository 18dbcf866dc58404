from __future__ import annotations

import io

import pytest

from pngn_errors import IncompleteFrame
from pngn_grid import Grid


def test_default_grid_is_empty_and_degenerate() -> None:
    grid = Grid()
    assert (grid.height, grid.width) == (0, 0)
    assert grid.is_degenerate
    assert grid.to_lines() == []


def test_set_then_get_wraps_coordinates() -> None:
    grid = Grid(3, 4)
    for row, col in [(0, 0), (5, 9), (-1, -1), (-7, 13), (300, -401)]:
        grid.set(row, col, 'v')
        assert grid.get(row % 3, col % 4) == 'v'
        assert grid.get(row, col) == 'v'


def test_resize_preserves_content_at_unchanged_coordinates() -> None:
    grid = Grid.from_lines(["ab", "cd"])
    grid.set_height(3)
    assert grid.to_lines() == ["ab", "cd", "  "]
    grid.set_width(3)
    assert grid.to_lines() == ["ab ", "cd ", "   "]
    grid.resize(width=1)
    assert grid.to_lines() == ["a", "c", " "]
    assert grid.cells.shape == (3, 1)


def test_shrink_then_regrow_does_not_resurrect_content() -> None:
    grid = Grid.from_lines(["xyz", "xyz", "xyz"])
    grid.resize(1, 1)
    grid.resize(3, 3)
    assert grid.to_lines() == ["x  ", "   ", "   "]


def test_fill_and_clear() -> None:
    grid = Grid(2, 2)
    grid.fill('#')
    assert grid.to_lines() == ["##", "##"]
    grid.clear()
    assert grid.to_lines() == ["  ", "  "]


def test_generic_cells_use_caller_fill_value() -> None:
    grid = Grid(2, 3, fill_value=0)
    grid.set(1, 2, 7)
    grid.set_width(4)
    assert grid.get(1, 2) == 7
    assert grid.get(1, 3) == 0
    assert grid.to_lines() == ["0000", "0070"]


def test_negative_dimension_rejected() -> None:
    with pytest.raises(ValueError):
        Grid(-1, 2)


def test_parse_rows_pads_and_truncates() -> None:
    grid = Grid()
    grid.parse_rows(iter(["abcdef\n", "a\n", ""]), 3, 4)
    assert grid.to_lines() == ["abcd", "a   ", "    "]
    assert (grid.height, grid.width) == (3, 4)


def test_parse_rows_reads_exactly_row_count_lines() -> None:
    lines = iter(["12", "34", "56"])
    grid = Grid(2, 2)
    grid.parse_rows(lines, 2)
    assert grid.to_lines() == ["12", "34"]
    assert next(lines) == "56"


def test_parse_rows_short_source_raises_and_keeps_grid() -> None:
    grid = Grid.from_lines(["old"])
    with pytest.raises(IncompleteFrame) as excinfo:
        grid.parse_rows(["one", "two"], 3, 3)
    assert excinfo.value.expected == 3
    assert excinfo.value.read == 2
    assert grid.to_lines() == ["old"]


def test_render_writes_one_line_per_row() -> None:
    grid = Grid.from_lines(["ab", "c"])
    sink = io.StringIO()
    grid.render(sink)
    assert sink.getvalue() == "ab\nc \n"


def test_copy_and_equality() -> None:
    grid = Grid.from_lines(["ab"])
    duplicate = grid.copy()
    assert duplicate == grid
    duplicate.set(0, 0, 'z')
    assert duplicate != grid
    assert grid.get(0, 0) == 'a'
