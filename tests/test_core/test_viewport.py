# tests/test_core/test_viewport.py
"""Unit tests for the viewport mapper (`reflow` and `body_height`)."""

import itertools

import pytest

from toyed.core.Session import Cursor, ScrollOffset
from toyed.core.Viewport import body_height, reflow


@pytest.mark.parametrize(("height", "expected"), [(24, 22), (3, 1), (2, 1), (1, 1)])
def test_body_height(height: int, expected: int) -> None:
    assert body_height(height) == expected


def test_cursor_already_visible_keeps_offset() -> None:
    scroll = ScrollOffset(line=5, column=10)
    assert reflow(Cursor(column=12, row=7), scroll, 10, 20) == scroll


def test_scrolls_up_to_reveal_cursor() -> None:
    result = reflow(Cursor(column=0, row=2), ScrollOffset(line=5, column=0), 10, 80)
    assert result == ScrollOffset(line=2, column=0)


def test_scrolls_down_minimally() -> None:
    result = reflow(Cursor(column=0, row=15), ScrollOffset(line=0, column=0), 10, 80)
    assert result == ScrollOffset(line=6, column=0)


def test_scrolls_horizontally_both_ways() -> None:
    right = reflow(Cursor(column=85, row=0), ScrollOffset(), 10, 80)
    assert right.column == 6
    left = reflow(Cursor(column=3, row=0), right, 10, 80)
    assert left.column == 3


def test_input_offset_is_not_modified() -> None:
    scroll = ScrollOffset()
    reflow(Cursor(column=100, row=100), scroll, 5, 5)
    assert scroll == ScrollOffset(line=0, column=0)


def test_viewport_guarantee_grid() -> None:
    """After reflow the cursor lies inside the visible window, for any start offset."""
    rows_choices = [1, 2, 5]
    cols_choices = [1, 3, 8]
    positions = [0, 1, 4, 9, 17]
    offsets = [0, 3, 12]

    for rows, cols, row, col, s_line, s_col in itertools.product(
        rows_choices, cols_choices, positions, positions, offsets, offsets
    ):
        result = reflow(Cursor(column=col, row=row), ScrollOffset(s_line, s_col), rows, cols)
        assert result.line <= row < result.line + rows
        assert result.column <= col < result.column + cols


def test_degenerate_viewport_sizes_are_clamped() -> None:
    result = reflow(Cursor(column=4, row=4), ScrollOffset(), 0, -2)
    assert result == ScrollOffset(line=4, column=4)
