# tests/ui/test_draw_screen.py
"""Unit tests for the renderer in `toyed.ui.DrawScreen`.
=========================================================

`build_draw_plan` is pure, so most tests inspect the returned plan directly.
The `DrawScreen` painter is exercised against a mocked `curses` module
(patched inside `toyed.ui.DrawScreen` only) and a mocked window.
"""

from typing import Generator
from unittest.mock import MagicMock, call, patch

import pytest

from toyed.core.ColorClass import ColorClass
from toyed.core.Highlighter import rehighlight
from toyed.core.Session import Cursor, Notice, ScrollOffset, Session
from toyed.core.TextBuffer import TextBuffer
from toyed.ui.DrawScreen import (
    FOOTER_TEXT,
    DrawPlan,
    DrawScreen,
    Span,
    build_draw_plan,
    display_char,
    fit_text,
)
from toyed.utils.utils import DEFAULT_CONFIG


class CursesError(Exception):
    """Minimal replacement for `curses.error` used in tests."""


# --- Global `curses` mock -----------------------------------------------------
@pytest.fixture
def mock_curses() -> Generator[MagicMock, None, None]:
    """Patch the `curses` module as imported by `toyed.ui.DrawScreen`.

    `color_pair()` returns the pair index as-is, which is enough to check
    which pair each colour class was given.
    """
    curses_mock = MagicMock()
    curses_mock.error = CursesError
    constants = {
        "A_NORMAL": 0,
        "A_REVERSE": 1,
        "A_BOLD": 2,
        "A_DIM": 3,
        "COLOR_BLACK": 0,
        "COLOR_RED": 1,
        "COLOR_GREEN": 2,
        "COLOR_YELLOW": 3,
        "COLOR_BLUE": 4,
        "COLOR_MAGENTA": 5,
        "COLOR_WHITE": 7,
        "COLORS": 256,
        "COLOR_PAIRS": 256,
    }
    for name, val in constants.items():
        setattr(curses_mock, name, val)
    curses_mock.has_colors.return_value = True
    curses_mock.color_pair.side_effect = lambda x: x

    with patch("toyed.ui.DrawScreen.curses", curses_mock):
        yield curses_mock


def make_session(lines: list[str], **kwargs) -> Session:
    buffer = TextBuffer(lines)
    rehighlight(buffer)
    return Session(buffer=buffer, filename="notes.txt", **kwargs)


def line_text(spans: tuple[Span, ...]) -> str:
    return "".join(span.text for span in spans)


# --- Helpers ---
def test_fit_text_pads_and_clips() -> None:
    assert fit_text("abc", 5) == "abc  "
    assert fit_text("abcdef", 4) == "abcd"
    assert fit_text("abc", 0) == ""


def test_display_char_replaces_non_single_width() -> None:
    assert display_char("a") == "a"
    assert display_char("\t") == "?"
    assert display_char("\x00") == "?"
    assert display_char("中") == "?"


# --- build_draw_plan ---
def test_plan_layout_header_body_footer() -> None:
    session = make_session(["ab#c", "123"])
    plan = build_draw_plan(session, 5, 12)

    assert len(plan.lines) == 5
    assert plan.lines[0] == (Span(" File: notes", ColorClass.HEADER),)
    assert plan.lines[-1] == (Span(fit_text(FOOTER_TEXT, 12), ColorClass.FOOTER),)
    for spans in plan.lines:
        assert len(line_text(spans)) == 12


def test_body_rows_are_split_into_color_runs() -> None:
    session = make_session(["ab#c", "123"])
    plan = build_draw_plan(session, 5, 8)

    assert plan.lines[1] == (
        Span("ab", ColorClass.VARIABLE),
        Span("#c", ColorClass.COMMENT),
        Span("    ", ColorClass.BODY),
    )
    assert plan.lines[2] == (Span("123", ColorClass.NUMBER), Span("     ", ColorClass.BODY))
    # Past the end of the buffer.
    assert plan.lines[3] == (Span("        ", ColorClass.BODY),)


def test_body_honours_scroll_offset() -> None:
    session = make_session(
        ["row0", "row1", "abcdefgh"], scroll=ScrollOffset(line=2, column=3), cursor=Cursor(5, 2)
    )
    plan = build_draw_plan(session, 3, 4)

    assert line_text(plan.lines[1]) == "defg"
    assert (plan.cursor_y, plan.cursor_x) == (1, 2)


def test_header_shows_modified_marker() -> None:
    session = make_session(["x"], modified=True)
    plan = build_draw_plan(session, 3, 40)
    assert line_text(plan.lines[0]).rstrip() == " File: notes.txt [modified]"


def test_notice_replaces_footer() -> None:
    session = make_session(["x"], notice=Notice("File saved. Press any key to continue."))
    plan = build_draw_plan(session, 3, 50)
    assert plan.lines[-1][0].color is ColorClass.FOOTER
    assert line_text(plan.lines[-1]).startswith("File saved.")


def test_error_notice_uses_error_color() -> None:
    session = make_session(["x"], notice=Notice("Save failed: nope.", is_error=True))
    plan = build_draw_plan(session, 3, 30)
    assert plan.lines[-1][0].color is ColorClass.ERROR


def test_wide_characters_render_as_placeholder() -> None:
    session = make_session(["a中b"])
    plan = build_draw_plan(session, 3, 3)
    assert line_text(plan.lines[1]) == "a?b"


@pytest.mark.parametrize(("height", "rows"), [(0, 0), (1, 1), (2, 2)])
def test_tiny_terminals_get_chrome_only(height: int, rows: int) -> None:
    plan = build_draw_plan(make_session(["x"]), height, 10)
    assert len(plan.lines) == rows


def test_build_draw_plan_does_not_mutate_session() -> None:
    session = make_session(["abc"], cursor=Cursor(2, 0))
    before = (session.buffer.lines, session.buffer.highlight_rows, session.cursor, session.scroll)
    build_draw_plan(session, 4, 2)
    after = (session.buffer.lines, session.buffer.highlight_rows, session.cursor, session.scroll)
    assert before == after


# --- DrawScreen painter ---
@pytest.fixture
def mock_editor(mock_stdscr: MagicMock) -> MagicMock:
    editor = MagicMock()
    editor.stdscr = mock_stdscr
    return editor


def test_init_colors_256(mock_curses: MagicMock, mock_editor: MagicMock) -> None:
    drawer = DrawScreen(mock_editor, {"colors": DEFAULT_CONFIG["colors"]})

    assert set(drawer.colors) == set(ColorClass)
    assert mock_curses.init_pair.call_count == len(ColorClass)
    mock_curses.start_color.assert_called_once()


def test_init_colors_8_color_uses_classic_pairs(mock_curses: MagicMock, mock_editor: MagicMock) -> None:
    mock_curses.COLORS = 8
    drawer = DrawScreen(mock_editor, {})

    pair_for_body = drawer.colors[ColorClass.BODY]
    mock_curses.init_pair.assert_any_call(pair_for_body, 2, 0)  # green on black
    pair_for_header = drawer.colors[ColorClass.HEADER]
    mock_curses.init_pair.assert_any_call(pair_for_header, 7, 4)  # white on blue


def test_init_colors_monochrome(mock_curses: MagicMock, mock_editor: MagicMock) -> None:
    mock_curses.has_colors.return_value = False
    drawer = DrawScreen(mock_editor, {})

    assert drawer.colors[ColorClass.HEADER] == 1  # A_REVERSE
    mock_curses.init_pair.assert_not_called()


def test_draw_paints_spans_and_moves_cursor(
    mock_curses: MagicMock, mock_editor: MagicMock, mock_stdscr: MagicMock
) -> None:
    drawer = DrawScreen(mock_editor, {})
    drawer.colors = {color: index for index, color in enumerate(ColorClass)}
    plan = DrawPlan(
        height=3,
        width=4,
        lines=(
            (Span("head", ColorClass.HEADER),),
            (Span("ab", ColorClass.VARIABLE), Span("  ", ColorClass.BODY)),
            (Span("foot", ColorClass.FOOTER),),
        ),
        cursor_y=1,
        cursor_x=2,
    )

    drawer.draw(plan)

    mock_stdscr.erase.assert_called_once()
    mock_stdscr.addstr.assert_has_calls(
        [
            call(0, 0, "head", drawer.colors[ColorClass.HEADER]),
            call(1, 0, "ab", drawer.colors[ColorClass.VARIABLE]),
            call(1, 2, "  ", drawer.colors[ColorClass.BODY]),
            call(2, 0, "foot", drawer.colors[ColorClass.FOOTER]),
        ]
    )
    mock_stdscr.move.assert_called_once_with(1, 2)
    mock_stdscr.refresh.assert_called_once()


def test_draw_survives_curses_errors(
    mock_curses: MagicMock, mock_editor: MagicMock, mock_stdscr: MagicMock
) -> None:
    """The bottom-right cell raises on real terminals; the frame still completes."""
    mock_stdscr.addstr.side_effect = CursesError("edge")
    drawer = DrawScreen(mock_editor, {})

    drawer.draw(build_draw_plan(make_session(["x"]), 3, 5))

    mock_stdscr.move.assert_called_once()
    mock_stdscr.refresh.assert_called_once()
