# toyed/ui/DrawScreen.py
"""DrawScreen.py
========================
Rendering for the toyed editor.

Rendering is split in two:

- `build_draw_plan()` is a pure projection of the session onto a
  ``height x width`` grid. It produces a `DrawPlan`: one list of coloured
  `Span` runs per terminal row (header, body rows, footer) and the final
  cursor cell. It reads the session and changes nothing.
- `DrawScreen` paints a `DrawPlan` with curses. It owns the mapping from
  `ColorClass` to curses attributes and is the only place that touches
  terminal drawing calls.

Every buffer character occupies exactly one cell. Characters that do not
display as a single cell (control characters, wide or combining glyphs) are
drawn as a placeholder so the column arithmetic stays one-to-one.
"""

import curses
import logging
from typing import TYPE_CHECKING, Any, NamedTuple, Optional

from wcwidth import wcwidth

from toyed.core.ColorClass import ColorClass
from toyed.core.Session import Session
from toyed.core.Viewport import HEADER_ROWS, body_height
from toyed.utils.utils import hex_to_xterm

if TYPE_CHECKING:
    from toyed.core.Editor import Editor


HEADER_TEXT = " File: {filename}"
MODIFIED_MARKER = " [modified]"
FOOTER_TEXT = " toyed  -  Ctrl-Q to quit  -  Ctrl-S to save"
PLACEHOLDER_CHAR = "?"


class Span(NamedTuple):
    text: str
    color: ColorClass


class DrawPlan(NamedTuple):
    """Everything needed to paint one frame.

    Attributes:
        lines: One tuple of spans per terminal row; each row covers exactly
            ``width`` cells.
        cursor_y: Terminal row for the hardware cursor.
        cursor_x: Terminal column for the hardware cursor.
    """

    height: int
    width: int
    lines: tuple[tuple[Span, ...], ...]
    cursor_y: int
    cursor_x: int


def display_char(ch: str) -> str:
    """Return *ch* if it draws as exactly one cell, else the placeholder."""
    return ch if wcwidth(ch) == 1 else PLACEHOLDER_CHAR


def fit_text(text: str, width: int) -> str:
    """Clip or right-pad *text* to exactly *width* cells."""
    if width <= 0:
        return ""
    return "".join(display_char(ch) for ch in text[:width]).ljust(width)


def _chrome_line(text: str, color: ColorClass, width: int) -> tuple[Span, ...]:
    return (Span(fit_text(text, width), color),)


def _body_line(session: Session, buffer_row: int, width: int) -> tuple[Span, ...]:
    """Slice one buffer row at the horizontal scroll offset into colour runs."""
    if buffer_row >= len(session.buffer):
        return (Span(" " * width, ColorClass.BODY),)

    cells = session.buffer.rows[buffer_row].cells
    start = session.scroll.column
    visible = cells[start : start + width]

    spans: list[Span] = []
    run_chars: list[str] = []
    run_color: Optional[ColorClass] = None
    for cell in visible:
        if cell.color is not run_color and run_chars:
            spans.append(Span("".join(run_chars), run_color))
            run_chars = []
        run_color = cell.color
        run_chars.append(display_char(cell.char))
    if run_chars and run_color is not None:
        spans.append(Span("".join(run_chars), run_color))

    if len(visible) < width:
        spans.append(Span(" " * (width - len(visible)), ColorClass.BODY))
    return tuple(spans)


def header_text(session: Session) -> str:
    text = HEADER_TEXT.format(filename=session.filename)
    if session.modified:
        text += MODIFIED_MARKER
    return text


def build_draw_plan(session: Session, height: int, width: int) -> DrawPlan:
    """Project *session* onto a ``height x width`` terminal.

    Layout: row 0 is the header, rows ``1 .. height-2`` are the body, the
    last row is the footer. Buffer row ``scroll.line + i`` goes to body row
    ``i``; body rows past the end of the buffer are blank.
    """
    width = max(0, width)
    lines: list[tuple[Span, ...]] = []

    if height >= 1:
        lines.append(_chrome_line(header_text(session), ColorClass.HEADER, width))

    if height >= 3:
        for i in range(body_height(height)):
            lines.append(_body_line(session, session.scroll.line + i, width))

    if height >= 2:
        if session.notice is not None:
            color = ColorClass.ERROR if session.notice.is_error else ColorClass.FOOTER
            lines.append(_chrome_line(session.notice.text, color, width))
        else:
            lines.append(_chrome_line(FOOTER_TEXT, ColorClass.FOOTER, width))

    return DrawPlan(
        height=height,
        width=width,
        lines=tuple(lines),
        cursor_y=session.cursor.row - session.scroll.line + HEADER_ROWS,
        cursor_x=session.cursor.column - session.scroll.column,
    )


## ================= class DrawScreen ==============================
class DrawScreen:
    """DrawScreen Class
    =========================
    Paints `DrawPlan` frames onto the curses standard screen.

    Attributes:
        editor (Editor): The owning editor (for `stdscr` and `config`).
        stdscr (curses.window): Window painted on.
        colors (dict[ColorClass, int]): curses attribute per colour class.

    All curses errors are caught and logged so a bad frame never takes the
    editor down; writing the bottom-right cell raises on most terminals and
    is expected.
    """

    MIN_WINDOW_HEIGHT = 3
    MIN_WINDOW_WIDTH = 1

    # (fg hex key, bg hex key or None, 8-colour fg, 8-colour bg, monochrome attr)
    COLOR_DEFINITIONS: dict[ColorClass, tuple[str, Optional[str], str, str, str]] = {
        ColorClass.HEADER: ("header", "header_bg", "COLOR_WHITE", "COLOR_BLUE", "A_REVERSE"),
        ColorClass.FOOTER: ("footer", "footer_bg", "COLOR_WHITE", "COLOR_BLUE", "A_REVERSE"),
        ColorClass.BODY: ("body", None, "COLOR_GREEN", "COLOR_BLACK", "A_NORMAL"),
        ColorClass.COMMENT: ("comment", None, "COLOR_BLUE", "COLOR_BLACK", "A_DIM"),
        ColorClass.KEYWORD: ("keyword", None, "COLOR_YELLOW", "COLOR_BLACK", "A_BOLD"),
        ColorClass.STRING: ("string", None, "COLOR_WHITE", "COLOR_BLACK", "A_NORMAL"),
        ColorClass.NUMBER: ("number", None, "COLOR_MAGENTA", "COLOR_BLACK", "A_NORMAL"),
        ColorClass.OPERATOR: ("operator", None, "COLOR_RED", "COLOR_BLACK", "A_BOLD"),
        ColorClass.VARIABLE: ("variable", None, "COLOR_WHITE", "COLOR_BLACK", "A_NORMAL"),
        ColorClass.ERROR: ("error", "error_bg", "COLOR_WHITE", "COLOR_RED", "A_REVERSE"),
    }

    def __init__(self, editor: "Editor", config: dict[str, Any]) -> None:
        self.editor = editor
        self.config = config
        self.stdscr = editor.stdscr
        self.colors: dict[ColorClass, int] = {}
        self.init_colors()

    def init_colors(self) -> None:
        """Initializes one curses colour pair per `ColorClass`.

        256-colour terminals take hex colours from the ``[colors]`` config
        section; 8/16-colour terminals get the classic pairs; terminals without
        colour fall back to plain attributes.
        """
        self.colors = {}

        if not curses.has_colors() or curses.COLORS < 8:
            logging.warning("Terminal has no or limited color support (< 8). Using monochrome attributes.")
            for color_class, (*_rest, mono_attr) in self.COLOR_DEFINITIONS.items():
                self.colors[color_class] = getattr(curses, mono_attr)
            return

        curses.start_color()
        try:
            curses.use_default_colors()
        except curses.error:
            pass

        user_colors = self.config.get("colors", {})
        can_use_256_colors = curses.COLORS >= 256

        for pair_id, (color_class, definition) in enumerate(self.COLOR_DEFINITIONS.items(), start=1):
            fg_key, bg_key, fg_8, bg_8, mono_attr = definition
            if pair_id >= curses.COLOR_PAIRS:
                logging.warning(f"Ran out of color pairs at '{color_class.value}'.")
                self.colors[color_class] = getattr(curses, mono_attr)
                continue

            if can_use_256_colors:
                fg = hex_to_xterm(str(user_colors.get(fg_key, "#FFFFFF")))
                bg = hex_to_xterm(str(user_colors[bg_key])) if bg_key and bg_key in user_colors else -1
            else:
                fg = getattr(curses, fg_8)
                bg = getattr(curses, bg_8)

            try:
                curses.init_pair(pair_id, fg, bg)
                self.colors[color_class] = curses.color_pair(pair_id)
            except curses.error as e:
                logging.error(f"Failed to initialize curses pair for '{color_class.value}': {e}")
                self.colors[color_class] = getattr(curses, mono_attr)

    def draw(self, plan: DrawPlan) -> None:
        """Paint *plan* and place the cursor."""
        try:
            self.stdscr.erase()
            if plan.height < self.MIN_WINDOW_HEIGHT or plan.width < self.MIN_WINDOW_WIDTH:
                logging.debug(f"DrawScreen: window too small ({plan.width}x{plan.height}).")

            for screen_row, spans in enumerate(plan.lines):
                self._draw_line(screen_row, spans)

            self._position_cursor(plan)
            self.stdscr.refresh()
        except curses.error as e:
            logging.error(f"Curses error in DrawScreen.draw(): {e}")

    def _draw_line(self, screen_row: int, spans: tuple[Span, ...]) -> None:
        x = 0
        for span in spans:
            if not span.text:
                continue
            attr = self.colors.get(span.color, 0)
            try:
                self.stdscr.addstr(screen_row, x, span.text, attr)
            except curses.error:
                # The last cell of the last row cannot be written without scrolling.
                logging.debug("addstr hit the window edge at (%d,%d)", screen_row, x)
            x += len(span.text)

    def _position_cursor(self, plan: DrawPlan) -> None:
        y = max(0, min(plan.cursor_y, plan.height - 1))
        x = max(0, min(plan.cursor_x, plan.width - 1))
        try:
            self.stdscr.move(y, x)
        except curses.error as e:
            logging.warning(f"Cannot move cursor to ({y},{x}): {e}")
