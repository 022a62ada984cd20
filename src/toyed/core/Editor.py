# toyed/core/Editor.py
"""toyed.core.Editor
===================

The editor controller: one `Session`, one input loop.

Each iteration reflows the viewport, renders a frame, blocks for one key,
translates it into an `InputEvent` and dispatches it through `action_map`.
Every event is handled to completion (mutation, highlight recompute) before
the next key is read.

Handlers return True when the screen needs repainting; the loop only
repaints when something changed.
"""

import curses
import logging
from typing import Any, Callable

from toyed.core.Events import EventKind, InputEvent
from toyed.core.Highlighter import rehighlight
from toyed.core.Session import EditorState, Notice, Session
from toyed.core.TextBuffer import SaveFailed, TextBuffer
from toyed.core.Viewport import body_height, reflow
from toyed.ui.DrawScreen import DrawScreen, build_draw_plan
from toyed.ui.KeyBinder import KeyBinder
from toyed.utils.logging_config import logger

SAVED_NOTICE = "File saved. Press any key to continue."
SAVE_FAILED_NOTICE = "Save failed: {reason}. Press any key to continue."


class Editor:
    """Class Editor
    =========================
    Owns the session and wires the terminal components around it.

    Attributes:
        stdscr (curses.window): The main curses window.
        config (dict): Merged application configuration.
        session (Session): Buffer, cursor, scroll offset and notice.
        drawer (DrawScreen): Paints draw plans.
        keybinder (KeyBinder): Reads keys and produces events.
        action_map (dict[EventKind, Callable]): Event kind -> handler.
    """

    def __init__(self, stdscr: "curses.window", config: dict[str, Any], filename: str) -> None:
        self.stdscr = stdscr
        self.config: dict[str, Any] = config

        self.session = Session(buffer=TextBuffer.load(filename), filename=filename)

        self._setup_environment()
        self._initialize_components()
        self.action_map = self._setup_action_map()
        logging.info("Editor initialized for '%s' (%d rows).", filename, len(self.session.buffer))

    # --- Setup ---
    def _setup_environment(self) -> None:
        """Raw mode (so Ctrl-Q/Ctrl-S reach us), no echo, keypad decoding."""
        self.stdscr.keypad(True)
        curses.raw()
        curses.noecho()
        try:
            curses.curs_set(1)
        except curses.error:
            logging.debug("Terminal does not support cursor visibility changes.")

    def _initialize_components(self) -> None:
        self.drawer: DrawScreen = DrawScreen(self, self.config)
        self.keybinder: KeyBinder = KeyBinder(self)

    def _setup_action_map(self) -> dict[EventKind, Callable[[InputEvent], bool]]:
        return {
            EventKind.QUIT: self.handle_quit,
            EventKind.SAVE: self.save_file,
            EventKind.UP: self.handle_up,
            EventKind.DOWN: self.handle_down,
            EventKind.LEFT: self.handle_left,
            EventKind.RIGHT: self.handle_right,
            EventKind.BACKSPACE: self.handle_backspace,
            EventKind.LINE_BREAK: self.handle_enter,
            EventKind.CHAR: self.insert_char,
            EventKind.RESIZE: self.handle_resize,
        }

    # --- Properties ---
    @property
    def running(self) -> bool:
        return self.session.state is EditorState.EDITING

    def terminal_size(self) -> tuple[int, int]:
        height, width = self.stdscr.getmaxyx()
        return height, width

    # --- Dispatch ---
    def handle_event(self, event: InputEvent) -> bool:
        """Apply one event to the session.

        While a notice is shown the event only dismisses it.

        Returns:
            bool: True if the screen needs repainting.
        """
        session = self.session
        if session.notice is not None:
            logging.debug("Dismissing notice %r on %s.", session.notice.text, event.kind.name)
            session.notice = None
            return True

        handler = self.action_map.get(event.kind)
        if handler is None:
            logging.debug("Ignored event %s.", event.kind.name)
            return False
        logging.debug(
            "Event %s%s at (row %d, col %d).",
            event.kind.name,
            f" {event.char!r}" if event.char else "",
            session.cursor.row,
            session.cursor.column,
        )
        return handler(event)

    # --- Commands ---
    def handle_quit(self, _event: InputEvent) -> bool:
        if self.session.modified:
            logging.info("Quitting with unsaved changes to '%s'.", self.session.filename)
        self.session.state = EditorState.TERMINATED
        return False

    def save_file(self, _event: InputEvent) -> bool:
        session = self.session
        try:
            session.buffer.save(session.filename)
        except SaveFailed as e:
            session.notice = Notice(SAVE_FAILED_NOTICE.format(reason=e.reason), is_error=True)
            return True
        session.modified = False
        session.notice = Notice(SAVED_NOTICE)
        return True

    # --- Cursor movement ---
    def handle_up(self, _event: InputEvent) -> bool:
        cursor = self.session.cursor
        if cursor.row == 0:
            return False
        cursor.row -= 1
        cursor.column = min(cursor.column, self.session.current_row_length)
        return True

    def handle_down(self, _event: InputEvent) -> bool:
        cursor = self.session.cursor
        if cursor.row >= len(self.session.buffer) - 1:
            return False
        cursor.row += 1
        cursor.column = min(cursor.column, self.session.current_row_length)
        return True

    def handle_left(self, _event: InputEvent) -> bool:
        cursor = self.session.cursor
        if cursor.column > 0:
            cursor.column -= 1
        elif cursor.row > 0:
            cursor.row -= 1
            cursor.column = self.session.current_row_length
        else:
            return False
        return True

    def handle_right(self, _event: InputEvent) -> bool:
        cursor = self.session.cursor
        if cursor.column < self.session.current_row_length:
            cursor.column += 1
        elif cursor.row < len(self.session.buffer) - 1:
            cursor.row += 1
            cursor.column = 0
        else:
            return False
        return True

    # --- Edits ---
    def _after_edit(self) -> bool:
        rehighlight(self.session.buffer)
        self.session.modified = True
        return True

    def handle_backspace(self, _event: InputEvent) -> bool:
        session = self.session
        cursor = session.cursor
        if cursor.column > 0:
            session.buffer.delete_char(cursor.row, cursor.column)
            cursor.column -= 1
            return self._after_edit()

        join_col = session.buffer.join_with_previous(cursor.row)
        if join_col is None:
            return False
        cursor.row -= 1
        cursor.column = join_col
        return self._after_edit()

    def handle_enter(self, _event: InputEvent) -> bool:
        cursor = self.session.cursor
        self.session.buffer.split_row(cursor.row, cursor.column)
        cursor.row += 1
        cursor.column = 0
        return self._after_edit()

    def insert_char(self, event: InputEvent) -> bool:
        cursor = self.session.cursor
        self.session.buffer.insert_char(cursor.row, cursor.column, event.char)
        cursor.column += 1
        return self._after_edit()

    def handle_resize(self, _event: InputEvent) -> bool:
        height, width = self.terminal_size()
        logging.debug("Window resized to %dx%d.", width, height)
        return True

    # --- Rendering ---
    def refresh(self) -> None:
        """Reflow the scroll offset for the current size and paint a frame."""
        height, width = self.terminal_size()
        session = self.session
        session.scroll = reflow(session.cursor, session.scroll, body_height(height), width)
        self.drawer.draw(build_draw_plan(session, height, width))

    # --- Main loop ---
    def run(self) -> None:
        """Render, read, dispatch; repeat until the session terminates.

        Unexpected exceptions (including `IndexOutOfRange`, which means the
        cursor went out of sync with the buffer) are logged and re-raised so
        `curses.wrapper` can restore the terminal.
        """
        logger.info("Editor main loop started.")
        redraw_needed = True
        try:
            while self.running:
                if redraw_needed:
                    self.refresh()
                event = self.keybinder.read_event()
                redraw_needed = self.handle_event(event)
        except KeyboardInterrupt:
            logger.info("Main loop interrupted by KeyboardInterrupt.")
            self.session.state = EditorState.TERMINATED
        except Exception as e:
            logger.critical("Unhandled exception in main loop: %s", e, exc_info=True)
            raise
        logger.info("Editor main loop finished.")
