# toyed/core/Events.py
"""Abstract input events consumed by the editor controller.

The terminal binding layer (`toyed.ui.KeyBinder`) turns raw key codes into
these; the controller never sees a curses key code.
"""

from enum import Enum
from typing import NamedTuple


class EventKind(Enum):
    QUIT = "quit"
    SAVE = "save_file"
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    BACKSPACE = "backspace"
    LINE_BREAK = "line_break"
    CHAR = "char"
    RESIZE = "resize"
    OTHER = "other"


class InputEvent(NamedTuple):
    kind: EventKind
    char: str = ""

    @classmethod
    def printable(cls, ch: str) -> "InputEvent":
        return cls(EventKind.CHAR, ch)
