# src/toyed/core/__init__.py
"""Public facade for toyed.core: re-export main classes from CamelCase modules."""

from .ColorClass import ColorClass  # noqa: F401
from .Editor import Editor  # noqa: F401
from .Events import EventKind, InputEvent  # noqa: F401
from .Session import Cursor, EditorState, Notice, ScrollOffset, Session  # noqa: F401
from .TextBuffer import Cell, IndexOutOfRange, Row, SaveFailed, TextBuffer  # noqa: F401


__all__ = [
    "Cell",
    "ColorClass",
    "Cursor",
    "Editor",
    "EditorState",
    "EventKind",
    "IndexOutOfRange",
    "InputEvent",
    "Notice",
    "Row",
    "SaveFailed",
    "ScrollOffset",
    "Session",
    "TextBuffer",
]
