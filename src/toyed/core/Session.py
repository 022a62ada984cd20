# toyed/core/Session.py
"""Editing session state owned by the controller loop.

Cursor, scroll offset, filename and the transient save notice live here
instead of in module globals; every component call receives what it needs
from the one `Session` the `Editor` holds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from toyed.core.TextBuffer import TextBuffer


class EditorState(Enum):
    EDITING = "editing"
    TERMINATED = "terminated"


@dataclass(slots=True)
class Cursor:
    """Logical insertion point. ``column == len(row)`` means end of line."""

    column: int = 0
    row: int = 0


@dataclass(frozen=True, slots=True)
class ScrollOffset:
    """Logical cell shown at the top-left of the body area."""

    line: int = 0
    column: int = 0


@dataclass(frozen=True, slots=True)
class Notice:
    """A one-shot message shown in the footer until the next key press."""

    text: str
    is_error: bool = False


@dataclass(slots=True)
class Session:
    buffer: TextBuffer
    filename: str
    cursor: Cursor = field(default_factory=Cursor)
    scroll: ScrollOffset = field(default_factory=ScrollOffset)
    state: EditorState = EditorState.EDITING
    notice: Optional[Notice] = None
    modified: bool = False

    @property
    def current_row_length(self) -> int:
        return self.buffer.row_length(self.cursor.row)
