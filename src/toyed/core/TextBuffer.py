# toyed/core/TextBuffer.py
"""toyed.core.TextBuffer
=======================

The row store behind the editor: an ordered list of `Row` objects, each of
which owns its characters together with their display class.

Keeping the character and its class in one `Cell` means the text and the
highlight overlay can never drift apart in length. Every edit below moves
cells, never characters alone.

Invariants held by `TextBuffer`:
    - there is always at least one row (an empty document is one empty row);
    - row indices are validated strictly and raise `IndexOutOfRange`;
    - column indices are tolerated: insert clamps, delete no-ops.

File I/O uses UTF-8 with ``surrogateescape`` and no newline translation, so
undecodable bytes and carriage returns survive a load/save cycle untouched.
"""

import logging
from typing import Iterable, NamedTuple, Optional

from toyed.core.ColorClass import ColorClass
from toyed.core.Highlighter import rehighlight

logger = logging.getLogger("toyed")

FILE_ENCODING = "utf-8"
FILE_ERRORS = "surrogateescape"
LINE_TERMINATOR = "\n"


class IndexOutOfRange(IndexError):
    """Raised when a row index falls outside ``[0, len(rows))``.

    This signals a defect in the caller: the controller owns the cursor and
    must never hand out an invalid row.
    """

    def __init__(self, row: int, row_count: int) -> None:
        super().__init__(f"row {row} out of range for buffer with {row_count} rows")
        self.row = row
        self.row_count = row_count


class SaveFailed(OSError):
    """Raised by `TextBuffer.save` when the destination cannot be written."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"cannot write '{path}': {reason}")
        self.path = path
        self.reason = reason


class Cell(NamedTuple):
    char: str
    color: ColorClass


class Row:
    """One line of text, stored as a list of `Cell` pairs."""

    __slots__ = ("cells",)

    def __init__(self, text: str = "", color: ColorClass = ColorClass.BODY) -> None:
        self.cells: list[Cell] = [Cell(ch, color) for ch in text]

    @classmethod
    def from_cells(cls, cells: Iterable[Cell]) -> "Row":
        row = cls()
        row.cells = list(cells)
        return row

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        return f"Row({self.text!r})"

    @property
    def text(self) -> str:
        return "".join(cell.char for cell in self.cells)

    @property
    def colors(self) -> list[ColorClass]:
        return [cell.color for cell in self.cells]

    def recolor(self, colors: list[ColorClass]) -> None:
        """Replace every cell's class, keeping the characters."""
        if len(colors) != len(self.cells):
            raise ValueError(
                f"highlight row has {len(colors)} classes for {len(self.cells)} characters"
            )
        self.cells = [Cell(cell.char, color) for cell, color in zip(self.cells, colors)]


class TextBuffer:
    """The whole document in memory.

    Attributes:
        rows (list[Row]): Ordered rows; index is the 0-based line number.
    """

    def __init__(self, lines: Optional[Iterable[str]] = None) -> None:
        self.rows: list[Row] = [Row(line) for line in (lines or [])]
        if not self.rows:
            self.rows.append(Row())

    def __len__(self) -> int:
        return len(self.rows)

    def __repr__(self) -> str:
        return f"TextBuffer({self.lines!r})"

    # --- Read-only views ---
    @property
    def lines(self) -> list[str]:
        return [row.text for row in self.rows]

    @property
    def highlight_rows(self) -> list[list[ColorClass]]:
        return [row.colors for row in self.rows]

    def row(self, index: int) -> Row:
        self._check_row(index)
        return self.rows[index]

    def row_length(self, index: int) -> int:
        return len(self.row(index))

    def _check_row(self, index: int) -> None:
        if not 0 <= index < len(self.rows):
            raise IndexOutOfRange(index, len(self.rows))

    # --- Load / save ---
    @classmethod
    def load(cls, path: str) -> "TextBuffer":
        """Read *path* into a new buffer and highlight it.

        A file that cannot be opened or read yields the one-empty-row buffer;
        the failure is logged, not raised.
        """
        lines: list[str] = []
        try:
            with open(path, "r", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="") as f:
                for line in f:
                    if line.endswith(LINE_TERMINATOR):
                        line = line[: -len(LINE_TERMINATOR)]
                    lines.append(line)
        except OSError as e:
            logger.warning("Could not read '%s' (%s); starting with an empty buffer.", path, e)
            lines = []

        buffer = cls(lines)
        rehighlight(buffer)
        logger.info("Loaded '%s' (%d rows).", path, len(buffer))
        return buffer

    def save(self, path: str) -> None:
        """Write every row followed by a line terminator.

        Raises:
            SaveFailed: If the destination cannot be opened or written. The
                buffer itself is never modified by a failed save.
        """
        try:
            with open(path, "w", encoding=FILE_ENCODING, errors=FILE_ERRORS, newline="") as f:
                for row in self.rows:
                    f.write(row.text)
                    f.write(LINE_TERMINATOR)
        except OSError as e:
            logger.error("Failed to write '%s': %s", path, e)
            raise SaveFailed(path, e.strerror or str(e)) from e
        logger.info("Saved '%s' (%d rows).", path, len(self.rows))

    # --- Edits ---
    def insert_char(self, row: int, col: int, ch: str) -> None:
        """Insert *ch* before column *col* (clamped to ``[0, len(row)]``).

        The new cell borrows the class of the cell before it, or BODY at
        column 0; the next full highlight pass corrects it.
        """
        if len(ch) != 1:
            raise ValueError(f"insert_char expects a single character, got {ch!r}")
        target = self.row(row)
        col = max(0, min(col, len(target)))
        color = target.cells[col - 1].color if col > 0 else ColorClass.BODY
        target.cells.insert(col, Cell(ch, color))

    def delete_char(self, row: int, col: int) -> None:
        """Remove the character just before *col*. No-op unless ``0 < col <= len``."""
        target = self.row(row)
        if col <= 0 or col > len(target):
            return
        del target.cells[col - 1]

    def split_row(self, row: int, col: int) -> None:
        """Cut *row* at *col*; the tail becomes a new row right after it."""
        target = self.row(row)
        col = max(0, min(col, len(target)))
        tail = Row.from_cells(target.cells[col:])
        del target.cells[col:]
        self.rows.insert(row + 1, tail)

    def join_with_previous(self, row: int) -> Optional[int]:
        """Append *row* to the row above it and remove it.

        Returns:
            The join column (the previous row's original length), or None
            when *row* is 0 and nothing was joined.
        """
        self._check_row(row)
        if row == 0:
            return None
        previous = self.rows[row - 1]
        join_col = len(previous)
        previous.cells.extend(self.rows.pop(row).cells)
        return join_col

    def apply_highlight(self, classes: list[list[ColorClass]]) -> None:
        """Recolor every row from a freshly computed highlight sequence.

        The whole shape is checked first; on mismatch no row is touched.
        """
        if len(classes) != len(self.rows):
            raise ValueError(
                f"highlight has {len(classes)} rows for a buffer of {len(self.rows)} rows"
            )
        for index, (row, colors) in enumerate(zip(self.rows, classes)):
            if len(colors) != len(row):
                raise ValueError(
                    f"highlight row {index} has {len(colors)} classes for {len(row)} characters"
                )
        for row, colors in zip(self.rows, classes):
            row.recolor(colors)
