# toyed/core/Viewport.py
"""Maps the logical cursor onto the bounded terminal grid.

`reflow` moves the scroll offset by the minimum needed to keep the cursor
inside ``[line, line + rows) x [column, column + cols)``. It never animates
and never recomputes layout beyond the two comparisons per axis.
"""

import logging

from toyed.core.Session import Cursor, ScrollOffset

HEADER_ROWS = 1
FOOTER_ROWS = 1


def body_height(terminal_height: int) -> int:
    """Rows available for text between the header and the footer."""
    return max(1, terminal_height - HEADER_ROWS - FOOTER_ROWS)


def _reveal(position: int, offset: int, span: int) -> int:
    if position < offset:
        return position
    if position >= offset + span:
        return position - span + 1
    return offset


def reflow(
    cursor: Cursor, scroll: ScrollOffset, viewport_rows: int, viewport_cols: int
) -> ScrollOffset:
    """Return the scroll offset that keeps *cursor* visible.

    Args:
        cursor: Current logical cursor.
        scroll: Current scroll offset (not modified).
        viewport_rows: Body height in rows.
        viewport_cols: Terminal width in columns.
    """
    rows = max(1, viewport_rows)
    cols = max(1, viewport_cols)
    new_scroll = ScrollOffset(
        line=_reveal(cursor.row, scroll.line, rows),
        column=_reveal(cursor.column, scroll.column, cols),
    )
    if new_scroll != scroll:
        logging.debug(
            "reflow: cursor (%d,%d) -> scroll (%d,%d)",
            cursor.row,
            cursor.column,
            new_scroll.line,
            new_scroll.column,
        )
    return new_scroll
