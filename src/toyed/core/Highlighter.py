# toyed/core/Highlighter.py
"""toyed.core.Highlighter
========================

A deliberately shallow single-pass character classifier.

Per row, left to right:
    - ``#`` turns itself and the rest of the row into COMMENT;
    - whitespace is BODY, decimal digits are NUMBER;
    - ASCII letters and ``_`` are VARIABLE;
    - everything else is OPERATOR.

There is no state across rows and no notion of strings or multi-character
tokens. The whole buffer is reclassified after every edit; documents are
small and edits arrive at typing speed, so incremental highlighting is not
worth its bookkeeping here.
"""

import string
from typing import TYPE_CHECKING

from toyed.core.ColorClass import ColorClass

if TYPE_CHECKING:
    from toyed.core.TextBuffer import TextBuffer

COMMENT_MARKER = "#"

# C-locale character sets, same as isspace/isdigit/isalpha on plain ASCII.
_WHITESPACE = frozenset(string.whitespace)
_DIGITS = frozenset(string.digits)
_WORD = frozenset(string.ascii_letters + "_")


def classify_char(ch: str) -> ColorClass:
    if ch in _WHITESPACE:
        return ColorClass.BODY
    if ch in _DIGITS:
        return ColorClass.NUMBER
    if ch in _WORD:
        return ColorClass.VARIABLE
    return ColorClass.OPERATOR


def classify_line(text: str) -> list[ColorClass]:
    """Return one class per character of *text*."""
    classes: list[ColorClass] = []
    for index, ch in enumerate(text):
        if ch == COMMENT_MARKER:
            classes.extend([ColorClass.COMMENT] * (len(text) - index))
            break
        classes.append(classify_char(ch))
    return classes


def recompute(buffer: "TextBuffer") -> list[list[ColorClass]]:
    """Classify every row of *buffer*. Pure: the buffer is not touched."""
    return [classify_line(row.text) for row in buffer.rows]


def rehighlight(buffer: "TextBuffer") -> None:
    buffer.apply_highlight(recompute(buffer))
