# toyed/core/ColorClass.py
"""Display classes attached to every buffer character and to the screen chrome."""

from enum import Enum


class ColorClass(Enum):
    """Tag used purely for display.

    Only BODY, COMMENT, NUMBER, VARIABLE and OPERATOR are produced by the
    highlighter. HEADER, FOOTER and ERROR are used by the renderer chrome;
    KEYWORD and STRING are reserved.
    """

    HEADER = "header"
    FOOTER = "footer"
    BODY = "body"
    COMMENT = "comment"
    KEYWORD = "keyword"
    STRING = "string"
    NUMBER = "number"
    OPERATOR = "operator"
    VARIABLE = "variable"
    ERROR = "error"
