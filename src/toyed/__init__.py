# src/toyed/__init__.py
"""toyed: a small curses line editor with a live character-class highlighter."""

__version__ = "0.1.0"
