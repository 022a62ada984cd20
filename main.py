#!/usr/bin/env python3
# /toyed/main.py
"""
toyed Main Entry Point
======================

Launches the toyed editor on one file:
1) Environment Loading: reads ~/.config/toyed/.env early (TOYED_KEYTRACE).
2) Path Setup: ensures the toyed package under src/ is importable.
3) Argument Check: exactly one filename, otherwise usage and exit status 1.
4) Configuration & Logging: loads config and initializes logging before the
   editor is imported.
5) Curses Wrapper: safely initializes/tears down curses to avoid terminal
   corruption, and runs the editor loop.
"""

from __future__ import annotations

import curses
import locale
import logging
import os
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

# --- Step 1: Load Environment Variables from the User's Config Directory ---
try:
    load_dotenv(dotenv_path=Path.home() / ".config" / "toyed" / ".env")
except Exception:
    # No HOME or unreadable file; the .env is optional.
    pass

# --- Step 2: Set up the Python Path ---
src_root = os.path.join(os.path.dirname(os.path.abspath(__file__)), "src")
if src_root not in sys.path:
    sys.path.insert(0, src_root)

logger = logging.getLogger("toyed")

USAGE = "Usage: {prog} filename"


def parse_args(argv: list[str]) -> Optional[str]:
    """Return the filename argument, or None when it is missing or blank."""
    if len(argv) <= 1:
        return None
    raw = argv[1].strip()
    return raw or None


def bootstrap() -> dict[str, Any]:
    """Load configuration and set up logging; returns the merged config."""
    from toyed.utils.logging_config import setup_logging
    from toyed.utils.utils import load_config

    config = load_config()
    setup_logging(config)
    return config


# --- Curses Application Runner ---
def main_app_runner(stdscr: curses.window, config: dict[str, Any], filename: str) -> None:
    """
    Target for `curses.wrapper`: sets a short ESC delay, builds the editor on
    *filename* and runs its loop until the user quits.
    """
    from toyed.core.Editor import Editor

    escape_delay = int(config.get("editor", {}).get("escape_delay", 25))
    try:
        curses.set_escdelay(escape_delay)
    except Exception:
        os.environ.setdefault("ESCDELAY", str(escape_delay))

    editor = Editor(stdscr, config, filename)
    editor.run()


def start(argv: Optional[list[str]] = None) -> int:
    """
    Checks arguments, initializes config, logging and locale, and runs the
    editor via `curses.wrapper`.

    Returns:
        int: Process exit status.
    """
    argv = sys.argv if argv is None else argv
    filename = parse_args(argv)
    if filename is None:
        prog = os.path.basename(argv[0]) if argv else "toyed"
        print(USAGE.format(prog=prog))
        return 1

    try:
        config = bootstrap()
    except Exception as e:
        # Logging is not ready; print to stderr.
        print(f"FATAL: Could not initialize configuration or logging system: {e}", file=sys.stderr)
        return 1

    logger.info("toyed starting up on '%s'.", filename)

    # Locale is important for proper character width/encoding behavior in curses.
    try:
        locale.setlocale(locale.LC_ALL, "")
    except locale.Error:
        logger.warning("Could not set system locale. Character rendering may be affected.")

    try:
        curses.wrapper(main_app_runner, config, filename)
    except Exception:
        logger.critical("Unhandled exception at the top level.", exc_info=True)
        return 1

    logger.info("toyed shut down gracefully.")
    return 0


if __name__ == "__main__":
    sys.exit(start())
