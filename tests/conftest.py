# tests/conftest.py
"""Pytest configuration with shared fixtures for the toyed editor tests."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Generator
from unittest.mock import MagicMock, patch

import pytest

from toyed.core.Editor import Editor
from toyed.utils.utils import DEFAULT_CONFIG, deep_merge


class CursesError(Exception):
    """Minimal replacement for `curses.error` used in tests."""


# --- Base fixtures for curses and configuration ---
@pytest.fixture
def mock_stdscr() -> MagicMock:
    """Create a mock of the `curses` stdscr with a 24x80 terminal."""
    stdscr = MagicMock()
    stdscr.getmaxyx.return_value = (24, 80)
    return stdscr


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Embedded defaults, as `load_config` returns them without a user file."""
    return deep_merge({}, DEFAULT_CONFIG)


# --- Sample documents ---
@pytest.fixture
def sample_file(tmp_path: Path) -> Path:
    """A three-line document exercising every highlight class."""
    path = tmp_path / "sample.txt"
    path.write_text("ab#c\n123\nxyz\n", encoding="utf-8")
    return path


@pytest.fixture
def missing_file(tmp_path: Path) -> Path:
    return tmp_path / "does-not-exist.txt"


# --- Editor fixtures ---
@pytest.fixture
def editor_factory(
    mock_stdscr: MagicMock, mock_config: dict[str, Any]
) -> Generator[Any, None, None]:
    """Build real `Editor` instances with the terminal components mocked out.

    `DrawScreen` and `KeyBinder` are replaced with mocks and `curses` is
    patched inside `toyed.core.Editor`, so the controller logic runs without
    a terminal.
    """
    with (
        patch("toyed.core.Editor.DrawScreen") as mock_drawer_cls,
        patch("toyed.core.Editor.KeyBinder") as mock_keybinder_cls,
        patch("toyed.core.Editor.curses") as mock_curses,
    ):
        mock_curses.error = CursesError

        def factory(filename: str | Path) -> Editor:
            return Editor(mock_stdscr, mock_config, str(filename))

        factory.drawer_cls = mock_drawer_cls  # type: ignore[attr-defined]
        factory.keybinder_cls = mock_keybinder_cls  # type: ignore[attr-defined]
        factory.curses = mock_curses  # type: ignore[attr-defined]
        yield factory


@pytest.fixture
def real_editor(editor_factory: Any, sample_file: Path) -> Editor:
    """A real `Editor` on `sample_file` with mocked terminal components."""
    return editor_factory(sample_file)
