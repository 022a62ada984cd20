# tests/test_main.py
"""Tests for the `main.py` launcher: argument handling and curses startup."""

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

import main


@pytest.mark.parametrize(
    ("argv", "expected"),
    [
        (["toyed"], None),
        (["toyed", ""], None),
        (["toyed", "   "], None),
        (["toyed", "notes.txt"], "notes.txt"),
        (["toyed", "a.txt", "extra"], "a.txt"),
    ],
)
def test_parse_args(argv: list[str], expected: str | None) -> None:
    assert main.parse_args(argv) == expected


def test_missing_argument_prints_usage(capsys: pytest.CaptureFixture[str]) -> None:
    """Usage goes to stdout and curses is never started."""
    with patch("main.curses") as mock_curses, patch("main.bootstrap") as mock_bootstrap:
        status = main.start(["/usr/bin/toyed"])

    assert status == 1
    assert capsys.readouterr().out.strip() == "Usage: toyed filename"
    mock_curses.wrapper.assert_not_called()
    mock_bootstrap.assert_not_called()


def test_start_runs_editor_under_wrapper(mock_config: dict[str, Any]) -> None:
    with (
        patch("main.bootstrap", return_value=mock_config),
        patch("main.locale"),
        patch("main.curses") as mock_curses,
    ):
        status = main.start(["toyed", "notes.txt"])

    assert status == 0
    mock_curses.wrapper.assert_called_once_with(main.main_app_runner, mock_config, "notes.txt")


def test_start_reports_failure_status(mock_config: dict[str, Any]) -> None:
    """An exception escaping the editor loop ends the process with status 1."""
    with (
        patch("main.bootstrap", return_value=mock_config),
        patch("main.locale"),
        patch("main.curses") as mock_curses,
    ):
        mock_curses.wrapper.side_effect = IndexError("row 9 out of range")
        status = main.start(["toyed", "notes.txt"])

    assert status == 1


def test_start_reports_config_failure(capsys: pytest.CaptureFixture[str]) -> None:
    with patch("main.bootstrap", side_effect=RuntimeError("boom")), patch("main.curses") as mock_curses:
        status = main.start(["toyed", "notes.txt"])

    assert status == 1
    assert "boom" in capsys.readouterr().err
    mock_curses.wrapper.assert_not_called()


def test_main_app_runner_builds_and_runs_editor(mock_stdscr: MagicMock, mock_config: dict[str, Any]) -> None:
    with patch("main.curses") as mock_curses, patch("toyed.core.Editor.Editor") as mock_editor_cls:
        main.main_app_runner(mock_stdscr, mock_config, "notes.txt")

    mock_curses.set_escdelay.assert_called_once_with(25)
    mock_editor_cls.assert_called_once_with(mock_stdscr, mock_config, "notes.txt")
    mock_editor_cls.return_value.run.assert_called_once()
