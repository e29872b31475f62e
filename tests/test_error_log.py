from datetime import datetime
from pathlib import Path

from wayfarer.presentation.cli.error_log import format_error_report, write_error_log
from wayfarer.services import ContentError


def _raise_and_catch() -> ContentError:
    try:
        raise ContentError("Puzzle node type does not exist.")
    except ContentError as exc:
        return exc


def test_report_names_position_and_traceback() -> None:
    report = format_error_report(_raise_and_catch(), 2, 7, now=datetime(2024, 5, 1, 12, 30, 0))
    assert report.startswith("[2024-05-01 12:30:00] ContentError: Puzzle node type does not exist.")
    assert "Chapter: 2\n" in report
    assert "Node: 7\n" in report
    assert "Traceback (most recent call last)" in report


def test_report_without_position_uses_placeholders() -> None:
    report = format_error_report(_raise_and_catch(), None, None)
    assert "Chapter: -\n" in report
    assert "Node: -\n" in report


def test_write_error_log_appends(tmp_path: Path) -> None:
    path = tmp_path / "logs" / "error_log.txt"
    assert write_error_log(_raise_and_catch(), 1, 1, path)
    assert write_error_log(_raise_and_catch(), 1, 2, path)
    content = path.read_text(encoding="utf-8")
    assert content.count("ContentError") >= 2
    assert "Node: 2" in content


def test_write_error_log_is_best_effort(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    assert write_error_log(_raise_and_catch(), 1, 1, blocker / "error_log.txt") is False
