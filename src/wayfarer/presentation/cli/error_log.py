"""Crash report written next to the status file."""
from __future__ import annotations

import logging
import traceback
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)


def format_error_report(
    exc: BaseException,
    chapter_id: int | None,
    node_id: int | None,
    *,
    now: datetime | None = None,
) -> str:
    stamp = (now or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    trace = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return (
        f"[{stamp}] {type(exc).__name__}: {exc}\n"
        f"Chapter: {'-' if chapter_id is None else chapter_id}\n"
        f"Node: {'-' if node_id is None else node_id}\n"
        f"{trace}\n"
    )


def write_error_log(
    exc: BaseException,
    chapter_id: int | None,
    node_id: int | None,
    path: Path,
) -> bool:
    """Append a report for ``exc``; returns False when the log cannot be written."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("a", encoding="utf-8") as handle:
            handle.write(format_error_report(exc, chapter_id, node_id))
    except OSError:
        logger.exception("Could not write error log to %s", path)
        return False
    return True
