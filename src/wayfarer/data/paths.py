"""Helpers for resolving data file locations."""
from __future__ import annotations

from pathlib import Path


def get_package_data_root() -> Path:
    """Return the directory holding the bundled data files."""
    return Path(__file__).resolve().parent


def get_chapters_path(base_path: Path | str | None = None) -> Path:
    """Return the directory containing the chapter documents."""
    if base_path is not None:
        return Path(base_path)
    return get_package_data_root() / "chapters"
