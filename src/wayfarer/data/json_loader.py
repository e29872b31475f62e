"""Low-level JSON helpers for repositories."""
from __future__ import annotations

import json
from pathlib import Path

from .errors import DataLoadError


def load_json(path: Path) -> object:
    """Load JSON from disk and raise DataLoadError on failure."""
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise DataLoadError(f"Chapter file not found: {path}") from exc
    except OSError as exc:
        raise DataLoadError(f"Unable to read chapter file: {path}") from exc

    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise DataLoadError(f"Invalid JSON in {path}: {exc}") from exc


def normalize_key(key: str) -> str:
    """Fold a field name so that ``childId``, ``ChildId`` and ``child_id`` match."""
    return key.replace("_", "").lower()


def fold_keys(mapping: dict[str, object]) -> dict[str, object]:
    """Return a copy of ``mapping`` whose keys are folded with normalize_key."""
    return {normalize_key(key): value for key, value in mapping.items() if isinstance(key, str)}
