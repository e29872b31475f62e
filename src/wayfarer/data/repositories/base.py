"""Base repository implementation for JSON content data."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Generic, TypeVar

from wayfarer.data.errors import DataValidationError
from wayfarer.data.json_loader import fold_keys, load_json
from wayfarer.data import paths

T = TypeVar("T")


class RepositoryBase(Generic[T]):
    """Common caching and loading behavior for repositories keyed by integer id."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        self._base_path = Path(base_path) if base_path is not None else None
        self._definitions: Dict[int, T] | None = None

    def _get_directory(self) -> Path:
        return paths.get_chapters_path(self._base_path)

    def _load_raw(self, file_path: Path) -> dict[str, object]:
        raw = load_json(file_path)
        if not isinstance(raw, dict):
            raise DataValidationError(f"Expected top-level object in {file_path}")
        return fold_keys(raw)

    def _build(self) -> Dict[int, T]:
        """Load every definition from disk into typed objects."""
        raise NotImplementedError

    def _ensure_loaded(self) -> None:
        if self._definitions is None:
            self._definitions = self._build()

    def get(self, def_id: int) -> T:
        """Return a definition by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        try:
            return self._definitions[def_id]
        except KeyError as exc:
            raise KeyError(def_id) from exc

    def has(self, def_id: int) -> bool:
        self._ensure_loaded()
        assert self._definitions is not None
        return def_id in self._definitions

    def all(self) -> list[T]:
        """Return all definitions sorted deterministically by id."""
        self._ensure_loaded()
        assert self._definitions is not None
        return [self._definitions[key] for key in sorted(self._definitions.keys())]

    @staticmethod
    def _require_mapping(value: object, context: str) -> dict[str, object]:
        if not isinstance(value, dict):
            raise DataValidationError(f"{context} must be an object/dict.")
        return fold_keys(value)

    @staticmethod
    def _require_list(value: object, context: str) -> list[object]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise DataValidationError(f"{context} must be a list if provided.")
        return value

    @staticmethod
    def _require_str(value: object, context: str) -> str:
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string.")
        return value

    @staticmethod
    def _optional_str(value: object, context: str) -> str | None:
        if value is None:
            return None
        if not isinstance(value, str):
            raise DataValidationError(f"{context} must be a string if provided.")
        return value

    @staticmethod
    def _require_int(value: object, context: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise DataValidationError(f"{context} must be an integer.")
        return value

    @classmethod
    def _optional_int(cls, value: object, context: str) -> int | None:
        if value is None:
            return None
        return cls._require_int(value, context)

    @staticmethod
    def _optional_float(value: object, context: str) -> float | None:
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DataValidationError(f"{context} must be a number if provided.")
        return float(value)

    @staticmethod
    def _optional_bool(value: object, context: str) -> bool:
        if value is None:
            return False
        if not isinstance(value, bool):
            raise DataValidationError(f"{context} must be a boolean if provided.")
        return value
