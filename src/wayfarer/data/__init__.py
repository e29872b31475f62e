"""Data layer utilities for loading chapter documents."""

from .errors import DataLoadError, DataValidationError
from .paths import get_chapters_path, get_package_data_root

__all__ = [
    "DataLoadError",
    "DataValidationError",
    "get_chapters_path",
    "get_package_data_root",
]
