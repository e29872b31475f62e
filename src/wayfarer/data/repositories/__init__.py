"""Repository exports."""

from .chapters_repo import FIRST_CHAPTER_ID, ChaptersRepository

__all__ = [
    "FIRST_CHAPTER_ID",
    "ChaptersRepository",
]
