"""Persisted player progress."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass
class Status:
    """Visited nodes per chapter and collected inventory items.

    A chapter key with an empty list means the chapter was started but no
    node in it has been completed yet.
    """

    visited_nodes: Dict[int, List[int]] = field(default_factory=dict)
    inventory: List[str] = field(default_factory=list)

    @property
    def has_progress(self) -> bool:
        return bool(self.visited_nodes)

    @property
    def last_started_chapter(self) -> int | None:
        if not self.visited_nodes:
            return None
        return max(self.visited_nodes)
