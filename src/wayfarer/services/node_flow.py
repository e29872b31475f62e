"""Contract shared by the game engine and the node behaviors it drives."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from wayfarer.domain.defs import ChapterDef, NodeDef


@dataclass(frozen=True, slots=True)
class NextStep:
    """What a node decided once it finished loading: the id of the node to load next."""

    child_id: int | None


class NodeBehavior(Protocol):
    def load(self) -> NextStep:
        """Render and run the node, returning where the story goes next."""
        ...


class NodeDispatcher(Protocol):
    def build(self, node: NodeDef, chapter: ChapterDef) -> NodeBehavior:
        ...
