"""Chapter graph traversal: load a node, let it run, persist, move on."""
from __future__ import annotations

import logging

from wayfarer.data.repositories import FIRST_CHAPTER_ID, ChaptersRepository
from wayfarer.domain.defs import ChapterDef, NodeDef
from wayfarer.services.errors import ContentError
from wayfarer.services.node_flow import NextStep, NodeDispatcher
from wayfarer.services.status_store import StatusStore

logger = logging.getLogger(__name__)

FIRST_NODE_ID = 1


class GameEngine:
    """Owns the current chapter and node pointers for one play session."""

    def __init__(
        self,
        chapters_repo: ChaptersRepository,
        status_store: StatusStore,
        dispatcher: NodeDispatcher,
    ) -> None:
        self._chapters_repo = chapters_repo
        self._status_store = status_store
        self._dispatcher = dispatcher
        self.current_chapter: ChapterDef | None = None
        self.current_node: NodeDef | None = None

    @property
    def status_store(self) -> StatusStore:
        return self._status_store

    # -----------------------
    # Chapter transitions
    # -----------------------
    def enter_chapter(self, chapter_id: int, *, reset: bool = True) -> ChapterDef:
        """Make ``chapter_id`` current and record it as started."""
        try:
            chapter = self._chapters_repo.get(chapter_id)
        except KeyError as exc:
            raise ContentError(f"Chapter {chapter_id} does not exist.") from exc
        self.current_chapter = chapter
        self.current_node = None
        self._status_store.begin_chapter(chapter.id, reset=reset)
        logger.info("Entered chapter %d: %s", chapter.id, chapter.title)
        return chapter

    def start_chapter(self, chapter_id: int = FIRST_CHAPTER_ID) -> None:
        """Start a chapter from its first node and play until the session ends."""
        self.enter_chapter(chapter_id)
        self.traverse(FIRST_NODE_ID)

    def start_next_chapter(self) -> None:
        self.start_chapter(self._require_chapter().id + 1)

    def jump_to(self, chapter_id: int, node_id: int = FIRST_NODE_ID) -> None:
        """Debug entry point: play from an arbitrary node without clearing chapter progress."""
        self.enter_chapter(chapter_id, reset=False)
        self.traverse(node_id)

    # -----------------------
    # Node transitions
    # -----------------------
    def traverse(self, node_id: int | None) -> None:
        next_id = node_id
        while True:
            step = self.load_node(next_id)
            next_id = self.advance_to_next(step)
            if next_id is None:
                logger.info("Session ended.")
                return

    def load_node(self, node_id: int | None) -> NextStep:
        """Resolve, refresh and run a node of the current chapter."""
        chapter = self._require_chapter()
        if node_id is None:
            raise ContentError("Id was null and/or node wasn't the last in the chapter!")
        node = self._chapters_repo.search_node_by_id(chapter.id, node_id)
        if node is None:
            raise ContentError(f"Node {node_id} does not exist in chapter {chapter.id}.")
        node.is_visited = self._status_store.is_visited(chapter.id, node.id)
        self.current_node = node
        logger.debug("Loading chapter %d node %d (%s).", chapter.id, node.id, node.type)
        behavior = self._dispatcher.build(node, chapter)
        return behavior.load()

    def advance_to_next(self, step: NextStep) -> int | None:
        """Persist the current node as visited and return the next node id.

        Returns None when the session is over. Reaching a chapter's last node
        moves on to the next chapter when there is one.
        """
        chapter = self._require_chapter()
        node = self.current_node
        if node is None:
            raise ContentError("No node is loaded.")
        self._status_store.mark_visited(chapter.id, node.id)
        if node.is_closing:
            return None
        if node.is_last:
            if not self._chapters_repo.has(chapter.id + 1):
                return None
            self.enter_chapter(chapter.id + 1)
            return FIRST_NODE_ID
        if step.child_id is None:
            raise ContentError(
                f"Node {node.id} of chapter {chapter.id} has no child and is not the last in the chapter."
            )
        return step.child_id

    def _require_chapter(self) -> ChapterDef:
        if self.current_chapter is None:
            raise ContentError("No chapter is loaded.")
        return self.current_chapter
