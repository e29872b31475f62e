"""Evaluation of read-only gates against the player's status."""
from __future__ import annotations

from wayfarer.domain.defs import CONDITION_NODE_VISITED, ConditionDef
from wayfarer.services.errors import ContentError
from wayfarer.services.status_store import StatusStore


class ConditionEvaluator:
    """Answers whether a choice, action or line is currently available."""

    def __init__(self, status_store: StatusStore) -> None:
        self._status_store = status_store

    def evaluate(self, condition: ConditionDef | None, *, chapter_id: int) -> bool:
        if condition is None:
            return True
        if condition.kind == CONDITION_NODE_VISITED:
            try:
                node_id = int(condition.item)
            except ValueError as exc:
                raise ContentError(
                    f"Condition '{condition.kind}' expects a node id, got {condition.item!r}."
                ) from exc
            return self._status_store.is_visited(chapter_id, node_id)
        # Any other kind is an inventory check; authored content relies on this.
        return self._status_store.has_item(condition.item)
