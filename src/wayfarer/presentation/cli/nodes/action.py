"""Free-text verbs typed by the player."""
from __future__ import annotations

from typing import List

from wayfarer.domain.defs import ActionDef
from wayfarer.presentation.cli.nodes.base import BaseNode
from wayfarer.services.node_flow import NextStep

HELP_WORDS = ("help", "?")
REFUSAL = "Nothing happens."
ITEM_COLOR = "green"


class ActionNode(BaseNode):
    def load(self) -> NextStep:
        self.render_text()
        while True:
            raw = self.context.terminal.read_line("> ").strip().lower()
            if not raw:
                continue
            available = self._available_actions()
            if raw in HELP_WORDS:
                verbs = ", ".join(action.verbs[0] for action in available)
                self.typist.line(f"You could try: {verbs}" if verbs else "There is nothing to do here.")
                continue
            action = self._match(raw, available)
            if action is None:
                self.typist.line(REFUSAL)
                continue
            self.typist.render_text(action.answer)
            if action.effect is not None:
                self.context.status_store.store_item(action.effect.gain_item)
                self.typist.line(f"({action.effect.gain_item} added to your inventory)", ITEM_COLOR)
            if action.child_id is not None:
                self.typist.wait_for_key()
                return NextStep(action.child_id)

    def _available_actions(self) -> List[ActionDef]:
        return [action for action in self.node.actions if self.is_available(action.condition)]

    @staticmethod
    def _match(raw: str, actions: List[ActionDef]) -> ActionDef | None:
        for action in actions:
            if any(raw == verb.lower() for verb in action.verbs):
                return action
        return None
