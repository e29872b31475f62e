"""Numbered choices, filtered by their conditions."""
from __future__ import annotations

from wayfarer.presentation.cli.nodes.base import BaseNode
from wayfarer.services.node_flow import NextStep


class ChoiceNode(BaseNode):
    def load(self) -> NextStep:
        self.render_text()
        visible = [choice for choice in self.node.choices if self.is_available(choice.condition)]
        if not visible:
            self.typist.wait_for_key()
            return NextStep(self.node.child_id)
        self.typist.line()
        self.typist.render_menu([choice.description for choice in visible])
        selected = visible[self.typist.prompt_index(len(visible))]
        self.typist.line()
        return NextStep(selected.child_id)
