"""Linear narration."""
from __future__ import annotations

from wayfarer.presentation.cli.nodes.base import BaseNode
from wayfarer.services.node_flow import NextStep


class StoryNode(BaseNode):
    def load(self) -> NextStep:
        self.render_text()
        self.typist.wait_for_key()
        return NextStep(self.node.child_id)
