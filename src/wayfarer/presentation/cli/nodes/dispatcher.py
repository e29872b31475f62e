"""Maps a node's type tag to the behavior that plays it."""
from __future__ import annotations

from typing import Dict, Type

from wayfarer.domain.defs import ChapterDef, NodeDef
from wayfarer.presentation.cli.nodes.action import ActionNode
from wayfarer.presentation.cli.nodes.base import BaseNode, NodeContext
from wayfarer.presentation.cli.nodes.choice import ChoiceNode
from wayfarer.presentation.cli.nodes.combat import CombatNode
from wayfarer.presentation.cli.nodes.dialogue import DialogueNode
from wayfarer.presentation.cli.nodes.minigame import MinigameNode
from wayfarer.presentation.cli.nodes.story import StoryNode
from wayfarer.services.errors import ContentError

NODE_BEHAVIORS: Dict[str, Type[BaseNode]] = {
    "Story": StoryNode,
    "Choice": ChoiceNode,
    "Dialogue": DialogueNode,
    "Action": ActionNode,
    "Combat": CombatNode,
    "Minigame": MinigameNode,
}


class CliNodeDispatcher:
    def __init__(self, context: NodeContext) -> None:
        self._context = context

    def build(self, node: NodeDef, chapter: ChapterDef) -> BaseNode:
        behavior = NODE_BEHAVIORS.get(node.type)
        if behavior is None:
            raise ContentError(f"{node.type} node type does not exist.")
        if node.type == "Combat" and node.encounter is None:
            raise ContentError(f"Combat node {node.id} is missing its encounter.")
        if node.type == "Minigame" and node.minigame is None:
            raise ContentError(f"Minigame node {node.id} is missing its minigame.")
        return behavior(node, chapter, self._context)
