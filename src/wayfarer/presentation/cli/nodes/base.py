"""Shared plumbing for node behaviors."""
from __future__ import annotations

from dataclasses import dataclass

from wayfarer.core.terminal import Terminal
from wayfarer.domain.defs import ChapterDef, NodeDef
from wayfarer.presentation.cli.render import Typist
from wayfarer.services.combat_service import CombatService
from wayfarer.services.condition_service import ConditionEvaluator
from wayfarer.services.node_flow import NextStep
from wayfarer.services.qte_service import QteService
from wayfarer.services.status_store import StatusStore


@dataclass
class NodeContext:
    """Capabilities handed to every node behavior."""

    typist: Typist
    status_store: StatusStore
    conditions: ConditionEvaluator
    qte: QteService
    combat: CombatService

    @property
    def terminal(self) -> Terminal:
        return self.typist.terminal


class BaseNode:
    def __init__(self, node: NodeDef, chapter: ChapterDef, context: NodeContext) -> None:
        self.node = node
        self.chapter = chapter
        self.context = context

    @property
    def typist(self) -> Typist:
        return self.context.typist

    def load(self) -> NextStep:
        raise NotImplementedError

    def render_text(self) -> None:
        """Show the node text, or its alternate text once the node has been played."""
        self.typist.render_node_id(self.chapter.id, self.node.id)
        if self.node.display_text:
            self.typist.render_text(self.node.display_text)

    def is_available(self, condition) -> bool:
        return self.context.conditions.evaluate(condition, chapter_id=self.chapter.id)
