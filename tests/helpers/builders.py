"""Factories for chapters, nodes and a fully wired node context."""
from __future__ import annotations

from wayfarer.core.rng import RNG
from wayfarer.domain.defs import ChapterDef, EncounterDef, FoeDef, NodeDef
from wayfarer.presentation.cli.nodes import CliNodeDispatcher, NodeContext
from wayfarer.presentation.cli.render import Typist
from wayfarer.services import CombatService, ConditionEvaluator, QteService, StatusStore

from tests.helpers.doubles import InstantClock, ScriptedRNG, ScriptedTerminal


def make_context(
    terminal: ScriptedTerminal,
    rng: RNG | None = None,
    *,
    status_store: StatusStore | None = None,
    clock: InstantClock | None = None,
) -> NodeContext:
    rng = rng or ScriptedRNG()
    clock = clock or InstantClock()
    store = status_store or StatusStore()
    return NodeContext(
        typist=Typist(terminal, clock, instant=True),
        status_store=store,
        conditions=ConditionEvaluator(store),
        qte=QteService(terminal, rng, clock),
        combat=CombatService(rng),
    )


def make_dispatcher(context: NodeContext) -> CliNodeDispatcher:
    return CliNodeDispatcher(context)


def story(node_id: int, child_id: int | None = None, **kwargs) -> NodeDef:
    return NodeDef(id=node_id, type="Story", text=f"Story {node_id}", child_id=child_id, **kwargs)


def goblin_fight(
    node_id: int = 1,
    *,
    health: int = 1,
    damage: int = 5,
    child_id: int = 2,
    defeat_child_id: int = 1,
) -> NodeDef:
    encounter = EncounterDef(
        foes=(FoeDef(name="Goblin", health=health, damage=damage),),
        victory_message="The goblin flees into the hills.",
        defeat_message="The goblin laughs as you fall.",
    )
    return NodeDef(
        id=node_id,
        type="Combat",
        text="A goblin blocks the path.",
        child_id=child_id,
        encounter=encounter,
        defeat_child_id=defeat_child_id,
    )


def chapter(chapter_id: int, *nodes: NodeDef, title: str | None = None) -> ChapterDef:
    return ChapterDef(id=chapter_id, title=title or f"Chapter {chapter_id}", nodes=list(nodes))
