"""Chapter and node definition structures used by the runtime."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

CONDITION_NODE_VISITED = "isNodeVisited"
DEFAULT_DEFEAT_CHILD_ID = 1


@dataclass(frozen=True, slots=True)
class ConditionDef:
    """Read-only gate evaluated against the player's status."""

    kind: str
    item: str


@dataclass(frozen=True, slots=True)
class EffectDef:
    """Write-only consequence: an item added to the inventory."""

    gain_item: str


@dataclass(frozen=True, slots=True)
class ChoiceDef:
    description: str
    child_id: int
    condition: ConditionDef | None = None


@dataclass(frozen=True, slots=True)
class ActionDef:
    verbs: Tuple[str, ...]
    answer: str
    effect: EffectDef | None = None
    condition: ConditionDef | None = None
    child_id: int | None = None


@dataclass(frozen=True, slots=True)
class DialogueLineDef:
    speaker: str
    text: str
    child_id: int | None = None


@dataclass(frozen=True, slots=True)
class FoeDef:
    """Authored foe stats. Live combat works on copies of these."""

    name: str
    health: int
    damage: int
    attacks_per_round: int = 1


@dataclass(frozen=True, slots=True)
class EncounterDef:
    foes: Tuple[FoeDef, ...]
    victory_message: str = ""
    defeat_message: str = ""
    qte_cycles: int = 3
    qte_length: int = 20
    # None falls back to the chapter's Prowess values.
    qte_speed_factor: float | None = None
    qte_width: int | None = None


@dataclass(frozen=True, slots=True)
class MinigameDef:
    trials: int = 3
    required_successes: int = 2
    qte_cycles: int = 3
    qte_length: int = 20
    qte_speed_factor: float = 1.0
    qte_width: int = 2
    success_text: str = ""
    failure_text: str = ""
    fail_child_id: int | None = None


@dataclass(slots=True)
class NodeDef:
    """Generic node record; the ``type`` tag selects its behavior."""

    id: int
    type: str
    text: str = ""
    alt_text: str | None = None
    child_id: int | None = None
    choices: List[ChoiceDef] = field(default_factory=list)
    actions: List[ActionDef] = field(default_factory=list)
    dialogues: List[DialogueLineDef] = field(default_factory=list)
    encounter: EncounterDef | None = None
    defeat_child_id: int = DEFAULT_DEFEAT_CHILD_ID
    minigame: MinigameDef | None = None
    is_last: bool = False
    is_closing: bool = False
    # Mirrors the status store; refreshed on every load, never authoritative.
    is_visited: bool = False

    @property
    def display_text(self) -> str:
        if self.is_visited and self.alt_text:
            return self.alt_text
        return self.text


@dataclass(slots=True)
class ChapterDef:
    id: int
    title: str
    nodes: List[NodeDef] = field(default_factory=list)
