"""Domain definition exports."""

from .chapter_def import (
    CONDITION_NODE_VISITED,
    DEFAULT_DEFEAT_CHILD_ID,
    ActionDef,
    ChapterDef,
    ChoiceDef,
    ConditionDef,
    DialogueLineDef,
    EffectDef,
    EncounterDef,
    FoeDef,
    MinigameDef,
    NodeDef,
)

__all__ = [
    "CONDITION_NODE_VISITED",
    "DEFAULT_DEFEAT_CHILD_ID",
    "ActionDef",
    "ChapterDef",
    "ChoiceDef",
    "ConditionDef",
    "DialogueLineDef",
    "EffectDef",
    "EncounterDef",
    "FoeDef",
    "MinigameDef",
    "NodeDef",
]
