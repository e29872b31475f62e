"""Service layer exports."""

from .combat_service import CombatService
from .condition_service import ConditionEvaluator
from .errors import ConfigurationError, ContentError, FatalGameError
from .game_engine import FIRST_NODE_ID, GameEngine
from .node_flow import NextStep, NodeBehavior, NodeDispatcher
from .qte_service import QteService
from .status_store import FileStatusStore, StatusStore

__all__ = [
    "CombatService",
    "ConditionEvaluator",
    "ConfigurationError",
    "ContentError",
    "FatalGameError",
    "FIRST_NODE_ID",
    "GameEngine",
    "NextStep",
    "NodeBehavior",
    "NodeDispatcher",
    "QteService",
    "FileStatusStore",
    "StatusStore",
]
