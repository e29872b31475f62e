"""Shared type aliases for the core and domain layers."""
from typing import Literal, Tuple

Direction = Literal["up", "down", "left", "right"]
NodeType = Literal["Story", "Choice", "Dialogue", "Action", "Combat", "Minigame"]

DIRECTIONS: Tuple[Direction, ...] = ("up", "down", "left", "right")
NODE_TYPES: Tuple[NodeType, ...] = ("Story", "Choice", "Dialogue", "Action", "Combat", "Minigame")

__all__ = ["DIRECTIONS", "NODE_TYPES", "Direction", "NodeType"]
