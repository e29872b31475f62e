"""Per-chapter combat stat blocks for the player."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping


@dataclass(frozen=True, slots=True)
class Prowess:
    """How strong the player is at a given point of the story.

    ``rage_bonus`` is added to every strike for each hit taken, and
    ``fury_bonus`` applies while health is at or below a tenth of the maximum.
    """

    max_health: int
    base_damage: int
    rage_bonus: int
    fury_bonus: int
    qte_speed_factor: float = 1.0
    qte_width: int = 2


PROWESS_BY_CHAPTER: Mapping[int, Prowess] = {
    1: Prowess(max_health=30, base_damage=10, rage_bonus=1, fury_bonus=5, qte_speed_factor=1.0, qte_width=2),
    2: Prowess(max_health=40, base_damage=12, rage_bonus=1, fury_bonus=6, qte_speed_factor=1.1, qte_width=2),
    3: Prowess(max_health=55, base_damage=15, rage_bonus=2, fury_bonus=8, qte_speed_factor=1.25, qte_width=2),
}

FURY_HEALTH_RATIO = 0.1
