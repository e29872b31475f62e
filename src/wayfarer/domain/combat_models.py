"""Live combat state. Built fresh from an encounter for every fight."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from wayfarer.domain.prowess import FURY_HEALTH_RATIO, Prowess


@dataclass(slots=True)
class FoeState:
    name: str
    health: int
    damage: int
    attacks_per_round: int = 1

    @property
    def is_alive(self) -> bool:
        return self.health > 0


@dataclass
class CombatState:
    prowess: Prowess
    health: int
    foes: List[FoeState] = field(default_factory=list)
    rage_bonus: int = 0

    @property
    def is_player_defeated(self) -> bool:
        return self.health <= 0

    @property
    def is_furious(self) -> bool:
        return self.health <= self.prowess.max_health * FURY_HEALTH_RATIO

    def living_foes(self) -> List[FoeState]:
        return [foe for foe in self.foes if foe.is_alive]

    @property
    def is_over(self) -> bool:
        return self.is_player_defeated or not self.living_foes()
