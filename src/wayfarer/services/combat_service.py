"""Combat rules: prowess lookup, damage exchange and win/loss detection."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Mapping

from wayfarer.core.rng import RNG
from wayfarer.domain.combat_models import CombatState, FoeState
from wayfarer.domain.defs import EncounterDef
from wayfarer.domain.prowess import PROWESS_BY_CHAPTER, Prowess
from wayfarer.domain.qte import QteOutcome, QteSettings
from wayfarer.services.errors import ConfigurationError

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CombatEvent:
    """Base combat event."""


@dataclass(slots=True)
class CombatStartedEvent(CombatEvent):
    foe_names: List[str]
    health: int


@dataclass(slots=True)
class DodgeResolvedEvent(CombatEvent):
    foe_name: str
    outcome: QteOutcome
    damage_taken: int
    health: int


@dataclass(slots=True)
class FuryAwakenedEvent(CombatEvent):
    health: int


@dataclass(slots=True)
class PlayerDefeatedEvent(CombatEvent):
    pass


@dataclass(slots=True)
class StrikeResolvedEvent(CombatEvent):
    foe_name: str
    outcome: QteOutcome
    damage: int
    foe_health: int


@dataclass(slots=True)
class FoeDefeatedEvent(CombatEvent):
    foe_name: str


@dataclass(slots=True)
class CombatResolvedEvent(CombatEvent):
    victory: bool


class CombatService:
    """Deterministic (given the RNG) combat rules used by combat nodes."""

    def __init__(self, rng: RNG, prowess_table: Mapping[int, Prowess] | None = None) -> None:
        self._rng = rng
        self._prowess_table = PROWESS_BY_CHAPTER if prowess_table is None else prowess_table

    def get_prowess(self, chapter_id: int) -> Prowess:
        try:
            return self._prowess_table[chapter_id]
        except KeyError as exc:
            raise ConfigurationError(f"Prowess for chapter {chapter_id} is not implemented.") from exc

    def has_prowess(self, chapter_id: int) -> bool:
        return chapter_id in self._prowess_table

    # -----------------------
    # Combat Lifecycle
    # -----------------------
    def start_combat(self, encounter: EncounterDef, chapter_id: int) -> tuple[CombatState, List[CombatEvent]]:
        """Build a fresh combat state; the encounter definition is never mutated."""
        prowess = self.get_prowess(chapter_id)
        foes = [
            FoeState(
                name=foe.name,
                health=foe.health,
                damage=foe.damage,
                attacks_per_round=foe.attacks_per_round,
            )
            for foe in encounter.foes
        ]
        state = CombatState(prowess=prowess, health=prowess.max_health, foes=foes)
        logger.info("Combat started in chapter %d against %s.", chapter_id, [foe.name for foe in foes])
        return state, [CombatStartedEvent(foe_names=[foe.name for foe in foes], health=state.health)]

    @staticmethod
    def qte_settings(encounter: EncounterDef, prowess: Prowess) -> QteSettings:
        speed = prowess.qte_speed_factor if encounter.qte_speed_factor is None else encounter.qte_speed_factor
        width = prowess.qte_width if encounter.qte_width is None else encounter.qte_width
        return QteSettings(
            cycles=encounter.qte_cycles,
            length=encounter.qte_length,
            speed_factor=speed,
            half_width=width,
        )

    # -----------------------
    # Exchanges
    # -----------------------
    def resolve_foe_attack(self, state: CombatState, foe: FoeState, outcome: QteOutcome) -> List[CombatEvent]:
        """Apply a foe's attack given the player's dodge outcome."""
        damage_taken = 0
        if outcome is QteOutcome.FAIL:
            damage_taken = foe.damage
            state.health -= foe.damage
            state.rage_bonus += state.prowess.rage_bonus
        events: List[CombatEvent] = [
            DodgeResolvedEvent(
                foe_name=foe.name,
                outcome=outcome,
                damage_taken=damage_taken,
                health=state.health,
            )
        ]
        if state.is_player_defeated:
            logger.info("Player defeated by %s.", foe.name)
            events.append(PlayerDefeatedEvent())
            events.append(CombatResolvedEvent(victory=False))
        elif state.is_furious:
            events.append(FuryAwakenedEvent(health=state.health))
        return events

    def resolve_player_attack(
        self,
        state: CombatState,
        foe: FoeState,
        defense: QteOutcome,
        attack: QteOutcome,
    ) -> List[CombatEvent]:
        """Apply the player's counter-attack. Player health is never touched here."""
        damage = self._strike_damage(state, defense, attack)
        if attack is QteOutcome.FAIL:
            damage = 0
        foe.health -= damage
        events: List[CombatEvent] = [
            StrikeResolvedEvent(foe_name=foe.name, outcome=attack, damage=damage, foe_health=foe.health)
        ]
        if not foe.is_alive:
            logger.info("%s defeated.", foe.name)
            events.append(FoeDefeatedEvent(foe_name=foe.name))
            if not state.living_foes():
                events.append(CombatResolvedEvent(victory=True))
        return events

    def _strike_damage(self, state: CombatState, defense: QteOutcome, attack: QteOutcome) -> int:
        prowess = state.prowess
        damage = prowess.base_damage + state.rage_bonus
        if state.is_furious:
            damage += prowess.fury_bonus
        # Each perfect roll adds its own bonus draw.
        if defense is QteOutcome.PERFECT:
            damage += self.perfect_timing_bonus(prowess)
        if attack is QteOutcome.PERFECT:
            damage += self.perfect_timing_bonus(prowess)
        return damage

    def perfect_timing_bonus(self, prowess: Prowess) -> int:
        return self._rng.randrange(prowess.base_damage // 10, prowess.base_damage // 3)
