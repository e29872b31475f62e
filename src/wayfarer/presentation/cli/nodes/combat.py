"""Turn-based fight driven by quick-time events."""
from __future__ import annotations

from typing import Iterable

from wayfarer.domain.combat_models import CombatState, FoeState
from wayfarer.domain.defs import EncounterDef
from wayfarer.domain.qte import QteOutcome, QteSettings
from wayfarer.presentation.cli.nodes.base import BaseNode
from wayfarer.services.combat_service import (
    CombatEvent,
    DodgeResolvedEvent,
    FoeDefeatedEvent,
    FuryAwakenedEvent,
    PlayerDefeatedEvent,
    StrikeResolvedEvent,
)
from wayfarer.services.errors import ContentError
from wayfarer.services.node_flow import NextStep

FOE_COLOR = "dark_yellow"
PROMPT_COLOR = "white"
HIT_COLOR = "red"
GOOD_COLOR = "green"
TELL_PAUSE_SECONDS = 0.8

DODGE_MESSAGES = {
    QteOutcome.PERFECT: "Perfect parry! You gained an edge.",
    QteOutcome.SUCCESS: "Good dodge! You avoided the attack.",
}


class CombatNode(BaseNode):
    def load(self) -> NextStep:
        encounter = self.node.encounter
        if encounter is None or not encounter.foes:
            raise ContentError(f"Combat node {self.node.id} has no foes to fight.")
        combat = self.context.combat
        state, _ = combat.start_combat(encounter, self.chapter.id)
        settings = combat.qte_settings(encounter, state.prowess)

        self.render_text()
        self.typist.line("Prepare to fight!", HIT_COLOR)
        self.typist.wait_for_key()

        while not state.is_over:
            # Foes only fall on their own turn, so a round snapshot is safe.
            for foe in state.living_foes():
                defense = QteOutcome.SUCCESS
                for _ in range(foe.attacks_per_round):
                    defense = self._dodge(foe, settings)
                    self._render_events(combat.resolve_foe_attack(state, foe, defense))
                    if state.is_player_defeated:
                        return self._defeat(encounter)
                    self._render_health(state)
                self.typist.wait_for_key()
                if not foe.is_alive:
                    continue
                attack = self._strike(foe, settings)
                self._render_events(combat.resolve_player_attack(state, foe, defense, attack))
                self.typist.wait_for_key()

        if encounter.victory_message:
            self.typist.render_text(encounter.victory_message)
        self.typist.wait_for_key()
        return NextStep(self.node.child_id)

    def _dodge(self, foe: FoeState, settings: QteSettings) -> QteOutcome:
        qte = self.context.qte
        challenge = qte.prepare(settings)
        self.typist.line(f"{foe.name} prepares to attack!", FOE_COLOR)
        self.typist.pause(TELL_PAUSE_SECONDS)
        self.typist.line(f"Press {challenge.required_key.upper()} to dodge!", PROMPT_COLOR)
        return qte.run(challenge)

    def _strike(self, foe: FoeState, settings: QteSettings) -> QteOutcome:
        qte = self.context.qte
        challenge = qte.prepare(settings)
        self.typist.line(f"Your turn to attack {foe.name}!", GOOD_COLOR)
        self.typist.line(f"Press {challenge.required_key.upper()} to strike!", PROMPT_COLOR)
        return qte.run(challenge)

    def _defeat(self, encounter: EncounterDef) -> NextStep:
        if encounter.defeat_message:
            self.typist.render_text(encounter.defeat_message, color=HIT_COLOR)
        self.typist.wait_for_key()
        return NextStep(self.node.defeat_child_id)

    def _render_health(self, state: CombatState) -> None:
        self.typist.line(f"Health: {state.health}/{state.prowess.max_health}")

    def _render_events(self, events: Iterable[CombatEvent]) -> None:
        for event in events:
            if isinstance(event, DodgeResolvedEvent):
                if event.outcome is QteOutcome.FAIL:
                    self.typist.line(
                        f"You were hit, taking {event.damage_taken} damage! Your rage increases.",
                        HIT_COLOR,
                    )
                else:
                    self.typist.line(DODGE_MESSAGES[event.outcome], GOOD_COLOR)
            elif isinstance(event, FuryAwakenedEvent):
                self.typist.line("Your health is critically low! Your rage becomes fury!", HIT_COLOR)
            elif isinstance(event, PlayerDefeatedEvent):
                self.typist.line("Your health has been depleted!", HIT_COLOR)
            elif isinstance(event, StrikeResolvedEvent):
                if event.outcome is QteOutcome.PERFECT:
                    self.typist.line(f"Critical hit! You deal {event.damage} damage to {event.foe_name}!", GOOD_COLOR)
                elif event.outcome is QteOutcome.SUCCESS:
                    self.typist.line(f"You deal {event.damage} damage to {event.foe_name}.")
                else:
                    self.typist.line("You missed!")
            elif isinstance(event, FoeDefeatedEvent):
                self.typist.line(f"{event.foe_name} is defeated!", GOOD_COLOR)
