"""Skill check made of several quick-time trials."""
from __future__ import annotations

from wayfarer.domain.qte import QteOutcome, QteSettings
from wayfarer.presentation.cli.nodes.base import BaseNode
from wayfarer.services.errors import ContentError
from wayfarer.services.node_flow import NextStep

TRIAL_MESSAGES = {
    QteOutcome.PERFECT: "Flawless!",
    QteOutcome.SUCCESS: "Close enough.",
    QteOutcome.FAIL: "Not this time.",
}


class MinigameNode(BaseNode):
    def load(self) -> NextStep:
        game = self.node.minigame
        if game is None:
            raise ContentError(f"Minigame node {self.node.id} has no minigame settings.")
        settings = QteSettings(
            cycles=game.qte_cycles,
            length=game.qte_length,
            speed_factor=game.qte_speed_factor,
            half_width=game.qte_width,
        )
        qte = self.context.qte

        self.render_text()
        self.typist.wait_for_key()
        successes = 0
        for trial in range(1, game.trials + 1):
            remaining = game.trials - trial + 1
            if successes >= game.required_successes or successes + remaining < game.required_successes:
                break
            challenge = qte.prepare(settings)
            self.typist.line(f"Trial {trial}/{game.trials}: press {challenge.required_key.upper()}!", "white")
            outcome = qte.run(challenge)
            self.typist.line(TRIAL_MESSAGES[outcome])
            if outcome.is_hit:
                successes += 1

        if successes >= game.required_successes:
            if game.success_text:
                self.typist.render_text(game.success_text)
            self.typist.wait_for_key()
            return NextStep(self.node.child_id)
        if game.failure_text:
            self.typist.render_text(game.failure_text, color="red")
        self.typist.wait_for_key()
        return NextStep(self.node.id if game.fail_child_id is None else game.fail_child_id)
