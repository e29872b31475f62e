import pytest

from wayfarer.domain.defs import EncounterDef, FoeDef, NodeDef
from wayfarer.presentation.cli.nodes.combat import CombatNode
from wayfarer.services import ConfigurationError, ContentError

from tests.helpers.builders import chapter, goblin_fight, make_context
from tests.helpers.doubles import ScriptExhausted, ScriptedRNG, ScriptedTerminal


def _run(node: NodeDef, keys, rng_values, chapter_id: int = 1):
    terminal = ScriptedTerminal(keys=keys)
    rng = ScriptedRNG(rng_values)
    context = make_context(terminal, rng)
    behavior = CombatNode(node, chapter(chapter_id, node), context)
    return behavior, terminal, rng


def test_failed_dodge_then_critical_strike_wins() -> None:
    # dodge: key up, target 10, "down" pressed; strike: key down, target 1, "down" pressed; bonus 2
    behavior, terminal, rng = _run(
        goblin_fight(health=1, damage=5),
        keys=["enter", "down", "enter", "down", "enter", "enter"],
        rng_values=[0, 10, 1, 1, 2],
    )
    step = behavior.load()

    output = terminal.output
    assert step.child_id == 2
    assert "Prepare to fight!" in output
    assert "Goblin prepares to attack!" in output
    assert "Press UP to dodge!" in output
    assert "You were hit, taking 5 damage! Your rage increases." in output
    assert "Health: 25/30" in output
    assert "Your turn to attack Goblin!" in output
    assert "Critical hit! You deal 13 damage to Goblin!" in output
    assert "Goblin is defeated!" in output
    assert "The goblin flees into the hills." in output
    assert terminal.pending_keys == 0
    assert rng.remaining == 0


def test_lethal_hit_takes_defeat_branch_without_player_attack() -> None:
    behavior, terminal, _ = _run(
        goblin_fight(health=50, damage=30, defeat_child_id=1),
        keys=["enter", "left", "enter"],
        rng_values=[0, 5],
    )
    step = behavior.load()

    output = terminal.output
    assert step.child_id == 1
    assert "Your health has been depleted!" in output
    assert "The goblin laughs as you fall." in output
    assert "Your turn to attack" not in output
    assert "The goblin flees into the hills." not in output
    assert terminal.pending_keys == 0


def test_perfect_parry_and_missed_strike_leave_foe_standing() -> None:
    # dodge: key up, target 1; strike: key left, target 5, "up" pressed; defense bonus draw 1
    behavior, terminal, rng = _run(
        goblin_fight(health=20, damage=5),
        keys=["enter", "up", "enter", "up", "enter"],
        rng_values=[0, 1, 2, 5, 1],
    )
    # The fight goes on into a second round that the script does not cover.
    with pytest.raises(ScriptExhausted):
        behavior.load()

    output = terminal.output
    assert "Perfect parry! You gained an edge." in output
    assert "You missed!" in output
    assert "is defeated!" not in output
    assert "The goblin flees into the hills." not in output
    assert "The goblin laughs as you fall." not in output
    assert rng.draws[:5] == [(4, None), (1, 18), (4, None), (1, 18), (1, 3)]


def test_foe_with_two_attacks_dodges_twice_before_player_strikes() -> None:
    node = goblin_fight(health=20, damage=5)
    node.encounter = EncounterDef(
        foes=(FoeDef(name="Goblin", health=20, damage=5, attacks_per_round=2),),
        victory_message="Done.",
    )
    behavior, terminal, rng = _run(
        node,
        keys=["enter", "up", "up", "enter", "up", "enter"],
        rng_values=[0, 1, 0, 10, 0, 3],
    )
    with pytest.raises(ScriptExhausted):
        behavior.load()

    output = terminal.output
    first_turn = output.index("Your turn to attack Goblin!")
    assert output.count("Goblin prepares to attack!", 0, first_turn) == 2
    assert "Perfect parry! You gained an edge." in output
    # Only the last dodge feeds the bonus, and it failed: no bonus draw.
    assert "You deal 11 damage to Goblin." in output
    assert rng.draws[5] == (1, 18)
    assert (1, 3) not in rng.draws[:6]


def test_foes_attack_in_encounter_order() -> None:
    node = goblin_fight()
    node.encounter = EncounterDef(
        foes=(FoeDef(name="Rat", health=1, damage=1), FoeDef(name="Wolf", health=1, damage=1)),
        victory_message="The den is quiet.",
    )
    behavior, terminal, _ = _run(
        node,
        keys=["enter", "up", "enter", "up", "enter", "up", "enter", "up", "enter", "enter"],
        rng_values=[0, 3, 0, 3, 0, 3, 0, 3],
    )
    step = behavior.load()

    output = terminal.output
    assert output.index("Rat prepares to attack!") < output.index("Wolf prepares to attack!")
    assert output.index("Rat is defeated!") < output.index("Wolf prepares to attack!")
    assert "The den is quiet." in output
    assert step.child_id == 2



def test_fallen_foe_does_not_return_in_later_rounds() -> None:
    node = goblin_fight()
    node.encounter = EncounterDef(
        foes=(FoeDef(name="Rat", health=1, damage=1), FoeDef(name="Wolf", health=100, damage=1)),
    )
    round_one = ["up", "enter", "up", "enter", "up", "enter", "up", "enter"]
    round_two = ["up", "enter", "up", "enter"]
    behavior, terminal, _ = _run(node, keys=["enter", *round_one, *round_two], rng_values=[0, 3] * 6)

    # Round three starts with the Wolf alone; the script ends at its first pause.
    with pytest.raises(ScriptExhausted):
        behavior.load()

    output = terminal.output
    assert output.count("Rat is defeated!") == 1
    assert output.count("Rat prepares to attack!") == 1
    assert output.count("Wolf prepares to attack!") == 3

def test_combat_in_chapter_without_prowess_is_fatal() -> None:
    behavior, _, _ = _run(goblin_fight(), keys=["enter"], rng_values=[], chapter_id=7)
    with pytest.raises(ConfigurationError):
        behavior.load()


def test_combat_without_foes_is_fatal() -> None:
    node = goblin_fight()
    node.encounter = EncounterDef(foes=())
    behavior, _, _ = _run(node, keys=[], rng_values=[])
    with pytest.raises(ContentError):
        behavior.load()


def test_authored_encounter_is_untouched_after_fight() -> None:
    node = goblin_fight(health=1, damage=5)
    behavior, _, _ = _run(
        node,
        keys=["enter", "down", "enter", "down", "enter", "enter"],
        rng_values=[0, 10, 1, 1, 2],
    )
    behavior.load()
    assert node.encounter is not None
    assert node.encounter.foes[0].health == 1
