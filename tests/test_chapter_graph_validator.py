from wayfarer.data.repositories import ChaptersRepository
from wayfarer.domain.defs import ChoiceDef, EncounterDef, MinigameDef, NodeDef
from wayfarer.services import CombatService
from wayfarer.services.chapter_graph_validator import format_issue, has_errors, validate_chapters
from wayfarer.core.rng import RNG

from tests.helpers.builders import chapter, goblin_fight, story


def _codes(issues) -> list[str]:
    return [issue.code for issue in issues]


def test_bundled_chapters_have_no_errors() -> None:
    combat = CombatService(RNG(0))
    issues = validate_chapters(ChaptersRepository().all(), has_prowess=combat.has_prowess)
    assert not has_errors(issues), "\n".join(format_issue(issue) for issue in issues)


def test_clean_chapter_has_no_issues() -> None:
    assert validate_chapters([chapter(1, story(1, 2), story(2, is_last=True))]) == []


def test_empty_chapter_set_is_an_error() -> None:
    issues = validate_chapters([])
    assert _codes(issues) == ["NO_CHAPTERS"]
    assert has_errors(issues)


def test_duplicate_and_missing_first_node() -> None:
    issues = validate_chapters([chapter(1, story(2, 3), story(3, is_last=True), story(3, is_last=True))])
    assert "DUPLICATE_NODE_ID" in _codes(issues)
    assert "MISSING_FIRST_NODE" in _codes(issues)


def test_chapter_ids_must_be_dense() -> None:
    issues = validate_chapters([chapter(1, story(1, is_last=True)), chapter(3, story(1, is_last=True))])
    assert _codes(issues) == ["CHAPTER_SEQUENCE_GAP"]


def test_unknown_type_and_dangling_reference() -> None:
    choice = NodeDef(id=2, type="Choice", choices=[ChoiceDef(description="Away", child_id=9)])
    issues = validate_chapters([chapter(1, NodeDef(id=1, type="Riddle", child_id=2), choice)])
    assert _codes(issues) == ["UNKNOWN_NODE_TYPE", "DANGLING_REFERENCE"]
    assert issues[1].context["field_path"] == "choices[0].child_id"
    assert issues[1].context["referenced_id"] == "9"


def test_node_without_exit() -> None:
    issues = validate_chapters([chapter(1, story(1, None))])
    assert _codes(issues) == ["NO_EXIT"]
    assert has_errors(issues)


def test_combat_checks() -> None:
    empty_fight = NodeDef(id=1, type="Combat", child_id=2, encounter=EncounterDef(foes=()))
    issues = validate_chapters(
        [chapter(1, empty_fight, story(2, is_last=True))],
        has_prowess=lambda chapter_id: False,
    )
    assert "MISSING_FOES" in _codes(issues)
    assert "MISSING_PROWESS" in _codes(issues)


def test_combat_defeat_target_must_exist() -> None:
    issues = validate_chapters([chapter(1, goblin_fight(node_id=1, child_id=2, defeat_child_id=7), story(2, is_last=True))])
    assert _codes(issues) == ["DANGLING_REFERENCE"]
    assert issues[0].context["field_path"] == "defeat_child_id"


def test_minigame_checks() -> None:
    bare = NodeDef(id=1, type="Minigame", child_id=2)
    short = NodeDef(id=2, type="Minigame", child_id=3, minigame=MinigameDef(qte_length=3, fail_child_id=8))
    issues = validate_chapters([chapter(1, bare, short, story(3, is_last=True))])
    assert sorted(_codes(issues)) == ["DANGLING_REFERENCE", "MISSING_MINIGAME", "SHORT_QTE_LANE"]
    short_issue = next(issue for issue in issues if issue.code == "SHORT_QTE_LANE")
    assert short_issue.severity == "WARNING"


def test_format_issue_includes_context() -> None:
    issue = validate_chapters([chapter(1, story(1, None))])[0]
    assert format_issue(issue) == "[ERROR] NO_EXIT: Node has no way to advance. (chapter_id=1 node_id=1)"
