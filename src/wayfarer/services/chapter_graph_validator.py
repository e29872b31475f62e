"""Static chapter graph validation utilities."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Sequence

from wayfarer.core.types import NODE_TYPES
from wayfarer.domain.defs import ChapterDef, NodeDef

Severity = str

FIRST_NODE_ID = 1
MIN_QTE_LENGTH = 5


@dataclass(frozen=True, slots=True)
class Issue:
    severity: Severity
    code: str
    message: str
    context: dict[str, str]


def format_issue(issue: Issue) -> str:
    context = " ".join(f"{key}={value}" for key, value in issue.context.items())
    suffix = f" ({context})" if context else ""
    return f"[{issue.severity}] {issue.code}: {issue.message}{suffix}"


def has_errors(issues: Iterable[Issue]) -> bool:
    return any(issue.severity == "ERROR" for issue in issues)


def validate_chapters(
    chapters: Sequence[ChapterDef],
    *,
    has_prowess: Callable[[int], bool] | None = None,
) -> list[Issue]:
    """Check every chapter for structural problems the engine would hit at runtime."""
    issues: list[Issue] = []
    if not chapters:
        issues.append(Issue(severity="ERROR", code="NO_CHAPTERS", message="No chapters were loaded.", context={}))
        return issues
    expected_id = 1
    for chapter in sorted(chapters, key=lambda item: item.id):
        if chapter.id != expected_id:
            issues.append(
                Issue(
                    severity="ERROR",
                    code="CHAPTER_SEQUENCE_GAP",
                    message="Chapter ids must be dense and start at 1.",
                    context={"chapter_id": str(chapter.id), "expected_id": str(expected_id)},
                )
            )
        expected_id = chapter.id + 1
        _validate_chapter(chapter, issues, has_prowess)
    return issues


def _validate_chapter(
    chapter: ChapterDef,
    issues: list[Issue],
    has_prowess: Callable[[int], bool] | None,
) -> None:
    seen: set[int] = set()
    for node in chapter.nodes:
        if node.id in seen:
            issues.append(_issue("ERROR", "DUPLICATE_NODE_ID", "Duplicate node id detected.", chapter, node))
        seen.add(node.id)
    if FIRST_NODE_ID not in seen:
        issues.append(
            Issue(
                severity="ERROR",
                code="MISSING_FIRST_NODE",
                message="Chapter has no node with id 1.",
                context={"chapter_id": str(chapter.id)},
            )
        )

    for node in chapter.nodes:
        if node.type not in NODE_TYPES:
            issues.append(
                _issue("ERROR", "UNKNOWN_NODE_TYPE", f"'{node.type}' node type does not exist.", chapter, node)
            )
            continue
        for field_path, target in _references(node):
            if target not in seen:
                issues.append(
                    _issue(
                        "ERROR",
                        "DANGLING_REFERENCE",
                        "Reference points to a node missing from the chapter.",
                        chapter,
                        node,
                        field_path=field_path,
                        referenced_id=str(target),
                    )
                )
        if not (node.is_last or node.is_closing) and not _has_exit(node):
            issues.append(_issue("ERROR", "NO_EXIT", "Node has no way to advance.", chapter, node))
        if node.type == "Combat":
            _validate_combat(chapter, node, issues, has_prowess)
        if node.type == "Minigame" and node.minigame is None:
            issues.append(_issue("ERROR", "MISSING_MINIGAME", "Minigame node has no minigame.", chapter, node))
        if node.type == "Minigame" and node.minigame and node.minigame.qte_length < MIN_QTE_LENGTH:
            issues.append(_issue("WARNING", "SHORT_QTE_LANE", "QTE lane is too short to play.", chapter, node))


def _validate_combat(
    chapter: ChapterDef,
    node: NodeDef,
    issues: list[Issue],
    has_prowess: Callable[[int], bool] | None,
) -> None:
    if node.encounter is None or not node.encounter.foes:
        issues.append(_issue("ERROR", "MISSING_FOES", "Combat node has no foes.", chapter, node))
    elif node.encounter.qte_length < MIN_QTE_LENGTH:
        issues.append(_issue("WARNING", "SHORT_QTE_LANE", "QTE lane is too short to play.", chapter, node))
    if has_prowess is not None and not has_prowess(chapter.id):
        issues.append(
            _issue("ERROR", "MISSING_PROWESS", "Chapter has combat but no prowess entry.", chapter, node)
        )


def _references(node: NodeDef) -> list[tuple[str, int]]:
    refs: list[tuple[str, int]] = []
    if node.child_id is not None and not (node.is_last or node.is_closing):
        refs.append(("child_id", node.child_id))
    refs.extend((f"choices[{index}].child_id", choice.child_id) for index, choice in enumerate(node.choices))
    refs.extend(
        (f"actions[{index}].child_id", action.child_id)
        for index, action in enumerate(node.actions)
        if action.child_id is not None
    )
    refs.extend(
        (f"dialogues[{index}].child_id", line.child_id)
        for index, line in enumerate(node.dialogues)
        if line.child_id is not None
    )
    if node.type == "Combat":
        refs.append(("defeat_child_id", node.defeat_child_id))
    if node.minigame is not None and node.minigame.fail_child_id is not None:
        refs.append(("minigame.fail_child_id", node.minigame.fail_child_id))
    return refs


def _has_exit(node: NodeDef) -> bool:
    if node.child_id is not None:
        return True
    if node.type == "Choice":
        return bool(node.choices)
    if node.type == "Action":
        return any(action.child_id is not None for action in node.actions)
    if node.type == "Dialogue":
        return any(line.child_id is not None for line in node.dialogues)
    return False


def _issue(
    severity: Severity,
    code: str,
    message: str,
    chapter: ChapterDef,
    node: NodeDef,
    **context: str,
) -> Issue:
    return Issue(
        severity=severity,
        code=code,
        message=message,
        context={"chapter_id": str(chapter.id), "node_id": str(node.id), **context},
    )
