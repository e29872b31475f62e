"""Repository for chapter documents and their nodes."""
from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterable, List

from wayfarer.data.errors import DataValidationError
from wayfarer.data.repositories.base import RepositoryBase
from wayfarer.domain.defs import (
    DEFAULT_DEFEAT_CHILD_ID,
    ActionDef,
    ChapterDef,
    ChoiceDef,
    ConditionDef,
    DialogueLineDef,
    EffectDef,
    EncounterDef,
    FoeDef,
    MinigameDef,
    NodeDef,
)

FIRST_CHAPTER_ID = 1


class ChaptersRepository(RepositoryBase[ChapterDef]):
    """Loads ``c<N>.json`` documents for N = 1, 2, ... until one is missing."""

    def __init__(self, base_path: Path | str | None = None) -> None:
        super().__init__(base_path)

    @classmethod
    def from_chapters(cls, chapters: Iterable[ChapterDef]) -> "ChaptersRepository":
        """Build a repository around already-constructed chapters."""
        repo = cls()
        repo._definitions = {chapter.id: chapter for chapter in chapters}
        return repo

    def search_node_by_id(self, chapter_id: int, node_id: int) -> NodeDef | None:
        """Return the node with ``node_id`` in the chapter, scanning in authored order."""
        chapter = self.get(chapter_id)
        for node in chapter.nodes:
            if node.id == node_id:
                return node
        return None

    def _build(self) -> Dict[int, ChapterDef]:
        directory = self._get_directory()
        chapters: Dict[int, ChapterDef] = {}
        chapter_id = FIRST_CHAPTER_ID
        while True:
            file_path = directory / f"c{chapter_id}.json"
            if not file_path.exists():
                break
            raw = self._load_raw(file_path)
            chapter = self._parse_chapter(raw, f"chapter file '{file_path.name}'")
            if chapter.id != chapter_id:
                raise DataValidationError(
                    f"{file_path.name} declares chapter id {chapter.id}, expected {chapter_id}."
                )
            chapters[chapter_id] = chapter
            chapter_id += 1
        return chapters

    def _parse_chapter(self, raw: dict[str, object], context: str) -> ChapterDef:
        chapter_id = self._require_int(raw.get("id"), f"{context} id")
        title = self._require_str(raw.get("title"), f"{context} title")
        nodes = [
            self._parse_node(entry, f"chapter {chapter_id} nodes[{index}]")
            for index, entry in enumerate(self._require_list(raw.get("nodes"), f"{context} nodes"))
        ]
        return ChapterDef(id=chapter_id, title=title, nodes=nodes)

    def _parse_node(self, entry: object, context: str) -> NodeDef:
        data = self._require_mapping(entry, context)
        node_id = self._require_int(data.get("id"), f"{context} id")
        node_ctx = f"{context} (node {node_id})"
        encounter_raw = data.get("encounter")
        minigame_raw = data.get("minigame")
        defeat_child_id = self._optional_int(data.get("defeatchildid"), f"{node_ctx} defeat_child_id")
        return NodeDef(
            id=node_id,
            type=self._require_str(data.get("type"), f"{node_ctx} type"),
            text=self._optional_str(data.get("text"), f"{node_ctx} text") or "",
            alt_text=self._optional_str(data.get("alttext"), f"{node_ctx} alt_text"),
            child_id=self._optional_int(data.get("childid"), f"{node_ctx} child_id"),
            choices=self._parse_choices(data.get("choices"), node_ctx),
            actions=self._parse_actions(data.get("actions"), node_ctx),
            dialogues=self._parse_dialogues(data.get("dialogues"), node_ctx),
            encounter=None if encounter_raw is None else self._parse_encounter(encounter_raw, node_ctx),
            defeat_child_id=DEFAULT_DEFEAT_CHILD_ID if defeat_child_id is None else defeat_child_id,
            minigame=None if minigame_raw is None else self._parse_minigame(minigame_raw, node_ctx),
            is_last=self._optional_bool(data.get("islast"), f"{node_ctx} is_last"),
            is_closing=self._optional_bool(data.get("isclosing"), f"{node_ctx} is_closing"),
        )

    def _parse_condition(self, raw: object, context: str) -> ConditionDef | None:
        if raw is None:
            return None
        data = self._require_mapping(raw, context)
        kind = data.get("type", data.get("kind"))
        item = data.get("item")
        if isinstance(item, int) and not isinstance(item, bool):
            item = str(item)
        return ConditionDef(
            kind=self._require_str(kind, f"{context} type"),
            item=self._require_str(item, f"{context} item"),
        )

    def _parse_effect(self, raw: object, context: str) -> EffectDef | None:
        if raw is None:
            return None
        data = self._require_mapping(raw, context)
        return EffectDef(gain_item=self._require_str(data.get("gainitem"), f"{context} gain_item"))

    def _parse_choices(self, raw: object, context: str) -> List[ChoiceDef]:
        choices: List[ChoiceDef] = []
        for index, entry in enumerate(self._require_list(raw, f"{context} choices")):
            choice_ctx = f"{context} choices[{index}]"
            data = self._require_mapping(entry, choice_ctx)
            description = data.get("desc", data.get("description"))
            choices.append(
                ChoiceDef(
                    description=self._require_str(description, f"{choice_ctx} desc"),
                    child_id=self._require_int(data.get("childid"), f"{choice_ctx} child_id"),
                    condition=self._parse_condition(data.get("condition"), f"{choice_ctx} condition"),
                )
            )
        return choices

    def _parse_actions(self, raw: object, context: str) -> List[ActionDef]:
        actions: List[ActionDef] = []
        for index, entry in enumerate(self._require_list(raw, f"{context} actions")):
            action_ctx = f"{context} actions[{index}]"
            data = self._require_mapping(entry, action_ctx)
            verbs = tuple(
                self._require_str(verb, f"{action_ctx} verbs[{verb_index}]")
                for verb_index, verb in enumerate(self._require_list(data.get("verbs"), f"{action_ctx} verbs"))
            )
            if not verbs:
                raise DataValidationError(f"{action_ctx} must declare at least one verb.")
            actions.append(
                ActionDef(
                    verbs=verbs,
                    answer=self._require_str(data.get("answer"), f"{action_ctx} answer"),
                    effect=self._parse_effect(data.get("effect"), f"{action_ctx} effect"),
                    condition=self._parse_condition(data.get("condition"), f"{action_ctx} condition"),
                    child_id=self._optional_int(data.get("childid"), f"{action_ctx} child_id"),
                )
            )
        return actions

    def _parse_dialogues(self, raw: object, context: str) -> List[DialogueLineDef]:
        lines: List[DialogueLineDef] = []
        for index, entry in enumerate(self._require_list(raw, f"{context} dialogues")):
            line_ctx = f"{context} dialogues[{index}]"
            data = self._require_mapping(entry, line_ctx)
            lines.append(
                DialogueLineDef(
                    speaker=self._require_str(data.get("actor", data.get("speaker")), f"{line_ctx} actor"),
                    text=self._require_str(data.get("line", data.get("text")), f"{line_ctx} line"),
                    child_id=self._optional_int(data.get("childid"), f"{line_ctx} child_id"),
                )
            )
        return lines

    def _parse_encounter(self, raw: object, context: str) -> EncounterDef:
        enc_ctx = f"{context} encounter"
        data = self._require_mapping(raw, enc_ctx)
        foes = tuple(
            self._parse_foe(entry, f"{enc_ctx} foes[{index}]")
            for index, entry in enumerate(self._require_list(data.get("foes"), f"{enc_ctx} foes"))
        )
        return EncounterDef(
            foes=foes,
            victory_message=self._optional_str(data.get("victorymessage"), f"{enc_ctx} victory_message") or "",
            defeat_message=self._optional_str(data.get("defeatmessage"), f"{enc_ctx} defeat_message") or "",
            qte_cycles=self._positive_int(data.get("qtecycles"), f"{enc_ctx} qte_cycles", default=3),
            qte_length=self._positive_int(data.get("qtelength"), f"{enc_ctx} qte_length", default=20),
            qte_speed_factor=self._positive_float(data.get("qtespeedfactor"), f"{enc_ctx} qte_speed_factor"),
            qte_width=self._optional_int(data.get("qtewidth"), f"{enc_ctx} qte_width"),
        )

    def _parse_foe(self, raw: object, context: str) -> FoeDef:
        data = self._require_mapping(raw, context)
        return FoeDef(
            name=self._require_str(data.get("name"), f"{context} name"),
            health=self._require_int(data.get("health"), f"{context} health"),
            damage=self._require_int(data.get("damage"), f"{context} damage"),
            attacks_per_round=self._positive_int(
                data.get("attacksperround"), f"{context} attacks_per_round", default=1
            ),
        )

    def _parse_minigame(self, raw: object, context: str) -> MinigameDef:
        game_ctx = f"{context} minigame"
        data = self._require_mapping(raw, game_ctx)
        trials = self._positive_int(data.get("trials"), f"{game_ctx} trials", default=3)
        required = self._positive_int(data.get("requiredsuccesses"), f"{game_ctx} required_successes", default=2)
        if required > trials:
            raise DataValidationError(f"{game_ctx} required_successes cannot exceed trials.")
        speed = self._positive_float(data.get("qtespeedfactor"), f"{game_ctx} qte_speed_factor")
        width = self._optional_int(data.get("qtewidth"), f"{game_ctx} qte_width")
        return MinigameDef(
            trials=trials,
            required_successes=required,
            qte_cycles=self._positive_int(data.get("qtecycles"), f"{game_ctx} qte_cycles", default=3),
            qte_length=self._positive_int(data.get("qtelength"), f"{game_ctx} qte_length", default=20),
            qte_speed_factor=1.0 if speed is None else speed,
            qte_width=2 if width is None else width,
            success_text=self._optional_str(data.get("successtext"), f"{game_ctx} success_text") or "",
            failure_text=self._optional_str(data.get("failuretext"), f"{game_ctx} failure_text") or "",
            fail_child_id=self._optional_int(data.get("failchildid"), f"{game_ctx} fail_child_id"),
        )

    def _positive_int(self, value: object, context: str, *, default: int) -> int:
        if value is None:
            return default
        parsed = self._require_int(value, context)
        if parsed <= 0:
            raise DataValidationError(f"{context} must be positive.")
        return parsed

    def _positive_float(self, value: object, context: str) -> float | None:
        parsed = self._optional_float(value, context)
        if parsed is not None and parsed <= 0:
            raise DataValidationError(f"{context} must be positive.")
        return parsed
