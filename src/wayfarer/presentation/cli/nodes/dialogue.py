"""Spoken lines, possibly ending in a set of replies that branch the story."""
from __future__ import annotations

from typing import List

from wayfarer.domain.defs import DialogueLineDef
from wayfarer.presentation.cli.nodes.base import BaseNode
from wayfarer.services.node_flow import NextStep

NARRATOR = "Narrator"
SPEAKER_COLOR = "cyan"


class DialogueNode(BaseNode):
    def load(self) -> NextStep:
        self.render_text()
        lines = self.node.dialogues
        index = 0
        while index < len(lines):
            line = lines[index]
            if line.child_id is None:
                self._render_line(line)
                index += 1
                continue
            replies = self._reply_group(lines, index)
            if len(replies) == 1:
                chosen = replies[0]
            else:
                self.typist.line()
                self.typist.render_menu([reply.text for reply in replies])
                chosen = replies[self.typist.prompt_index(len(replies))]
            self._render_line(chosen)
            self.typist.wait_for_key()
            return NextStep(chosen.child_id)
        self.typist.wait_for_key()
        return NextStep(self.node.child_id)

    @staticmethod
    def _reply_group(lines: List[DialogueLineDef], start: int) -> List[DialogueLineDef]:
        group: List[DialogueLineDef] = []
        for line in lines[start:]:
            if line.child_id is None:
                break
            group.append(line)
        return group

    def _render_line(self, line: DialogueLineDef) -> None:
        if line.speaker == NARRATOR:
            self.typist.render_text(line.text)
            return
        self.typist.terminal.write(f"{line.speaker}: ", SPEAKER_COLOR)
        self.typist.render_text(line.text, color=None)
