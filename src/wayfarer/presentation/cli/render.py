"""Shared CLI rendering helpers."""
from __future__ import annotations

import textwrap
from typing import Sequence

from wayfarer.core.clock import Clock
from wayfarer.core.terminal import Color, Terminal

DEFAULT_WIDTH = 72
CHAR_DELAY_SECONDS = 0.018
STORY_COLOR = "dark_cyan"
HINT_COLOR = "dark_gray"


def wrap_text(text: str, width: int = DEFAULT_WIDTH) -> list[str]:
    """Wrap text on word boundaries, keeping authored line breaks."""
    if width <= 0:
        return text.split("\n")
    lines: list[str] = []
    for paragraph in text.split("\n"):
        if not paragraph.strip():
            lines.append("")
            continue
        lines.extend(
            textwrap.wrap(paragraph, width=width, break_long_words=False, break_on_hyphens=False)
        )
    return lines


class Typist:
    """Writes narrative text, optionally one character at a time."""

    def __init__(
        self,
        terminal: Terminal,
        clock: Clock,
        *,
        instant: bool = False,
        show_node_ids: bool = False,
        width: int = DEFAULT_WIDTH,
    ) -> None:
        self._terminal = terminal
        self._clock = clock
        self.instant = instant
        self.show_node_ids = show_node_ids
        self._width = width

    @property
    def terminal(self) -> Terminal:
        return self._terminal

    def render_text(self, text: str, color: Color | None = STORY_COLOR, *, flowing: bool = True) -> None:
        for line in wrap_text(text, self._width):
            if not flowing or self.instant or not line:
                self._terminal.write_line(line, color)
                continue
            for char in line:
                self._terminal.write(char, color)
                self._clock.sleep(CHAR_DELAY_SECONDS)
            self._terminal.write_line()

    def line(self, text: str = "", color: Color | None = None) -> None:
        self._terminal.write_line(text, color)

    def pause(self, seconds: float) -> None:
        """Dramatic pause, skipped when rendering instantly."""
        if not self.instant:
            self._clock.sleep(seconds)

    def wait_for_key(self, new_lines: int = 1) -> str:
        self._terminal.write("(press any key)", HINT_COLOR)
        with self._terminal.key_capture():
            key = self._terminal.read_key()
        self._terminal.write("\r" + " " * 15 + "\r")
        for _ in range(new_lines):
            self._terminal.write_line()
        return key

    def render_node_id(self, chapter_id: int, node_id: int) -> None:
        if self.show_node_ids:
            self._terminal.write_line(f"[chapter {chapter_id} / node {node_id}]", HINT_COLOR)

    def render_heading(self, title: str) -> None:
        """Print a consistent section heading."""
        self._terminal.write_line()
        self._terminal.write_line(f"=== {title} ===")

    def render_menu(self, options: Sequence[str]) -> None:
        """Display numbered options."""
        for idx, label in enumerate(options, start=1):
            self._terminal.write_line(f"{idx}. {label}")

    def prompt_index(self, option_count: int, prompt: str = "> ") -> int:
        """Ask for a 1-based number until a valid one is entered; return it 0-based."""
        while True:
            raw = self._terminal.read_line(prompt).strip()
            try:
                index = int(raw) - 1
            except ValueError:
                self._terminal.write_line("Please enter a number.")
                continue
            if 0 <= index < option_count:
                return index
            self._terminal.write_line(f"Please enter a value between 1 and {option_count}.")
