"""Terminal capability used by every node behavior.

Keys are reported as normalised strings: ``up``, ``down``, ``left``,
``right``, ``enter``, ``escape``, ``backspace`` or the typed character.
"""
from __future__ import annotations

from typing import ContextManager, Protocol

Color = str

KEY_ENTER = "enter"
KEY_ESCAPE = "escape"
KEY_BACKSPACE = "backspace"


class Terminal(Protocol):
    def write(self, text: str, color: Color | None = None) -> None:
        ...

    def write_line(self, text: str = "", color: Color | None = None) -> None:
        ...

    def read_line(self, prompt: str = "") -> str:
        ...

    def read_key(self) -> str:
        """Block until a single key is pressed and return it."""
        ...

    def key_available(self) -> bool:
        """Return True when read_key would not block."""
        ...

    def clear(self) -> None:
        ...

    def key_capture(self) -> ContextManager[None]:
        """Switch to unbuffered single-key input for the duration of the block."""
        ...
