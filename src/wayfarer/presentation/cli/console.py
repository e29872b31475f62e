"""Real terminal: ANSI colours and unbuffered single-key polling."""
from __future__ import annotations

import os
import sys
from contextlib import contextmanager
from typing import Iterator, TextIO

from wayfarer.core.terminal import KEY_BACKSPACE, KEY_ENTER, KEY_ESCAPE, Color

if os.name == "nt":
    import msvcrt
else:
    import select
    import termios
    import tty

_RESET = "\x1b[0m"
_COLORS = {
    "red": "\x1b[91m",
    "dark_red": "\x1b[31m",
    "green": "\x1b[92m",
    "dark_green": "\x1b[32m",
    "yellow": "\x1b[93m",
    "dark_yellow": "\x1b[33m",
    "cyan": "\x1b[96m",
    "dark_cyan": "\x1b[36m",
    "dark_gray": "\x1b[90m",
    "white": "\x1b[97m",
}
_POSIX_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}
_WINDOWS_ARROWS = {"H": "up", "P": "down", "K": "left", "M": "right"}
_ESCAPE_FOLLOW_UP_SECONDS = 0.02


def normalize_char(char: str) -> str:
    if char in ("\r", "\n"):
        return KEY_ENTER
    if char in ("\x7f", "\x08"):
        return KEY_BACKSPACE
    if char == "\x1b":
        return KEY_ESCAPE
    return char


class ConsoleTerminal:
    """Terminal implementation on top of stdin/stdout."""

    def __init__(self, stream: TextIO | None = None, *, use_color: bool | None = None) -> None:
        self._stream = stream or sys.stdout
        self._use_color = self._stream.isatty() if use_color is None else use_color
        self._capture_depth = 0

    # -----------------------
    # Output
    # -----------------------
    def write(self, text: str, color: Color | None = None) -> None:
        if color and self._use_color and color in _COLORS:
            text = f"{_COLORS[color]}{text}{_RESET}"
        self._stream.write(text)
        self._stream.flush()

    def write_line(self, text: str = "", color: Color | None = None) -> None:
        self.write(text, color)
        self.write("\n")

    def clear(self) -> None:
        if self._use_color:
            self.write("\x1b[2J\x1b[H")
        else:
            self.write("\n" * 3)

    # -----------------------
    # Input
    # -----------------------
    def read_line(self, prompt: str = "") -> str:
        return input(prompt)

    @contextmanager
    def key_capture(self) -> Iterator[None]:
        if self._capture_depth or not sys.stdin.isatty():
            self._capture_depth += 1
            try:
                yield
            finally:
                self._capture_depth -= 1
            return
        saved = None
        if os.name != "nt":
            fd = sys.stdin.fileno()
            saved = termios.tcgetattr(fd)
            tty.setcbreak(fd)
        self._capture_depth += 1
        self.write("\x1b[?25l" if self._use_color else "")
        try:
            yield
        finally:
            self._capture_depth -= 1
            self.write("\x1b[?25h" if self._use_color else "")
            if saved is not None:
                termios.tcsetattr(sys.stdin.fileno(), termios.TCSADRAIN, saved)

    def key_available(self) -> bool:
        if os.name == "nt":
            return bool(msvcrt.kbhit())
        readable, _, _ = select.select([sys.stdin], [], [], 0)
        return bool(readable)

    def read_key(self) -> str:
        with self.key_capture():
            if os.name == "nt":
                return self._read_key_windows()
            return self._read_key_posix()

    def _read_key_windows(self) -> str:
        char = msvcrt.getwch()
        if char in ("\x00", "\xe0"):
            return _WINDOWS_ARROWS.get(msvcrt.getwch(), KEY_ESCAPE)
        return normalize_char(char)

    def _read_key_posix(self) -> str:
        fd = sys.stdin.fileno()
        char = os.read(fd, 1).decode("utf-8", errors="ignore")
        if char != "\x1b":
            return normalize_char(char)
        readable, _, _ = select.select([sys.stdin], [], [], _ESCAPE_FOLLOW_UP_SECONDS)
        if not readable:
            return KEY_ESCAPE
        sequence = os.read(fd, 2).decode("utf-8", errors="ignore")
        if len(sequence) == 2 and sequence[0] in ("[", "O"):
            return _POSIX_ARROWS.get(sequence[1], KEY_ESCAPE)
        return KEY_ESCAPE
