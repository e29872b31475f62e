"""Scripted stand-ins for the terminal, clock and RNG capabilities."""
from __future__ import annotations

from collections import deque
from contextlib import contextmanager
from typing import Iterable, Iterator, List, Tuple

from wayfarer.core.rng import RNG

NO_KEY = object()


class ScriptExhausted(Exception):
    """Raised when a test double is asked for more input than was scripted."""


class ScriptedTerminal:
    """Terminal that replays queued keys and lines and records everything written.

    Put ``NO_KEY`` in the key script to make the next key-capture block see
    no keypress at all, which is how a QTE timeout is scripted.
    """

    def __init__(self, keys: Iterable[object] = (), lines: Iterable[str] = ()) -> None:
        self._keys: deque[object] = deque(keys)
        self._lines: deque[str] = deque(lines)
        self._silent = False
        self.writes: List[Tuple[str, str | None]] = []
        self.prompts: List[str] = []
        self.captures = 0
        self.clears = 0

    @property
    def output(self) -> str:
        return "".join(text for text, _ in self.writes)

    @property
    def pending_keys(self) -> int:
        return len(self._keys)

    def write(self, text: str, color: str | None = None) -> None:
        self.writes.append((text, color))

    def write_line(self, text: str = "", color: str | None = None) -> None:
        self.writes.append((text + "\n", color))

    def read_line(self, prompt: str = "") -> str:
        self.prompts.append(prompt)
        if not self._lines:
            raise ScriptExhausted("No scripted line left.")
        return self._lines.popleft()

    def read_key(self) -> str:
        if self._silent or not self._keys:
            raise ScriptExhausted("No scripted key left.")
        key = self._keys.popleft()
        assert isinstance(key, str)
        return key

    def key_available(self) -> bool:
        return not self._silent and bool(self._keys)

    def clear(self) -> None:
        self.clears += 1

    @contextmanager
    def key_capture(self) -> Iterator[None]:
        self.captures += 1
        silent = bool(self._keys) and self._keys[0] is NO_KEY
        if silent:
            self._keys.popleft()
        self._silent = silent
        try:
            yield
        finally:
            self._silent = False


class InstantClock:
    """Clock that never blocks; it only records requested sleeps."""

    def __init__(self) -> None:
        self.sleeps: List[float] = []

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)


class ScriptedRNG(RNG):
    """RNG whose ``randrange`` draws come from a queue, then from a seeded stream."""

    def __init__(self, values: Iterable[int] = (), seed: int = 0) -> None:
        super().__init__(seed)
        self._values: deque[int] = deque(values)
        self.draws: List[Tuple[int, int | None]] = []

    @property
    def remaining(self) -> int:
        return len(self._values)

    def randrange(self, start: int, stop: int | None = None) -> int:
        self.draws.append((start, stop))
        if self._values:
            return self._values.popleft()
        return super().randrange(start, stop)
