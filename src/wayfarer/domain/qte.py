"""Quick-time-event rules: outcome classification and cursor bookkeeping."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from wayfarer.core.types import Direction

SUCCESS_DISTANCE = 2
BASE_FRAME_MS = 100
POLL_SLICE_MS = 10


class QteOutcome(Enum):
    FAIL = "fail"
    SUCCESS = "success"
    PERFECT = "perfect"

    @property
    def is_hit(self) -> bool:
        return self is not QteOutcome.FAIL


def resolve_keypress(cursor: int, target: int, pressed: str, required: Direction) -> QteOutcome:
    """Classify a single keypress against the target window."""
    if pressed != required:
        return QteOutcome.FAIL
    distance = abs(cursor - target)
    if distance == 0:
        return QteOutcome.PERFECT
    if distance <= SUCCESS_DISTANCE:
        return QteOutcome.SUCCESS
    return QteOutcome.FAIL


@dataclass(frozen=True, slots=True)
class QteSettings:
    cycles: int = 3
    length: int = 20
    speed_factor: float = 1.0
    half_width: int = 2

    @property
    def frame_ms(self) -> int:
        return max(POLL_SLICE_MS, int(BASE_FRAME_MS / self.speed_factor))


@dataclass(frozen=True, slots=True)
class QteChallenge:
    required_key: Direction
    target: int
    settings: QteSettings


@dataclass(slots=True)
class QteLane:
    """Cursor bouncing between position 0 and ``length - 1``."""

    length: int
    cursor: int = 1
    direction: int = 1
    oscillations: int = 0

    @property
    def right(self) -> int:
        return self.length - 1

    def advance(self) -> None:
        self.cursor += self.direction
        if self.direction > 0 and self.cursor >= self.right:
            self.direction = -1
            self.oscillations += 1
        elif self.direction < 0 and self.cursor <= 0:
            self.direction = 1
            self.oscillations += 1

    def in_window(self, position: int, target: int, half_width: int) -> bool:
        return abs(position - target) <= half_width
