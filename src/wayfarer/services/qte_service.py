"""Real-time quick-time-event loop."""
from __future__ import annotations

import logging

from wayfarer.core.clock import Clock
from wayfarer.core.rng import RNG
from wayfarer.core.terminal import Terminal
from wayfarer.core.types import DIRECTIONS
from wayfarer.domain.qte import (
    POLL_SLICE_MS,
    QteChallenge,
    QteLane,
    QteOutcome,
    QteSettings,
    resolve_keypress,
)

logger = logging.getLogger(__name__)

CURSOR_GLYPH = "█"
TARGET_GLYPH = "X"
LANE_GLYPH = "-"
LANE_COLOR = "dark_cyan"
WINDOW_COLOR = "yellow"
TARGET_COLOR = "red"


class QteService:
    """Draws challenges and runs the cursor loop until a key or a timeout."""

    def __init__(self, terminal: Terminal, rng: RNG, clock: Clock) -> None:
        self._terminal = terminal
        self._rng = rng
        self._clock = clock

    def prepare(self, settings: QteSettings) -> QteChallenge:
        """Pick the required direction, then a target away from both lane edges."""
        required_key = DIRECTIONS[self._rng.randrange(len(DIRECTIONS))]
        right = settings.length - 1
        target = self._rng.randrange(1, right - 1)
        return QteChallenge(required_key=required_key, target=target, settings=settings)

    def run(self, challenge: QteChallenge) -> QteOutcome:
        settings = challenge.settings
        lane = QteLane(length=settings.length)
        frame_ms = settings.frame_ms
        outcome = QteOutcome.FAIL
        with self._terminal.key_capture():
            while lane.oscillations < settings.cycles:
                self._render_lane(lane, challenge)
                pressed = self._poll_frame(frame_ms)
                if pressed is not None:
                    outcome = resolve_keypress(lane.cursor, challenge.target, pressed, challenge.required_key)
                    logger.debug(
                        "QTE key %s at %d (target %d, required %s): %s",
                        pressed,
                        lane.cursor,
                        challenge.target,
                        challenge.required_key,
                        outcome.value,
                    )
                    break
                lane.advance()
            else:
                logger.debug("QTE timed out after %d oscillations.", lane.oscillations)
            self._terminal.write("\r" + " " * (settings.length + 2) + "\r")
        return outcome

    def _poll_frame(self, frame_ms: int) -> str | None:
        elapsed = 0
        while elapsed < frame_ms:
            if self._terminal.key_available():
                return self._terminal.read_key()
            self._clock.sleep(POLL_SLICE_MS / 1000)
            elapsed += POLL_SLICE_MS
        return None

    def _render_lane(self, lane: QteLane, challenge: QteChallenge) -> None:
        terminal = self._terminal
        terminal.write("\r")
        terminal.write("<", LANE_COLOR)
        for position in range(lane.length):
            if position == lane.cursor:
                symbol = CURSOR_GLYPH
            elif position == challenge.target:
                symbol = TARGET_GLYPH
            else:
                symbol = LANE_GLYPH
            if position == challenge.target:
                color = TARGET_COLOR
            elif lane.in_window(position, challenge.target, challenge.settings.half_width):
                color = WINDOW_COLOR
            else:
                color = LANE_COLOR
            terminal.write(symbol, color)
        terminal.write(">", LANE_COLOR)
