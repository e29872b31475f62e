"""Wall-clock capability injected into anything that waits."""
from __future__ import annotations

import time
from typing import Protocol


class Clock(Protocol):
    def sleep(self, seconds: float) -> None:
        ...


class SystemClock:
    """Real-time clock backed by the time module."""

    def sleep(self, seconds: float) -> None:
        if seconds > 0:
            time.sleep(seconds)
