"""Storefront integration hook and the background thread that services it."""
from __future__ import annotations

import logging
import threading
from typing import Protocol

logger = logging.getLogger(__name__)

CALLBACK_INTERVAL_SECONDS = 0.015


class PlatformBridge(Protocol):
    """A storefront SDK that needs its callbacks pumped while the game runs."""

    @property
    def initialized(self) -> bool:
        ...

    def initialize(self) -> bool:
        ...

    def run_callbacks(self) -> None:
        ...

    def shutdown(self) -> None:
        ...


class NullPlatform:
    """Bridge used when no storefront SDK is available."""

    def __init__(self) -> None:
        self._initialized = False
        self.callback_runs = 0

    @property
    def initialized(self) -> bool:
        return self._initialized

    def initialize(self) -> bool:
        self._initialized = True
        return True

    def run_callbacks(self) -> None:
        self.callback_runs += 1

    def shutdown(self) -> None:
        self._initialized = False


class CallbackPump:
    """Runs ``bridge.run_callbacks`` on a daemon thread until stopped."""

    def __init__(self, bridge: PlatformBridge, interval: float = CALLBACK_INTERVAL_SECONDS) -> None:
        self._bridge = bridge
        self._interval = interval
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> bool:
        if self.running:
            return True
        if not self._bridge.initialize():
            logger.warning("Platform bridge failed to initialize; continuing without it.")
            return False
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="platform-callbacks", daemon=True)
        self._thread.start()
        logger.info("Platform callback pump started.")
        return True

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout=1.0)
            self._thread = None
        if self._bridge.initialized:
            self._bridge.shutdown()
        logger.info("Platform callback pump stopped.")

    def _run(self) -> None:
        while self._bridge.initialized and not self._stop.is_set():
            self._bridge.run_callbacks()
            self._stop.wait(self._interval)

    def __enter__(self) -> "CallbackPump":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()
