"""Tick sources that drive the session state machine."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)


class IntervalClock:
    """Calls ``on_tick`` from a daemon thread every ``interval_s`` seconds."""

    def __init__(self, interval_s: float = 1.0) -> None:
        self._interval_s = interval_s
        self._thread: Optional[threading.Thread] = None
        self._stop_event = threading.Event()
        self._on_tick: Optional[Callable[[], None]] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self, on_tick: Callable[[], None]) -> None:
        if self.running:
            return
        self._on_tick = on_tick
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._worker, args=(self._stop_event,), daemon=True)
        self._thread.start()

    def stop(self) -> None:
        # No join: stop() is called from the tick callback itself on auto-stop,
        # and from callers holding the lock that the tick callback waits on.
        self._stop_event.set()
        self._thread = None

    def _worker(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._interval_s):
            callback = self._on_tick
            if callback is None or stop_event.is_set():
                continue
            try:
                callback()
            except Exception:
                logger.exception("tick callback failed")


class ManualClock:
    """Synchronous clock: ticks are delivered only by ``advance``."""

    def __init__(self) -> None:
        self._on_tick: Optional[Callable[[], None]] = None
        self.ticks = 0

    @property
    def running(self) -> bool:
        return self._on_tick is not None

    def start(self, on_tick: Callable[[], None]) -> None:
        self._on_tick = on_tick

    def stop(self) -> None:
        self._on_tick = None

    def advance(self, n: int = 1) -> None:
        for _ in range(n):
            if self._on_tick is None:
                return
            self.ticks += 1
            self._on_tick()
