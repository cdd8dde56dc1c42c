"""Clock and periodic tick management (wx-friendly, no GUI dependency)."""
from __future__ import annotations

import logging
import threading
from datetime import datetime
from typing import Callable, Optional

LOGGER = logging.getLogger(__name__)

DEFAULT_TICK_SECONDS = 1.0


class SystemClock:
    """Reads the local wall clock."""

    def now(self) -> datetime:
        return datetime.now()


class TickTimer:
    """Invoke ``on_tick`` with the clock's current instant once per period.

    The loop runs on a daemon thread waiting on a ``threading.Event``. It must
    be stopped explicitly, either with :meth:`stop` or by using the timer as a
    context manager, so that callbacks never fire against a destroyed view.
    """

    def __init__(
        self,
        on_tick: Callable[[datetime], None],
        clock: Optional[SystemClock] = None,
        interval: float = DEFAULT_TICK_SECONDS,
    ) -> None:
        if interval <= 0:
            raise ValueError("tick interval must be positive")
        self.on_tick = on_tick
        self.clock = clock or SystemClock()
        self.interval = interval
        self.tick_count = 0
        self._stop_event: threading.Event | None = None
        self._thread: threading.Thread | None = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> "TickTimer":
        if self.is_running:
            return self
        self._stop_event = threading.Event()
        self._thread = threading.Thread(target=self._run_loop, name="time-clock-tick", daemon=True)
        self._thread.start()
        LOGGER.debug("Started tick timer with %.2fs period", self.interval)
        return self

    def stop(self) -> None:
        if self._stop_event:
            self._stop_event.set()
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=self.interval + 1)
        self._thread = None
        self._stop_event = None
        LOGGER.debug("Stopped tick timer after %s ticks", self.tick_count)

    def _run_loop(self) -> None:
        stop_event = self._stop_event
        assert stop_event is not None
        while not stop_event.wait(self.interval):
            self.tick_count += 1
            try:
                self.on_tick(self.clock.now())
            except Exception:  # pragma: no cover - defensive
                LOGGER.exception("Tick callback failed")

    def __enter__(self) -> "TickTimer":
        return self.start()

    def __exit__(self, *_exc) -> None:
        self.stop()
