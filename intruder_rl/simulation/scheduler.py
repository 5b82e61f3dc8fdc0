"""Timer-driven tick cadence with at most one tick in flight."""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable

from intruder_rl.config.constants import FAST_INTERVAL_S, SLOW_INTERVAL_S

logger = logging.getLogger(__name__)


class TickScheduler:
    """Repeatedly calls *step_fn* on a background timer.

    Changing cadence cancels the pending timer before a new one is armed, and
    ticks are serialized by a non-blocking lock: a tick that fires while another
    is still running is skipped rather than queued.
    """

    def __init__(self, step_fn: Callable[[], object]) -> None:
        self._step_fn = step_fn
        self._timer: threading.Timer | None = None
        self._interval: float | None = None
        self._generation = 0
        self._tick_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self.ticks_run = 0
        self.ticks_skipped = 0

    @property
    def interval(self) -> float | None:
        return self._interval

    @property
    def running(self) -> bool:
        return self._interval is not None

    def slow(self) -> None:
        self.set_interval(SLOW_INTERVAL_S)

    def fast(self) -> None:
        self.set_interval(FAST_INTERVAL_S)

    def set_interval(self, seconds: float) -> None:
        if seconds <= 0:
            raise ValueError("interval must be > 0")
        with self._state_lock:
            self._cancel_pending()
            self._interval = seconds
            self._arm()
        logger.info("tick cadence set to %.3fs", seconds)

    def stop(self) -> None:
        with self._state_lock:
            self._cancel_pending()
            self._interval = None

    def tick(self) -> bool:
        """Run one tick now unless another is in flight. Returns True if it ran."""
        if not self._tick_lock.acquire(blocking=False):
            with self._state_lock:
                self.ticks_skipped += 1
            return False
        try:
            self._step_fn()
            with self._state_lock:
                self.ticks_run += 1
        finally:
            self._tick_lock.release()
        return True

    def _fire(self, generation: int) -> None:
        self.tick()
        with self._state_lock:
            # A cadence change while this tick ran already armed its own timer
            if self._interval is not None and generation == self._generation:
                self._arm()

    def _arm(self) -> None:
        assert self._interval is not None
        timer = threading.Timer(self._interval, self._fire, args=(self._generation,))
        timer.daemon = True
        self._timer = timer
        timer.start()

    def _cancel_pending(self) -> None:
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
