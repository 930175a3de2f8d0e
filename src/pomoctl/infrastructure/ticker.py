"""Ticker — the one-second tick source that drives the scheduler.

Ticks are scheduled against a monotonic deadline so slow callbacks do
not accumulate drift. The next tick is never armed until the previous
callback has returned, so callbacks never overlap. ``stop()`` is the only
cancellation mechanism and is safe to call from another thread or a
signal handler.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

logger = logging.getLogger(__name__)


class Ticker:
    """Deliver ticks to a callback at a fixed nominal interval.

    Parameters:
        interval: Seconds between ticks (nominally 1.0).
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        interval: float = 1.0,
        *,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if interval < 0:
            raise ValueError(f"Tick interval must be non-negative, got {interval}")
        self._interval = interval
        self._clock = clock
        self._stop = threading.Event()

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def stopped(self) -> bool:
        return self._stop.is_set()

    def stop(self) -> None:
        self._stop.set()

    def run(
        self,
        callback: Callable[[], object],
        *,
        max_ticks: int | None = None,
        should_continue: Callable[[], bool] | None = None,
    ) -> int:
        """Call *callback* once per interval until stopped.

        The loop ends when ``stop()`` is called, *max_ticks* ticks have
        been delivered, or *should_continue* returns False (checked
        before each tick). Returns the number of ticks delivered.
        """
        self._stop.clear()
        delivered = 0
        deadline = self._clock() + self._interval

        while not self._stop.is_set():
            if max_ticks is not None and delivered >= max_ticks:
                break
            if should_continue is not None and not should_continue():
                break

            delay = deadline - self._clock()
            if delay > 0 and self._stop.wait(delay):
                break

            callback()
            delivered += 1

            deadline += self._interval
            now = self._clock()
            if deadline < now:
                # Fell behind by more than an interval; resync instead of bursting.
                logger.debug("Ticker behind by %.3fs, resyncing", now - deadline)
                deadline = now + self._interval

        logger.debug("Ticker stopped after %d ticks", delivered)
        return delivered
