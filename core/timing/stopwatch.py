from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from core.errors import AlreadyRunning, NotRunning

from .clock import DEFAULT_CLOCK, Clock

logger = logging.getLogger(__name__)


class TimerState(str, Enum):
    STOPPED = "stopped"
    RUNNING = "running"


@dataclass
class Stopwatch:
    """Start/stop timer accumulating elapsed nanoseconds across cycles.

    Elapsed time is derived from the instant captured at ``start`` rather
    than from periodic ticks, so ``elapsed()`` is exact whenever it is read.
    """

    clock: Clock = field(default=DEFAULT_CLOCK, repr=False)
    accumulated_ns: int = 0
    started_ns: Optional[int] = None
    _last_now: int = field(default=0, repr=False)

    @property
    def state(self) -> TimerState:
        return TimerState.STOPPED if self.started_ns is None else TimerState.RUNNING

    @property
    def running(self) -> bool:
        return self.started_ns is not None

    def _now(self) -> int:
        # readings never go below the latest one seen, so elapsed never shrinks
        self._last_now = max(self._last_now, self.clock.now())
        return self._last_now

    def start(self) -> None:
        if self.started_ns is not None:
            raise AlreadyRunning()
        self.started_ns = self._now()
        logger.debug("timer started (accumulated=%d ns)", self.accumulated_ns)

    def stop(self) -> int:
        if self.started_ns is None:
            raise NotRunning()
        self.accumulated_ns += self._now() - self.started_ns
        self.started_ns = None
        logger.debug("timer stopped (accumulated=%d ns)", self.accumulated_ns)
        return self.accumulated_ns

    def reset(self) -> None:
        self.started_ns = None
        self.accumulated_ns = 0
        logger.debug("timer reset")

    def elapsed(self) -> int:
        if self.started_ns is None:
            return self.accumulated_ns
        return self.accumulated_ns + self._now() - self.started_ns


__all__ = ["Stopwatch", "TimerState"]
