"""The single timer session owned by one stopwatch process."""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from core.export import ExportFormat, format_laps
from core.measure import measure
from core.models import LapView, Measurement
from core.timing.clock import DEFAULT_CLOCK, Clock, new_ulid
from core.timing.laps import LapLedger
from core.timing.stopwatch import Stopwatch, TimerState

logger = logging.getLogger(__name__)


class TimerSession:
    """Group one :class:`Stopwatch` with its :class:`LapLedger`.

    The session is created once per process and handed to the dispatcher;
    the clock is injectable so tests can drive time by hand.
    """

    def __init__(self, clock: Clock = DEFAULT_CLOCK) -> None:
        self.session_id = new_ulid()
        self.clock = clock
        self.timer = Stopwatch(clock=clock)
        self.ledger = LapLedger(self.timer.elapsed)
        logger.debug("session %s created", self.session_id)

    # ------------------------------------------------------------------
    # Timer
    # ------------------------------------------------------------------
    @property
    def state(self) -> TimerState:
        return self.timer.state

    def start(self) -> None:
        self.timer.start()

    def stop(self) -> int:
        return self.timer.stop()

    def reset(self) -> None:
        self.timer.reset()
        self.ledger.clear()

    def elapsed(self) -> int:
        return self.timer.elapsed()

    def watch_poll(self) -> int:
        return self.timer.elapsed()

    # ------------------------------------------------------------------
    # Laps
    # ------------------------------------------------------------------
    def lap(self, label: Optional[str] = None) -> LapView:
        self.ledger.record(label)
        return self.ledger.list()[-1]

    def laps(self) -> List[LapView]:
        return self.ledger.list()

    def export(self, mode: ExportFormat) -> str:
        return format_laps(self.ledger.list(), mode)

    # ------------------------------------------------------------------
    # External commands
    # ------------------------------------------------------------------
    def measure(self, command: str, args: Sequence[str] = ()) -> Measurement:
        return measure(command, args, clock=self.clock)


__all__ = ["TimerSession"]
