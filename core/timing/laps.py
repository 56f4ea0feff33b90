from __future__ import annotations

import logging
from typing import Callable, Iterator, List, Optional

from core.models import Lap, LapView

logger = logging.getLogger(__name__)


class LapLedger:
    """Append-only, ordered record of lap checkpoints.

    ``elapsed`` is the read side of the owning timer; each recorded lap keeps
    a snapshot of its value, not a live reference.
    """

    def __init__(self, elapsed: Callable[[], int]) -> None:
        self._elapsed = elapsed
        self._laps: List[Lap] = []

    def record(self, label: Optional[str] = None) -> Lap:
        if label is not None and not label.strip():
            label = None
        lap = Lap(
            sequence_number=len(self._laps) + 1,
            label=label,
            elapsed_at_lap=self._elapsed(),
        )
        self._laps.append(lap)
        logger.debug("lap %d recorded at %d ns (%s)", lap.sequence_number, lap.elapsed_at_lap, label)
        return lap

    def list(self) -> List[LapView]:
        views: List[LapView] = []
        previous = 0
        for lap in self._laps:
            views.append(LapView(**lap.model_dump(), delta=lap.elapsed_at_lap - previous))
            previous = lap.elapsed_at_lap
        return views

    def clear(self) -> None:
        self._laps.clear()

    def __len__(self) -> int:
        return len(self._laps)

    def __iter__(self) -> Iterator[Lap]:
        return iter(self._laps)


__all__ = ["LapLedger"]
