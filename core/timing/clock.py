"""Monotonic clock sources used by the stopwatch."""

from __future__ import annotations

import time
from typing import Protocol

import ulid

NS_PER_MS = 1_000_000
NS_PER_SEC = 1_000_000_000


class Clock(Protocol):
    """Anything that hands out monotonic nanosecond timestamps."""

    def now(self) -> int: ...


class MonotonicClock:
    """Clock backed by ``time.monotonic_ns`` (unaffected by wall-clock jumps)."""

    def now(self) -> int:
        return time.monotonic_ns()


def new_ulid() -> str: return str(ulid.new())


DEFAULT_CLOCK = MonotonicClock()

__all__ = ["Clock", "MonotonicClock", "DEFAULT_CLOCK", "NS_PER_MS", "NS_PER_SEC", "new_ulid"]
