from __future__ import annotations

from .clock import NS_PER_MS

MS_PER_HOUR = 3_600_000
MS_PER_MINUTE = 60_000
MS_PER_SECOND = 1_000


def format_duration(ns: int) -> str:
    """Render ``ns`` nanoseconds as ``HH:MM:SS.mmm``.

    Sub-millisecond remainders are truncated, never rounded. Hours keep
    growing past 24 (``25:00:00.000``) and widen beyond two digits when
    needed.
    """

    if ns < 0:
        raise ValueError(f"duration must be non-negative, got {ns}")
    ms = ns // NS_PER_MS
    h = ms // MS_PER_HOUR
    m = (ms % MS_PER_HOUR) // MS_PER_MINUTE
    s = (ms % MS_PER_MINUTE) // MS_PER_SECOND
    mm = ms % MS_PER_SECOND
    return f"{h:02d}:{m:02d}:{s:02d}.{mm:03d}"


__all__ = ["format_duration"]
