"""Time the full execution of an external command."""

from __future__ import annotations

import logging
import subprocess
from typing import Sequence

from core.errors import LaunchFailure
from core.models import Measurement
from core.timing.clock import DEFAULT_CLOCK, Clock

logger = logging.getLogger(__name__)


def measure(command: str, args: Sequence[str] = (), clock: Clock = DEFAULT_CLOCK) -> Measurement:
    """Run ``command`` with ``args`` to completion and report how long it took.

    The child inherits this process's stdin/stdout/stderr. A child that exits
    non-zero is reported through ``Measurement.exit_code``; only a failure to
    spawn raises :class:`LaunchFailure`. There is no timeout.
    """

    argv = [command, *args]
    logger.debug("spawning %r", argv)
    start = clock.now()
    try:
        proc = subprocess.Popen(argv)
    except (OSError, ValueError) as exc:
        reason = exc.strerror if isinstance(exc, OSError) and exc.strerror else str(exc)
        logger.debug("spawn of %r failed: %s", command, reason)
        raise LaunchFailure(command, reason) from exc
    exit_code = proc.wait()
    end = clock.now()

    result = Measurement(
        command=command,
        args=tuple(args),
        duration=max(0, end - start),
        exit_code=exit_code,
    )
    logger.debug("%r finished with exit %d after %d ns", command, exit_code, result.duration)
    return result


__all__ = ["measure"]
