"""Live elapsed-time display, cancelled by pressing Enter."""

from __future__ import annotations

import select
import sys
import time
from typing import Callable, Optional, TextIO

import typer

from core.timing.format import format_duration

HINT = "[Press Enter to switch command]"
HIDE_CURSOR = "\x1b[?25l"
SHOW_CURSOR = "\x1b[?25h"


def input_pending(stream: Optional[TextIO] = None) -> bool:
    """Non-blocking check for a pending line on ``stream`` (stdin by default)."""
    stream = stream or sys.stdin
    if sys.platform.startswith("win"):
        import msvcrt  # type: ignore[import-not-found]

        return bool(msvcrt.kbhit())
    ready, _, _ = select.select([stream], [], [], 0)
    return bool(ready)


def run_watch(
    poll: Callable[[], int],
    interval: float,
    cancelled: Callable[[], bool],
    consume: Callable[[], object],
    out: Optional[TextIO] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> int:
    """Redraw ``poll()`` in place every ``interval`` seconds until cancelled.

    Each tick draws, sleeps, then checks ``cancelled``; the pending input that
    ended the loop is drained with ``consume``. Ctrl+C also ends the loop.
    Returns the last elapsed value shown.
    """

    typer.echo(HINT + HIDE_CURSOR, file=out, color=True)
    interrupted = False
    try:
        while True:
            typer.echo("\r" + format_duration(poll()), nl=False, file=out)
            sleep(interval)
            if cancelled():
                break
    except KeyboardInterrupt:
        interrupted = True
    finally:
        final = poll()
        typer.echo("\r" + format_duration(final) + SHOW_CURSOR, file=out, color=True)
    if not interrupted:
        consume()
    return final


__all__ = ["input_pending", "run_watch"]
