"""Error taxonomy shared by the stopwatch core and the command dispatcher."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    ALREADY_RUNNING = "AlreadyRunning"
    NOT_RUNNING = "NotRunning"
    LAUNCH_FAILURE = "LaunchFailure"
    INVALID = "Invalid"

    @property
    def exit_code(self) -> int:
        # Malformed input is a usage error; everything else is a failed operation.
        return 2 if self is ErrorKind.INVALID else 1


class StopwatchError(Exception):
    """Base class for every recoverable stopwatch failure."""

    kind: ErrorKind = ErrorKind.INVALID

    @property
    def exit_code(self) -> int:
        return self.kind.exit_code


class AlreadyRunning(StopwatchError):
    kind = ErrorKind.ALREADY_RUNNING

    def __init__(self) -> None:
        super().__init__("stopwatch is already running")


class NotRunning(StopwatchError):
    kind = ErrorKind.NOT_RUNNING

    def __init__(self) -> None:
        super().__init__("stopwatch is not running")


class LaunchFailure(StopwatchError):
    """The measured executable could not be found or spawned."""

    kind = ErrorKind.LAUNCH_FAILURE

    def __init__(self, command: str, reason: Optional[str] = None) -> None:
        self.command = command
        self.reason = reason
        msg = f"failed to launch {command!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class InvalidCommand(StopwatchError):
    kind = ErrorKind.INVALID


__all__ = [
    "AlreadyRunning",
    "ErrorKind",
    "InvalidCommand",
    "LaunchFailure",
    "NotRunning",
    "StopwatchError",
]
