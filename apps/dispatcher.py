"""Turn batch arguments and REPL lines into stopwatch commands."""

from __future__ import annotations

import logging
import shlex
import sys
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, TextIO, Tuple

import typer

from apps.watch import input_pending, run_watch
from config.settings import Settings
from core.errors import InvalidCommand, StopwatchError
from core.export import ExportFormat
from core.session import TimerSession
from core.timing.format import format_duration

__version__ = "1.0.0"

logger = logging.getLogger(__name__)

COMMANDS = (
    "start",
    "stop",
    "reset",
    "elapsed",
    "lap",
    "laps",
    "export",
    "watch",
    "measure",
    "help",
    "version",
    "exit",
)

ALIASES = {
    "-h": "help",
    "--help": "help",
    "-V": "version",
    "--version": "version",
    "quit": "exit",
}

HELP_TEXT = """\
COMMANDS:
  start              Start the stopwatch
  stop               Stop the stopwatch and keep the accumulated time
  reset              Back to 00:00:00.000, stopped, laps cleared
  elapsed            Print the accumulated time
  lap [label]        Record a lap (batch: lap:<label>)
  laps               List recorded laps with their deltas
  export [json|csv]  Print the laps as JSON or CSV (batch: export:<format>)
  watch              Live elapsed time (press Enter to leave)
  measure CMD ARGS   Time an external command (batch: takes the remaining arguments)
  help               This help
  exit/quit          Leave the REPL

MODES:
  stopwatch run <cmds...>          # batch, stops at the first error
  stopwatch interactive            # explicit REPL
  stopwatch measure CMD [ARGS...]  # time one command
  stopwatch <cmds...>              # legacy batch (no subcommand)
  stopwatch                        # REPL (default)
"""

REPL_BANNER = "Stopwatch REPL. Commands: start | stop | reset | elapsed | lap | laps | export | watch | measure | help | exit"


@dataclass(frozen=True)
class Command:
    name: str
    arg: Optional[str] = None
    rest: Tuple[str, ...] = field(default_factory=tuple)
    source: str = ""


def _resolve(word: str) -> str:
    name = ALIASES.get(word, word.lower())
    if name not in COMMANDS:
        raise InvalidCommand(f"unknown command {word!r}")
    return name


def _split_colon(token: str) -> Tuple[str, Optional[str]]:
    if token.startswith("-") or ":" not in token:
        return token, None
    word, arg = token.split(":", 1)
    return word, arg


def _validate(cmd: Command) -> Command:
    if cmd.name == "measure" and not cmd.rest:
        raise InvalidCommand("measure needs a command to run")
    if cmd.name == "export" and cmd.arg:
        try:
            ExportFormat.parse(cmd.arg)
        except ValueError as exc:
            raise InvalidCommand(str(exc)) from None
    return cmd


def parse_batch(tokens: Sequence[str]) -> List[Command]:
    """Parse a batch argument list; every token must be valid before anything runs."""

    commands: List[Command] = []
    tokens = list(tokens)
    i = 0
    while i < len(tokens):
        token = tokens[i]
        word, arg = _split_colon(token)
        name = _resolve(word)
        if name == "measure":
            rest = tuple(tokens[i + 1:])
            if arg:
                rest = (arg, *rest)
            commands.append(_validate(Command(name, rest=rest, source=" ".join(tokens[i:]))))
            break
        if arg is not None and name not in ("lap", "export"):
            raise InvalidCommand(f"command {name!r} takes no argument")
        commands.append(_validate(Command(name, arg=arg, source=token)))
        i += 1
    return commands


def parse_line(line: str) -> Command:
    """Parse one REPL line, split shell-style."""

    try:
        words = shlex.split(line)
    except ValueError as exc:
        raise InvalidCommand(f"cannot parse line: {exc}") from None
    if not words:
        raise InvalidCommand("empty command")
    word, arg = _split_colon(words[0])
    name = _resolve(word)
    rest = tuple(words[1:])
    if name == "measure":
        if arg:
            rest = (arg, *rest)
        return _validate(Command(name, rest=rest, source=line))
    if name == "lap":
        if rest:
            arg = " ".join(rest) if arg is None else " ".join((arg, *rest))
        return Command(name, arg=arg, source=line)
    if name == "export":
        if rest:
            if arg is not None or len(rest) > 1:
                raise InvalidCommand("export takes a single format")
            arg = rest[0]
        return _validate(Command(name, arg=arg, source=line))
    if rest or arg is not None:
        raise InvalidCommand(f"command {name!r} takes no argument")
    return Command(name, source=line)


class Dispatcher:
    """Route parsed commands to a :class:`TimerSession` and print the results."""

    def __init__(
        self,
        session: TimerSession,
        settings: Settings,
        stdin: Optional[TextIO] = None,
        watch_cancelled: Optional[Callable[[], bool]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.session = session
        self.settings = settings
        self.stdin = stdin or sys.stdin
        self.watch_cancelled = watch_cancelled or (lambda: input_pending(self.stdin))
        self.sleep = sleep

    def execute(self, cmd: Command) -> bool:
        """Run ``cmd``; return False when the caller should stop reading commands.

        Raises :class:`StopwatchError` subclasses for failed operations and
        malformed arguments.
        """

        logger.debug("dispatch %s", cmd)
        name = cmd.name
        if name == "start":
            self.session.start()
        elif name == "stop":
            self.session.stop()
        elif name == "reset":
            self.session.reset()
        elif name == "elapsed":
            typer.echo(format_duration(self.session.elapsed()))
        elif name == "lap":
            typer.echo(self.session.lap(cmd.arg).render())
        elif name == "laps":
            for lap in self.session.laps():
                typer.echo(lap.render())
        elif name == "export":
            typer.echo(self.session.export(self._export_format(cmd.arg)).rstrip("\n"))
        elif name == "watch":
            self._watch()
        elif name == "measure":
            if not cmd.rest:
                raise InvalidCommand("measure needs a command to run")
            result = self.session.measure(cmd.rest[0], cmd.rest[1:])
            typer.echo(result.render())
        elif name == "help":
            typer.echo(HELP_TEXT, nl=False)
        elif name == "version":
            typer.echo(f"stopwatch v{__version__}")
        elif name == "exit":
            return False
        return True

    def _export_format(self, name: Optional[str]) -> ExportFormat:
        if not name:
            return self.settings.export_format
        try:
            return ExportFormat.parse(name)
        except ValueError as exc:
            raise InvalidCommand(str(exc)) from None

    def _watch(self) -> None:
        if self.settings.watch_autostart and not self.session.timer.running:
            self.session.start()
        run_watch(
            self.session.watch_poll,
            self.settings.watch_interval,
            cancelled=self.watch_cancelled,
            consume=self.stdin.readline,
            sleep=self.sleep,
        )


def _report(exc: StopwatchError, cmd: str) -> None:
    typer.echo(f"error: {exc} (cmd: {cmd})", err=True)


def run_batch(session: TimerSession, settings: Settings, tokens: Sequence[str], **kwargs) -> int:
    """Execute ``tokens`` in order; the first failure aborts the rest and sets the exit code."""

    if not tokens:
        typer.echo("error: no commands. Use `stopwatch --help` for help.", err=True)
        return 2
    try:
        commands = parse_batch(tokens)
    except InvalidCommand as exc:
        _report(exc, " ".join(tokens))
        return exc.exit_code

    dispatcher = Dispatcher(session, settings, **kwargs)
    for cmd in commands:
        try:
            if not dispatcher.execute(cmd):
                break
        except StopwatchError as exc:
            _report(exc, cmd.source)
            return exc.exit_code
    return 0


def run_repl(session: TimerSession, settings: Settings, stdin: Optional[TextIO] = None, **kwargs) -> int:
    """Read commands line by line until ``exit``/``quit`` or end of input."""

    stdin = stdin or sys.stdin
    dispatcher = Dispatcher(session, settings, stdin=stdin, **kwargs)
    typer.echo(REPL_BANNER)
    typer.echo(f"session {session.session_id}")
    logger.debug("REPL attached to session %s", session.session_id)
    while True:
        typer.echo("> ", nl=False)
        try:
            line = stdin.readline()
        except KeyboardInterrupt:
            typer.echo("")
            break
        if not line:
            break
        line = line.strip()
        if not line:
            continue
        try:
            if not dispatcher.execute(parse_line(line)):
                break
        except StopwatchError as exc:
            _report(exc, line)
    return 0


__all__ = [
    "COMMANDS",
    "Command",
    "Dispatcher",
    "HELP_TEXT",
    "__version__",
    "parse_batch",
    "parse_line",
    "run_batch",
    "run_repl",
]
