from __future__ import annotations

import logging
import sys
from typing import List, Optional, Sequence

import typer
from pydantic import ValidationError

from apps.dispatcher import __version__, run_batch, run_repl
from config.settings import Settings, get_settings
from core.errors import StopwatchError
from core.session import TimerSession

SUBCOMMANDS = ("run", "interactive", "measure")

LOG_FORMAT = "[stopwatch] %(levelname)s %(name)s: %(message)s"

app = typer.Typer(
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
    help="Stopwatch CLI (REPL + batch) with realtime watch and command timing.",
)


def configure_logging(level: str) -> None:
    root = logging.getLogger()
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    root.setLevel(level)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"stopwatch v{__version__}")
        raise typer.Exit()


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else get_settings()


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug details to stderr"),
    version: Optional[bool] = typer.Option(
        None, "--version", "-V", callback=_version_callback, is_eager=True, help="Show the version and exit"
    ),
) -> None:
    """Without a subcommand, start the interactive REPL."""

    try:
        settings = get_settings(force_refresh=True)
    except ValidationError as exc:
        typer.echo(f"error: invalid configuration: {exc}", err=True)
        raise typer.Exit(code=2)
    configure_logging("DEBUG" if verbose else settings.log_level)
    ctx.obj = settings

    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=run_repl(TimerSession(), settings))


@app.command(context_settings={"ignore_unknown_options": True})
def run(
    ctx: typer.Context,
    cmds: Optional[List[str]] = typer.Argument(None, help="Commands to run in order, e.g. start elapsed stop"),
) -> None:
    """Batch mode: run the commands in order and exit on the first error."""

    raise typer.Exit(code=run_batch(TimerSession(), _settings(ctx), cmds or []))


@app.command()
def interactive(ctx: typer.Context) -> None:
    """Interactive REPL (same as running without arguments)."""

    raise typer.Exit(code=run_repl(TimerSession(), _settings(ctx)))


@app.command(context_settings={"ignore_unknown_options": True, "allow_interspersed_args": False})
def measure(
    command: str = typer.Argument(..., help="Executable to run"),
    args: Optional[List[str]] = typer.Argument(None, help="Arguments passed to the executable"),
) -> None:
    """Time one external command; its output passes straight through."""

    session = TimerSession()
    try:
        result = session.measure(command, args or [])
    except StopwatchError as exc:
        typer.echo(f"error: {exc} (cmd: measure {command})", err=True)
        raise typer.Exit(code=exc.exit_code)
    typer.echo(result.render())


def normalize_argv(argv: Sequence[str]) -> List[str]:
    """Insert ``run`` before legacy command lists given without a subcommand."""

    argv = list(argv)
    for i, token in enumerate(argv):
        if token.startswith("-"):
            continue
        if token not in SUBCOMMANDS:
            argv.insert(i, "run")
        break
    return argv


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = sys.argv[1:] if argv is None else argv
    app(args=normalize_argv(args), prog_name="stopwatch")


if __name__ == "__main__":
    main()
