# tests/unit/test_cli.py
import sys

import pytest
from typer.testing import CliRunner

from apps.dispatcher import __version__
from apps.stopwatch_cli import app, normalize_argv

runner = CliRunner()


@pytest.mark.parametrize(
    "argv, expected",
    [
        ([], []),
        (["start", "elapsed"], ["run", "start", "elapsed"]),
        (["-v", "start"], ["-v", "run", "start"]),
        (["run", "start"], ["run", "start"]),
        (["interactive"], ["interactive"]),
        (["measure", "ls"], ["measure", "ls"]),
        (["--version"], ["--version"]),
    ],
)
def test_normalize_argv_routes_legacy_lists_to_run(argv, expected):
    assert normalize_argv(argv) == expected


def test_version_flag():
    result = runner.invoke(app, ["--version"])
    assert result.exit_code == 0
    assert result.output.strip() == f"stopwatch v{__version__}"


def test_run_batch_success():
    result = runner.invoke(app, ["run", "start", "elapsed", "stop", "export:csv"])
    assert result.exit_code == 0, result.output
    assert "sequence,label,elapsed,delta" in result.output


def test_run_batch_state_error_exit_code():
    result = runner.invoke(app, ["run", "start", "start"])
    assert result.exit_code == 1


def test_run_batch_unknown_command_exit_code():
    result = runner.invoke(app, ["run", "launch"])
    assert result.exit_code == 2


def test_run_without_commands_is_usage_error():
    result = runner.invoke(app, ["run"])
    assert result.exit_code == 2


def test_run_accepts_dash_aliases():
    result = runner.invoke(app, ["run", "-V", "help"])
    assert result.exit_code == 0
    assert f"stopwatch v{__version__}" in result.output
    assert "COMMANDS:" in result.output


@pytest.mark.parametrize("flag", ["-h", "--help"])
def test_short_and_long_help_flags(flag):
    result = runner.invoke(app, normalize_argv([flag]))
    assert result.exit_code == 0
    assert "run" in result.output


def test_measure_subcommand_passes_exit_code_through_output():
    result = runner.invoke(app, ["measure", sys.executable, "-c", "import sys; sys.exit(7)"])
    assert result.exit_code == 0
    assert "(exit 7)" in result.output


def test_measure_subcommand_launch_failure(tmp_path):
    result = runner.invoke(app, ["measure", str(tmp_path / "nothing")])
    assert result.exit_code == 1


def test_no_arguments_starts_repl():
    result = runner.invoke(app, [], input="start\nstop\nelapsed\nexit\n")
    assert result.exit_code == 0
    assert result.output.startswith("Stopwatch REPL.")


def test_interactive_subcommand():
    result = runner.invoke(app, ["interactive"], input="version\n")
    assert result.exit_code == 0
    assert f"stopwatch v{__version__}" in result.output


def test_invalid_configuration_exit_code(monkeypatch):
    monkeypatch.setenv("STOPWATCH_WATCH_INTERVAL_MS", "-5")
    result = runner.invoke(app, ["run", "elapsed"])
    assert result.exit_code == 2
