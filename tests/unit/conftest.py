# tests/unit/conftest.py
import pytest

from core.timing.clock import NS_PER_MS


class ManualClock:
    """Clock that only moves when a test advances it."""

    def __init__(self, start_ns: int = 1_000 * NS_PER_MS):
        self.t = start_ns

    def now(self) -> int:
        return self.t

    def advance_ms(self, ms: float) -> None:
        self.t += int(ms * NS_PER_MS)

    def advance_ns(self, ns: int) -> None:
        self.t += ns


@pytest.fixture
def clock():
    return ManualClock()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """
    Keep STOPWATCH_* overrides from the runner's shell out of the tests.
    """
    for key in ("WATCH_INTERVAL_MS", "WATCH_AUTOSTART", "EXPORT_FORMAT", "LOG_LEVEL"):
        monkeypatch.delenv(f"STOPWATCH_{key}", raising=False)
    yield
