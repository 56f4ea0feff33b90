"""Value objects produced by the stopwatch core."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from core.timing.format import format_duration


class Lap(BaseModel):
    """A checkpoint snapshot of the timer's elapsed value."""

    model_config = ConfigDict(frozen=True)

    sequence_number: int = Field(ge=1)
    label: Optional[str] = None
    elapsed_at_lap: int = Field(ge=0, description="Elapsed nanoseconds when recorded")

    @property
    def display_name(self) -> str:
        return self.label if self.label is not None else f"#{self.sequence_number}"


class LapView(Lap):
    """A lap together with its derived delta from the previous lap."""

    delta: int = Field(ge=0)

    def render(self) -> str:
        line = (
            f"lap {self.sequence_number}  {format_duration(self.elapsed_at_lap)}"
            f"  +{format_duration(self.delta)}"
        )
        if self.label is not None:
            line += f"  {self.label}"
        return line


class Measurement(BaseModel):
    """Duration and exit status of one externally launched command."""

    model_config = ConfigDict(frozen=True)

    command: str
    args: tuple[str, ...] = ()
    duration: int = Field(ge=0, description="Wall-clock nanoseconds")
    exit_code: int

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0

    def render(self) -> str:
        return f"{format_duration(self.duration)} (exit {self.exit_code})"


__all__ = ["Lap", "LapView", "Measurement"]
