# config/settings.py
"""
Runtime configuration for the stopwatch CLI.

Every field defaults from a STOPWATCH_* environment variable:
    STOPWATCH_WATCH_INTERVAL_MS, STOPWATCH_WATCH_AUTOSTART,
    STOPWATCH_EXPORT_FORMAT, STOPWATCH_LOG_LEVEL
Values are validated when the model is built, so a bad override fails at
startup rather than in the middle of a session.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.export import ExportFormat


def _env(name: str, default: str) -> str:
    return os.getenv(f"STOPWATCH_{name}", default)


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True, validate_default=True)

    watch_interval_ms: int = Field(default_factory=lambda: _env("WATCH_INTERVAL_MS", "100"), gt=0)
    watch_autostart: bool = Field(default_factory=lambda: _env("WATCH_AUTOSTART", "true"))
    export_format: ExportFormat = Field(default_factory=lambda: _env("EXPORT_FORMAT", "json"))
    log_level: str = Field(default_factory=lambda: _env("LOG_LEVEL", "WARNING"))

    @field_validator("export_format", mode="before")
    @classmethod
    def _lower_format(cls, v):
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {v!r}")
        return level

    @property
    def watch_interval(self) -> float:
        """Redraw period of the watch display, in seconds."""
        return self.watch_interval_ms / 1000.0


# ---------- Singleton access ----------

_settings_singleton: Optional[Settings] = None

def get_settings(force_refresh: bool = False) -> Settings:
    """
    Return cached Settings, re-reading the environment when asked to.
    """
    global _settings_singleton
    if force_refresh or _settings_singleton is None:
        _settings_singleton = Settings()
    return _settings_singleton


__all__ = ["Settings", "get_settings"]
