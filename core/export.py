"""Render lap listings as JSON or CSV text."""

from __future__ import annotations

import csv
import io
import json
from enum import Enum
from typing import Any, Dict, List, Sequence

from core.models import LapView
from core.timing.format import format_duration

CSV_HEADER = ("sequence", "label", "elapsed", "delta")


class ExportFormat(str, Enum):
    JSON = "json"
    CSV = "csv"

    @classmethod
    def parse(cls, name: str) -> "ExportFormat":
        try:
            return cls(name.strip().lower())
        except ValueError:
            choices = ", ".join(f.value for f in cls)
            raise ValueError(f"unknown export format {name!r} (expected one of: {choices})") from None


def lap_record(lap: LapView) -> Dict[str, Any]:
    return {
        "sequence_number": lap.sequence_number,
        "label": lap.label,
        "elapsed_at_lap": format_duration(lap.elapsed_at_lap),
        "delta": format_duration(lap.delta),
    }


def to_json(laps: Sequence[LapView]) -> str:
    records: List[Dict[str, Any]] = [lap_record(lap) for lap in laps]
    if not records:
        return "[]"
    return json.dumps(records, indent=2, ensure_ascii=False)


def to_csv(laps: Sequence[LapView]) -> str:
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for lap in laps:
        writer.writerow(
            [
                lap.sequence_number,
                lap.label or "",
                format_duration(lap.elapsed_at_lap),
                format_duration(lap.delta),
            ]
        )
    return buf.getvalue()


def format_laps(laps: Sequence[LapView], mode: ExportFormat) -> str:
    if mode is ExportFormat.JSON:
        return to_json(laps)
    return to_csv(laps)


__all__ = ["CSV_HEADER", "ExportFormat", "format_laps", "lap_record", "to_csv", "to_json"]
