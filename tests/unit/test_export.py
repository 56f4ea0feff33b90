# tests/unit/test_export.py
import csv
import io
import json

import pytest

from core.export import CSV_HEADER, ExportFormat, format_laps
from core.models import LapView
from core.timing.clock import NS_PER_MS


def _laps():
    return [
        LapView(sequence_number=1, label="build", elapsed_at_lap=1_234 * NS_PER_MS, delta=1_234 * NS_PER_MS),
        LapView(sequence_number=2, label=None, elapsed_at_lap=61_000 * NS_PER_MS, delta=59_766 * NS_PER_MS),
    ]


def test_json_empty_is_empty_array():
    assert format_laps([], ExportFormat.JSON) == "[]"
    assert json.loads(format_laps([], ExportFormat.JSON)) == []


def test_csv_empty_is_header_only():
    assert format_laps([], ExportFormat.CSV) == "sequence,label,elapsed,delta\n"


def test_json_records():
    data = json.loads(format_laps(_laps(), ExportFormat.JSON))
    assert data == [
        {"sequence_number": 1, "label": "build", "elapsed_at_lap": "00:00:01.234", "delta": "00:00:01.234"},
        {"sequence_number": 2, "label": None, "elapsed_at_lap": "00:01:01.000", "delta": "00:00:59.766"},
    ]


def test_csv_rows():
    text = format_laps(_laps(), ExportFormat.CSV)
    assert text.splitlines() == [
        "sequence,label,elapsed,delta",
        "1,build,00:00:01.234,00:00:01.234",
        "2,,00:01:01.000,00:00:59.766",
    ]


def test_csv_quotes_awkward_labels():
    lap = LapView(sequence_number=1, label='lint, "strict"', elapsed_at_lap=0, delta=0)
    rows = list(csv.reader(io.StringIO(format_laps([lap], ExportFormat.CSV))))
    assert rows[0] == list(CSV_HEADER)
    assert rows[1][1] == 'lint, "strict"'


@pytest.mark.parametrize("name, expected", [("json", ExportFormat.JSON), (" CSV ", ExportFormat.CSV)])
def test_parse_format_names(name, expected):
    assert ExportFormat.parse(name) is expected


def test_parse_unknown_format():
    with pytest.raises(ValueError, match="xml"):
        ExportFormat.parse("xml")
