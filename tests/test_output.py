"""Unit tests for the output service."""

from datetime import date
from pathlib import Path

import pandas as pd

from weight_ledger.domain.measurement import Measurement
from weight_ledger.services.output import OutputService
from weight_ledger.services.reports import HistoryPoint, SummaryReport


def test_format_summary_no_data() -> None:
    """Test that an empty summary prints 'no data'."""
    lines = OutputService().format_summary(SummaryReport(days=5))

    if lines != ["no data"]:
        raise AssertionError(f"Expected ['no data'], got {lines}")


def test_format_summary() -> None:
    """Test rendering of the current weight."""
    report = SummaryReport(
        days=5, start=date(2020, 1, 6), end=date(2020, 1, 10), count=3, average=79.0
    )

    lines = OutputService().format_summary(report)

    if lines[0] != "Current weight: 79.00":
        raise AssertionError(f"Unexpected first line: {lines[0]!r}")
    if "2020-01-06" not in lines[1] or "2020-01-10" not in lines[1]:
        raise AssertionError(f"Expected window dates in {lines[1]!r}")


def test_format_history() -> None:
    """Test rendering of the history table."""
    points = [
        HistoryPoint(id=1, date=date(2020, 1, 1), weight=70.0, average=70.0),
        HistoryPoint(id=2, date=date(2020, 1, 2), weight=72.0, average=71.0),
    ]

    lines = OutputService().format_history(points, periods=3)

    if len(lines) != 3:
        raise AssertionError(f"Expected header and 2 rows, got {lines}")
    if "MA(3)" not in lines[0]:
        raise AssertionError(f"Expected window size in header {lines[0]!r}")
    if lines[2].split() != ["2020-01-02", "72.00", "71.00"]:
        raise AssertionError(f"Unexpected row: {lines[2]!r}")


def test_write_measurements_csv(tmp_path: Path) -> None:
    """Test exporting measurements to CSV."""
    measurements = [
        Measurement(id=1, date=date(2020, 1, 1), weight=80.0),
        Measurement(id=2, date=date(2020, 1, 2), weight=79.5),
    ]
    csv_path = tmp_path / "export" / "weights.csv"

    OutputService().write_measurements_csv(measurements, csv_path)

    df = pd.read_csv(csv_path)

    if list(df.columns) != ["id", "date", "weight"]:
        raise AssertionError(f"Unexpected columns: {list(df.columns)}")
    if df["date"].tolist() != ["2020-01-01", "2020-01-02"]:
        raise AssertionError(f"Unexpected dates: {df['date'].tolist()}")
    if df["weight"].tolist() != [80.0, 79.5]:
        raise AssertionError(f"Unexpected weights: {df['weight'].tolist()}")
