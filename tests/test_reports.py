"""Unit tests for the report service."""

from datetime import date, timedelta
from pathlib import Path

import pytest

from weight_ledger.domain.measurement import Measurement
from weight_ledger.domain.requests import AddRequest, HistoryRequest, InitRequest, SummaryRequest
from weight_ledger.services.measurement import MeasurementService
from weight_ledger.services.reports import HistoryReport, ReportService, summarize
from weight_ledger.utils.exceptions import InvalidWindowError
from weight_ledger.utils.parameters import AppConfig


def _measurements(weights: list[float], start: date = date(2020, 1, 1)) -> list[Measurement]:
    return [
        Measurement(id=i + 1, date=start + timedelta(days=i), weight=weight)
        for i, weight in enumerate(weights)
    ]


def test_history_window_of_three() -> None:
    """Test the moving average with a shrinking window at the start."""
    report = HistoryReport(_measurements([70, 72, 71, 73]), periods=3)

    averages = [point.average for point in report]

    if averages != pytest.approx([70, 71, 71, 72]):
        raise AssertionError(f"Expected [70, 71, 71, 72], got {averages}")


def test_history_window_of_one_is_raw_sequence() -> None:
    """Test that a window of one reproduces the weights."""
    weights = [80.0, 79.6, 79.9, 79.1, 78.8]
    report = HistoryReport(_measurements(weights), periods=1)

    averages = [point.average for point in report]

    if averages != pytest.approx(weights):
        raise AssertionError(f"Expected {weights}, got {averages}")


def test_history_window_larger_than_data() -> None:
    """Test that a window longer than the data averages everything seen so far."""
    report = HistoryReport(_measurements([70, 80]), periods=10)

    averages = [point.average for point in report]

    if averages != pytest.approx([70, 75]):
        raise AssertionError(f"Expected [70, 75], got {averages}")


def test_history_is_restartable() -> None:
    """Test that the history can be iterated more than once."""
    report = HistoryReport(_measurements([70, 72, 71]), periods=2)

    first_pass = list(report)
    second_pass = list(report)

    if first_pass != second_pass or len(first_pass) != 3:
        raise AssertionError(f"Expected two equal passes, got {first_pass} and {second_pass}")


def test_history_keeps_dates() -> None:
    """Test that every point carries the date of its measurement."""
    measurements = _measurements([70, 72])
    points = list(HistoryReport(measurements, periods=2))

    dates = [point.date for point in points]
    expected = [m.date for m in measurements]

    if dates != expected:
        raise AssertionError(f"Expected {expected}, got {dates}")


def test_history_empty() -> None:
    """Test that no measurements give an empty history."""
    points = list(HistoryReport([], periods=3))

    if points:
        raise AssertionError(f"Expected empty history, got {points}")


def test_history_rejects_zero_periods() -> None:
    """Test that the window must cover at least one measurement."""
    with pytest.raises(InvalidWindowError):
        HistoryReport([], periods=0)


def test_summary_empty() -> None:
    """Test that the summary of no measurements reports no data."""
    report = summarize([], days=5)

    if report.has_data or report.average is not None:
        raise AssertionError(f"Expected no data, got {report}")


def test_summary_uses_trailing_calendar_days() -> None:
    """Test that only the last k calendar days before the latest date count."""
    measurements = [
        Measurement(id=1, date=date(2020, 1, 1), weight=90.0),
        Measurement(id=2, date=date(2020, 1, 6), weight=80.0),
        Measurement(id=3, date=date(2020, 1, 8), weight=79.0),
        Measurement(id=4, date=date(2020, 1, 10), weight=78.0),
    ]

    report = summarize(measurements, days=5)

    if report.count != 3:
        raise AssertionError(f"Expected 3 measurements in window, got {report.count}")
    if report.start != date(2020, 1, 6) or report.end != date(2020, 1, 10):
        raise AssertionError(f"Expected window 2020-01-06..2020-01-10, got {report.start}..{report.end}")
    if report.average != pytest.approx(79.0):
        raise AssertionError(f"Expected average=79.0, got {report.average}")


def test_summary_counts_same_day_measurements_individually() -> None:
    """Test that several weighings on one day are not pre-averaged."""
    measurements = [
        Measurement(id=1, date=date(2020, 1, 1), weight=80.0),
        Measurement(id=2, date=date(2020, 1, 2), weight=78.0),
        Measurement(id=3, date=date(2020, 1, 2), weight=78.0),
    ]

    report = summarize(measurements, days=5)

    if report.average != pytest.approx(236.0 / 3):
        raise AssertionError(f"Expected average={236.0 / 3}, got {report.average}")


def test_report_service_reads_data_file(tmp_path: Path) -> None:
    """Test building both reports from a data file."""
    file = str(tmp_path / "ww.db")
    measurement_service = MeasurementService()
    measurement_service.initialize(InitRequest(file=file))
    for day, weight in [("2020-01-03", 71.0), ("2020-01-01", 70.0), ("2020-01-02", 72.0)]:
        measurement_service.add(AddRequest(file=file, date=day, weight=weight))

    service = ReportService(AppConfig(summary_days=2))

    summary = service.summary(SummaryRequest(file=file))
    history = service.history(HistoryRequest(file=file, periods=3))

    if summary.average != pytest.approx(71.5):
        raise AssertionError(f"Expected summary average=71.5, got {summary.average}")
    if [point.weight for point in history] != [70.0, 72.0, 71.0]:
        raise AssertionError(f"Expected weights in date order, got {history}")
    if [point.average for point in history] != pytest.approx([70.0, 71.0, 71.0]):
        raise AssertionError(f"Expected averages [70, 71, 71], got {history}")


def test_report_service_empty_data_file(tmp_path: Path) -> None:
    """Test that an empty data file gives empty reports, not errors."""
    file = str(tmp_path / "ww.db")
    MeasurementService().initialize(InitRequest(file=file))
    service = ReportService(AppConfig())

    summary = service.summary(SummaryRequest(file=file))
    history = service.history(HistoryRequest(file=file, periods=3))

    if summary.has_data:
        raise AssertionError(f"Expected no data, got {summary}")
    if history:
        raise AssertionError(f"Expected empty history, got {history}")
