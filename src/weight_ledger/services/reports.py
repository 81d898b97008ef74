"""
Report service.

Derives read-only statistics from the measurements of a data file:
the current weight (mean of the last few calendar days) and the
moving-average history.
"""

import datetime as dt
import logging
from collections.abc import Iterable, Iterator

import pandas as pd
from pydantic import BaseModel

from weight_ledger.domain.measurement import Measurement
from weight_ledger.domain.requests import HistoryRequest, SummaryRequest
from weight_ledger.infrastructure.store.sqlite_store import MeasurementStore
from weight_ledger.services.measurement import require_file
from weight_ledger.utils.exceptions import InvalidWindowError
from weight_ledger.utils.parameters import AppConfig

logger = logging.getLogger(__name__)


class SummaryReport(BaseModel):
    """Mean weight over the trailing calendar-day window."""

    days: int
    start: dt.date | None = None
    end: dt.date | None = None
    count: int = 0
    average: float | None = None

    @property
    def has_data(self) -> bool:
        return self.average is not None


class HistoryPoint(BaseModel):
    """One measurement with the moving average ending at it."""

    id: int
    date: dt.date
    weight: float
    average: float


def _to_frame(measurements: Iterable[Measurement]) -> pd.DataFrame:
    return pd.DataFrame(
        [m.model_dump() for m in measurements],
        columns=["id", "date", "weight"],
    )


def summarize(measurements: Iterable[Measurement], days: int) -> SummaryReport:
    """
    Compute the current-weight summary.

    Every measurement dated within ``days`` calendar days of the latest
    one (inclusive) counts individually towards the mean.

    Args:
        measurements: Measurements ordered by date.
        days: Size of the trailing window in calendar days.

    Returns:
        Summary report; ``average`` is None when there is no data.
    """
    if days < 1:
        raise InvalidWindowError(f"incorrect number of days {days}. It must be at least 1.")

    df = _to_frame(measurements)
    if df.empty:
        return SummaryReport(days=days)

    end = df["date"].max()
    start = end - dt.timedelta(days=days - 1)
    window = df[df["date"] >= start]

    return SummaryReport(
        days=days,
        start=start,
        end=end,
        count=len(window),
        average=float(window["weight"].mean()),
    )


def check_periods(periods: int) -> int:
    """
    Check that a moving-average window covers at least one measurement.

    Raises:
        InvalidWindowError: If periods is smaller than one.
    """
    if periods < 1:
        raise InvalidWindowError(f"incorrect number of periods {periods}. It must be at least 1.")
    return periods


class HistoryReport:
    """
    Moving-average history over a sequence of measurements.

    The average at each position covers that measurement and up to
    ``periods - 1`` preceding ones by position, so the first few points
    average over fewer values instead of being padded. The report is
    computed on iteration and can be iterated again.
    """

    def __init__(self, measurements: Iterable[Measurement], periods: int) -> None:
        self.measurements = measurements
        self.periods = check_periods(periods)

    def __iter__(self) -> Iterator[HistoryPoint]:
        df = _to_frame(self.measurements)
        if df.empty:
            return

        averages = df["weight"].rolling(window=self.periods, min_periods=1).mean()
        for row, average in zip(df.itertuples(index=False), averages):
            yield HistoryPoint(
                id=int(row.id),
                date=row.date,
                weight=float(row.weight),
                average=float(average),
            )


class ReportService:
    """
    Service for building reports from a data file.

    Reports are materialized before the data file is closed.
    """

    def __init__(self, config: AppConfig) -> None:
        """
        Initialize report service.

        Args:
            config: Application configuration (for the summary window).
        """
        self.config = config

    def summary(self, request: SummaryRequest) -> SummaryReport:
        """Build the current-weight summary for a data file."""
        file = require_file(request.file)
        with MeasurementStore.open(file) as store:
            report = summarize(store.list_all(), self.config.summary_days)
        logger.info(f"Summary of {file}: {report.count} measurements in the last {report.days} days")
        return report

    def history(self, request: HistoryRequest) -> list[HistoryPoint]:
        """Build the moving-average history for a data file."""
        file = require_file(request.file)
        periods = check_periods(request.periods)
        with MeasurementStore.open(file) as store:
            points = list(HistoryReport(store.list_all(), periods))
        logger.info(f"History of {file}: {len(points)} points, {request.periods} periods")
        return points
