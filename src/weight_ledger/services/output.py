"""
Output service for presenting reports and measurements.

Renders reports as text lines for the terminal and exports measurement
listings to CSV.
"""

import logging
from pathlib import Path

import pandas as pd

from weight_ledger.domain.measurement import Measurement
from weight_ledger.services.reports import HistoryPoint, SummaryReport
from weight_ledger.utils.dates import format_date
from weight_ledger.utils.exceptions import OutputError

logger = logging.getLogger(__name__)


class OutputService:
    """
    Service for turning results into printable lines and files.
    """

    def format_summary(self, report: SummaryReport) -> list[str]:
        """
        Render the current-weight summary.

        Args:
            report: Summary report.

        Returns:
            Lines to print.
        """
        if not report.has_data or report.start is None or report.end is None:
            return ["no data"]

        return [
            f"Current weight: {report.average:.2f}",
            f"  average of {report.count} measurements "
            f"from {format_date(report.start)} to {format_date(report.end)} "
            f"(last {report.days} days)",
        ]

    def format_history(self, points: list[HistoryPoint], periods: int) -> list[str]:
        """
        Render the moving-average history as a table.

        Args:
            points: History points in date order.
            periods: Moving-average window, for the header.

        Returns:
            Lines to print; empty when there are no points.
        """
        if not points:
            return []

        lines = [f"{'DATE':<10}  {'WEIGHT':>8}  {f'MA({periods})':>8}"]
        for point in points:
            lines.append(
                f"{format_date(point.date):<10}  {point.weight:>8.2f}  {point.average:>8.2f}"
            )
        return lines

    def format_measurements(self, measurements: list[Measurement]) -> list[str]:
        """
        Render measurements as a table with their ids.

        Args:
            measurements: Measurements in date order.

        Returns:
            Lines to print; empty when there are no measurements.
        """
        if not measurements:
            return []

        lines = [f"{'ID':>5}  {'DATE':<10}  {'WEIGHT':>8}"]
        for m in measurements:
            lines.append(f"{m.id:>5}  {format_date(m.date):<10}  {m.weight:>8.2f}")
        return lines

    def write_measurements_csv(self, measurements: list[Measurement], csv_path: Path) -> None:
        """
        Write measurements to a CSV file with columns id, date, weight.

        Args:
            measurements: Measurements to export.
            csv_path: Destination file. Parent directories are created.
        """
        data = [
            {"id": m.id, "date": format_date(m.date), "weight": m.weight}
            for m in measurements
        ]
        df = pd.DataFrame(data, columns=["id", "date", "weight"])

        try:
            csv_path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(csv_path, index=False, encoding="utf-8")
        except OSError as e:
            raise OutputError(f"cannot write {csv_path}: {e}") from e
        logger.info(f"Wrote {len(measurements)} measurements to {csv_path}")
