"""
Command-line interface for Weight Ledger.

Provides commands for creating a data file, recording, editing and
removing measurements, and showing reports.
"""

from collections.abc import Callable
from pathlib import Path

import typer

from weight_ledger import __version__
from weight_ledger.domain.requests import (
    AddRequest,
    EditRequest,
    HistoryRequest,
    InitRequest,
    ListRequest,
    RemoveRequest,
    Request,
    SummaryRequest,
)
from weight_ledger.services.measurement import MeasurementService
from weight_ledger.services.output import OutputService
from weight_ledger.services.reports import ReportService
from weight_ledger.utils.dates import format_date, today
from weight_ledger.utils.exceptions import ConfigurationError, WeightLedgerError
from weight_ledger.utils.logging_config import get_logger, setup_logging
from weight_ledger.utils.parameters import AppConfig, ParameterLoader

app = typer.Typer(help="Weight Ledger - keeps track of your weight", no_args_is_help=True)
show_app = typer.Typer(help="Show report", no_args_is_help=True)
app.add_typer(show_app, name="show")
app.add_typer(show_app, name="S", hidden=True)

logger = get_logger(__name__)

FILE_HELP = "Data file (default from settings file)"
VERBOSE_HELP = "Show more output"
QUIET_HELP = "Show no confirmation, even if the settings file asks for one"
CONFIG_HELP = "Path to settings file [default: ~/.weight_ledger.yaml]"


def init_config(config_path: str | None = None) -> AppConfig:
    """
    Load settings and initialize logging.

    Args:
        config_path: Path to the settings file, or None for the default.

    Returns:
        Application configuration.
    """
    param_loader = ParameterLoader(config_path)
    try:
        setup_logging(param_loader.get_logging_config())
    except OSError as e:
        raise ConfigurationError(f"cannot set up logging: {e}") from e
    return param_loader.get_app_config()


def execute(request: Request, config: AppConfig, verbose: bool = False) -> list[str]:
    """
    Carry out one request.

    Args:
        request: The request built from the command line.
        config: Application configuration.
        verbose: Whether to add a confirmation line on success.

    Returns:
        Lines to print on standard output.
    """
    measurement_service = MeasurementService()
    report_service = ReportService(config)
    output_service = OutputService()

    match request:
        case InitRequest():
            measurement_service.initialize(request)
            return [f"created file {request.file}."] if verbose else []

        case AddRequest():
            added = measurement_service.add(request)
            if not verbose:
                return []
            return [
                f"added measurement {added.weight:.2f} with date {format_date(added.date)} "
                f"to file {request.file} (id={added.id})."
            ]

        case EditRequest():
            edited = measurement_service.edit(request)
            if not verbose:
                return []
            return [
                f"edited measurement {edited.id} in file {request.file}: "
                f"date {format_date(edited.date)}, weight {edited.weight:.2f}."
            ]

        case RemoveRequest():
            removed = measurement_service.remove(request)
            if not verbose:
                return []
            return [
                f"removed measurement {removed.id} ({format_date(removed.date)}, "
                f"{removed.weight:.2f}) from file {request.file}."
            ]

        case SummaryRequest():
            return output_service.format_summary(report_service.summary(request))

        case HistoryRequest():
            points = report_service.history(request)
            return output_service.format_history(points, request.periods)

        case ListRequest():
            measurements = measurement_service.list_measurements(request)
            if request.csv_path is None:
                return output_service.format_measurements(measurements)
            output_service.write_measurements_csv(measurements, Path(request.csv_path))
            if not verbose:
                return []
            return [f"exported {len(measurements)} measurements to {request.csv_path}."]

        case _:
            raise WeightLedgerError(f"unsupported request: {type(request).__name__}")


def _verbosity(verbose: bool, quiet: bool) -> bool | None:
    """Resolve the confirmation flags; None defers to the settings file."""
    if quiet:
        return False
    if verbose:
        return True
    return None


def _run(
    build_request: Callable[[AppConfig], Request],
    verbose: bool | None,
    config_path: str | None,
) -> None:
    try:
        config = init_config(config_path)
    except WeightLedgerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    try:
        request = build_request(config)
        logger.debug(f"Executing {request!r}")
        lines = execute(request, config, config.verbose if verbose is None else verbose)

    except WeightLedgerError as e:
        logger.error(f"Command failed: {e}")
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    for line in lines:
        typer.echo(line)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"weight-ledger {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False, "--version", callback=_version_callback, is_eager=True, help="Show version and exit"
    ),
) -> None:
    """
    Keep track of your weight.

    Measurements are stored in a local data file created with `init`.
    """


@app.command()
def init(
    file: str | None = typer.Option(None, "--file", "-f", help=FILE_HELP),
    verbose: bool = typer.Option(False, "--verbose", "-b", help=VERBOSE_HELP),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """
    Init a new data file specified by the user.
    """
    _run(
        lambda config: InitRequest(file=file or config.data_file),
        _verbosity(verbose, quiet),
        config_path,
    )


@app.command()
def add(
    file: str | None = typer.Option(None, "--file", "-f", help=FILE_HELP),
    date: str | None = typer.Option(
        None, "--date", "-d", help="Date of measurement (format: YYYY-MM-DD) [default: today]"
    ),
    weight: float | None = typer.Option(None, "--weight", "-w", help="Measured weight"),
    verbose: bool = typer.Option(False, "--verbose", "-b", help=VERBOSE_HELP),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """
    Add a new measurement.
    """

    def build(config: AppConfig) -> AddRequest:
        day = date if date is not None else format_date(today(config.timezone))
        return AddRequest(file=file or config.data_file, date=day, weight=weight)

    _run(build, _verbosity(verbose, quiet), config_path)


@app.command()
def edit(
    file: str | None = typer.Option(None, "--file", "-f", help=FILE_HELP),
    measurement_id: int | None = typer.Option(
        None, "--id", "-i", help="Id of the edited measurement"
    ),
    date: str | None = typer.Option(None, "--date", "-d", help="New date (format: YYYY-MM-DD)"),
    weight: float | None = typer.Option(None, "--weight", "-w", help="New weight"),
    verbose: bool = typer.Option(False, "--verbose", "-b", help=VERBOSE_HELP),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """
    Edit the date and/or weight of a measurement.
    """
    _run(
        lambda config: EditRequest(
            file=file or config.data_file, id=measurement_id, date=date, weight=weight
        ),
        _verbosity(verbose, quiet),
        config_path,
    )


@app.command()
def remove(
    file: str | None = typer.Option(None, "--file", "-f", help=FILE_HELP),
    measurement_id: int | None = typer.Option(
        None, "--id", "-i", help="Id of the removed measurement"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-b", help=VERBOSE_HELP),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """
    Remove a measurement.
    """
    _run(
        lambda config: RemoveRequest(file=file or config.data_file, id=measurement_id),
        _verbosity(verbose, quiet),
        config_path,
    )


@show_app.command()
def summary(
    file: str | None = typer.Option(None, "--file", "-f", help=FILE_HELP),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """
    Current weight (average of last few days).
    """
    _run(lambda config: SummaryRequest(file=file or config.data_file), False, config_path)


@show_app.command()
def history(
    periods: int = typer.Option(
        ..., "--periods", "-x", help="Number of measurements in the moving average"
    ),
    file: str | None = typer.Option(None, "--file", "-f", help=FILE_HELP),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """
    Historical data with moving average (<x> periods).
    """
    _run(
        lambda config: HistoryRequest(file=file or config.data_file, periods=periods),
        False,
        config_path,
    )


@show_app.command("list")
def list_measurements(
    file: str | None = typer.Option(None, "--file", "-f", help=FILE_HELP),
    csv_path: str | None = typer.Option(None, "--csv", help="Export the measurements to this CSV file"),
    verbose: bool = typer.Option(False, "--verbose", "-b", help=VERBOSE_HELP),
    quiet: bool = typer.Option(False, "--quiet", "-q", help=QUIET_HELP),
    config_path: str | None = typer.Option(None, "--config", help=CONFIG_HELP),
) -> None:
    """
    All measurements with their ids.
    """
    _run(
        lambda config: ListRequest(file=file or config.data_file, csv_path=csv_path),
        _verbosity(verbose, quiet),
        config_path,
    )


app.command("I", hidden=True)(init)
app.command("A", hidden=True)(add)
app.command("E", hidden=True)(edit)
app.command("R", hidden=True)(remove)


if __name__ == "__main__":
    app()
