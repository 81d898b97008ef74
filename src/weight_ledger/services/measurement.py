"""
Measurement service.

Validates caller-supplied fields and turns requests into data file calls.
All validation happens before the data file is opened, so a rejected
request never has side effects.
"""

import logging
import math
from datetime import date

from weight_ledger.domain.measurement import Measurement
from weight_ledger.domain.requests import (
    AddRequest,
    EditRequest,
    InitRequest,
    ListRequest,
    RemoveRequest,
)
from weight_ledger.infrastructure.store.sqlite_store import MeasurementStore
from weight_ledger.utils.dates import parse_date
from weight_ledger.utils.exceptions import (
    InvalidWeightError,
    MissingDateError,
    MissingFileError,
    MissingIdError,
    MissingWeightError,
    NothingToUpdateError,
    RecordNotFoundError,
)

logger = logging.getLogger(__name__)


def require_file(file: str) -> str:
    """
    Check that a data file path was given.

    Raises:
        MissingFileError: If the path is empty.
    """
    if not file or not file.strip():
        raise MissingFileError()
    return file


def check_weight(weight: float) -> float:
    """
    Check that a weight is a positive number.

    Raises:
        InvalidWeightError: If the weight is zero, negative or not finite.
    """
    if not math.isfinite(weight) or weight <= 0:
        raise InvalidWeightError(f"incorrect weight {weight}. It must be a positive number.")
    return weight


def _require_id(measurement_id: int | None) -> int:
    if measurement_id is None or measurement_id < 0:
        raise MissingIdError()
    return measurement_id


class MeasurementService:
    """
    Service for creating data files and changing the measurements in them.

    Rules are checked in a fixed order and the first failure wins: data
    file, then required fields and their format, then the existence of
    the referenced measurement.
    """

    def initialize(self, request: InitRequest) -> None:
        """
        Create a new data file.

        Args:
            request: Init request.

        Raises:
            MissingFileError: If no file was given.
            StoreAlreadyExistsError: If the file already exists.
            StoreIOError: If the file cannot be created.
        """
        file = require_file(request.file)
        MeasurementStore.initialize(file)

    def add(self, request: AddRequest) -> Measurement:
        """
        Record a new measurement.

        Args:
            request: Add request.

        Returns:
            The stored measurement with its new id.
        """
        file = require_file(request.file)
        if request.date is None or not request.date.strip():
            raise MissingDateError()
        if request.weight is None:
            raise MissingWeightError()
        day = parse_date(request.date)
        weight = check_weight(request.weight)

        with MeasurementStore.open(file) as store:
            measurement_id = store.insert(day, weight)
            return store.get(measurement_id)

    def edit(self, request: EditRequest) -> Measurement:
        """
        Change the date and/or weight of an existing measurement.

        Args:
            request: Edit request. Fields left as None keep their values.

        Returns:
            The measurement as stored after the change.
        """
        file = require_file(request.file)
        measurement_id = _require_id(request.id)

        day: date | None = None
        if request.date is not None:
            day = parse_date(request.date)
        weight = check_weight(request.weight) if request.weight is not None else None
        if day is None and weight is None:
            raise NothingToUpdateError(
                "nothing to edit. Specify a new value with --date or --weight."
            )

        with MeasurementStore.open(file) as store:
            if not store.exists(measurement_id):
                raise RecordNotFoundError(measurement_id)
            store.update(measurement_id, day=day, weight=weight)
            return store.get(measurement_id)

    def remove(self, request: RemoveRequest) -> Measurement:
        """
        Delete an existing measurement.

        Args:
            request: Remove request.

        Returns:
            The measurement that was removed.
        """
        file = require_file(request.file)
        measurement_id = _require_id(request.id)

        with MeasurementStore.open(file) as store:
            if not store.exists(measurement_id):
                raise RecordNotFoundError(measurement_id)
            removed = store.get(measurement_id)
            store.delete(measurement_id)
            return removed

    def list_measurements(self, request: ListRequest) -> list[Measurement]:
        """Return every measurement ordered by date, then id."""
        file = require_file(request.file)
        with MeasurementStore.open(file) as store:
            measurements = list(store.list_all())
        logger.debug(f"Listed {len(measurements)} measurements from {file}")
        return measurements
