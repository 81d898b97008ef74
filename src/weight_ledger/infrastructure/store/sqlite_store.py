"""
SQLite data file for weight measurements.

A data file holds two tables: ``measurements`` with the records and
``properties`` with the fixed metadata that marks the file as ours.
Every statement is parameterized and every mutation runs inside one
explicit transaction.
"""

import logging
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from pathlib import Path
from types import TracebackType

from pydantic import ValidationError as PydanticValidationError

from weight_ledger.domain.measurement import STORE_PROPERTIES, Measurement
from weight_ledger.utils.dates import format_date, parse_stored_date
from weight_ledger.utils.exceptions import (
    CorruptRecordError,
    InvalidStoreError,
    RecordNotFoundError,
    StoreAlreadyExistsError,
    StoreIOError,
    StoreNotFoundError,
)

logger = logging.getLogger(__name__)

SCHEMA = (
    "CREATE TABLE measurements (measurement_id INTEGER PRIMARY KEY, day DATE, measurement REAL)",
    "CREATE TABLE properties (key TEXT, value TEXT)",
)


class MeasurementSequence:
    """
    All measurements of a store, ordered by date and then by id.

    Iterating runs a fresh query each time, so the sequence can be walked
    any number of times and always reflects the current file contents.
    Rows are ordered on their parsed dates, since older files store dates
    without zero padding and those do not sort correctly as text.
    """

    def __init__(self, connection: sqlite3.Connection) -> None:
        self._connection = connection

    def __iter__(self) -> Iterator[Measurement]:
        rows = self._connection.execute(
            "SELECT measurement_id, day, measurement FROM measurements"
        ).fetchall()
        measurements = [_to_measurement(row) for row in rows]
        measurements.sort(key=lambda m: (m.date, m.id))
        yield from measurements


def _to_measurement(row: tuple[int, str, float]) -> Measurement:
    measurement_id, day, weight = row
    try:
        return Measurement(id=measurement_id, date=parse_stored_date(str(day)), weight=weight)
    except (PydanticValidationError, ValueError) as e:
        raise CorruptRecordError(measurement_id, day, weight) from e


class MeasurementStore:
    """
    Handle to an open weight ledger data file.

    Use :meth:`initialize` to create a file and :meth:`open` to get a
    handle to an existing one. The handle is a context manager and closes
    the underlying connection on exit.
    """

    def __init__(self, path: Path, connection: sqlite3.Connection) -> None:
        self.path = path
        self._connection = connection

    @classmethod
    def initialize(cls, path: str | Path) -> None:
        """
        Create a new, empty data file.

        Args:
            path: Where to create the file.

        Raises:
            StoreAlreadyExistsError: If something already exists at path.
            StoreIOError: If the file cannot be created. No partial file
                is left behind.
        """
        path = Path(path).expanduser()
        if path.exists():
            raise StoreAlreadyExistsError(f"file {path} already exists.")

        try:
            connection = _connect(path)
        except sqlite3.Error as e:
            raise StoreIOError(f"cannot create {path}: {e}") from e

        try:
            with _transaction(connection):
                for statement in SCHEMA:
                    connection.execute(statement)
                connection.executemany(
                    "INSERT INTO properties (key, value) VALUES (?, ?)",
                    STORE_PROPERTIES.items(),
                )
        except sqlite3.Error as e:
            connection.close()
            path.unlink(missing_ok=True)
            logger.error(f"Failed to initialize {path}: {e}")
            raise StoreIOError(f"cannot create {path}: {e}") from e

        connection.close()
        logger.info(f"Created data file {path}")

    @classmethod
    def open(cls, path: str | Path) -> "MeasurementStore":
        """
        Open an existing data file after checking its metadata.

        Args:
            path: Path to the data file.

        Returns:
            An open store.

        Raises:
            StoreNotFoundError: If no file exists at path.
            InvalidStoreError: If the file is not a weight ledger data file.
        """
        path = Path(path).expanduser()
        if not path.is_file():
            raise StoreNotFoundError(f"file {path} does not exist.")

        invalid = InvalidStoreError(f"file {path} is not a correct weightWatcher data file.")

        try:
            connection = _connect(path)
        except sqlite3.Error as e:
            raise invalid from e

        store = cls(path, connection)
        try:
            properties = store.properties()
        except sqlite3.Error as e:
            store.close()
            raise invalid from e

        for key, value in STORE_PROPERTIES.items():
            if properties.get(key) != value:
                store.close()
                logger.debug(f"Property {key!r} of {path} is {properties.get(key)!r}, expected {value!r}")
                raise invalid

        logger.debug(f"Opened data file {path}")
        return store

    def __enter__(self) -> "MeasurementStore":
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying connection."""
        self._connection.close()

    def properties(self) -> dict[str, str]:
        """Return the metadata stored in the file."""
        rows = self._connection.execute("SELECT key, value FROM properties").fetchall()
        return {key: value for key, value in rows}

    def insert(self, day: date, weight: float) -> int:
        """
        Add a measurement.

        Args:
            day: Date of the measurement.
            weight: Measured weight.

        Returns:
            The id assigned to the new measurement.
        """
        with self._mutation("insert measurement"):
            cursor = self._connection.execute(
                "INSERT INTO measurements (day, measurement) VALUES (?, ?)",
                (format_date(day), weight),
            )
        measurement_id = cursor.lastrowid
        if measurement_id is None:
            raise StoreIOError(f"no id assigned to the new measurement in {self.path}")
        logger.info(f"Inserted measurement {measurement_id} ({day}, {weight}) into {self.path}")
        return measurement_id

    def update(
        self, measurement_id: int, day: date | None = None, weight: float | None = None
    ) -> None:
        """
        Change the supplied fields of a measurement; omitted ones keep their values.

        Raises:
            RecordNotFoundError: If no measurement has this id.
        """
        assignments: list[str] = []
        params: list[object] = []
        if day is not None:
            assignments.append("day = ?")
            params.append(format_date(day))
        if weight is not None:
            assignments.append("measurement = ?")
            params.append(weight)

        with self._mutation(f"update measurement {measurement_id}"):
            if not assignments:
                if not self.exists(measurement_id):
                    raise RecordNotFoundError(measurement_id)
                return
            cursor = self._connection.execute(
                f"UPDATE measurements SET {', '.join(assignments)} WHERE measurement_id = ?",
                (*params, measurement_id),
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError(measurement_id)
        logger.info(f"Updated measurement {measurement_id} in {self.path}")

    def delete(self, measurement_id: int) -> None:
        """
        Remove a measurement permanently.

        Raises:
            RecordNotFoundError: If no measurement has this id.
        """
        with self._mutation(f"delete measurement {measurement_id}"):
            cursor = self._connection.execute(
                "DELETE FROM measurements WHERE measurement_id = ?", (measurement_id,)
            )
            if cursor.rowcount == 0:
                raise RecordNotFoundError(measurement_id)
        logger.info(f"Deleted measurement {measurement_id} from {self.path}")

    def exists(self, measurement_id: int) -> bool:
        """Return whether a measurement with this id is present."""
        row = self._connection.execute(
            "SELECT 1 FROM measurements WHERE measurement_id = ?", (measurement_id,)
        ).fetchone()
        return row is not None

    def get(self, measurement_id: int) -> Measurement:
        """
        Fetch one measurement.

        Raises:
            RecordNotFoundError: If no measurement has this id.
        """
        row = self._connection.execute(
            "SELECT measurement_id, day, measurement FROM measurements WHERE measurement_id = ?",
            (measurement_id,),
        ).fetchone()
        if row is None:
            raise RecordNotFoundError(measurement_id)
        return _to_measurement(row)

    def list_all(self) -> MeasurementSequence:
        """Return every measurement ordered by date, then id."""
        return MeasurementSequence(self._connection)

    @contextmanager
    def _mutation(self, action: str) -> Iterator[None]:
        try:
            with _transaction(self._connection):
                yield
        except sqlite3.Error as e:
            logger.error(f"Failed to {action} in {self.path}: {e}")
            raise StoreIOError(f"failed to {action}: {e}") from e


def _connect(path: Path) -> sqlite3.Connection:
    # Autocommit mode: transactions are opened explicitly by _transaction.
    return sqlite3.connect(path, isolation_level=None)


@contextmanager
def _transaction(connection: sqlite3.Connection) -> Iterator[None]:
    connection.execute("BEGIN")
    try:
        yield
        connection.execute("COMMIT")
    except BaseException:
        if connection.in_transaction:
            connection.execute("ROLLBACK")
        raise
