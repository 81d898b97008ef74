"""Custom exceptions for the weight ledger."""


class WeightLedgerError(Exception):
    """Base exception for all weight ledger errors."""

    pass


class ConfigurationError(WeightLedgerError):
    """Raised when there is a configuration error."""

    pass


class ConfigSyntaxError(ConfigurationError):
    """Raised when the settings file exists but cannot be understood."""

    pass


class ValidationError(WeightLedgerError):
    """Raised when caller-supplied data fails validation."""

    pass


class MissingFileError(ValidationError):
    """Raised when no data file was given."""

    def __init__(self) -> None:
        super().__init__("missing information about data file. Specify it with --file or -f flag.")


class MissingDateError(ValidationError):
    """Raised when a date is required but was not given."""

    def __init__(self) -> None:
        super().__init__("missing date parameter. Specify it with --date or -d flag.")


class MissingWeightError(ValidationError):
    """Raised when a weight is required but was not given."""

    def __init__(self) -> None:
        super().__init__("missing weight parameter. Specify it with --weight or -w flag.")


class MissingIdError(ValidationError):
    """Raised when a measurement id is required but was not given."""

    def __init__(self) -> None:
        super().__init__("missing ID parameter. Specify it with --id or -i flag.")


class InvalidDateError(ValidationError):
    """Raised when a date is not in YYYY-MM-DD format."""

    pass


class InvalidWeightError(ValidationError):
    """Raised when a weight is not a positive number."""

    pass


class InvalidWindowError(ValidationError):
    """Raised when a report window is smaller than one."""

    pass


class NothingToUpdateError(ValidationError):
    """Raised when an edit supplies no field to change."""

    pass


class StoreError(WeightLedgerError):
    """Base exception for data file problems."""

    pass


class StoreAlreadyExistsError(StoreError):
    """Raised when initializing a data file over an existing path."""

    pass


class StoreNotFoundError(StoreError):
    """Raised when opening a data file that does not exist."""

    pass


class InvalidStoreError(StoreError):
    """Raised when a file is not a correct weight ledger data file."""

    pass


class StoreIOError(StoreError):
    """Raised when the underlying storage fails."""

    pass


class CorruptRecordError(StoreError):
    """Raised when a stored measurement cannot be read back."""

    def __init__(self, measurement_id: int, day: object, weight: object) -> None:
        super().__init__(
            f"measurement with id={measurement_id} has an incorrect value "
            f"(date={day!r}, weight={weight!r})."
        )
        self.measurement_id = measurement_id


class RecordNotFoundError(WeightLedgerError):
    """Raised when no measurement has the requested id."""

    def __init__(self, measurement_id: int) -> None:
        super().__init__(f"measurement with id={measurement_id} does not exist.")
        self.measurement_id = measurement_id


class OutputError(WeightLedgerError):
    """Raised when a report or export cannot be written."""

    pass
