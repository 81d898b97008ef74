"""
Command requests.

One request model per command. The shell builds exactly one of these per
invocation and dispatches on its type. Optional fields are None when the
caller did not supply them; validating their content is the job of the
services, so that every caller gets the same error messages.
"""

from pydantic import BaseModel


class InitRequest(BaseModel):
    """Create a new data file."""

    file: str


class AddRequest(BaseModel):
    """Record a new measurement."""

    file: str
    date: str | None = None
    weight: float | None = None


class EditRequest(BaseModel):
    """Change the supplied fields of an existing measurement."""

    file: str
    id: int | None = None
    date: str | None = None
    weight: float | None = None


class RemoveRequest(BaseModel):
    """Delete an existing measurement."""

    file: str
    id: int | None = None


class SummaryRequest(BaseModel):
    """Report the current weight."""

    file: str


class HistoryRequest(BaseModel):
    """Report the moving-average history."""

    file: str
    periods: int


class ListRequest(BaseModel):
    """List every measurement, optionally exporting them to CSV."""

    file: str
    csv_path: str | None = None


Request = (
    InitRequest
    | AddRequest
    | EditRequest
    | RemoveRequest
    | SummaryRequest
    | HistoryRequest
    | ListRequest
)
