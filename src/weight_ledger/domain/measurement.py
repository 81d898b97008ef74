"""
Measurement domain model and data file metadata.

This module defines the record kept for every weighing and the fixed
properties that identify a file as a weight ledger data file.
"""

import datetime as dt

from pydantic import BaseModel, ConfigDict, Field

# Written once at initialization; a file is a valid data file only if it
# carries every one of these pairs.
STORE_PROPERTIES: dict[str, str] = {
    "applicationName": "weightWatcher",
    "databaseVersion": "1.0",
}


class Measurement(BaseModel):
    """
    A single body-weight measurement.

    The unit is whatever the user consistently records; no conversion
    is applied.
    """

    id: int = Field(ge=0, description="Store-assigned identifier")
    date: dt.date = Field(description="Calendar date of the measurement")
    weight: float = Field(ge=0, description="Measured weight")

    model_config = ConfigDict(frozen=True)
