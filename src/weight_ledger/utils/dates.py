"""
Date utilities.

Measurement dates are plain calendar dates written as YYYY-MM-DD.
"""

import re
from datetime import date, datetime

import pytz

from weight_ledger.utils.exceptions import InvalidDateError

DATE_FORMAT = "%Y-%m-%d"
DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def today(timezone_str: str | None = None) -> date:
    """
    Return the current calendar date.

    Args:
        timezone_str: Optional timezone name (e.g., "Europe/Warsaw").
            If None, the local date of the machine is used.

    Returns:
        Today's date in the given timezone.
    """
    if timezone_str is None:
        return date.today()
    return datetime.now(pytz.timezone(timezone_str)).date()


def parse_date(date_str: str) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    Args:
        date_str: Date string.

    Returns:
        Parsed date.

    Raises:
        InvalidDateError: If the string is not a valid YYYY-MM-DD date.
    """
    error = InvalidDateError(f"incorrect date {date_str!r}. Use the format YYYY-MM-DD.")
    if not DATE_PATTERN.fullmatch(date_str):
        raise error
    try:
        return datetime.strptime(date_str, DATE_FORMAT).date()
    except ValueError as e:
        raise error from e


def parse_stored_date(date_str: str) -> date:
    """
    Parse a date read back from a data file.

    Older data files hold dates without zero padding (e.g. 2020-2-01),
    so single-digit months and days are accepted here.

    Raises:
        ValueError: If the string is not a date at all.
    """
    return datetime.strptime(date_str.strip(), DATE_FORMAT).date()


def format_date(value: date) -> str:
    """Format a date as YYYY-MM-DD."""
    return value.strftime(DATE_FORMAT)
