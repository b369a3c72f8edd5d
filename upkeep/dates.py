"""Calendar helpers: strict date parsing and whole-day arithmetic."""

import re
from datetime import date
from typing import Union

from dateutil.relativedelta import relativedelta

from .errors import ValidationError

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_date(value: Union[str, date, None]) -> date:
    """
    Parse a YYYY-MM-DD string into a date.

    date instances pass through unchanged. Anything else (None, empty,
    missing zero padding, impossible month/day) raises ValidationError.
    """
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _ISO_DATE.match(value):
        raise ValidationError(f"Expected a YYYY-MM-DD date, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise ValidationError(f"Invalid date {value!r}: {e}") from None


def add_months(start: date, months: int) -> date:
    """
    Advance a date by whole calendar months.

    Day-of-month overflow clamps to the last day of the target month:
    2024-01-31 + 1 month is 2024-02-29, 2023-01-31 + 1 month is 2023-02-28.
    """
    return start + relativedelta(months=months)


def days_between(start: date, end: date) -> int:
    """Whole days from start to end (negative when end is earlier)."""
    return (end - start).days
