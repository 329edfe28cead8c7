# psref/models/dates.py

"""Calendar dates in the service's ``YYYY-MM-DD`` wire format."""

import re
from datetime import date, datetime

DATE_FORMAT = "%Y-%m-%d"

_DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}", re.ASCII)


def parse_date(text: str) -> date:
    """Decode a wire date.

    Only the exact ``YYYY-MM-DD`` shape is accepted; ``strptime`` alone
    would also take single-digit months and days.

    Raises:
        ValueError: if *text* is not a valid date in that format.
    """
    if not _DATE_PATTERN.fullmatch(text):
        raise ValueError(f"invalid date {text!r}, want YYYY-MM-DD")
    return datetime.strptime(text, DATE_FORMAT).date()


def format_date(value: date) -> str:
    """Encode a date in the wire format."""
    return f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
