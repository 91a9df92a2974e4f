"""Date helpers shared by the task model, parser and storage.

Tasks carry calendar dates only (no time of day), always written in ISO
``YYYY-MM-DD`` form so the task file and the console show the same text.
"""

import re
from datetime import date, datetime
from typing import Optional


ISO_DATE_FORMAT = "%Y-%m-%d"
ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def parse_iso_date(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string.

    Args:
        value: Text to parse, surrounding whitespace is ignored

    Returns:
        The calendar date

    Raises:
        ValueError: If the text is not a valid date in that exact form
    """
    text = value.strip()
    # strptime alone also accepts single-digit months and days
    if not ISO_DATE_RE.fullmatch(text):
        raise ValueError(f"'{value}' is not in YYYY-MM-DD form")
    return datetime.strptime(text, ISO_DATE_FORMAT).date()


def format_date(value: Optional[date]) -> str:
    """Render a date the way it is shown and stored."""
    if value is None:
        return ""
    return value.strftime(ISO_DATE_FORMAT)


def today() -> date:
    return date.today()
