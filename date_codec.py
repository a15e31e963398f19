"""Date handling for RemindMe.

Reminder dates arrive as "YYYY-MM-DD" strings. They are split into their
month/day/year parts for storage, with the year forced to 0 for repeating
reminders.

Parsing is lenient by default: a missing or non-numeric token becomes 0,
which the store accepts and which never matches a real day. Strict mode
raises InvalidDateError instead.
"""

import re
from datetime import date, datetime
from typing import NamedTuple
from zoneinfo import ZoneInfo

from database import REPEATING_YEAR

HUMAN_DATE_FORMAT = "%A %B %d, %Y"


class InvalidDateError(ValueError):
    """A date token could not be parsed in strict mode."""


class ParsedDate(NamedTuple):
    year: int
    month: int
    day: int


NUMBER = re.compile(r"[+-]?\d+", re.ASCII)


def _token(tokens, index: int, name: str, strict: bool) -> int:
    # Plain ASCII digits only; int() would also take "1_5", " 6" and other scripts
    token = tokens[index] if index < len(tokens) else ""
    if NUMBER.fullmatch(token):
        return int(token)
    if strict:
        raise InvalidDateError(f"invalid {name} in date {'-'.join(tokens)!r}")
    return 0


def parse_date(date_str: str, repeat: bool, strict: bool = False) -> ParsedDate:
    """Split a "YYYY-MM-DD" string into its stored parts.

    Args:
        date_str: Date as sent by the client
        repeat: Whether the reminder repeats every year
        strict: Raise on missing or non-numeric tokens instead of using 0

    Returns:
        ParsedDate: year (0 when repeating), month and day

    Raises:
        InvalidDateError: In strict mode, when a token in use is not a number
    """
    tokens = date_str.split("-")
    year = REPEATING_YEAR
    if not repeat:
        year = _token(tokens, 0, "year", strict)
    month = _token(tokens, 1, "month", strict)
    day = _token(tokens, 2, "day", strict)
    return ParsedDate(year=year, month=month, day=day)


def format_human_date(value: date) -> str:
    """Format a date the way digests and confirmations show it.

    >>> format_human_date(date(2024, 3, 1))
    'Friday March 01, 2024'
    """
    return value.strftime(HUMAN_DATE_FORMAT)


def describe_request_date(date_str: str) -> str:
    """Human form of a request date, or the raw string if it is not a real date."""
    try:
        return format_human_date(date.fromisoformat(date_str))
    except ValueError:
        return date_str


def local_today(timezone: str) -> date:
    """Today's date in the given IANA timezone."""
    return datetime.now(ZoneInfo(timezone)).date()
