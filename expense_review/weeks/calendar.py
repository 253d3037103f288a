"""
Calendar Utilities

Pure date arithmetic for the weekly view. No state, no clock access:
every function takes the date it works on.

DESIGN DECISION: Everything here works on calendar dates only.
A datetime passed in is first reduced to its local calendar date, so a
record made late on Sunday evening never slips out of its week because of
its time-of-day or a UTC offset.

Weeks start on Monday (ISO 8601), not Sunday.
"""

import re
from datetime import date, datetime, timedelta
from typing import Optional, Union

DateLike = Union[date, datetime]

# Strict on purpose: date.fromisoformat() also accepts "20240312" and
# week dates on newer Pythons, which would not round-trip to the same text.
ISO_DATE_PATTERN = re.compile(r"^\d{4}-\d{2}-\d{2}$")

MONDAY = 0
SUNDAY = 6
DAYS_IN_WEEK = 7


def as_date(value: DateLike) -> date:
    """
    Project a date or datetime onto its local calendar date.
    
    Aware datetimes are converted to the local time zone first; naive
    datetimes are taken to already be local.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    raise TypeError(f"Expected a date or datetime, got {type(value).__name__}")


def add_days(value: DateLike, days: int) -> date:
    return as_date(value) + timedelta(days=days)


def week_start(anchor: DateLike) -> date:
    """Monday of the week containing ``anchor``."""
    day = as_date(anchor)
    return day - timedelta(days=day.weekday() - MONDAY)


def week_end(anchor: DateLike) -> date:
    """Sunday of the week containing ``anchor``."""
    day = as_date(anchor)
    return day + timedelta(days=SUNDAY - day.weekday())


def date_only_compare(a: DateLike, b: DateLike) -> int:
    """
    Order two dates by year, month and day only.
    
    Returns:
        -1 if a is earlier, 0 if same calendar day, 1 if a is later
    """
    left = as_date(a)
    right = as_date(b)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def to_iso_date(value: DateLike) -> str:
    """Format as zero-padded YYYY-MM-DD using the local calendar date."""
    day = as_date(value)
    return f"{day.year:04d}-{day.month:02d}-{day.day:02d}"


def parse_iso_date(text: Optional[str]) -> Optional[date]:
    """
    Parse a strict YYYY-MM-DD string.
    
    Returns None for empty input, a wrong shape, or an impossible
    date such as 2024-02-30.
    """
    if not isinstance(text, str):
        return None
    text = text.strip()
    if not ISO_DATE_PATTERN.match(text):
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def format_short_date(value: DateLike) -> str:
    """Format as e.g. 'Mar 12'."""
    day = as_date(value)
    return f"{day:%b} {day.day}"
