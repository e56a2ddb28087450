"""
Display formatting for event dates and figures.
All functions take an explicit display timezone; datetimes without tzinfo are UTC.
"""

from datetime import datetime, timezone, tzinfo
from typing import Optional

MONTHS = [
    "January", "February", "March", "April", "May", "June", "July",
    "August", "September", "October", "November", "December",
]
WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

EMPTY_VALUE = "—"


def to_display(value: datetime, tz: tzinfo = timezone.utc) -> datetime:
    """Convert a datetime to the display timezone."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(tz)


def format_short_date(value: datetime, tz: tzinfo = timezone.utc) -> str:
    """``Jan 5``"""
    local = to_display(value, tz)
    return f"{MONTHS[local.month - 1][:3]} {local.day}"


def format_time(value: datetime, tz: tzinfo = timezone.utc) -> str:
    """``3:05 PM``"""
    local = to_display(value, tz)
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_table_datetime(value: datetime, tz: tzinfo = timezone.utc) -> str:
    """Date and time cell of the dashboard table, ``Jan 5, 3:05 PM``."""
    return f"{format_short_date(value, tz)}, {format_time(value, tz)}"


def format_medium_date(value: datetime, tz: tzinfo = timezone.utc) -> str:
    """``Jan 5, 2024``"""
    local = to_display(value, tz)
    return f"{format_short_date(local, tz)}, {local.year}"


def format_long_date(value: datetime, tz: tzinfo = timezone.utc) -> str:
    """``Monday, January 15, 2024``"""
    local = to_display(value, tz)
    return f"{WEEKDAYS[local.weekday()]}, {MONTHS[local.month - 1]} {local.day}, {local.year}"


def format_date_range(start: datetime, end: datetime, tz: tzinfo = timezone.utc) -> str:
    """
    Compact date range.

    ``Jan 15, 2024 - 20`` within one month, ``Jan 15, 2024 - Feb 3`` within
    one year, ``Dec 30, 2024 - Jan 2, 2025`` across years.
    """
    local_start = to_display(start, tz)
    local_end = to_display(end, tz)
    start_text = format_medium_date(local_start, tz)

    if local_start.year != local_end.year:
        end_text = format_medium_date(local_end, tz)
    elif local_start.month != local_end.month:
        end_text = format_short_date(local_end, tz)
    else:
        end_text = str(local_end.day)
    return f"{start_text} - {end_text}"


def format_count(value: Optional[int]) -> str:
    """Thousands-separated number, or a dash for zero/missing."""
    if not value:
        return EMPTY_VALUE
    return f"{value:,}"


def format_currency(value: Optional[int]) -> str:
    if not value:
        return EMPTY_VALUE
    return f"${value:,}"


def format_datetime_local(value: datetime, tz: tzinfo = timezone.utc) -> str:
    """Value for an ``<input type="datetime-local">``, ``YYYY-MM-DDTHH:mm``."""
    return to_display(value, tz).strftime("%Y-%m-%dT%H:%M")


def parse_datetime_local(value: str, tz: tzinfo = timezone.utc) -> datetime:
    """
    Parse a datetime-local value entered in the display timezone.

    Raises:
        ValueError: If the value is not a datetime
    """
    parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=tz)
    return parsed.astimezone(timezone.utc)


def datetime_local_to_iso(value: str, tz: tzinfo = timezone.utc) -> str:
    """Convert a datetime-local value to an ISO-8601 UTC string ending in ``Z``."""
    parsed = parse_datetime_local(value, tz)
    return parsed.strftime("%Y-%m-%dT%H:%M:%S.") + f"{parsed.microsecond // 1000:03d}Z"
