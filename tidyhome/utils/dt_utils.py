# File: utils/dt_utils.py
"""Calendar date utilities for TidyHome.

Pure Python date functions over canonical ``YYYY-MM-DD`` strings. Dates carry
no time-of-day; "today" is resolved in a configurable default timezone.

⚠️ UTILS PURITY: Only standard library and dateutil imports allowed here.
   No imports from engines or helpers.

Functions:
    - set_default_timezone / get_default_timezone: Configure "local" time
    - dt_today_local: Get today's date in local timezone
    - dt_today_iso: Get today's date as ISO string
    - dt_parse_date: Parse date strings
    - dt_format_date: Format a date as canonical ISO string
    - dt_add_days: Shift an ISO date by a number of days
    - dt_add_months: Shift a date by whole months (clamped)
    - dt_diff_days: Signed day difference between two ISO dates
    - day_of_week: Weekday with Sunday=0 numbering
    - day_of_month: Day-of-month of an ISO date
    - days_in_month: Length of a month
    - clamp_day_of_month: Materialize a day-of-month in a specific month
"""

from __future__ import annotations

from calendar import monthrange
from datetime import date, datetime, timedelta
import logging
from zoneinfo import ZoneInfo

# Third-party date utilities
from dateutil.relativedelta import relativedelta

# Module-level logger
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

# Default timezone - can be overridden by caller
DEFAULT_TIME_ZONE: ZoneInfo = ZoneInfo("UTC")

DAYS_PER_WEEK = 7


# ==============================================================================
# Timezone Configuration
# ==============================================================================


def set_default_timezone(tz: ZoneInfo) -> None:
    """Set the default timezone used to resolve "today".

    Call this during application setup with the household's timezone.

    Args:
        tz: ZoneInfo object representing the default timezone
    """
    global DEFAULT_TIME_ZONE  # noqa: PLW0603
    DEFAULT_TIME_ZONE = tz


def get_default_timezone() -> ZoneInfo:
    """Get the current default timezone.

    Returns:
        The configured default timezone (ZoneInfo object)
    """
    return DEFAULT_TIME_ZONE


# ==============================================================================
# Current Date Functions
# ==============================================================================


def dt_today_local(tz: ZoneInfo | None = None) -> date:
    """Return today's date in local timezone as a `datetime.date`.

    Args:
        tz: Optional timezone override. Uses DEFAULT_TIME_ZONE if not provided.

    Returns:
        Today's date in the specified timezone.
    """
    tz_info = tz or DEFAULT_TIME_ZONE
    return datetime.now(tz_info).date()


def dt_today_iso(tz: ZoneInfo | None = None) -> str:
    """Return today's date in local timezone as ISO string (YYYY-MM-DD).

    Example:
        "2024-04-07"
    """
    return dt_today_local(tz).isoformat()


# ==============================================================================
# Parsing / Formatting
# ==============================================================================


def dt_parse_date(date_input: str | date | None) -> date | None:
    """Safely parse a canonical date into a `datetime.date`.

    Accepts "YYYY-MM-DD" strings and `date` objects. A `datetime` is reduced
    to its calendar date; a datetime string keeps only its date part.

    Args:
        date_input: Date string, date object, or None

    Returns:
        datetime.date or None if parsing fails.
    """
    if date_input is None:
        return None

    if isinstance(date_input, datetime):
        return date_input.date()

    if isinstance(date_input, date):
        return date_input

    if not isinstance(date_input, str) or not date_input:
        return None

    try:
        return date.fromisoformat(date_input[:10])
    except ValueError:
        _LOGGER.debug("dt_parse_date: Could not parse date: %s", date_input)
        return None


def dt_format_date(value: date) -> str:
    """Format a date as canonical ISO string (YYYY-MM-DD)."""
    return value.isoformat()


# ==============================================================================
# Arithmetic
# ==============================================================================


def dt_add_days(date_str: str, days: int) -> str:
    """Shift an ISO date by a number of days.

    Raises:
        ValueError: If date_str is not a valid ISO date.

    Examples:
        dt_add_days("2024-02-28", 1) → "2024-02-29"
        dt_add_days("2024-03-01", -1) → "2024-02-29"
    """
    return (date.fromisoformat(date_str) + timedelta(days=days)).isoformat()


def dt_add_months(value: date, months: int) -> date:
    """Shift a date by whole months, clamping the day to the month length.

    Examples:
        dt_add_months(date(2024, 1, 31), 1) → date(2024, 2, 29)
    """
    return value + relativedelta(months=months)


def dt_diff_days(start: str | date, end: str | date) -> int:
    """Return the signed number of days from start to end.

    Raises:
        ValueError: If either input is not a valid date.
    """
    start_date = dt_parse_date(start)
    end_date = dt_parse_date(end)
    if start_date is None or end_date is None:
        raise ValueError(f"Invalid date range: {start!r} → {end!r}")
    return (end_date - start_date).days


# ==============================================================================
# Calendar Queries
# ==============================================================================


def day_of_week(value: str | date) -> int | None:
    """Return the weekday using Sunday=0..Saturday=6 numbering.

    Python's `date.weekday()` is Monday=0; stored schedules use Sunday=0.

    Returns:
        Weekday index, or None if the input cannot be parsed.
    """
    parsed = dt_parse_date(value)
    if parsed is None:
        return None
    return (parsed.weekday() + 1) % DAYS_PER_WEEK


def day_of_month(value: str | date) -> int | None:
    """Return the day-of-month of a date, or None if it cannot be parsed."""
    parsed = dt_parse_date(value)
    if parsed is None:
        return None
    return parsed.day


def days_in_month(year: int, month: int) -> int:
    """Return the number of days in a month (month is 1-12)."""
    return monthrange(year, month)[1]


def clamp_day_of_month(year: int, month: int, day: int) -> date:
    """Materialize a day-of-month inside a specific month.

    Days past the end of the month clamp down to the last day; days below 1
    clamp up to the 1st.

    Examples:
        clamp_day_of_month(2024, 2, 31) → date(2024, 2, 29)
        clamp_day_of_month(2023, 2, 31) → date(2023, 2, 28)
        clamp_day_of_month(2024, 4, 31) → date(2024, 4, 30)
    """
    last_day = days_in_month(year, month)
    return date(year, month, max(1, min(day, last_day)))
