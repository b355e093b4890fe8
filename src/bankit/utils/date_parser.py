"""Date parsing utilities."""

from datetime import date, datetime, time, timedelta, UTC
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

def utc_today() -> date:
    """Current calendar day in UTC, the clock stored timestamps use."""
    return datetime.now(UTC).date()


PERIODS = ("today", "this-week", "this-month", "this-year", "last-week", "last-month", "last-year")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Accepts ISO and other absolute formats understood by dateutil
    ("2024-01-15", "January 15, 2024") as well as "today", "yesterday",
    and "this/last week|month|year" (which resolve to the period's first day).
    Relative words are resolved against the UTC calendar day.

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = utc_today()

    if text == "today":
        return today
    if text == "yesterday":
        return today - timedelta(days=1)

    words = text.split()
    if len(words) == 2 and words[0] in ("this", "last"):
        try:
            return get_date_range(f"{words[0]}-{words[1]}")[0]
        except ValueError:
            pass

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def get_date_range(period: str) -> tuple[date, date]:
    """Get inclusive start and end dates for a named period.

    Args:
        period: One of ``PERIODS``

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = utc_today()
    monday = today - timedelta(days=today.weekday())
    first_of_month = today.replace(day=1)
    first_of_year = today.replace(month=1, day=1)

    if period == "today":
        return today, today
    if period == "this-week":
        return monday, today
    if period == "this-month":
        return first_of_month, today
    if period == "this-year":
        return first_of_year, today
    if period == "last-week":
        start = monday - timedelta(days=7)
        return start, start + timedelta(days=6)
    if period == "last-month":
        return first_of_month - relativedelta(months=1), first_of_month - timedelta(days=1)
    if period == "last-year":
        return first_of_year - relativedelta(years=1), first_of_year - timedelta(days=1)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(PERIODS)}")


def day_bounds(
    start_date: Optional[date], end_date: Optional[date]
) -> tuple[Optional[datetime], Optional[datetime]]:
    """Convert inclusive calendar days into UTC timestamp bounds.

    The start bound is midnight of ``start_date``; the end bound is the last
    microsecond of ``end_date``.
    """
    start = datetime.combine(start_date, time.min, tzinfo=UTC) if start_date else None
    end = datetime.combine(end_date, time.max, tzinfo=UTC) if end_date else None
    return start, end
