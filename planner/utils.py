# planner/utils.py
import calendar
from datetime import date, datetime, timedelta

MONTHS = list(calendar.month_name)[1:]
GRADES = ["K", "1", "2", "3", "4", "5", "6", "7", "8", "9", "10", "11", "12"]


def month_days(year, month):
    _, ndays = calendar.monthrange(year, month)
    return [date(year, month, d) for d in range(1, ndays+1)]


def month_bounds(year, month):
    days = month_days(year, month)
    return days[0], days[-1]


def month_index(name):
    """1-based month number for an English month name (case-insensitive)."""
    for i, m in enumerate(MONTHS, 1):
        if m.lower() == str(name).strip().lower():
            return i
    raise ValueError(f"Unknown month: {name!r}")


def to_date(value):
    """
    Calendar date of `value`, time of day dropped.
    Accepts date, datetime, 'YYYY-MM-DD' and ISO datetime strings; for the
    latter only the date part is read so no timezone shift can move the day.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        text = value.strip()
        if "T" in text:
            text = text.split("T", 1)[0]
        return date.fromisoformat(text)
    raise TypeError(f"Unsupported type for date: {type(value)}")


def parse_date(value):
    """Like to_date but returns None for empty or unparseable input."""
    if value is None or value == "":
        return None
    try:
        return to_date(value)
    except (TypeError, ValueError):
        return None


def week_monday(d):
    return d - timedelta(days=d.weekday())


def years_between(start, end):
    return set(range(start.year, end.year + 1))
