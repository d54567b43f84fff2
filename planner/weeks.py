"""
Week bucketing of timeframes.
"""
import math
from datetime import timedelta
from enum import Enum

from .models import Timeframe, WeekBucket
from .utils import MONTHS, month_bounds, to_date, week_monday


class WeekAlignment(Enum):
    """How week buckets are laid over a date range."""
    CALENDAR_STRIDE = "calendar_stride"  # 7-day strides from the range start
    MONDAY_ALIGNED = "monday_aligned"    # ISO weeks, Monday..Sunday

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(a.value for a in cls)
            raise ValueError(f"Unknown week alignment {value!r} (expected one of: {choices})")


def week_label(label, n):
    return f"{label} – Week {n}"


def build_weeks(start, end, label, alignment=WeekAlignment.CALENDAR_STRIDE):
    """
    Split [start, end] (inclusive) into consecutive week buckets.

    Buckets never extend past `end`, so the last one may be short. With
    MONDAY_ALIGNED the first bucket also stops at the first Sunday. An empty
    list is returned when start > end.
    """
    start, end = to_date(start), to_date(end)
    alignment = WeekAlignment.parse(alignment)
    weeks = []
    cursor = start
    while cursor <= end:
        if alignment is WeekAlignment.MONDAY_ALIGNED:
            stop = week_monday(cursor) + timedelta(days=6)
        else:
            stop = cursor + timedelta(days=6)
        n = len(weeks) + 1
        weeks.append(WeekBucket(week_label(label, n), n, cursor, min(stop, end)))
        cursor = stop + timedelta(days=1)
    return weeks


def weeks_for_timeframe(tf: Timeframe, alignment=WeekAlignment.CALENDAR_STRIDE):
    if not tf.is_active:
        return []
    return build_weeks(tf.start_date, tf.end_date, tf.label, alignment)


def expected_week_count(start, end):
    """Number of CALENDAR_STRIDE buckets for [start, end]."""
    start, end = to_date(start), to_date(end)
    if start > end:
        return 0
    return math.ceil(((end - start).days + 1) / 7)


def month_timeframe(year, month):
    """Timeframe covering a whole calendar month, labelled '<Month> <year>'."""
    first, last = month_bounds(year, month)
    return Timeframe(f"{MONTHS[month - 1]} {year}", first, last)
