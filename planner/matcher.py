from typing import Iterable, List, Sequence

from .models import Holiday, WeekBucket


def format_holiday(h: Holiday) -> str:
    return f"{h.date.isoformat()} — {h.display_name} ({h.country})"


def filter_countries(holidays: Iterable[Holiday], countries: Iterable[str]) -> List[Holiday]:
    """Keep holidays whose canonical country is among `countries` (exact match)."""
    selected = set(countries)
    return [h for h in holidays if h.country in selected]


def holidays_in_week(holidays: Iterable[Holiday], bucket: WeekBucket) -> List[Holiday]:
    return [h for h in holidays if bucket.contains(h.date)]


def important_dates(holidays: Iterable[Holiday], bucket: WeekBucket) -> str:
    # source order is kept, no sorting
    return "\n".join(format_holiday(h) for h in holidays_in_week(holidays, bucket))


def match_weeks(holidays: Sequence[Holiday], buckets: Sequence[WeekBucket], countries=None) -> List[str]:
    """One important-dates string per bucket; holidays outside every bucket are dropped."""
    if countries is not None:
        holidays = filter_countries(holidays, countries)
    return [important_dates(holidays, b) for b in buckets]
