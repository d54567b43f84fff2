from dataclasses import dataclass, field, replace
from datetime import date
from typing import List, Optional, Tuple, Union

from .utils import parse_date, to_date


@dataclass(frozen=True)
class Holiday:
    """A dated observance for one country."""
    date: date
    name: str
    country: str
    local_name: str = ""
    end_date: Optional[date] = None
    type: Tuple[str, ...] = ()
    description: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.local_name or self.name

    def with_country(self, country: str) -> "Holiday":
        return replace(self, country=country)

    @classmethod
    def from_dict(cls, data: dict) -> "Holiday":
        """Build from a holiday record as stored in the JSON bundles."""
        types = data.get("type") or ()
        if isinstance(types, str):
            types = (types,)
        return cls(
            date=to_date(data["date"]),
            name=data.get("name") or "",
            country=str(data.get("country") or ""),
            local_name=data.get("localName") or data.get("local_name") or "",
            end_date=parse_date(data.get("endDate") or data.get("end_date")),
            type=tuple(types),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class CountryEntry:
    code: str
    name: str


@dataclass(frozen=True)
class Timeframe:
    """User-defined date range; inactive unless both bounds parse."""
    label: str
    start: Optional[Union[str, date]] = None
    end: Optional[Union[str, date]] = None

    @property
    def start_date(self) -> Optional[date]:
        return parse_date(self.start)

    @property
    def end_date(self) -> Optional[date]:
        return parse_date(self.end)

    @property
    def is_active(self) -> bool:
        return self.start_date is not None and self.end_date is not None


@dataclass(frozen=True)
class WeekBucket:
    label: str
    index: int
    start: date
    end: date

    def contains(self, d: date) -> bool:
        return self.start <= d <= self.end


EDITABLE_FIELDS = ("lessons", "concepts", "holiday_integrations", "assessment")
COMPUTED_FIELDS = ("important_dates",)
ROW_FIELDS = EDITABLE_FIELDS + COMPUTED_FIELDS

COLUMN_TITLES = {
    "week": "Week",
    "lessons": "Lessons",
    "concepts": "Concepts",
    "holiday_integrations": "Holiday Integrations",
    "assessment": "Assessment",
    "important_dates": "Important Dates",
}


@dataclass
class LessonPlanRow:
    bucket: WeekBucket
    important_dates: str = ""
    lessons: str = ""
    concepts: str = ""
    holiday_integrations: str = ""
    assessment: str = ""

    @property
    def week(self) -> str:
        return self.bucket.label


@dataclass
class LessonPlanTable:
    label: str
    timeframe: Timeframe
    grade: Optional[str] = None
    rows: List[LessonPlanRow] = field(default_factory=list)
