"""
Shared fixtures: a small country table and holiday set, no file or network I/O.
"""
from datetime import date

import pytest

from planner.countries import CountryTable, HolidayNormalizer
from planner.models import CountryEntry, Holiday
from planner.planner import HolidayPlanner


@pytest.fixture
def country_table() -> CountryTable:
    return CountryTable([
        CountryEntry("FR", "France"),
        CountryEntry("de", "Germany"),
        {"code": "MX", "name": "Mexico"},
    ])


@pytest.fixture
def normalizer(country_table) -> HolidayNormalizer:
    return HolidayNormalizer(country_table)


@pytest.fixture
def raw_holidays():
    return [
        Holiday(date(2025, 1, 1), "New Year's Day", "fr", local_name="Jour de l'An"),
        Holiday(date(2025, 1, 10), "Fête test", "fr"),
        Holiday(date(2025, 1, 14), "Grenzfest", "DE", local_name="Grenzfest lokal"),
        Holiday(date(2025, 1, 15), "Martin Luther King Jr. Day", "US"),
        Holiday(date(2025, 1, 25), "Late Holiday", "France"),
        Holiday(date(2025, 9, 16), "Independence Day", "Mexico", local_name="Día de la Independencia"),
        Holiday(date(2026, 1, 1), "New Year's Day", "FR"),
        Holiday(date(2024, 12, 25), "Christmas Day", "FR"),
    ]


@pytest.fixture
def planner(country_table, raw_holidays) -> HolidayPlanner:
    return HolidayPlanner(country_table=country_table, base_holidays=raw_holidays,
                          alignment="calendar_stride", default_selection="none", year=2025)
