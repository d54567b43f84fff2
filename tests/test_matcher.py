from datetime import date

import pytest

from planner.matcher import filter_countries, format_holiday, match_weeks
from planner.models import Holiday
from planner.weeks import build_weeks


@pytest.fixture
def weeks():
    return build_weeks(date(2025, 1, 1), date(2025, 1, 20), "Semester 1")


@pytest.fixture
def holidays(normalizer, raw_holidays):
    return normalizer.normalize_all(raw_holidays)


@pytest.mark.unit
class TestWeekMatcher:

    def test_holiday_lands_in_its_week(self, weeks, holidays):
        lines = match_weeks(holidays, weeks, countries=["France"])
        assert lines[1] == "2025-01-10 — Fête test (France)"

    def test_outside_timeframe_dropped(self, weeks, holidays):
        lines = match_weeks(holidays, weeks, countries=["France", "Germany", "United States"])
        assert not any("2025-01-25" in text for text in lines)
        assert not any("2024-12-25" in text for text in lines)

    def test_bounds_are_inclusive(self, weeks, holidays):
        lines = match_weeks(holidays, weeks, countries=["France", "Germany", "United States"])
        assert lines[0] == "2025-01-01 — Jour de l'An (France)"
        # last day of week 2 and first day of week 3
        assert lines[1].splitlines()[-1] == "2025-01-14 — Grenzfest lokal (Germany)"
        assert lines[2] == "2025-01-15 — Martin Luther King Jr. Day (United States)"

    def test_source_order_kept(self, weeks):
        hs = [
            Holiday(date(2025, 1, 12), "B", "France"),
            Holiday(date(2025, 1, 9), "A", "France"),
        ]
        assert match_weeks(hs, weeks)[1] == "2025-01-12 — B (France)\n2025-01-09 — A (France)"

    def test_each_holiday_in_exactly_one_week(self, weeks, holidays):
        lines = match_weeks(holidays, weeks, countries=["France", "Germany", "United States"])
        for h in holidays:
            if date(2025, 1, 1) <= h.date <= date(2025, 1, 20):
                assert sum(format_holiday(h) in text.splitlines() for text in lines) == 1

    def test_country_filter_is_exact(self, holidays):
        assert filter_countries(holidays, ["france"]) == []
        assert {h.country for h in filter_countries(holidays, ["Mexico"])} == {"Mexico"}

    def test_no_countries_selected(self, weeks, holidays):
        assert match_weeks(holidays, weeks, countries=[]) == ["", "", ""]


@pytest.mark.unit
def test_format_falls_back_to_name():
    h = Holiday(date(2025, 3, 17), "Saint Patrick's Day", "Ireland")
    assert format_holiday(h) == "2025-03-17 — Saint Patrick's Day (Ireland)"
    h = Holiday(date(2025, 3, 17), "Saint Patrick's Day", "Ireland", local_name="Lá Fhéile Pádraig")
    assert format_holiday(h) == "2025-03-17 — Lá Fhéile Pádraig (Ireland)"
