"""
Tests for the JSON loaders and the remote holiday/country clients.
HTTP is faked with httpx.MockTransport.
"""
import json
from datetime import date

import httpx
import pytest

from planner.exceptions import HolidaySourceError
from planner.sources import (
    CalendarificClient, NagerCountryClient, load_bundled_holidays, load_country_table,
    load_holidays, parse_holidays, save_country_table,
)


def calendarific_payload(*items):
    return {"meta": {"code": 200}, "response": {"holidays": list(items)}}


def calendarific_item(iso, name, name_local=None):
    item = {"name": name, "date": {"iso": iso}, "type": ["National holiday"], "description": f"{name} description"}
    if name_local:
        item["name_local"] = name_local
    return item


class TestJsonSources:

    def test_load_country_table(self, tmp_path):
        path = tmp_path / "countries.json"
        path.write_text(json.dumps({"countries": [{"code": "fr", "name": "France"}]}), encoding="utf-8")
        table = load_country_table(path)
        assert table.get("FR") == "France"

    def test_save_and_reload_country_table(self, tmp_path, country_table):
        path = tmp_path / "out.json"
        save_country_table(country_table, path)
        assert load_country_table(path).names() == country_table.names()

    def test_load_holidays_skips_bad_records(self, tmp_path):
        path = tmp_path / "h.json"
        path.write_text(json.dumps([
            {"date": "2025-03-14", "name": "Holi", "localName": "होली", "country": "IN",
             "description": "Festival of colours", "month": "March", "week": 11},
            {"date": "14/03/2025", "name": "Broken", "country": "IN"},
            {"name": "No date", "country": "IN"},
            {"date": "2025-03-30", "endDate": "2025-04-01", "name": "Eid al-Fitr", "country": "EG"},
        ]), encoding="utf-8")
        holidays = load_holidays(path)
        assert [h.name for h in holidays] == ["Holi", "Eid al-Fitr"]
        assert holidays[0].local_name == "होली"
        assert holidays[0].description == "Festival of colours"
        assert holidays[1].end_date == date(2025, 4, 1)
        assert holidays[1].display_name == "Eid al-Fitr"

    def test_iso_datetime_keeps_calendar_day(self):
        [h] = parse_holidays([{"date": "2025-01-01T00:00:00-10:00", "name": "NYD", "country": "US"}])
        assert h.date == date(2025, 1, 1)

    def test_missing_file(self, tmp_path):
        with pytest.raises(HolidaySourceError):
            load_holidays(tmp_path / "missing.json")

    def test_bundled_data_loads(self):
        holidays = load_bundled_holidays()
        assert holidays
        table = load_country_table()
        assert table.get("us") == "United States"
        assert all(isinstance(h.date, date) for h in holidays)


@pytest.mark.asyncio
class TestCalendarificClient:

    async def test_fetch_country_maps_fields(self):
        seen = {}

        def handler(request: httpx.Request):
            seen.update(request.url.params)
            return httpx.Response(200, json=calendarific_payload(
                calendarific_item("2025-07-14", "Bastille Day", "Fête nationale"),
                calendarific_item("2025-11-11T00:00:00+01:00", "Armistice Day"),
            ))

        client = CalendarificClient(api_key="k", transport=httpx.MockTransport(handler))
        holidays = await client.fetch_country("FR", 2025)

        assert seen == {"api_key": "k", "country": "FR", "year": "2025"}
        assert [h.date for h in holidays] == [date(2025, 7, 14), date(2025, 11, 11)]
        assert holidays[0].local_name == "Fête nationale"
        assert holidays[1].local_name == "Armistice Day"
        assert holidays[0].country == "FR"
        assert holidays[0].type == ("National holiday",)

    async def test_non_2xx_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(401, json={"error": "bad key"}))
        client = CalendarificClient(api_key="k", transport=transport)
        with pytest.raises(HolidaySourceError) as exc:
            await client.fetch_country("FR", 2025)
        assert exc.value.status_code == 401

    async def test_malformed_payload_raises(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"meta": {"code": 200}}))
        client = CalendarificClient(api_key="k", transport=transport)
        with pytest.raises(HolidaySourceError):
            await client.fetch_country("FR", 2025)

    async def test_missing_api_key(self, monkeypatch):
        monkeypatch.setattr("planner.sources.Config.CALENDARIFIC_KEY", None)
        with pytest.raises(HolidaySourceError):
            await CalendarificClient(api_key=None).fetch_country("FR", 2025)

    async def test_failed_country_yields_empty_list(self):
        def handler(request: httpx.Request):
            country = request.url.params["country"]
            if country == "DE":
                raise httpx.ConnectError("boom", request=request)
            if country == "MX":
                raise RuntimeError("unexpected")
            if country == "JP":
                return httpx.Response(200, text="<html>not json</html>")
            return httpx.Response(200, json=calendarific_payload(
                calendarific_item("2025-01-01", f"New Year {country}")))

        client = CalendarificClient(api_key="k", transport=httpx.MockTransport(handler))
        result = await client.fetch_countries(["FR", "DE", "MX", "JP", "US"], 2025)

        assert list(result) == ["FR", "DE", "MX", "JP", "US"]
        assert result["DE"] == [] and result["MX"] == [] and result["JP"] == []
        assert [h.name for h in result["FR"]] == ["New Year FR"]

        merged = await client.fetch_all(["FR", "DE", "US"], 2025)
        assert [h.country for h in merged] == ["FR", "US"]

    async def test_fetch_country_table(self):
        def handler(request: httpx.Request):
            assert request.url.path == "/api/v2/countries"
            return httpx.Response(200, json={"response": {"countries": [
                {"country_name": "France", "iso-3166": "fr"},
                {"country_name": "Ghana", "iso-3166": "GH"},
            ]}})

        client = CalendarificClient(api_key="k", transport=httpx.MockTransport(handler))
        table = await client.fetch_country_table()
        assert table.get("FR") == "France"
        assert table.get("gh") == "Ghana"


@pytest.mark.asyncio
class TestNagerCountryClient:

    async def test_available_countries(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=[
            {"countryCode": "AD", "name": "Andorra"},
            {"countryCode": "AL", "name": "Albania"},
        ]))
        client = NagerCountryClient(transport=transport)
        assert await client.available_countries() == {"AD": "Andorra", "AL": "Albania"}
        table = await client.country_table()
        assert table.get("al") == "Albania"

    async def test_error_status_gives_empty(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(503))
        assert await NagerCountryClient(transport=transport).available_countries() == {}
