"""
Holiday and country sources: bundled JSON data and remote APIs.

Remote clients follow one rule: a failure for one country never stops the
others, it only means that country contributes no holidays.
"""
import asyncio
import json
import logging
import os
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

import httpx

from .config import Config
from .countries import CountryTable
from .exceptions import HolidaySourceError
from .models import CountryEntry, Holiday
from .utils import to_date

logger = logging.getLogger(__name__)


def _read_json(path):
    try:
        with open(path, encoding="utf-8") as fh:
            return json.load(fh)
    except (OSError, json.JSONDecodeError) as e:
        raise HolidaySourceError(f"Cannot read {path}: {e}", source=str(path))


def load_country_table(path=None) -> CountryTable:
    path = path or Config.data_path(Config.COUNTRY_TABLE_FILE)
    data = _read_json(path)
    entries = data.get("countries", []) if isinstance(data, dict) else data
    table = CountryTable(entries)
    logger.info(f"Loaded {len(table)} countries from {path}")
    return table


def save_country_table(table: CountryTable, path) -> None:
    data = {"countries": [{"code": code, "name": name} for code, name in table.items()]}
    with open(path, "w", encoding="utf-8") as fh:
        json.dump(data, fh, indent=2, ensure_ascii=False)
    logger.info(f"Saved {len(table)} countries to {path}")


def parse_holidays(records: Iterable[Dict[str, Any]], source: str = "") -> List[Holiday]:
    """Holiday records -> Holidays; records without a usable date are skipped."""
    holidays = []
    for rec in records:
        try:
            holidays.append(Holiday.from_dict(rec))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping holiday record from {source or 'input'}: {rec!r} ({e})")
    return holidays


def load_holidays(path) -> List[Holiday]:
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("holidays", [])
    holidays = parse_holidays(data, source=str(path))
    logger.info(f"Loaded {len(holidays)} holidays from {path}")
    return holidays


def load_bundled_holidays(data_dir=None) -> List[Holiday]:
    """Calendarific set followed by the cultural set, in that order."""
    data_dir = data_dir or Config.DATA_DIR
    holidays = []
    for name in (Config.CALENDARIFIC_HOLIDAYS_FILE, Config.CULTURAL_HOLIDAYS_FILE):
        holidays.extend(load_holidays(os.path.join(data_dir, name)))
    return holidays


class CalendarificClient:
    """Calendarific holidays API client, one request per country."""

    def __init__(self, api_key: Optional[str] = None, base_url: Optional[str] = None,
                 timeout: Optional[float] = None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.api_key = api_key or Config.CALENDARIFIC_KEY
        self.base_url = base_url or Config.CALENDARIFIC_URL
        self.timeout = timeout or Config.HTTP_TIMEOUT
        self.transport = transport

    def _client(self):
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport)

    @staticmethod
    def _to_holiday(item: Dict[str, Any], country_code: str) -> Holiday:
        types = item.get("type") or ()
        return Holiday(
            date=to_date(item["date"]["iso"]),
            name=item["name"],
            country=country_code,
            local_name=item.get("name_local") or item["name"],
            type=tuple(types) if isinstance(types, list) else (str(types),),
            description=item.get("description"),
        )

    async def fetch_country(self, country_code: str, year: Optional[int] = None,
                            client: Optional[httpx.AsyncClient] = None) -> List[Holiday]:
        """Holidays for one country; raises HolidaySourceError on any bad response."""
        if not self.api_key:
            raise HolidaySourceError("CALENDARIFIC_KEY is not configured", source="calendarific")
        year = year or date.today().year
        if client is None:
            async with self._client() as own:
                return await self.fetch_country(country_code, year, client=own)

        params = {"api_key": self.api_key, "country": country_code, "year": year}
        logger.info(f"Fetching Calendarific holidays for {country_code} {year}")

        try:
            response = await client.get(self.base_url, params=params)
        except httpx.HTTPError as e:
            raise HolidaySourceError(f"Request for {country_code} failed: {e}", source="calendarific")
        if response.status_code // 100 != 2:
            raise HolidaySourceError(f"Calendarific returned {response.status_code} for {country_code}",
                                     source="calendarific", status_code=response.status_code)
        try:
            payload = response.json()
            items = payload["response"]["holidays"]
            return [self._to_holiday(item, country_code) for item in items]
        except (ValueError, KeyError, TypeError) as e:
            raise HolidaySourceError(f"Invalid Calendarific response for {country_code}: {e}",
                                     source="calendarific", status_code=response.status_code)

    async def fetch_countries(self, country_codes: Iterable[str], year: Optional[int] = None) -> Dict[str, List[Holiday]]:
        """Fetch all countries concurrently; a failing country maps to an empty list."""
        codes = list(dict.fromkeys(country_codes))

        async with self._client() as client:
            async def one(code):
                try:
                    return await self.fetch_country(code, year, client=client)
                except Exception as e:
                    logger.error(f"Holiday fetch failed for {code}: {e}")
                    return []

            results = await asyncio.gather(*(one(code) for code in codes))
        return dict(zip(codes, results))

    async def fetch_all(self, country_codes: Iterable[str], year: Optional[int] = None) -> List[Holiday]:
        by_country = await self.fetch_countries(country_codes, year)
        return [h for holidays in by_country.values() for h in holidays]

    async def fetch_country_table(self) -> CountryTable:
        """Country list of the /countries endpoint as a CountryTable."""
        if not self.api_key:
            raise HolidaySourceError("CALENDARIFIC_KEY is not configured", source="calendarific")
        url = self.base_url.rsplit("/", 1)[0] + "/countries"
        async with self._client() as client:
            try:
                response = await client.get(url, params={"api_key": self.api_key})
                response.raise_for_status()
                countries = response.json()["response"]["countries"]
                entries = [CountryEntry(c["iso-3166"].upper(), c["country_name"]) for c in countries]
            except httpx.HTTPError as e:
                raise HolidaySourceError(f"Calendarific country list failed: {e}", source="calendarific")
            except (ValueError, KeyError, TypeError, AttributeError) as e:
                raise HolidaySourceError(f"Invalid Calendarific country list: {e}", source="calendarific")
        logger.info(f"Fetched {len(entries)} countries from Calendarific")
        return CountryTable(entries)


class NagerCountryClient:
    """Available-countries listing of Nager.Date, as a code -> name mapping."""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None,
                 transport: Optional[httpx.AsyncBaseTransport] = None):
        self.url = url or Config.NAGER_COUNTRIES_URL
        self.timeout = timeout or Config.HTTP_TIMEOUT
        self.transport = transport

    async def available_countries(self) -> Dict[str, str]:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(self.url)
        except httpx.HTTPError as e:
            logger.error(f"Nager.Date country list failed: {e}")
            return {}
        if response.status_code // 100 != 2:
            logger.warning(f"Nager.Date returned {response.status_code}")
            return {}
        try:
            return {entry["countryCode"]: entry["name"] for entry in response.json()}
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"Invalid Nager.Date response: {e}")
            return {}

    async def country_table(self) -> CountryTable:
        return CountryTable.from_mapping(await self.available_countries())
