"""
Country code <-> name table and holiday country normalization.
"""
import logging
from types import MappingProxyType
from typing import Iterable, Mapping, Optional, Union

from .models import CountryEntry, Holiday

logger = logging.getLogger(__name__)

# Used when the table has no entry for "US".
US_FALLBACK = "United States"


class CountryTable:
    """Immutable code -> name mapping; codes are looked up case-insensitively."""

    def __init__(self, entries: Iterable[Union[CountryEntry, Mapping[str, str]]] = ()):
        mapping = {}
        for entry in entries:
            if isinstance(entry, CountryEntry):
                code, name = entry.code, entry.name
            else:
                code, name = entry["code"], entry["name"]
            mapping[str(code).upper()] = name
        self._by_code = MappingProxyType(mapping)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str]) -> "CountryTable":
        return cls(CountryEntry(code, name) for code, name in mapping.items())

    def get(self, code: str) -> Optional[str]:
        return self._by_code.get(code.upper())

    def items(self):
        return self._by_code.items()

    def names(self):
        return sorted(set(self._by_code.values()))

    def __contains__(self, code) -> bool:
        return isinstance(code, str) and code.upper() in self._by_code

    def __len__(self) -> int:
        return len(self._by_code)


class HolidayNormalizer:
    """Rewrites holiday countries to canonical display names."""

    def __init__(self, table: CountryTable):
        self.table = table

    def country_name(self, country: str) -> str:
        if len(country) != 2:
            return country
        key = country.upper()
        name = self.table.get(key)
        if name is not None:
            return name
        if key == "US":
            return US_FALLBACK
        logger.debug(f"No country name for code {country!r}, keeping it")
        return country

    def normalize(self, holiday: Holiday) -> Holiday:
        return holiday.with_country(self.country_name(holiday.country))

    def normalize_all(self, holidays: Iterable[Holiday]):
        return [self.normalize(h) for h in holidays]
