"""
This module provides the read-only holiday table consulted by the classifier.

It uses the holidays library to build the table for the configured region.
"""
import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, Union

import holidays

from .config import HOLIDAY_COUNTRY, HOLIDAY_SUBDIVISION

# Get a logger instance for this module
logger = logging.getLogger(__name__)

DateLike = Union[date, datetime]


def _as_date(value: DateLike) -> date:
    """Reduces a datetime to its calendar day."""
    if isinstance(value, datetime):
        return value.date()
    return value


class HolidayCalendar:
    """An immutable, ordered set of holiday dates."""

    def __init__(self, dates: Iterable[DateLike] = ()):
        self._dates = tuple(sorted({_as_date(d) for d in dates}))
        self._lookup = frozenset(self._dates)

    @classmethod
    def for_years(
        cls,
        years: Iterable[int],
        country: str = HOLIDAY_COUNTRY,
        subdiv: str = HOLIDAY_SUBDIVISION,
        extra_dates: Iterable[DateLike] = (),
    ) -> "HolidayCalendar":
        """
        Builds the holiday table for the given years.

        Args:
            years: Calendar years to include.
            country: ISO country code understood by the holidays library.
            subdiv: Subdivision code, e.g. the state.
            extra_dates: Additional closure days not known to the library.
        """
        years = sorted(set(years))
        table = holidays.country_holidays(country, subdiv=subdiv, years=years)
        logger.debug(f"Loaded {len(table)} holidays for {country}-{subdiv} {years}.")
        return cls(list(table.keys()) + list(extra_dates))

    @classmethod
    def for_window(
        cls,
        start_date: date,
        number_of_days: int,
        country: str = HOLIDAY_COUNTRY,
        subdiv: str = HOLIDAY_SUBDIVISION,
        extra_dates: Iterable[DateLike] = (),
    ) -> "HolidayCalendar":
        """Builds the holiday table for every year a calendar window touches."""
        end_date = start_date + timedelta(days=max(number_of_days - 1, 0))
        years = range(start_date.year, end_date.year + 1)
        return cls.for_years(years, country=country, subdiv=subdiv, extra_dates=extra_dates)

    def __contains__(self, value: object) -> bool:
        if not isinstance(value, date):
            return False
        return _as_date(value) in self._lookup

    def __iter__(self) -> Iterator[date]:
        return iter(self._dates)

    def __len__(self) -> int:
        return len(self._dates)

    def __repr__(self) -> str:
        return f"HolidayCalendar({len(self._dates)} dates)"
