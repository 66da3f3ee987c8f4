"""
This module decides which pickups fall on a given calendar day.
"""
from datetime import date, timedelta
from typing import FrozenSet, Optional

from .holiday_calendar import HolidayCalendar
from .models import Category, PickupRules

# Monday of ISO week 2 of 2024. Week parity alternates from here without
# resetting at year ends, so 53-week ISO years keep the two-week rhythm.
PARITY_EPOCH = date(2024, 1, 8)


class DayClassifier:
    """
    Classifies single dates against a set of PickupRules.

    The classifier holds no mutable state; every method is a pure function of
    the rules, the holiday table and the date passed in.
    """

    def __init__(self, rules: PickupRules, holidays: Optional[HolidayCalendar] = None):
        self.rules = rules
        self.holidays = holidays if holidays is not None else HolidayCalendar()

    def is_waste_day(self, day: date) -> bool:
        return self.rules.waste_weekday is not None and day.weekday() == self.rules.waste_weekday

    def heavy_occurrence(self, year: int, month: int) -> Optional[date]:
        """
        Returns the heavy pickup date of a month, or None.

        The date is the Nth occurrence of the heavy weekday counted from the
        first of the month. Months with fewer occurrences have no heavy day.
        """
        week_of_month = self.rules.heavy_week_of_month
        weekday = self.rules.heavy_weekday
        if week_of_month is None or weekday is None or week_of_month < 1:
            return None

        first_of_month = date(year, month, 1)
        first_match = first_of_month + timedelta(days=(weekday - first_of_month.weekday()) % 7)
        occurrence = first_match + timedelta(weeks=week_of_month - 1)
        if occurrence.month != month:
            return None
        return occurrence

    def is_heavy_day(self, day: date) -> bool:
        """Used for both tree and junk days."""
        return self.heavy_occurrence(day.year, day.month) == day

    @staticmethod
    def is_even_month(day: date) -> bool:
        return day.month % 2 == 0

    def is_junk_day(self, day: date) -> bool:
        return self.is_even_month(day) and self.is_heavy_day(day)

    def is_tree_day(self, day: date) -> bool:
        return not self.is_even_month(day) and self.is_heavy_day(day)

    @staticmethod
    def week_index(day: date) -> int:
        """Whole weeks between the parity epoch and the week containing the day."""
        return (day - PARITY_EPOCH).days // 7

    @classmethod
    def is_even_week(cls, day: date) -> bool:
        return cls.week_index(day) % 2 == 0

    def is_recycling_day(self, day: date) -> bool:
        if self.rules.recycling_weekday is None or day.weekday() != self.rules.recycling_weekday:
            return False
        return self.rules.recycling_on_even_weeks == self.is_even_week(day)

    def categories_for_day(self, day: date) -> FrozenSet[Category]:
        """Returns every pickup category that applies to the day (possibly none)."""
        checks = {
            Category.WASTE: self.is_waste_day,
            Category.JUNK: self.is_junk_day,
            Category.TREE: self.is_tree_day,
            Category.RECYCLING: self.is_recycling_day,
        }
        return frozenset(category for category, check in checks.items() if check(day))

    def is_possible_holiday(self, day: date) -> bool:
        # Flag only; schedule shifts around holidays are not modelled.
        return day in self.holidays
