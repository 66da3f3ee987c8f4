"""
This module defines the data models for the pickup schedule engine.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import FrozenSet, List, Optional


class Category(str, Enum):
    """The kinds of pickup a single day can carry."""

    WASTE = "waste"
    JUNK = "junk"
    TREE = "tree"
    RECYCLING = "recycling"


# Order in which categories are reported.
CATEGORY_ORDER = (Category.WASTE, Category.JUNK, Category.TREE, Category.RECYCLING)


@dataclass(frozen=True)
class PickupRules:
    """
    Normalized pickup rules for one location.

    Weekdays use ``date.weekday()`` numbering (Monday is 0). ``None`` marks a
    rule the source data did not provide; it never matches any day.
    """

    waste_weekday: Optional[int] = None
    heavy_week_of_month: Optional[int] = None
    heavy_weekday: Optional[int] = None
    recycling_weekday: Optional[int] = None
    recycling_on_even_weeks: bool = False

    def to_dict(self) -> dict:
        """Serializable form using the API's wire names."""
        return {
            "wasteDay": self.waste_weekday,
            "junkWeekOfMonth": self.heavy_week_of_month,
            "junkDay": self.heavy_weekday,
            "recyclingDay": self.recycling_weekday,
            "recyclingOnEvenWeeks": self.recycling_on_even_weeks,
        }


@dataclass(frozen=True)
class CalendarEvent:
    """Represents a single day with at least one pickup."""

    date: date
    categories: FrozenSet[Category]
    possible_holiday: bool = False

    def sorted_categories(self) -> List[Category]:
        return [c for c in CATEGORY_ORDER if c in self.categories]

    def to_dict(self) -> dict:
        """Serializable form with the date formatted as YYYY-MM-DD."""
        return {
            "day": self.date.isoformat(),
            "categories": [c.value for c in self.sorted_categories()],
            "possibleHoliday": self.possible_holiday,
        }
