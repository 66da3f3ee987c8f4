"""
This module expands PickupRules into the list of upcoming pickup days.
"""
import logging
from datetime import date, timedelta
from typing import List, Optional

from .classifier import DayClassifier
from .config import DEFAULT_NUMBER_OF_DAYS
from .holiday_calendar import HolidayCalendar
from .models import CalendarEvent, PickupRules

logger = logging.getLogger(__name__)


def generate_events(
    rules: PickupRules,
    holidays: Optional[HolidayCalendar],
    start_date: date,
    number_of_days: int = DEFAULT_NUMBER_OF_DAYS,
) -> List[CalendarEvent]:
    """
    Generates the pickup events for a window of consecutive days.

    Args:
        rules: The normalized pickup rules.
        holidays: The holiday table used to flag possible holidays.
        start_date: The first day of the window (inclusive).
        number_of_days: The window length. Zero or less yields no events.

    Returns:
        One CalendarEvent per day with at least one pickup, in date order.
    """
    classifier = DayClassifier(rules, holidays)
    events = []
    for offset in range(max(number_of_days, 0)):
        day = start_date + timedelta(days=offset)
        categories = classifier.categories_for_day(day)
        # skip days without pickups
        if not categories:
            continue
        events.append(
            CalendarEvent(
                date=day,
                categories=categories,
                possible_holiday=classifier.is_possible_holiday(day),
            )
        )

    logger.debug(f"Generated {len(events)} events for {number_of_days} days from {start_date}.")
    return events


def upcoming_events(
    rules: PickupRules,
    holidays: Optional[HolidayCalendar],
    number_of_days: int = DEFAULT_NUMBER_OF_DAYS,
    today: Optional[date] = None,
) -> List[CalendarEvent]:
    """Generates the events for a window starting today."""
    return generate_events(rules, holidays, today or date.today(), number_of_days)
