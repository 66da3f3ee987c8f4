"""
Unit tests for the calendar window generator.
"""

from datetime import date, timedelta

import pytest

from pickup_schedule.calendar_window import generate_events, upcoming_events
from pickup_schedule.holiday_calendar import HolidayCalendar
from pickup_schedule.models import CalendarEvent, Category, PickupRules
from pickup_schedule.rules_parser import parse_rules

FULL_RULES = PickupRules(
    waste_weekday=2,  # Wednesday
    heavy_week_of_month=2,
    heavy_weekday=0,  # Monday
    recycling_weekday=4,  # Friday
    recycling_on_even_weeks=True,
)


def test_two_week_window():
    """
    Tests the expected events for the first two weeks of 2024.
    """
    # Arrange
    holidays = HolidayCalendar([date(2024, 1, 1), date(2024, 1, 10)])

    # Act
    events = generate_events(FULL_RULES, holidays, date(2024, 1, 1), 14)

    # Assert
    assert events == [
        CalendarEvent(date(2024, 1, 3), frozenset({Category.WASTE}), False),
        CalendarEvent(date(2024, 1, 8), frozenset({Category.TREE}), False),
        CalendarEvent(date(2024, 1, 10), frozenset({Category.WASTE}), True),
        CalendarEvent(date(2024, 1, 12), frozenset({Category.RECYCLING}), False),
    ]


@pytest.mark.parametrize("number_of_days", [0, -5])
def test_non_positive_window_is_empty(number_of_days):
    assert generate_events(FULL_RULES, HolidayCalendar(), date(2024, 1, 1), number_of_days) == []


def test_all_rules_unset_yields_no_events():
    assert generate_events(PickupRules(), HolidayCalendar(), date(2024, 1, 1), 60) == []


def test_events_are_ordered_and_bounded():
    events = generate_events(FULL_RULES, None, date(2024, 3, 1), 60)
    dates = [event.date for event in events]

    assert len(events) <= 60
    assert dates == sorted(set(dates))
    assert dates[0] >= date(2024, 3, 1)
    assert dates[-1] < date(2024, 3, 1) + timedelta(days=60)
    assert all(event.categories for event in events)


def test_unset_waste_never_emits_waste():
    rules = PickupRules(recycling_weekday=2, recycling_on_even_weeks=False)

    events = generate_events(rules, None, date(2024, 1, 1), 60)

    assert events
    assert all(Category.WASTE not in event.categories for event in events)


def test_recycling_every_fourteen_days():
    rules = PickupRules(recycling_weekday=4, recycling_on_even_weeks=True)

    events = generate_events(rules, None, date(2024, 3, 1), 90)
    dates = [event.date for event in events]

    assert len(dates) >= 6
    assert all(later - earlier == timedelta(days=14) for earlier, later in zip(dates, dates[1:]))


def test_malformed_heavy_pattern_yields_no_heavy_events():
    rules = parse_rules(
        {"features": [{"attributes": {"DAY": "Monday"}}]},
        {"features": [{"attributes": {"SERVICE_DA": ""}}]},
        None,
    )

    events = generate_events(rules, None, date(2024, 1, 1), 60)

    assert events
    for event in events:
        assert Category.JUNK not in event.categories
        assert Category.TREE not in event.categories


def test_holiday_flag_matches_table():
    rules = PickupRules(waste_weekday=2)
    holidays = HolidayCalendar([date(2024, 12, 25)])

    events = generate_events(rules, holidays, date(2024, 12, 1), 31)

    for event in events:
        assert event.possible_holiday is (event.date == date(2024, 12, 25))


def test_event_to_dict():
    event = CalendarEvent(
        date(2024, 1, 8), frozenset({Category.RECYCLING, Category.WASTE}), True
    )

    assert event.to_dict() == {
        "day": "2024-01-08",
        "categories": ["waste", "recycling"],
        "possibleHoliday": True,
    }


def test_upcoming_events_starts_today():
    events = upcoming_events(FULL_RULES, None, 14, today=date(2024, 1, 1))

    assert events == generate_events(FULL_RULES, None, date(2024, 1, 1), 14)


@pytest.mark.parametrize(
    "on_even_weeks, expected",
    [
        (True, [date(2026, 12, 11), date(2026, 12, 25), date(2027, 1, 8), date(2027, 1, 22)]),
        (False, [date(2026, 12, 4), date(2026, 12, 18), date(2027, 1, 1), date(2027, 1, 15), date(2027, 1, 29)]),
    ],
)
def test_recycling_keeps_rhythm_across_53_week_year(on_even_weeks, expected):
    """
    Tests that recycling stays two weeks apart across the end of ISO year 2026,
    which has a week 53.
    """
    rules = PickupRules(recycling_weekday=4, recycling_on_even_weeks=on_even_weeks)

    events = generate_events(rules, None, date(2026, 12, 1), 60)
    dates = [event.date for event in events]

    assert dates == expected
    assert all(later - earlier == timedelta(days=14) for earlier, later in zip(dates, dates[1:]))
