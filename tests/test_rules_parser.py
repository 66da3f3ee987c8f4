"""
Unit tests for the rules parser.
"""

import pytest

from pickup_schedule.models import PickupRules
from pickup_schedule.rules_parser import (is_valid_record, parse_heavy_pattern,
                                          parse_recycling_pattern, parse_rules,
                                          parse_weekday)


def record(field, value):
    """Builds a map server response with a single feature."""
    return {"features": [{"attributes": {field: value}}]}


WASTE = record("DAY", "Wednesday")
HEAVY = record("SERVICE_DA", "2 Monday")
RECYCLING = record("SERVICE_DAY", "Friday-B")


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Monday", 0),
        ("tuesday", 1),
        ("WEDNESDAY", 2),
        ("  Sunday ", 6),
        ("Mon", None),
        ("Lundi", None),
        ("", None),
        (None, None),
    ],
)
def test_parse_weekday(name, expected):
    assert parse_weekday(name) == expected


@pytest.mark.parametrize(
    "data, expected",
    [
        (None, False),
        ({}, False),
        ({"features": []}, False),
        ({"features": [{}]}, False),
        ({"features": [{"attributes": None}]}, False),
        ({"features": "Monday"}, False),
        ([{"attributes": {"DAY": "Monday"}}], False),
        (record("DAY", "Monday"), True),
    ],
)
def test_is_valid_record(data, expected):
    assert is_valid_record(data) is expected


def test_parse_heavy_pattern():
    assert parse_heavy_pattern("3 Tuesday") == (3, 1)
    assert parse_heavy_pattern("1 saturday") == (1, 5)


@pytest.mark.parametrize("value", ["", None, "Tuesday", "X Tuesday", "0 Tuesday", "3Tuesday", "3 Someday"])
def test_parse_heavy_pattern_malformed(value):
    assert parse_heavy_pattern(value) == (None, None)


def test_parse_recycling_pattern():
    # "-A" marks odd weeks, anything else even weeks
    assert parse_recycling_pattern("Friday-A") == (4, False)
    assert parse_recycling_pattern("Friday-B") == (4, True)
    assert parse_recycling_pattern("Friday") == (4, True)
    assert parse_recycling_pattern("Noday-A") == (None, False)
    assert parse_recycling_pattern("") == (None, False)


def test_parse_rules_full():
    """
    Tests parsing of three well-formed records.
    """
    rules = parse_rules(WASTE, HEAVY, RECYCLING)

    assert rules == PickupRules(
        waste_weekday=2,
        heavy_week_of_month=2,
        heavy_weekday=0,
        recycling_weekday=4,
        recycling_on_even_weeks=True,
    )


def test_parse_rules_missing_records_are_unset():
    """
    Tests that missing records leave every rule unset without raising.
    """
    rules = parse_rules(None, {"features": []}, {})

    assert rules == PickupRules()
    assert rules.recycling_on_even_weeks is False


def test_parse_rules_degrades_each_record_independently():
    rules = parse_rules(WASTE, record("SERVICE_DA", ""), record("SERVICE_DAY", 42))

    assert rules.waste_weekday == 2
    assert rules.heavy_week_of_month is None
    assert rules.heavy_weekday is None
    assert rules.recycling_weekday is None


def test_parse_rules_uses_only_first_feature():
    heavy = {
        "features": [
            {"attributes": {"SERVICE_DA": "4 Thursday"}},
            {"attributes": {"SERVICE_DA": "1 Monday"}},
        ]
    }

    rules = parse_rules(None, heavy, None)

    assert (rules.heavy_week_of_month, rules.heavy_weekday) == (4, 3)


def test_parse_rules_custom_field_names():
    rules = parse_rules(
        record("WD", "Monday"),
        record("HV", "1 Friday"),
        record("RC", "Tuesday-A"),
        field_names=("WD", "HV", "RC"),
    )

    assert rules.waste_weekday == 0
    assert rules.heavy_weekday == 4
    assert rules.recycling_weekday == 1
    assert rules.recycling_on_even_weeks is False


def test_parse_rules_logs_degradation(caplog):
    parse_rules(WASTE, HEAVY, None)

    assert "No usable recycling schedule" in caplog.text
