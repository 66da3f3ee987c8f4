"""
This module turns raw map server records into PickupRules.

Each record is expected in the ArcGIS query shape
``{"features": [{"attributes": {<field>: <string>}}, ...]}``; only the first
feature is consulted. Missing or malformed records never raise, they leave the
affected rule unset.
"""
import logging
from typing import Any, Mapping, Optional, Sequence, Tuple

from .config import HEAVY_LAYER, RECYCLING_LAYER, WASTE_LAYER
from .models import PickupRules

# Get a logger instance for this module
logger = logging.getLogger(__name__)

WEEKDAY_NAMES = (
    "monday",
    "tuesday",
    "wednesday",
    "thursday",
    "friday",
    "saturday",
    "sunday",
)
_WEEKDAY_INDEX = {name: index for index, name in enumerate(WEEKDAY_NAMES)}

# Recycling schedule A runs on odd weeks, anything else on even weeks.
# The city republishes which half is "A" every year:
# http://www.houstontx.gov/solidwaste/Recycle_Cal.pdf
ODD_WEEK_MARKER = "-A"

DEFAULT_FIELD_NAMES = (WASTE_LAYER.field, HEAVY_LAYER.field, RECYCLING_LAYER.field)


def is_valid_record(record: Any) -> bool:
    """True when the record carries a first feature with an attributes mapping."""
    if not isinstance(record, Mapping):
        return False
    features = record.get("features")
    if not isinstance(features, Sequence) or isinstance(features, str) or not features:
        return False
    first = features[0]
    return isinstance(first, Mapping) and isinstance(first.get("attributes"), Mapping)


def get_attribute(record: Any, field: str) -> Optional[str]:
    """Returns the string value of ``field`` from the first feature, or None."""
    if not is_valid_record(record):
        return None
    value = record["features"][0]["attributes"].get(field)
    if not isinstance(value, str):
        return None
    return value


def parse_weekday(name: Optional[str]) -> Optional[int]:
    """Maps an English weekday name (any case) to its ``date.weekday()`` index."""
    if not isinstance(name, str):
        return None
    return _WEEKDAY_INDEX.get(name.strip().lower())


def parse_heavy_pattern(value: Optional[str]) -> Tuple[Optional[int], Optional[int]]:
    """
    Parses a heavy pickup pattern of the form ``"<digit> <weekday-name>"``.

    Args:
        value: The raw pattern, e.g. ``"3 Tuesday"``.

    Returns:
        A ``(week_of_month, weekday)`` tuple; both are None when the pattern
        does not follow the grammar.
    """
    if not value:
        return None, None
    ordinal = value[0]
    if ordinal not in "123456789" or " " not in value:
        return None, None
    weekday = parse_weekday(value[value.index(" ") + 1 :])
    if weekday is None:
        return None, None
    return int(ordinal), weekday


def parse_recycling_pattern(value: Optional[str]) -> Tuple[Optional[int], bool]:
    """
    Parses a recycling pattern of the form ``"<weekday-name>-<suffix>"``.

    Returns:
        A ``(weekday, on_even_weeks)`` tuple. An unparseable weekday yields
        ``(None, False)``.
    """
    if not value:
        return None, False
    weekday = parse_weekday(value.split("-")[0])
    if weekday is None:
        return None, False
    return weekday, ODD_WEEK_MARKER not in value


def parse_rules(
    waste_record: Any,
    heavy_record: Any,
    recycling_record: Any,
    field_names: Sequence[str] = DEFAULT_FIELD_NAMES,
) -> PickupRules:
    """Builds PickupRules from the waste, heavy and recycling records."""
    waste_field, heavy_field, recycling_field = field_names

    # waste is one day a week
    waste_value = get_attribute(waste_record, waste_field)
    waste_weekday = parse_weekday(waste_value)
    if waste_weekday is None:
        logger.warning(f"No usable waste schedule in record (value: {waste_value!r}).")

    # heavy trash pickup is in the form of "3 Tuesday"
    heavy_value = get_attribute(heavy_record, heavy_field)
    heavy_week_of_month, heavy_weekday = parse_heavy_pattern(heavy_value)
    if heavy_weekday is None:
        logger.warning(f"No usable heavy pickup schedule in record (value: {heavy_value!r}).")

    # recycling pickup is alternating weeks
    recycling_value = get_attribute(recycling_record, recycling_field)
    recycling_weekday, recycling_on_even_weeks = parse_recycling_pattern(recycling_value)
    if recycling_weekday is None:
        logger.warning(f"No usable recycling schedule in record (value: {recycling_value!r}).")

    return PickupRules(
        waste_weekday=waste_weekday,
        heavy_week_of_month=heavy_week_of_month,
        heavy_weekday=heavy_weekday,
        recycling_weekday=recycling_weekday,
        recycling_on_even_weeks=recycling_on_even_weeks,
    )
