"""
This module defines the central facade for the pickup schedule application.
"""

import logging
from datetime import date
from typing import Any, Optional

from .calendar_window import upcoming_events
from .config import Settings
from .holiday_calendar import HolidayCalendar
from .rules_parser import parse_rules
from .services.arcgis_service import ArcGISService

logger = logging.getLogger(__name__)


class PickupScheduleFacade:
    """
    The central entry point for the pickup schedule application.
    It fetches the raw records, derives the rules and expands them into events.
    """

    def __init__(self, arcgis_service: ArcGISService, settings: Optional[Settings] = None):
        self.arcgis_service = arcgis_service
        self.settings = settings or Settings()

    def resolve_number_of_days(self, days: Optional[int]) -> int:
        """Applies the default window length and the upper bound."""
        if days is None:
            return self.settings.default_number_of_days
        return min(days, self.settings.max_number_of_days)

    def build_holidays(self, start_date: date, number_of_days: int) -> HolidayCalendar:
        return HolidayCalendar.for_window(
            start_date,
            number_of_days,
            country=self.settings.holiday_country,
            subdiv=self.settings.holiday_subdivision,
        )

    def get_upcoming_schedule(
        self,
        latitude: Any,
        longitude: Any,
        days: Optional[int] = None,
        today: Optional[date] = None,
    ) -> dict:
        """
        Computes the upcoming pickup schedule for a location.

        Args:
            latitude: The latitude of the location.
            longitude: The longitude of the location.
            days: The window length; defaults to the configured value.
            today: The first day of the window; defaults to the current date.

        Returns:
            A dict with the serialized ``events`` and the normalized ``schedule``.

        Raises:
            ValueError: If the coordinates are invalid.
            DownloadError: If the schedule records could not be loaded.
        """
        number_of_days = self.resolve_number_of_days(days)
        start_date = today or date.today()
        logger.info(
            f"Computing {number_of_days}-day schedule for ({latitude}, {longitude}) from {start_date}."
        )

        waste_record, heavy_record, recycling_record = self.arcgis_service.fetch_records(
            latitude, longitude
        )
        rules = parse_rules(
            waste_record,
            heavy_record,
            recycling_record,
            field_names=self.settings.field_names,
        )
        holidays = self.build_holidays(start_date, number_of_days)
        events = upcoming_events(rules, holidays, number_of_days, today=start_date)

        logger.info(f"Found {len(events)} pickup days for ({latitude}, {longitude}).")
        return {
            "events": [event.to_dict() for event in events],
            "schedule": rules.to_dict(),
        }
