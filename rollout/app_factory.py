"""
This module provides a factory for creating and configuring the application's core components.
"""
from typing import Optional

from pickup_schedule.config import Settings, load_settings
from pickup_schedule.facade import PickupScheduleFacade
from pickup_schedule.services.arcgis_service import ArcGISService

from .logging_config import setup_logging


def initialize_app() -> None:
    """
    Initializes the application by setting up logging.
    """
    setup_logging()


def create_facade(settings: Optional[Settings] = None) -> PickupScheduleFacade:
    """
    Initializes and returns the PickupScheduleFacade with all its dependencies.
    """
    settings = settings or load_settings()
    arcgis_service = ArcGISService(settings)
    return PickupScheduleFacade(arcgis_service=arcgis_service, settings=settings)
