"""
This module defines custom exceptions for the pickup schedule engine.
"""


class DownloadError(Exception):
    """Custom exception for errors while fetching schedule records from the map server."""

    pass
