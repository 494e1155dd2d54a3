"""
Utility functions for the RouteFinder application.

This module contains helper functions and utilities used throughout
the application.
"""

from .helpers import (
    format_duration,
    format_price,
    format_itinerary_summary,
    format_itinerary_legs,
    describe_route,
)

__all__ = [
    "format_duration",
    "format_price",
    "format_itinerary_summary",
    "format_itinerary_legs",
    "describe_route",
]
