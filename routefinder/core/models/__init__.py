"""
Core Models Package

Timetable, itinerary and search criterion models.
"""

from .timetable import (
    City,
    Departure,
    Station,
    Timetable,
    TimetableBuilder,
    TransportMode,
    TIME_FORMAT,
)
from .criteria import Criterion, path_cost, sort_key
from .itinerary import Itinerary

__all__ = [
    'City',
    'Departure',
    'Station',
    'Timetable',
    'TimetableBuilder',
    'TransportMode',
    'TIME_FORMAT',
    'Criterion',
    'path_cost',
    'sort_key',
    'Itinerary'
]
