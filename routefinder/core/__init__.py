"""
Core Package

Core services, interfaces, and models for the route search engine.
"""

# Import interfaces
from .interfaces import IRouteService, ITimetableRepository, TimetableLoadError

# Import models
from .models import (
    City, Departure, Station, Timetable, TimetableBuilder, TransportMode,
    Criterion, Itinerary
)

# Import services
from .services import (
    RouteFinder, TopRoutesEnumerator, JsonTimetableRepository,
    TimetableGenerator, ServiceFactory
)

__all__ = [
    # Interfaces
    'IRouteService',
    'ITimetableRepository',
    'TimetableLoadError',

    # Models
    'City',
    'Departure',
    'Station',
    'Timetable',
    'TimetableBuilder',
    'TransportMode',
    'Criterion',
    'Itinerary',

    # Services
    'RouteFinder',
    'TopRoutesEnumerator',
    'JsonTimetableRepository',
    'TimetableGenerator',
    'ServiceFactory'
]
