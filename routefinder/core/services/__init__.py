"""
Core Services Package

Service implementations for timetable loading and itinerary search.
"""

from .search_strategies import (
    SearchStrategy,
    TimeSearch,
    PriceSearch,
    TransferSearch,
    strategy_for,
)
from .top_routes import TopRoutesEnumerator
from .route_finder import RouteFinder
from .json_timetable_repository import JsonTimetableRepository
from .timetable_generator import TimetableGenerator
from .service_factory import ServiceFactory

__all__ = [
    'SearchStrategy',
    'TimeSearch',
    'PriceSearch',
    'TransferSearch',
    'strategy_for',
    'TopRoutesEnumerator',
    'RouteFinder',
    'JsonTimetableRepository',
    'TimetableGenerator',
    'ServiceFactory'
]
