"""
Core Interfaces Package

Interface definitions for the route search services.
"""

from .i_route_service import IRouteService
from .i_timetable_repository import ITimetableRepository, TimetableLoadError

__all__ = [
    'IRouteService',
    'ITimetableRepository',
    'TimetableLoadError'
]
