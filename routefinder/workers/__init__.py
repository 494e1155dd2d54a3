"""
Worker package for background route searches.
"""

from .route_worker import RouteRequest, RouteResult, RouteWorker

__all__ = [
    'RouteRequest',
    'RouteResult',
    'RouteWorker'
]
