"""
Service Factory

Factory for creating and managing core service instances.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..interfaces.i_route_service import IRouteService
from ..interfaces.i_timetable_repository import ITimetableRepository, TimetableLoadError
from ..models.timetable import Timetable
from ...managers.config_manager import ConfigData
from .json_timetable_repository import JsonTimetableRepository
from .route_finder import RouteFinder
from .timetable_generator import TimetableGenerator


class ServiceFactory:
    """Factory for creating and managing core service instances."""

    def __init__(self, config: Optional[ConfigData] = None,
                 timetable_path: Optional[Union[str, Path]] = None):
        """
        Initialize the service factory.

        Args:
            config: Application configuration, defaults to ConfigData()
            timetable_path: Timetable JSON file, overrides config.timetable_path
        """
        self.logger = logging.getLogger(__name__)
        self.config = config or ConfigData()

        if timetable_path is None and self.config.timetable_path:
            timetable_path = self.config.timetable_path
        self.timetable_path = Path(timetable_path) if timetable_path is not None else None

        # Service instances (singletons)
        self._repository: Optional[ITimetableRepository] = None
        self._timetable: Optional[Timetable] = None
        self._route_service: Optional[IRouteService] = None
        self._route_workers: List[Any] = []

        self.logger.info(f"Initialized ServiceFactory with timetable: {self.timetable_path}")

    def get_repository(self) -> ITimetableRepository:
        """Get or create the timetable repository instance."""
        if self._repository is None:
            if self.timetable_path is None:
                raise TimetableLoadError("No timetable file configured")
            self._repository = JsonTimetableRepository(self.timetable_path)
            self.logger.info("Created JsonTimetableRepository instance")

        return self._repository

    def get_timetable(self) -> Timetable:
        """Get the loaded timetable, loading it on first use."""
        if self._timetable is None:
            self._timetable = self.get_repository().load_timetable()

        return self._timetable

    def use_timetable(self, timetable: Timetable) -> None:
        """Serve an already built timetable instead of loading one."""
        self._timetable = timetable
        self._route_service = None

    def get_route_service(self) -> IRouteService:
        """Get or create the route service instance."""
        if self._route_service is None:
            self._route_service = RouteFinder(self.get_timetable(), self.config.search)
            self.logger.info("Created RouteFinder instance")

        return self._route_service

    def create_generator(self, rows: Optional[int] = None, cols: Optional[int] = None,
                         seed: Optional[int] = None) -> TimetableGenerator:
        """Create a timetable generator, falling back to configured values."""
        settings = self.config.generator
        return TimetableGenerator(
            rows=rows if rows is not None else settings.rows,
            cols=cols if cols is not None else settings.cols,
            departures_per_station=settings.departures_per_station,
            seed=seed if seed is not None else settings.seed,
        )

    def create_route_worker(self, max_workers: int = 2):
        """
        Create a background worker over the route service.

        Workers created here are shut down together with the factory.
        """
        from ...workers.route_worker import RouteWorker

        worker = RouteWorker(self.get_route_service(), max_workers=max_workers)
        self._route_workers.append(worker)
        self.logger.info(f"Created RouteWorker with {max_workers} threads")
        return worker

    def refresh_timetable(self) -> bool:
        """Reload the timetable from the repository and drop dependent services."""
        try:
            self._timetable = self.get_repository().load_timetable()
        except TimetableLoadError as e:
            self.logger.error(f"Failed to refresh timetable: {e}")
            return False

        self._route_service = None
        self.logger.info("Timetable refreshed successfully")
        return True

    def get_service_statistics(self) -> Dict[str, Any]:
        """Get statistics about the loaded services."""
        stats: Dict[str, Any] = {
            'timetable_path': str(self.timetable_path) if self.timetable_path else None,
            'timetable_loaded': self._timetable is not None,
            'route_service_ready': self._route_service is not None,
            'route_workers': len(self._route_workers),
        }
        if self._timetable is not None:
            stats['cities'] = len(self._timetable)
            stats['departures'] = self._timetable.departure_count
        return stats

    def shutdown(self) -> None:
        """Drop all service instances."""
        for worker in self._route_workers:
            worker.shutdown()
        self._route_workers = []
        self._repository = None
        self._timetable = None
        self._route_service = None
        self.logger.info("All services shut down successfully")
