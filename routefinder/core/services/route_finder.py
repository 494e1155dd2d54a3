"""
Route Finder

Service implementation for itinerary search by travel time, price or
number of transfers.
"""

import logging
from typing import Dict, List, Optional, Union

from ..interfaces.i_route_service import IRouteService
from ..models.criteria import Criterion
from ..models.itinerary import Itinerary
from ..models.timetable import Timetable
from ...managers.config_manager import SearchConfig
from .search_strategies import SearchStrategy, strategy_for
from .top_routes import TopRoutesEnumerator


class RouteFinder(IRouteService):
    """
    Multi-criteria route search over a read-only timetable.

    The timetable is never mutated and every call keeps its search state
    local, so one RouteFinder may be shared between threads.
    """

    def __init__(self, timetable: Timetable, config: Optional[SearchConfig] = None):
        """
        Initialize the route finder.

        Args:
            timetable: Timetable to search
            config: Search bounds, defaults to SearchConfig()
        """
        self.timetable = timetable
        self.config = config or SearchConfig()
        self.logger = logging.getLogger(__name__)

        self._strategies: Dict[Criterion, SearchStrategy] = {
            criterion: strategy_for(
                criterion,
                max_iterations=self.config.max_iterations,
                max_transfers=self.config.max_transfers,
            )
            for criterion in Criterion
        }

        self.logger.info(f"Initialized RouteFinder over {timetable!r}")

    def get_strategy(self, criterion: Union[Criterion, str]) -> SearchStrategy:
        return self._strategies[Criterion.parse(criterion)]

    def find_route(self, start: str, end: str, criterion: Union[Criterion, str]) -> Optional[Itinerary]:
        """Find the single best itinerary, or None if there is no route."""
        strategy = self.get_strategy(criterion)
        if not self._accepts(start, end):
            return None

        self.logger.debug(f"Finding {strategy.criterion.value} route from '{start}' to '{end}'")
        return strategy.search(self.timetable, start, end)

    def find_top_routes(self, start: str, end: str, criterion: Union[Criterion, str],
                        limit: Optional[int] = None) -> List[Itinerary]:
        """Find up to ``limit`` distinct itineraries, best first."""
        strategy = self.get_strategy(criterion)
        if limit is None:
            limit = self.config.default_limit
        if not self._accepts(start, end):
            return []

        self.logger.debug(f"Finding top {limit} {strategy.criterion.value} routes "
                          f"from '{start}' to '{end}'")
        return TopRoutesEnumerator(strategy).enumerate(self.timetable, start, end, limit)

    def find_best_route(self, start: str, end: str, criterion: Union[Criterion, str]) -> Optional[Itinerary]:
        """Same result as the first entry of a top-1 search."""
        routes = self.find_top_routes(start, end, criterion, 1)
        return routes[0] if routes else None

    def _accepts(self, start: str, end: str) -> bool:
        if self.config.reject_same_city and start == end:
            self.logger.info(f"Start and end city are both '{start}', no route to search")
            return False
        return True
