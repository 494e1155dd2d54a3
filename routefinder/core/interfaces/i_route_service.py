"""
Route Service Interface

Interface for itinerary search services.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Union

from ..models.criteria import Criterion
from ..models.itinerary import Itinerary


class IRouteService(ABC):
    """Interface for itinerary search services."""

    @abstractmethod
    def find_route(self, start: str, end: str, criterion: Union[Criterion, str]) -> Optional[Itinerary]:
        """
        Find the single best itinerary between two cities.

        Args:
            start: Starting city name
            end: Destination city name
            criterion: What to optimise for, as a Criterion or its name

        Returns:
            Itinerary if one was found, None otherwise
        """
        pass

    @abstractmethod
    def find_top_routes(self, start: str, end: str, criterion: Union[Criterion, str],
                        limit: int) -> List[Itinerary]:
        """
        Find up to ``limit`` distinct itineraries between two cities.

        Args:
            start: Starting city name
            end: Destination city name
            criterion: What to optimise for, as a Criterion or its name
            limit: Maximum number of itineraries to return

        Returns:
            Itineraries ordered best-first, possibly empty
        """
        pass

    @abstractmethod
    def find_best_route(self, start: str, end: str, criterion: Union[Criterion, str]) -> Optional[Itinerary]:
        """
        Get the first itinerary of a top-1 search.

        Args:
            start: Starting city name
            end: Destination city name
            criterion: What to optimise for, as a Criterion or its name

        Returns:
            Itinerary if one was found, None otherwise
        """
        pass
