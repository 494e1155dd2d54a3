"""
Top Routes Enumerator

Collects up to K distinct itineraries for a criterion, best first.
"""

import logging
from typing import Hashable, List, Set, Tuple

from ..models.itinerary import Itinerary
from ..models.timetable import Departure, Timetable
from .search_strategies import SearchStrategy


class TopRoutesEnumerator:
    """
    Extends a single-route search into a top-K search.

    The optimal itinerary from the strategy's own search is always the first
    candidate. The frontier is then re-explored without best-cost pruning:
    every arrival at the destination becomes a candidate and is not extended
    further, and each state (see ``SearchStrategy.state_key``) is expanded at
    most once so that
    distinct but non-optimal itineraries can survive into the pool.
    """

    def __init__(self, strategy: SearchStrategy):
        self.strategy = strategy
        self.logger = logging.getLogger(__name__)

    def enumerate(self, timetable: Timetable, start: str, end: str, limit: int) -> List[Itinerary]:
        """
        Find up to ``limit`` distinct itineraries.

        Args:
            timetable: Timetable to search
            start: Starting city name
            end: Destination city name
            limit: Maximum number of itineraries

        Returns:
            Itineraries sorted ascending by the strategy's criterion
        """
        if limit < 1:
            return []

        results: List[Itinerary] = []
        collected: Set[Tuple[Departure, ...]] = set()

        best = self.strategy.search(timetable, start, end)
        if best is not None:
            results.append(best)
            collected.add(best.legs)

        if start not in timetable or end not in timetable:
            return results

        frontier = self.strategy.new_frontier()
        for node in self.strategy.seed(timetable, start):
            frontier.push(node)

        visited: Set[Hashable] = set()
        iterations = 0
        max_iterations = self.strategy.max_iterations

        while frontier and len(results) < limit and iterations < max_iterations:
            iterations += 1
            current = frontier.pop()

            if self.strategy.exceeds_transfer_limit(current):
                continue

            if current.city == end:
                if current.legs not in collected:
                    collected.add(current.legs)
                    results.append(Itinerary(current.legs))
                continue

            state = self.strategy.state_key(current)
            if state in visited:
                continue
            visited.add(state)

            for child in self.strategy.expand(timetable, current):
                frontier.push(child)

        if iterations >= max_iterations and len(results) < limit:
            self.logger.warning(f"Top {limit} {self.strategy.criterion.value} search from "
                                f"'{start}' to '{end}' stopped after {iterations} iterations "
                                f"with {len(results)} routes")

        results.sort(key=lambda itinerary: self.strategy.sort_key(itinerary.legs))
        self.logger.debug(f"Collected {len(results)} {self.strategy.criterion.value} routes "
                          f"from '{start}' to '{end}'")
        return results[:limit]
