"""
Search Strategies

One search implementation per criterion over the implicit city graph whose
edges are timetable departures:

- PriceSearch: label-correcting shortest path on a min-heap, one best cost per city
- TimeSearch: the same on a min-heap of elapsed minutes, keeping every
  non-dominated (first departure, arrival) label per city
- TransferSearch: breadth-first search on a FIFO queue

All frontier and bookkeeping state is created inside each call, so a single
strategy instance can serve concurrent searches over a shared timetable.
"""

import heapq
import logging
from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from datetime import date, datetime
from typing import Deque, Dict, Hashable, Iterator, List, Optional, Tuple

from ..models.criteria import Criterion, path_cost, sort_key
from ..models.itinerary import Itinerary
from ..models.schedule import (
    anchor_departure,
    arrival_instant,
    earliest_boarding,
    next_departure_instant,
)
from ..models.timetable import Departure, Timetable


DEFAULT_MAX_ITERATIONS = 200_000
DEFAULT_MAX_TRANSFERS = 50


@dataclass
class SearchNode:
    """Frontier entry: a partial itinerary, the city it reached and its cost."""
    city: str
    legs: Tuple[Departure, ...]
    cost: int
    departed_at: Optional[datetime] = None
    arrived_at: Optional[datetime] = None

    @property
    def transfers(self) -> int:
        return len(self.legs) - 1

    def __lt__(self, other):
        # For priority queue - prioritize by cost, then fewer legs
        if self.cost != other.cost:
            return self.cost < other.cost
        return len(self.legs) < len(other.legs)


class Frontier(ABC):
    """Container of search nodes still to be explored."""

    @abstractmethod
    def push(self, node: SearchNode) -> None:
        pass

    @abstractmethod
    def pop(self) -> SearchNode:
        pass

    @abstractmethod
    def __len__(self) -> int:
        pass


class PriorityFrontier(Frontier):
    """Min-heap ordered by accumulated cost."""

    def __init__(self):
        self._heap: List[SearchNode] = []

    def push(self, node: SearchNode) -> None:
        heapq.heappush(self._heap, node)

    def pop(self) -> SearchNode:
        return heapq.heappop(self._heap)

    def __len__(self) -> int:
        return len(self._heap)


class FifoFrontier(Frontier):
    """First-in first-out queue for breadth-first exploration."""

    def __init__(self):
        self._queue: Deque[SearchNode] = deque()

    def push(self, node: SearchNode) -> None:
        self._queue.append(node)

    def pop(self) -> SearchNode:
        return self._queue.popleft()

    def __len__(self) -> int:
        return len(self._queue)


class LabelSet(ABC):
    """Per-city record of the partial itineraries still worth extending."""

    @abstractmethod
    def offer(self, node: SearchNode) -> bool:
        """Record a new node; False if it can never beat what is already recorded."""
        pass

    @abstractmethod
    def is_stale(self, node: SearchNode) -> bool:
        """Whether a queued node has since been beaten by a later offer."""
        pass


class BestCostLabels(LabelSet):
    """Scalar best cost per city, for criteria where cost alone decides."""

    def __init__(self):
        self._best: Dict[str, int] = {}

    def offer(self, node: SearchNode) -> bool:
        # Ties are kept so equally good alternatives stay reachable
        existing = self._best.get(node.city)
        if existing is not None and node.cost > existing:
            return False
        self._best[node.city] = node.cost
        return True

    def is_stale(self, node: SearchNode) -> bool:
        best = self._best.get(node.city)
        return best is not None and node.cost > best


class ParetoLabels(LabelSet):
    """
    Non-dominated (first departure, arrival, legs) labels per city.

    Elapsed time alone cannot rank two partial itineraries at the same city:
    the one with less elapsed time may have started later and arrive too late
    for an onward connection. A label is only dropped when another one left
    no earlier, arrived no later and used no more legs. Identical labels do
    not dominate each other.

    Nodes without instants (malformed times) are always accepted.
    """

    def __init__(self):
        self._labels: Dict[str, List[SearchNode]] = {}

    @staticmethod
    def dominates(a: SearchNode, b: SearchNode) -> bool:
        if (a.departed_at, a.arrived_at, len(a.legs)) == (b.departed_at, b.arrived_at, len(b.legs)):
            return False
        return (a.departed_at >= b.departed_at
                and a.arrived_at <= b.arrived_at
                and len(a.legs) <= len(b.legs))

    def offer(self, node: SearchNode) -> bool:
        if node.arrived_at is None:
            return True

        labels = self._labels.setdefault(node.city, [])
        if any(self.dominates(label, node) for label in labels):
            return False

        labels[:] = [label for label in labels if not self.dominates(node, label)]
        labels.append(node)
        return True

    def is_stale(self, node: SearchNode) -> bool:
        if node.arrived_at is None:
            return False
        return not any(label is node for label in self._labels.get(node.city, ()))


class SearchStrategy(ABC):
    """Base class for per-criterion itinerary searches."""

    criterion: Criterion

    def __init__(self, max_iterations: int = DEFAULT_MAX_ITERATIONS,
                 max_transfers: int = DEFAULT_MAX_TRANSFERS):
        """
        Initialize the strategy.

        Args:
            max_iterations: Frontier pops allowed before a search gives up
            max_transfers: Partial itineraries with more transfers are discarded
        """
        if max_iterations < 1:
            raise ValueError("max_iterations must be positive")
        if max_transfers < 0:
            raise ValueError("max_transfers cannot be negative")
        self.max_iterations = max_iterations
        self.max_transfers = max_transfers
        self.logger = logging.getLogger(__name__)

    def path_cost(self, legs: Tuple[Departure, ...]) -> int:
        return path_cost(self.criterion, legs)

    def sort_key(self, legs: Tuple[Departure, ...]) -> Tuple[int, ...]:
        return sort_key(self.criterion, legs)

    @abstractmethod
    def new_frontier(self) -> Frontier:
        """Create an empty frontier for one search run."""
        pass

    def make_node(self, parent: Optional[SearchNode], departure: Departure) -> SearchNode:
        """Partial itinerary extending ``parent`` (or starting) with one departure."""
        legs = (parent.legs if parent is not None else ()) + (departure,)
        return SearchNode(departure.destination, legs, self.path_cost(legs))

    def seed(self, timetable: Timetable, start: str) -> Iterator[SearchNode]:
        """One-leg partial itineraries for every departure leaving the start city."""
        for departure in timetable.departures_from(start):
            yield self.make_node(None, departure)

    def expand(self, timetable: Timetable, node: SearchNode) -> Iterator[SearchNode]:
        """Extend a partial itinerary by every departure leaving the city it reached."""
        for departure in timetable.departures_from(node.city):
            yield self.make_node(node, departure)

    def state_key(self, node: SearchNode) -> Hashable:
        """Key under which top-K enumeration expands a node at most once."""
        return (node.city, len(node.legs))

    def exceeds_transfer_limit(self, node: SearchNode) -> bool:
        return node.transfers > self.max_transfers

    @abstractmethod
    def search(self, timetable: Timetable, start: str, end: str) -> Optional[Itinerary]:
        """
        Find one optimal itinerary.

        Returns:
            Itinerary if the destination was reached within the search bounds,
            None otherwise
        """
        pass

    def _can_search(self, timetable: Timetable, start: str, end: str) -> bool:
        if start not in timetable:
            self.logger.warning(f"Start city '{start}' not found in timetable")
            return False
        if end not in timetable:
            self.logger.warning(f"End city '{end}' not found in timetable")
            return False
        return True

    def __repr__(self) -> str:
        return (f"{self.__class__.__name__}(max_iterations={self.max_iterations}, "
                f"max_transfers={self.max_transfers})")


class PrioritySearch(SearchStrategy):
    """Dijkstra-like search shared by cost-monotone criteria."""

    def new_frontier(self) -> Frontier:
        return PriorityFrontier()

    def new_labels(self) -> LabelSet:
        return BestCostLabels()

    def search(self, timetable: Timetable, start: str, end: str) -> Optional[Itinerary]:
        if not self._can_search(timetable, start, end):
            return None

        frontier = self.new_frontier()
        labels = self.new_labels()

        for node in self.seed(timetable, start):
            if labels.offer(node):
                frontier.push(node)

        iterations = 0
        while frontier and iterations < self.max_iterations:
            iterations += 1
            current = frontier.pop()

            if self.exceeds_transfer_limit(current):
                continue

            if current.city == end:
                self.logger.debug(f"{self.criterion.value} search reached '{end}' after "
                                  f"{iterations} iterations, cost {current.cost}")
                return Itinerary(current.legs)

            if labels.is_stale(current):
                continue

            for child in self.expand(timetable, current):
                if labels.offer(child):
                    frontier.push(child)

        if frontier:
            self.logger.warning(f"{self.criterion.value} search from '{start}' to '{end}' "
                                f"stopped after {iterations} iterations")
        else:
            self.logger.debug(f"No {self.criterion.value} route from '{start}' to '{end}'")
        return None


class TimeSearch(PrioritySearch):
    """Fastest itinerary, honouring transfer buffers and day rollover."""
    criterion = Criterion.TIME

    # Only differences between instants are ever used
    anchor_date = date(2000, 1, 1)

    def new_labels(self) -> LabelSet:
        return ParetoLabels()

    def make_node(self, parent: Optional[SearchNode], departure: Departure) -> SearchNode:
        """Carry absolute first-departure and arrival instants along the chain."""
        if parent is not None and parent.arrived_at is None:
            return super().make_node(parent, departure)

        try:
            if parent is None:
                departed_at = anchor_departure(departure, self.anchor_date)
                boarded_at = departed_at
            else:
                departed_at = parent.departed_at
                boarded_at = next_departure_instant(
                    departure, earliest_boarding(parent.arrived_at, departure))
        except ValueError:
            return super().make_node(parent, departure)

        arrived_at = arrival_instant(boarded_at, departure.duration)
        legs = (parent.legs if parent is not None else ()) + (departure,)
        cost = int((arrived_at - departed_at).total_seconds() // 60)
        return SearchNode(departure.destination, legs, cost, departed_at, arrived_at)

    def state_key(self, node: SearchNode) -> Hashable:
        # Different instants at the same city can lead to different connections
        return (node.city, len(node.legs), node.departed_at, node.arrived_at)


class PriceSearch(PrioritySearch):
    """Cheapest itinerary by summed leg prices."""
    criterion = Criterion.PRICE


class TransferSearch(SearchStrategy):
    """Itinerary with the fewest legs."""
    criterion = Criterion.TRANSFERS

    def new_frontier(self) -> Frontier:
        return FifoFrontier()

    def search(self, timetable: Timetable, start: str, end: str) -> Optional[Itinerary]:
        if not self._can_search(timetable, start, end):
            return None

        frontier = self.new_frontier()
        # Fewest legs with which each city has been expanded
        expanded: Dict[str, int] = {}

        for node in self.seed(timetable, start):
            frontier.push(node)

        iterations = 0
        while frontier and iterations < self.max_iterations:
            iterations += 1
            current = frontier.pop()

            if self.exceeds_transfer_limit(current):
                continue

            if current.city == end:
                self.logger.debug(f"transfers search reached '{end}' after {iterations} "
                                  f"iterations with {current.transfers} transfers")
                return Itinerary(current.legs)

            hops = len(current.legs)
            seen = expanded.get(current.city)
            if seen is not None and seen <= hops:
                continue
            expanded[current.city] = hops

            for child in self.expand(timetable, current):
                seen = expanded.get(child.city)
                if seen is None or seen > len(child.legs):
                    frontier.push(child)

        if frontier:
            self.logger.warning(f"transfers search from '{start}' to '{end}' "
                                f"stopped after {iterations} iterations")
        else:
            self.logger.debug(f"No transfers route from '{start}' to '{end}'")
        return None


_STRATEGIES = {
    Criterion.TIME: TimeSearch,
    Criterion.PRICE: PriceSearch,
    Criterion.TRANSFERS: TransferSearch,
}


def strategy_for(criterion: Criterion, max_iterations: int = DEFAULT_MAX_ITERATIONS,
                 max_transfers: int = DEFAULT_MAX_TRANSFERS) -> SearchStrategy:
    """Create the search strategy for a criterion."""
    return _STRATEGIES[criterion](max_iterations=max_iterations, max_transfers=max_transfers)
