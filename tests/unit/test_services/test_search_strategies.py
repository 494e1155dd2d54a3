"""
Unit tests for the per-criterion search strategies and the top routes enumerator.
"""

from datetime import datetime, timedelta

import pytest

from routefinder.core.models import Criterion
from routefinder.core.services.search_strategies import (
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_MAX_TRANSFERS,
    BestCostLabels,
    FifoFrontier,
    ParetoLabels,
    PriceSearch,
    PriorityFrontier,
    SearchNode,
    TimeSearch,
    TransferSearch,
    strategy_for,
)
from routefinder.core.services.top_routes import TopRoutesEnumerator


class TestSearchNode:
    """Test SearchNode ordering."""

    def test_lower_cost_first(self):
        assert SearchNode("A", (), 10) < SearchNode("B", (), 20)

    def test_fewer_legs_break_ties(self, diamond_timetable):
        one_leg = diamond_timetable.departures_from("A")[:1]
        two_legs = diamond_timetable.departures_from("A")[:2]

        assert SearchNode("B", one_leg, 5) < SearchNode("B", two_legs, 5)
        assert not SearchNode("B", two_legs, 5) < SearchNode("B", one_leg, 5)


class TestFrontiers:
    """Test frontier containers."""

    def test_priority_frontier_pops_cheapest(self):
        frontier = PriorityFrontier()
        for cost in (30, 10, 20):
            frontier.push(SearchNode("X", (), cost))

        assert [frontier.pop().cost for _ in range(3)] == [10, 20, 30]
        assert not frontier

    def test_fifo_frontier_keeps_insertion_order(self):
        frontier = FifoFrontier()
        for cost in (30, 10, 20):
            frontier.push(SearchNode("X", (), cost))

        assert len(frontier) == 3
        assert [frontier.pop().cost for _ in range(3)] == [30, 10, 20]


class TestStrategyFactory:
    """Test strategy_for."""

    @pytest.mark.parametrize("criterion,expected", [
        (Criterion.TIME, TimeSearch),
        (Criterion.PRICE, PriceSearch),
        (Criterion.TRANSFERS, TransferSearch),
    ])
    def test_strategy_per_criterion(self, criterion, expected):
        strategy = strategy_for(criterion)

        assert isinstance(strategy, expected)
        assert strategy.criterion is criterion
        assert strategy.max_iterations == DEFAULT_MAX_ITERATIONS
        assert strategy.max_transfers == DEFAULT_MAX_TRANSFERS

    def test_transfer_search_uses_fifo(self):
        assert isinstance(TransferSearch().new_frontier(), FifoFrontier)
        assert isinstance(TimeSearch().new_frontier(), PriorityFrontier)

    def test_invalid_bounds(self):
        with pytest.raises(ValueError):
            TimeSearch(max_iterations=0)
        with pytest.raises(ValueError):
            PriceSearch(max_transfers=-1)


class TestStrategies:
    """Test the strategies directly against the diamond network."""

    def test_seed_one_node_per_departure(self, diamond_timetable):
        nodes = list(PriceSearch().seed(diamond_timetable, "A"))

        assert [(n.city, n.cost) for n in nodes] == [("B", 100), ("C", 500), ("D", 1000)]

    def test_expand_appends_leg(self, diamond_timetable):
        strategy = TimeSearch()
        node = next(iter(strategy.seed(diamond_timetable, "C")))

        children = list(strategy.expand(diamond_timetable, node))

        assert [child.city for child in children] == ["A"]
        assert len(children[0].legs) == 2

    def test_transfer_limit(self, diamond_timetable):
        strategy = TransferSearch(max_transfers=1)
        legs = diamond_timetable.departures_from("A")[:1]

        assert not strategy.exceeds_transfer_limit(SearchNode("B", legs, 0))
        assert strategy.exceeds_transfer_limit(SearchNode("B", legs * 3, 0))

    def test_searches_are_independent(self, diamond_timetable):
        strategy = TimeSearch()

        first = strategy.search(diamond_timetable, "A", "D")
        second = strategy.search(diamond_timetable, "A", "D")

        assert first == second


class TestLabelSets:
    """Test per-city pruning records."""

    @staticmethod
    def timed(city, departed, arrived, legs=()):
        day = datetime(2000, 1, 1)
        return SearchNode(city, legs, 0, day.replace(hour=departed[0], minute=departed[1]),
                          day.replace(hour=arrived[0], minute=arrived[1]))

    def test_best_cost_keeps_ties(self):
        labels = BestCostLabels()
        first = SearchNode("X", (), 10)
        tie = SearchNode("X", (), 10)

        assert labels.offer(first)
        assert labels.offer(tie)
        assert not labels.offer(SearchNode("X", (), 11))
        assert not labels.is_stale(first)

    def test_best_cost_marks_beaten_nodes_stale(self):
        labels = BestCostLabels()
        worse = SearchNode("X", (), 20)
        labels.offer(worse)

        labels.offer(SearchNode("X", (), 5))

        assert labels.is_stale(worse)

    def test_pareto_keeps_later_start_and_earlier_arrival(self):
        labels = ParetoLabels()
        short = self.timed("X", (8, 50), (9, 20))
        early = self.timed("X", (8, 0), (9, 0))

        assert labels.offer(short)
        assert labels.offer(early)
        assert not labels.is_stale(short)
        assert not labels.is_stale(early)

    def test_pareto_rejects_dominated_label(self):
        labels = ParetoLabels()
        labels.offer(self.timed("X", (8, 30), (9, 0)))

        assert not labels.offer(self.timed("X", (8, 0), (9, 10)))

    def test_pareto_replaces_dominated_label(self):
        labels = ParetoLabels()
        worse = self.timed("X", (8, 0), (9, 10))
        labels.offer(worse)

        assert labels.offer(self.timed("X", (8, 30), (9, 0)))
        assert labels.is_stale(worse)

    def test_pareto_keeps_identical_labels(self):
        labels = ParetoLabels()
        first = self.timed("X", (8, 0), (9, 0))
        second = self.timed("X", (8, 0), (9, 0))

        assert labels.offer(first)
        assert labels.offer(second)
        assert not labels.is_stale(first)

    def test_pareto_accepts_nodes_without_instants(self):
        labels = ParetoLabels()
        node = SearchNode("X", (), 0)

        assert labels.offer(node)
        assert labels.offer(node)
        assert not labels.is_stale(node)


class TestTimeSearchNodes:
    """Test instant tracking in TimeSearch."""

    def test_nodes_carry_departure_and_arrival(self, missed_connection_timetable):
        strategy = TimeSearch()

        nodes = list(strategy.seed(missed_connection_timetable, "S"))

        assert sorted(node.cost for node in nodes) == [30, 60]
        for node in nodes:
            assert node.arrived_at - node.departed_at == timedelta(minutes=node.cost)

    def test_connection_rolls_to_next_day(self, missed_connection_timetable):
        strategy = TimeSearch()
        nodes = {node.cost: node for node in strategy.seed(missed_connection_timetable, "S")}

        on_time = next(iter(strategy.expand(missed_connection_timetable, nodes[60])))
        missed = next(iter(strategy.expand(missed_connection_timetable, nodes[30])))

        assert on_time.cost == 80
        assert missed.cost == 1470
        assert missed.arrived_at.date() > missed.departed_at.date()

    def test_state_key_separates_instants(self, missed_connection_timetable):
        strategy = TimeSearch()
        first, second = strategy.seed(missed_connection_timetable, "S")

        assert strategy.state_key(first) != strategy.state_key(second)
        assert PriceSearch().state_key(first) == PriceSearch().state_key(second)


class TestTopRoutesEnumerator:
    """Test the top-K enumerator."""

    def test_first_result_is_optimal(self, diamond_timetable):
        strategy = PriceSearch()

        routes = TopRoutesEnumerator(strategy).enumerate(diamond_timetable, "A", "D", 3)

        assert routes[0] == strategy.search(diamond_timetable, "A", "D")

    def test_fewer_routes_than_limit(self, diamond_timetable):
        routes = TopRoutesEnumerator(TimeSearch()).enumerate(diamond_timetable, "A", "D", 10)

        assert len(routes) == 3

    def test_no_route(self, diamond_timetable):
        assert TopRoutesEnumerator(TransferSearch()).enumerate(diamond_timetable, "A", "E", 3) == []

    def test_iteration_guard(self, diamond_timetable, caplog):
        routes = TopRoutesEnumerator(PriceSearch(max_iterations=2)).enumerate(
            diamond_timetable, "A", "D", 3)

        assert len(routes) <= 1
        assert "stopped after" in caplog.text

    def test_time_routes_through_the_same_city_at_different_instants(self, missed_connection_timetable):
        routes = TopRoutesEnumerator(TimeSearch()).enumerate(missed_connection_timetable, "S", "E", 5)

        assert [route.total_minutes for route in routes] == [80, 1470]
