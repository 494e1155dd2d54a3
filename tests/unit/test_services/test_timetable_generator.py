"""
Unit tests for TimetableGenerator.
"""

import pytest

from routefinder.core.models import TransportMode
from routefinder.core.models.schedule import parse_time_of_day
from routefinder.core.services import TimetableGenerator


class TestTimetableGenerator:
    """Test synthetic grid generation."""

    def test_grid_shape(self):
        timetable = TimetableGenerator(3, 4, seed=7).generate()

        assert len(timetable) == 12
        assert len(timetable.country_map) == 3
        assert all(len(row) == 4 for row in timetable.country_map)
        assert timetable.country_map[2][3] == "G_2_3"

    def test_station_naming(self):
        timetable = TimetableGenerator(2, 2, seed=7).generate()
        city = timetable.get_city("G_1_0")

        assert city.bus_station.id == "A_1_0"
        assert city.train_station.id == "Z_1_0"

    def test_departures_per_station(self):
        timetable = TimetableGenerator(3, 3, departures_per_station=4, seed=7).generate()

        for city in timetable:
            assert len(city.bus_station.departures) == 4
            assert len(city.train_station.departures) == 4
            assert all(d.mode is TransportMode.BUS for d in city.bus_station.departures)
            assert all(d.mode is TransportMode.TRAIN for d in city.train_station.departures)

    def test_departures_go_to_neighbours(self):
        generator = TimetableGenerator(4, 3, seed=99)
        timetable = generator.generate()

        for x in range(4):
            for y in range(3):
                neighbours = set(generator.neighbors(x, y))
                for departure in timetable.departures_from(generator.city_name(x, y)):
                    assert departure.destination in neighbours

    def test_value_ranges(self, grid_timetable):
        for city in grid_timetable:
            for departure in city.departures:
                assert 30 <= departure.duration <= 180
                assert 100 <= departure.price <= 1000
                assert 5 <= departure.min_transfer_time <= 30
                assert parse_time_of_day(departure.departure_time).minute in (0, 15, 30, 45)

    def test_same_seed_same_timetable(self):
        first = TimetableGenerator(3, 3, seed=42).generate()
        second = TimetableGenerator(3, 3, seed=42).generate()

        for name in first.city_names:
            assert first.departures_from(name) == second.departures_from(name)

    def test_single_city_grid_loops_back(self):
        timetable = TimetableGenerator(1, 1, seed=3).generate()

        assert timetable.city_names == ["G_0_0"]
        assert all(d.destination == "G_0_0" for d in timetable.departures_from("G_0_0"))

    def test_neighbors_at_corner_and_centre(self):
        generator = TimetableGenerator(3, 3)

        assert sorted(generator.neighbors(0, 0)) == ["G_0_1", "G_1_0"]
        assert len(generator.neighbors(1, 1)) == 4

    @pytest.mark.parametrize("rows,cols", [(0, 3), (3, 0), (-1, -1)])
    def test_invalid_grid(self, rows, cols):
        with pytest.raises(ValueError):
            TimetableGenerator(rows, cols)
