"""
Global pytest configuration and fixtures.
"""

import json
from datetime import date

import pytest

from routefinder.core.models import TimetableBuilder, TransportMode
from routefinder.core.services import RouteFinder, TimetableGenerator


ANCHOR_DATE = date(2024, 3, 15)


def build_city(builder, name):
    """Register a city using '<name>_bus' and '<name>_train' station ids."""
    builder.add_city(name, f"{name}_bus", f"{name}_train")


@pytest.fixture
def anchor_date():
    """Fixed calendar date for schedule assertions."""
    return ANCHOR_DATE


@pytest.fixture
def diamond_timetable():
    """
    Four cities where each criterion has a different winner from A to D.

    A -> C -> D   fastest  (60 min, 900, 1 transfer)
    A -> B -> D   cheapest (130 min, 200, 1 transfer)
    A -> D        direct   (200 min, 1000, 0 transfers)
    """
    builder = TimetableBuilder()
    for name in ("A", "B", "C", "D", "E"):
        build_city(builder, name)

    builder.add_departure("A_bus", TransportMode.BUS, "B", "08:00", 60, 100, 5)
    builder.add_departure("A_train", TransportMode.TRAIN, "C", "08:00", 30, 500, 5)
    builder.add_departure("A_train", TransportMode.TRAIN, "D", "07:00", 200, 1000, 0)
    builder.add_departure("B_bus", TransportMode.BUS, "D", "09:10", 60, 100, 10)
    builder.add_departure("C_train", TransportMode.TRAIN, "D", "08:40", 20, 400, 5)
    builder.add_departure("D_bus", TransportMode.BUS, "A", "12:00", 30, 50, 5)
    # E is isolated: no departures in or out
    return builder.build()


@pytest.fixture
def diamond_finder(diamond_timetable):
    return RouteFinder(diamond_timetable)


@pytest.fixture
def overnight_timetable():
    """Two legs where the connection only runs after midnight."""
    builder = TimetableBuilder()
    for name in ("X", "Y", "Z"):
        build_city(builder, name)

    builder.add_departure("X_train", TransportMode.TRAIN, "Y", "23:00", 50, 300, 0)
    builder.add_departure("Y_bus", TransportMode.BUS, "Z", "00:10", 30, 150, 5)
    return builder.build()


@pytest.fixture
def missed_connection_timetable():
    """
    The later, shorter S -> X run arrives too late for X -> E.

    S -> X 08:00 -> X -> E 09:10   80 min
    S -> X 08:50 -> X -> E 09:10   1470 min (waits for the next day)
    """
    builder = TimetableBuilder()
    for name in ("S", "X", "E"):
        build_city(builder, name)

    builder.add_departure("S_bus", TransportMode.BUS, "X", "08:00", 60, 100, 0)
    builder.add_departure("S_train", TransportMode.TRAIN, "X", "08:50", 30, 200, 0)
    builder.add_departure("X_bus", TransportMode.BUS, "E", "09:10", 10, 50, 0)
    return builder.build()


@pytest.fixture
def grid_timetable():
    """Seeded 4x4 synthetic timetable."""
    return TimetableGenerator(4, 4, seed=1234).generate()


@pytest.fixture
def timetable_document():
    """A small timetable in the JSON document format."""
    return {
        "countryMap": [["G_0_0", "G_0_1"]],
        "stations": [
            {"city": "G_0_0", "busStation": "A_0_0", "trainStation": "Z_0_0"},
            {"city": "G_0_1", "busStation": "A_0_1", "trainStation": "Z_0_1"},
        ],
        "departures": [
            {"type": "bus", "from": "A_0_0", "to": "G_0_1", "departureTime": "08:15",
             "duration": 45, "price": 320, "minTransferTime": 10},
            {"type": "train", "from": "Z_0_0", "to": "G_0_1", "departureTime": "09:00",
             "duration": 30, "price": 540, "minTransferTime": 15},
            {"type": "bus", "from": "A_0_1", "to": "G_0_0", "departureTime": "17:45",
             "duration": 50, "price": 300, "minTransferTime": 5},
        ],
    }


@pytest.fixture
def timetable_file(tmp_path, timetable_document):
    """Provide the small timetable document written to a temporary file."""
    path = tmp_path / "transport_data.json"
    path.write_text(json.dumps(timetable_document), encoding="utf-8")
    return path
