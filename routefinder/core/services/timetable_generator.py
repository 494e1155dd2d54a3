"""
Timetable Generator

Builds synthetic grid-shaped timetables for demos and load testing.
"""

import logging
import random
from typing import List, Optional, Tuple

from ..models.timetable import Timetable, TimetableBuilder, TransportMode


DEPARTURES_PER_STATION = 5


class TimetableGenerator:
    """
    Generates an n x m grid of cities.

    City ``G_x_y`` has bus station ``A_x_y`` and train station ``Z_x_y``; every
    station gets a fixed number of departures to a random orthogonal
    neighbour (or back to its own city on a 1 x 1 grid).
    """

    def __init__(self, rows: int, cols: int,
                 departures_per_station: int = DEPARTURES_PER_STATION,
                 seed: Optional[int] = None):
        if rows < 1 or cols < 1:
            raise ValueError(f"Grid must be at least 1x1, got {rows}x{cols}")
        if departures_per_station < 0:
            raise ValueError("departures_per_station cannot be negative")

        self.rows = rows
        self.cols = cols
        self.departures_per_station = departures_per_station
        self._random = random.Random(seed)
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def city_name(x: int, y: int) -> str:
        return f"G_{x}_{y}"

    @staticmethod
    def station_ids(x: int, y: int) -> Tuple[str, str]:
        return f"A_{x}_{y}", f"Z_{x}_{y}"

    def generate(self) -> Timetable:
        """Generate a new timetable."""
        builder = TimetableBuilder()
        builder.set_country_map([
            [self.city_name(x, y) for y in range(self.cols)]
            for x in range(self.rows)
        ])

        for x in range(self.rows):
            for y in range(self.cols):
                bus_id, train_id = self.station_ids(x, y)
                builder.add_city(self.city_name(x, y), bus_id, train_id)

        for x in range(self.rows):
            for y in range(self.cols):
                bus_id, train_id = self.station_ids(x, y)
                for station_id, mode in ((bus_id, TransportMode.BUS), (train_id, TransportMode.TRAIN)):
                    for _ in range(self.departures_per_station):
                        self._add_random_departure(builder, station_id, mode, x, y)

        timetable = builder.build()
        self.logger.info(f"Generated {self.rows}x{self.cols} timetable with "
                         f"{timetable.departure_count} departures")
        return timetable

    def _add_random_departure(self, builder: TimetableBuilder, station_id: str,
                              mode: TransportMode, x: int, y: int) -> None:
        neighbors = self.neighbors(x, y)
        destination = self._random.choice(neighbors) if neighbors else self.city_name(x, y)

        hour = self._random.randrange(24)
        minute = self._random.randrange(4) * 15

        builder.add_departure(
            station_id=station_id,
            mode=mode,
            destination=destination,
            departure_time=f"{hour:02d}:{minute:02d}",
            duration=self._random.randint(30, 180),
            price=self._random.randint(100, 1000),
            min_transfer_time=self._random.randint(5, 30),
        )

    def neighbors(self, x: int, y: int) -> List[str]:
        """Names of the orthogonally adjacent cities inside the grid."""
        result = []
        for dx, dy in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            nx, ny = x + dx, y + dy
            if 0 <= nx < self.rows and 0 <= ny < self.cols:
                result.append(self.city_name(nx, ny))
        return result
