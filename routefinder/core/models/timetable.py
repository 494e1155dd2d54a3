"""
Timetable Model

Read-only data model for cities, stations and scheduled departures.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Optional, Sequence, Tuple, Any


TIME_FORMAT = "%H:%M"


class TransportMode(Enum):
    """Kind of vehicle serving a departure."""
    BUS = "bus"
    TRAIN = "train"

    @classmethod
    def parse(cls, value: str) -> 'TransportMode':
        """Parse a mode name such as 'bus' or 'Train'."""
        try:
            return cls(value.strip().lower())
        except (AttributeError, ValueError):
            raise ValueError(f"Unknown transport mode: {value!r}")


@dataclass(frozen=True)
class Departure:
    """
    A single scheduled run between two cities (one leg of an itinerary).

    The departure time is a time-of-day string in HH:MM format; there is no
    calendar date attached to it.
    """

    mode: TransportMode
    origin: str
    destination: str
    departure_time: str
    duration: int
    price: int
    min_transfer_time: int = 0
    station_id: Optional[str] = None

    def __post_init__(self):
        """Validate departure data."""
        if not self.origin or not self.destination:
            raise ValueError("Origin and destination cannot be empty")
        if self.duration < 0:
            raise ValueError(f"Duration cannot be negative: {self.duration}")
        if self.price < 0:
            raise ValueError(f"Price cannot be negative: {self.price}")
        if self.min_transfer_time < 0:
            raise ValueError(f"Minimum transfer time cannot be negative: {self.min_transfer_time}")

    @property
    def arrival_time(self) -> str:
        """Arrival time-of-day, wrapping past midnight, or '??:??' if unparseable."""
        try:
            departure = datetime.strptime(self.departure_time, TIME_FORMAT)
        except (TypeError, ValueError):
            return "??:??"
        return (departure + timedelta(minutes=self.duration)).strftime(TIME_FORMAT)

    def to_dict(self) -> Dict[str, Any]:
        """Convert departure to dictionary representation."""
        return {
            "mode": self.mode.value,
            "origin": self.origin,
            "destination": self.destination,
            "departure_time": self.departure_time,
            "arrival_time": self.arrival_time,
            "duration": self.duration,
            "price": self.price,
            "min_transfer_time": self.min_transfer_time,
            "station_id": self.station_id,
        }

    def __str__(self) -> str:
        return (f"{self.mode.value}: {self.origin} -> {self.destination} "
                f"at {self.departure_time} ({self.duration} min, {self.price})")


@dataclass(frozen=True)
class Station:
    """A bus or train station and the departures leaving from it, in timetable order."""

    id: str
    mode: TransportMode
    departures: Tuple[Departure, ...] = ()

    def __post_init__(self):
        if not self.id or not self.id.strip():
            raise ValueError("Station id cannot be empty")


@dataclass(frozen=True)
class City:
    """A city served by exactly one bus station and one train station."""

    name: str
    bus_station: Station
    train_station: Station

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ValueError("City name cannot be empty")

    @property
    def stations(self) -> Tuple[Station, Station]:
        return (self.bus_station, self.train_station)

    @property
    def departures(self) -> Tuple[Departure, ...]:
        """All departures leaving the city, bus station first."""
        return self.bus_station.departures + self.train_station.departures


class Timetable:
    """
    Immutable collection of cities keyed by name.

    Built once by a TimetableBuilder and then shared read-only between any
    number of searches.
    """

    def __init__(self, cities: Mapping[str, City],
                 country_map: Optional[Sequence[Sequence[str]]] = None):
        self._cities: Mapping[str, City] = MappingProxyType(dict(cities))
        self._stations: Mapping[str, Station] = MappingProxyType({
            station.id: station
            for city in self._cities.values()
            for station in city.stations
        })
        self._country_map: Tuple[Tuple[str, ...], ...] = tuple(
            tuple(row) for row in (country_map or ())
        )

    @property
    def cities(self) -> Mapping[str, City]:
        return self._cities

    @property
    def city_names(self) -> List[str]:
        return sorted(self._cities)

    @property
    def country_map(self) -> Tuple[Tuple[str, ...], ...]:
        return self._country_map

    @property
    def departure_count(self) -> int:
        return sum(len(city.departures) for city in self._cities.values())

    def get_city(self, name: str) -> Optional[City]:
        return self._cities.get(name)

    def get_station(self, station_id: str) -> Optional[Station]:
        return self._stations.get(station_id)

    def departures_from(self, city_name: str) -> Tuple[Departure, ...]:
        """Departures leaving either station of a city; empty for unknown cities."""
        city = self._cities.get(city_name)
        if city is None:
            return ()
        return city.departures

    def __contains__(self, city_name: object) -> bool:
        return city_name in self._cities

    def __len__(self) -> int:
        return len(self._cities)

    def __iter__(self) -> Iterator[City]:
        return iter(self._cities.values())

    def __repr__(self) -> str:
        return f"Timetable(cities={len(self)}, departures={self.departure_count})"


class TimetableBuilder:
    """Mutable staging area used by loaders and generators to assemble a Timetable."""

    def __init__(self):
        self._city_stations: Dict[str, Tuple[str, str]] = {}
        self._station_city: Dict[str, str] = {}
        self._station_modes: Dict[str, TransportMode] = {}
        self._departures: Dict[str, List[Departure]] = {}
        self._country_map: List[List[str]] = []

    def add_city(self, name: str, bus_station_id: str, train_station_id: str) -> 'TimetableBuilder':
        """Register a city and its two stations."""
        if name in self._city_stations:
            raise ValueError(f"Duplicate city: {name}")
        if bus_station_id == train_station_id:
            raise ValueError(f"City {name} needs two distinct stations")
        for station_id in (bus_station_id, train_station_id):
            if station_id in self._station_city:
                raise ValueError(f"Duplicate station id: {station_id}")

        self._city_stations[name] = (bus_station_id, train_station_id)
        self._station_city[bus_station_id] = name
        self._station_city[train_station_id] = name
        self._station_modes[bus_station_id] = TransportMode.BUS
        self._station_modes[train_station_id] = TransportMode.TRAIN
        self._departures[bus_station_id] = []
        self._departures[train_station_id] = []
        return self

    def add_departure(self, station_id: str, mode: TransportMode, destination: str,
                      departure_time: str, duration: int, price: int,
                      min_transfer_time: int = 0) -> Departure:
        """
        Add a departure leaving from a registered station.

        Raises:
            KeyError: If the station id has not been registered
            ValueError: If the departure data is invalid
        """
        if station_id not in self._station_city:
            raise KeyError(f"Unknown station id: {station_id}")

        departure = Departure(
            mode=mode,
            origin=self._station_city[station_id],
            destination=destination,
            departure_time=departure_time,
            duration=duration,
            price=price,
            min_transfer_time=min_transfer_time,
            station_id=station_id,
        )
        self._departures[station_id].append(departure)
        return departure

    def has_station(self, station_id: str) -> bool:
        return station_id in self._station_city

    def set_country_map(self, grid: Sequence[Sequence[str]]) -> 'TimetableBuilder':
        self._country_map = [list(row) for row in grid]
        return self

    def build(self) -> Timetable:
        """Freeze the staged data into a Timetable."""
        cities = {}
        for name, (bus_id, train_id) in self._city_stations.items():
            cities[name] = City(
                name=name,
                bus_station=Station(bus_id, self._station_modes[bus_id], tuple(self._departures[bus_id])),
                train_station=Station(train_id, self._station_modes[train_id], tuple(self._departures[train_id])),
            )
        return Timetable(cities, self._country_map)
