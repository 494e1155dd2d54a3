"""
JSON Timetable Repository Implementation

Repository implementation for reading and writing timetables as JSON documents
of the form::

    {
      "countryMap": [["G_0_0", "G_0_1"], ...],
      "stations": [{"city": "G_0_0", "busStation": "A_0_0", "trainStation": "Z_0_0"}, ...],
      "departures": [{"type": "bus", "from": "A_0_0", "to": "G_0_1",
                      "departureTime": "08:15", "duration": 45, "price": 320,
                      "minTransferTime": 10}, ...]
    }

Departures name their origin by station id and their destination by city name.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Union

from ..interfaces.i_timetable_repository import ITimetableRepository, TimetableLoadError
from ..models.timetable import Timetable, TimetableBuilder, TransportMode


class JsonTimetableRepository(ITimetableRepository):
    """Repository implementation for JSON-based timetable data."""

    def __init__(self, file_path: Union[str, Path]):
        """
        Initialize the JSON timetable repository.

        Args:
            file_path: Path to the timetable JSON file
        """
        self.file_path = Path(file_path)
        self.logger = logging.getLogger(__name__)
        self.logger.info(f"Initialized JsonTimetableRepository with file: {self.file_path}")

    def load_timetable(self) -> Timetable:
        """Load the timetable from the JSON file."""
        self.logger.info(f"Loading timetable from {self.file_path}")

        if not self.file_path.exists():
            raise TimetableLoadError(f"Timetable file not found: {self.file_path}")

        try:
            with open(self.file_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            self.logger.error(f"JSON parsing failed at line {e.lineno}, column {e.colno}: {e}")
            raise TimetableLoadError(f"Malformed timetable JSON in {self.file_path}: {e}")
        except OSError as e:
            raise TimetableLoadError(f"Cannot read timetable file {self.file_path}: {e}")

        timetable = self.parse_document(data)
        self.logger.info(f"Loaded {len(timetable)} cities and {timetable.departure_count} departures")
        return timetable

    def parse_document(self, data: Any) -> Timetable:
        """
        Build a timetable from an already decoded JSON document.

        Raises:
            TimetableLoadError: If the document has no usable stations section
        """
        if not isinstance(data, dict) or not isinstance(data.get("stations"), list):
            raise TimetableLoadError("Timetable document must contain a 'stations' list")

        builder = TimetableBuilder()

        for index, station_data in enumerate(data["stations"]):
            try:
                builder.add_city(
                    str(station_data["city"]),
                    str(station_data["busStation"]),
                    str(station_data["trainStation"]),
                )
            except (KeyError, TypeError, ValueError) as e:
                self.logger.error(f"Skipping malformed station entry #{index}: {e}")

        skipped = 0
        for index, departure_data in enumerate(data.get("departures") or []):
            try:
                station_id = str(departure_data["from"])
                if not builder.has_station(station_id):
                    self.logger.debug(f"Skipping departure #{index} from unknown station {station_id}")
                    skipped += 1
                    continue

                builder.add_departure(
                    station_id=station_id,
                    mode=TransportMode.parse(departure_data["type"]),
                    destination=str(departure_data["to"]),
                    departure_time=str(departure_data["departureTime"]),
                    duration=int(departure_data["duration"]),
                    price=int(departure_data["price"]),
                    min_transfer_time=int(departure_data.get("minTransferTime", 0)),
                )
            except (KeyError, TypeError, ValueError) as e:
                self.logger.error(f"Skipping malformed departure entry #{index}: {e}")
                skipped += 1

        if skipped:
            self.logger.warning(f"Skipped {skipped} departures while loading timetable")

        country_map = data.get("countryMap")
        if isinstance(country_map, list):
            builder.set_country_map([row for row in country_map if isinstance(row, list)])

        return builder.build()

    @staticmethod
    def to_document(timetable: Timetable) -> Dict[str, Any]:
        """Convert a timetable to its JSON document representation."""
        stations: List[Dict[str, str]] = []
        departures: List[Dict[str, Any]] = []

        for city in timetable:
            stations.append({
                "city": city.name,
                "busStation": city.bus_station.id,
                "trainStation": city.train_station.id,
            })
            for station in city.stations:
                for departure in station.departures:
                    departures.append({
                        "type": departure.mode.value,
                        "from": station.id,
                        "to": departure.destination,
                        "departureTime": departure.departure_time,
                        "duration": departure.duration,
                        "price": departure.price,
                        "minTransferTime": departure.min_transfer_time,
                    })

        return {
            "countryMap": [list(row) for row in timetable.country_map],
            "stations": stations,
            "departures": departures,
        }

    def save_timetable(self, timetable: Timetable) -> bool:
        """Write the timetable to the JSON file."""
        try:
            self.file_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.file_path, 'w', encoding='utf-8') as f:
                json.dump(self.to_document(timetable), f, indent=2, ensure_ascii=False)
            self.logger.info(f"Saved {len(timetable)} cities to {self.file_path}")
            return True
        except OSError as e:
            self.logger.error(f"Failed to save timetable to {self.file_path}: {e}")
            return False
