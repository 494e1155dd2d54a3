"""
Itinerary Model

A complete trip from a start city to an end city as an ordered chain of legs.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple

from .criteria import Criterion, path_cost, total_price, transfer_count
from .schedule import build_schedule, elapsed_minutes
from .timetable import Departure, TransportMode


@dataclass(frozen=True)
class Itinerary:
    """
    Immutable chain of departures where each leg starts where the previous one ended.

    Two itineraries are equal exactly when their leg sequences are equal.
    """

    legs: Tuple[Departure, ...]

    def __post_init__(self):
        """Validate the leg chain."""
        if not isinstance(self.legs, tuple):
            object.__setattr__(self, 'legs', tuple(self.legs))

        if not self.legs:
            raise ValueError("Itinerary must have at least one leg")

        for previous, following in zip(self.legs, self.legs[1:]):
            if previous.destination != following.origin:
                raise ValueError(
                    f"Disconnected legs: {previous.destination} -> {following.origin}"
                )

    @classmethod
    def from_legs(cls, legs: Sequence[Departure]) -> 'Itinerary':
        return cls(tuple(legs))

    @property
    def start(self) -> str:
        return self.legs[0].origin

    @property
    def end(self) -> str:
        return self.legs[-1].destination

    @property
    def total_price(self) -> int:
        return total_price(self.legs)

    @property
    def transfer_count(self) -> int:
        return transfer_count(self.legs)

    @property
    def total_minutes(self) -> int:
        """Elapsed minutes including transfer buffers and overnight waits."""
        return elapsed_minutes(self.legs)

    @property
    def is_direct(self) -> bool:
        return len(self.legs) == 1

    @property
    def modes_used(self) -> List[TransportMode]:
        modes: List[TransportMode] = []
        for leg in self.legs:
            if leg.mode not in modes:
                modes.append(leg.mode)
        return modes

    @property
    def transfer_cities(self) -> List[str]:
        return [leg.origin for leg in self.legs[1:]]

    def cost(self, criterion: Criterion) -> int:
        return path_cost(criterion, self.legs)

    def schedule(self, anchor_date: Optional[date] = None) -> List[Tuple[datetime, datetime]]:
        """
        Absolute (departure, arrival) instants per leg.

        Raises:
            ValueError: If a leg has a malformed departure time
        """
        return build_schedule(self.legs, anchor_date)

    def to_dict(self) -> Dict[str, Any]:
        """Convert itinerary to dictionary representation."""
        return {
            "start": self.start,
            "end": self.end,
            "legs": [leg.to_dict() for leg in self.legs],
            "total_minutes": self.total_minutes,
            "total_price": self.total_price,
            "transfer_count": self.transfer_count,
            "modes_used": [mode.value for mode in self.modes_used],
        }

    def __len__(self) -> int:
        return len(self.legs)

    def __iter__(self) -> Iterator[Departure]:
        return iter(self.legs)

    def __getitem__(self, index: int) -> Departure:
        return self.legs[index]

    def __str__(self) -> str:
        return f"{self.start} -> {self.end} ({len(self.legs)} legs, {self.transfer_count} transfers)"

    def __repr__(self) -> str:
        return (f"Itinerary(start='{self.start}', end='{self.end}', "
                f"legs={len(self.legs)}, price={self.total_price})")
