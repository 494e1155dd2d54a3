"""
Criterion Cost Model

Per-criterion path costs and ordering keys.
"""

from enum import Enum
from typing import Callable, Dict, Sequence, Tuple, Union

from .schedule import elapsed_minutes
from .timetable import Departure


class Criterion(Enum):
    """What an itinerary search optimises for."""
    TIME = "time"
    PRICE = "price"
    TRANSFERS = "transfers"

    @classmethod
    def parse(cls, value: Union['Criterion', str]) -> 'Criterion':
        """Parse a criterion by name or value, case-insensitively."""
        if isinstance(value, cls):
            return value
        text = str(value).strip()
        for criterion in cls:
            if text.lower() in (criterion.value, criterion.name.lower()):
                return criterion
        raise ValueError(f"Unknown criterion: {value!r} (expected one of "
                         f"{', '.join(c.value for c in cls)})")


def total_price(legs: Sequence[Departure]) -> int:
    return sum(leg.price for leg in legs)


def transfer_count(legs: Sequence[Departure]) -> int:
    return max(len(legs) - 1, 0)


_PATH_COSTS: Dict[Criterion, Callable[[Sequence[Departure]], int]] = {
    Criterion.TIME: elapsed_minutes,
    Criterion.PRICE: total_price,
    Criterion.TRANSFERS: transfer_count,
}


def path_cost(criterion: Criterion, legs: Sequence[Departure]) -> int:
    """Aggregate cost of a chain of legs under a criterion."""
    return _PATH_COSTS[criterion](legs)


def sort_key(criterion: Criterion, legs: Sequence[Departure]) -> Tuple[int, ...]:
    """Ordering key: path cost, with fewer legs breaking ties for TIME."""
    if criterion is Criterion.TIME:
        return (elapsed_minutes(legs), len(legs))
    return (path_cost(criterion, legs),)
