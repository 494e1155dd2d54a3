"""
Schedule Arithmetic

Turns time-of-day departures into absolute instants for a chain of legs.

Timetables carry no calendar dates, so every itinerary is anchored on a
single date and a leg whose time-of-day falls before the earliest instant
it can be boarded is understood to run the following day.
"""

import logging
from functools import lru_cache
from datetime import date, datetime, time, timedelta
from typing import List, Optional, Sequence, Tuple

from .timetable import Departure, TIME_FORMAT

logger = logging.getLogger(__name__)

ONE_DAY = timedelta(days=1)


def parse_time_of_day(value: str) -> time:
    """
    Parse an HH:MM time-of-day.

    Raises:
        ValueError: If the value is not a valid time
    """
    if not isinstance(value, str):
        raise ValueError(f"Time of day must be a string, got {type(value).__name__}")
    return _strptime_time(value.strip())


@lru_cache(maxsize=2048)
def _strptime_time(text: str) -> time:
    return datetime.strptime(text, TIME_FORMAT).time()


def anchor_departure(departure: Departure, anchor_date: Optional[date] = None) -> datetime:
    """Absolute departure instant of a leg on the anchor date (today by default)."""
    if anchor_date is None:
        anchor_date = date.today()
    return datetime.combine(anchor_date, parse_time_of_day(departure.departure_time))


def arrival_instant(departure_instant: datetime, duration: int) -> datetime:
    return departure_instant + timedelta(minutes=duration)


def earliest_boarding(previous_arrival: datetime, departure: Departure) -> datetime:
    """First instant a connecting leg may be boarded after arriving on the previous one."""
    return previous_arrival + timedelta(minutes=departure.min_transfer_time)


def next_departure_instant(departure: Departure, earliest: datetime) -> datetime:
    """
    Place a leg's fixed time-of-day on the calendar at or after an instant.

    The time is combined with the date of the earliest boardable instant and
    moved one day forward if that would be too early.
    """
    candidate = datetime.combine(earliest.date(), parse_time_of_day(departure.departure_time))
    if candidate < earliest:
        candidate += ONE_DAY
    return candidate


def build_schedule(legs: Sequence[Departure],
                   anchor_date: Optional[date] = None) -> List[Tuple[datetime, datetime]]:
    """
    Compute (departure, arrival) instants for every leg of a chain.

    Args:
        legs: Connected legs in travel order
        anchor_date: Calendar date of the first departure

    Returns:
        One (departure, arrival) pair per leg

    Raises:
        ValueError: If any leg has a malformed departure time
    """
    schedule: List[Tuple[datetime, datetime]] = []
    if not legs:
        return schedule

    departure_at = anchor_departure(legs[0], anchor_date)
    arrival_at = arrival_instant(departure_at, legs[0].duration)
    schedule.append((departure_at, arrival_at))

    for leg in legs[1:]:
        departure_at = next_departure_instant(leg, earliest_boarding(arrival_at, leg))
        arrival_at = arrival_instant(departure_at, leg.duration)
        schedule.append((departure_at, arrival_at))

    return schedule


def elapsed_minutes(legs: Sequence[Departure], anchor_date: Optional[date] = None) -> int:
    """
    Total minutes from the first departure to the final arrival.

    Waiting time forced by minimum transfer buffers and day rollover is
    included. A chain containing a malformed time is costed as zero.
    """
    if not legs:
        return 0

    try:
        schedule = build_schedule(legs, anchor_date)
    except ValueError as e:
        logger.debug(f"Cannot compute travel time for {len(legs)} legs: {e}")
        return 0

    first_departure = schedule[0][0]
    last_arrival = schedule[-1][1]
    return int((last_arrival - first_departure).total_seconds() // 60)
