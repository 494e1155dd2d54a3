"""
Helper utility functions for the RouteFinder application.

This module contains formatting helpers for durations, prices and
itineraries shown by the command line interface.
"""

from typing import List, Optional

from ..core.models.criteria import Criterion
from ..core.models.itinerary import Itinerary
from ..core.models.timetable import TIME_FORMAT


def format_duration(total_minutes: int) -> str:
    """
    Format a number of minutes as a human-readable duration.

    Args:
        total_minutes: Duration in minutes

    Returns:
        str: Formatted duration string (e.g., "1h 30min", "45min")
    """
    hours = total_minutes // 60
    minutes = total_minutes % 60

    if hours > 0:
        return f"{hours}h {minutes}min"
    else:
        return f"{minutes}min"


def format_price(price: int, currency: str = "KM") -> str:
    return f"{price} {currency}"


def format_itinerary_summary(itinerary: Itinerary, currency: str = "KM") -> str:
    """
    One-line summary: duration, price and transfers.

    Args:
        itinerary: Itinerary to summarise
        currency: Currency label appended to the price

    Returns:
        str: e.g. "2h 5min, 640 KM, 1 transfer"
    """
    transfers = itinerary.transfer_count
    noun = "transfer" if transfers == 1 else "transfers"
    return (f"{format_duration(itinerary.total_minutes)}, "
            f"{format_price(itinerary.total_price, currency)}, {transfers} {noun}")


def format_itinerary_legs(itinerary: Itinerary, currency: str = "KM") -> List[str]:
    """
    Step-by-step lines for each leg with departure and arrival times.

    Falls back to the timetable's own times when the schedule cannot be
    computed.
    """
    try:
        schedule = itinerary.schedule()
    except ValueError:
        schedule = None

    lines = []
    for index, leg in enumerate(itinerary, start=1):
        if schedule is not None:
            departs, arrives = schedule[index - 1]
            departs_text = departs.strftime(TIME_FORMAT)
            arrives_text = arrives.strftime(TIME_FORMAT)
            day_offset = (arrives.date() - schedule[0][0].date()).days
            if day_offset > 0:
                arrives_text += f" (+{day_offset}d)"
        else:
            departs_text = leg.departure_time
            arrives_text = leg.arrival_time

        lines.append(f"{index}. {leg.origin} ({departs_text}) -> {leg.destination} "
                     f"({arrives_text}) [{leg.mode.value}] - {format_price(leg.price, currency)}")
    return lines


def describe_route(itinerary: Optional[Itinerary], criterion: Criterion,
                   currency: str = "KM") -> str:
    """Multi-line description of an itinerary, or a no-route message."""
    if itinerary is None:
        return "No route available."

    lines = [f"{itinerary.start} -> {itinerary.end} (by {criterion.value})"]
    lines.extend(format_itinerary_legs(itinerary, currency))
    lines.append(f"Total: {format_itinerary_summary(itinerary, currency)}")
    return "\n".join(lines)
