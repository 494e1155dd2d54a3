"""
Version information for the RouteFinder application.

Centralized version management for the route search engine, the timetable
tooling and the command line interface.
"""

# Core application information
__version__ = "1.2.0"
__version_info__ = (1, 2, 0)
__app_name__ = "RouteFinder"
__app_display_name__ = "RouteFinder - Multimodal Timetable Route Search"
__description__ = "Finds bus and train itineraries by travel time, price or number of transfers"

# Feature information
__features__ = [
    "Fastest itinerary with day rollover and minimum transfer buffers",
    "Cheapest itinerary",
    "Fewest transfers itinerary",
    "Top-K distinct itineraries for any criterion",
    "JSON timetable loading and saving",
    "Synthetic grid timetable generation",
]

# Search engine information
__search_criteria__ = ["time", "price", "transfers"]
__python_version_required__ = "3.9+"

# License information
__license__ = "GPL v3"


def get_version_string() -> str:
    """Get formatted version string."""
    return f"{__app_name__} v{__version__}"

