"""
RouteFinder multimodal route search

Finds bus and train itineraries through a static timetable.

Features:
- Fastest route with day rollover and minimum transfer buffers
- Cheapest route
- Route with fewest transfers
- Top-K distinct routes for any criterion
"""

__version__ = "1.2.0"
__description__ = "RouteFinder multimodal route search"
