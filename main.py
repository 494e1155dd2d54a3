"""
Main entry point for the RouteFinder application.

This module parses the command line, sets up logging, loads the configuration
and timetable, and runs route searches or timetable generation.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from routefinder.core.interfaces import TimetableLoadError
from routefinder.core.models import Criterion
from routefinder.core.services import JsonTimetableRepository, ServiceFactory
from routefinder.managers.config_manager import (
    ConfigData,
    ConfigManager,
    ConfigurationError,
    LoggingConfig,
)
from routefinder.utils.helpers import describe_route, format_itinerary_summary
from version import get_version_string


def setup_logging(settings: LoggingConfig, verbose: bool = False) -> None:
    """Setup application logging with console and optional file output."""
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    if settings.log_file:
        log_file = Path(settings.log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(str(log_file)))

    logging.basicConfig(
        level=logging.DEBUG if verbose else getattr(logging, settings.level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="routefinder",
        description="Find bus and train itineraries by time, price or transfers.",
    )
    parser.add_argument("--version", action="version", version=get_version_string())
    parser.add_argument("--config", help="Path to the JSON configuration file")
    parser.add_argument("--timetable", help="Path to the timetable JSON file")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    route = subparsers.add_parser("route", help="Search itineraries between two cities")
    route.add_argument("start", help="Starting city")
    route.add_argument("end", help="Destination city")
    route.add_argument("-c", "--criterion", default="time",
                       help="time, price or transfers (default: time)")
    route.add_argument("-n", "--top", type=int, default=None,
                       help="Number of alternative routes to list")
    route.add_argument("--json", action="store_true", help="Print results as JSON")

    subparsers.add_parser("cities", help="List the cities in the timetable")

    generate = subparsers.add_parser("generate", help="Generate a synthetic grid timetable")
    generate.add_argument("rows", type=int)
    generate.add_argument("cols", type=int)
    generate.add_argument("-o", "--output", required=True, help="Where to write the timetable")
    generate.add_argument("--seed", type=int, default=None)

    return parser


def load_configuration(config_path: Optional[str]) -> ConfigData:
    """Load configuration from an explicit file, or use defaults."""
    if config_path is None:
        return ConfigData()
    return ConfigManager(config_path).load_config()


def run_route(factory: ServiceFactory, args: argparse.Namespace) -> int:
    criterion = Criterion.parse(args.criterion)
    route_service = factory.get_route_service()

    if args.top is None:
        route = route_service.find_route(args.start, args.end, criterion)
        routes = [route] if route is not None else []
    else:
        routes = route_service.find_top_routes(args.start, args.end, criterion, args.top)

    if args.json:
        print(json.dumps([itinerary.to_dict() for itinerary in routes], indent=2))
    elif not routes:
        print(describe_route(None, criterion))
    elif len(routes) == 1:
        print(describe_route(routes[0], criterion))
    else:
        for rank, itinerary in enumerate(routes, start=1):
            print(f"#{rank}: {format_itinerary_summary(itinerary)}")
            print(describe_route(itinerary, criterion))
            print()

    return 0 if routes else 1


def run_cities(factory: ServiceFactory) -> int:
    for name in factory.get_timetable().city_names:
        print(name)
    return 0


def run_generate(factory: ServiceFactory, args: argparse.Namespace) -> int:
    timetable = factory.create_generator(args.rows, args.cols, args.seed).generate()
    if not JsonTimetableRepository(args.output).save_timetable(timetable):
        print(f"Error: could not write {args.output}", file=sys.stderr)
        return 2
    print(f"Wrote {len(timetable)} cities and {timetable.departure_count} departures to {args.output}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main application entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_configuration(args.config)
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    setup_logging(config.logging, args.verbose)
    logger = logging.getLogger(__name__)
    logger.info(f"Starting {get_version_string()}")

    factory = ServiceFactory(config, timetable_path=args.timetable)

    try:
        if args.command == "generate":
            return run_generate(factory, args)
        if args.command == "cities":
            return run_cities(factory)
        return run_route(factory, args)
    except TimetableLoadError as e:
        print(f"Timetable error: {e}", file=sys.stderr)
        return 2
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    finally:
        factory.shutdown()


if __name__ == "__main__":
    sys.exit(main())
