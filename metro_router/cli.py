"""Command-line interface for the metro route planner.

Usage:
    # Ranked routes with guidance, in Persian
    python -m metro_router route tajrish shush --lang fa

    # JSON output, best-first search, map export
    python -m metro_router route tajrish azadegan --json --strategy best_first --map route.html

    # Stations of a line
    python -m metro_router stations --line line_3 --lang en

    # Recent routes history
    python -m metro_router recent
    python -m metro_router recent --clear
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from .config import AppConfig, get_config
from .container import Container
from .domain.errors import MetroRouterError, NoRouteFoundError, StationNotFoundError
from .domain.models import Language, RouteResult
from .logging_config import configure_logging
from .services import RoutePlannerService
from .services.guidance import station_display

logger = logging.getLogger(__name__)


def _build_planner(config: AppConfig) -> RoutePlannerService:
    return Container.create_default(config).resolve(RoutePlannerService)


def _print_route(
    planner: RoutePlannerService, rank: int, route: RouteResult, lang: Language
) -> None:
    display = station_display(planner.network, lang)
    guides = dict(planner.guides(route, lang))

    print(f"#{rank} {planner.summary(route, lang)}")
    for i, step in enumerate(route.steps):
        marker = "*" if step.is_transfer else "-"
        print(f"  {marker} {display(step.station_id)} [{step.line}]")
        if i in guides:
            print(f"      {guides[i]}")


def cmd_route(args: argparse.Namespace, config: AppConfig) -> int:
    """Find and print routes between two stations.

    Returns:
        Exit code (0 for success, 1 for unknown station or no route)
    """
    if args.strategy:
        config.routing.strategy = args.strategy
    lang: Language = args.lang or config.default_language
    planner = _build_planner(config)

    try:
        routes = planner.plan_strict(args.origin, args.destination, args.max_routes)
    except StationNotFoundError as e:
        print(f"Unknown station: {e.station_id}", file=sys.stderr)
        return 1
    except NoRouteFoundError as e:
        print(f"No route found between {e.origin} and {e.destination}", file=sys.stderr)
        return 1

    if args.json:
        payload = {
            "origin": args.origin,
            "destination": args.destination,
            "routes": [
                {**route.to_dict(), "guides": planner.guides(route, lang)}
                for route in routes
            ],
        }
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for rank, route in enumerate(routes, start=1):
            _print_route(planner, rank, route, lang)

    if not args.no_history:
        planner.select_route(args.origin, args.destination, routes, 0)

    if args.map:
        output = planner.export_map(routes[0], Path(args.map), lang)
        print(f"Map saved to: {output}")

    return 0


def cmd_stations(args: argparse.Namespace, config: AppConfig) -> int:
    """List stations, optionally restricted to one line.

    Returns:
        Exit code (0 for success, 1 for unknown line)
    """
    lang: Language = args.lang or config.default_language
    planner = _build_planner(config)
    network = planner.network

    if args.line and network.line(args.line) is None:
        print(f"Unknown line: {args.line}", file=sys.stderr)
        return 1

    for station in planner.repository.list_stations():
        if args.line and args.line not in station.lines:
            continue
        print(f"{station.id}\t{station.display_name(lang)}\t{','.join(station.lines)}")
    return 0


def cmd_recent(args: argparse.Namespace, config: AppConfig) -> int:
    """Show or clear the recent routes history.

    Returns:
        Exit code (always 0)
    """
    planner = _build_planner(config)
    if planner.recent_routes is None:
        return 0

    if args.clear:
        removed = planner.recent_routes.clear()
        print(f"Removed {removed} recent route(s)")
        return 0

    for entry in planner.recent():
        print(f"{entry.from_station} -> {entry.to_station}\tx{entry.count}\t{entry.id}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metro-router",
        description="Plan metro trips on a static transit network",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    route = subparsers.add_parser("route", help="Find routes between two stations")
    route.add_argument("origin", help="Origin station id")
    route.add_argument("destination", help="Destination station id")
    route.add_argument("--max-routes", type=int, default=None)
    route.add_argument("--lang", choices=["en", "fa"], default=None)
    route.add_argument("--strategy", choices=["depth_first", "best_first"], default=None)
    route.add_argument("--map", help="Export the best route as an HTML map")
    route.add_argument("--json", action="store_true", help="Print JSON output")
    route.add_argument(
        "--no-history", action="store_true", help="Do not record the route"
    )
    route.set_defaults(handler=cmd_route)

    stations = subparsers.add_parser("stations", help="List stations")
    stations.add_argument("--line", default=None, help="Only stations of this line")
    stations.add_argument("--lang", choices=["en", "fa"], default=None)
    stations.set_defaults(handler=cmd_stations)

    recent = subparsers.add_parser("recent", help="Show the recent routes history")
    recent.add_argument("--clear", action="store_true", help="Clear the history")
    recent.set_defaults(handler=cmd_recent)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    config = get_config().model_copy(deep=True)
    configure_logging(config.observability)

    try:
        return args.handler(args, config)
    except MetroRouterError as e:
        logger.error("Command failed", extra={"error": str(e)})
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
