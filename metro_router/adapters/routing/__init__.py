"""Routing adapters - Implementations of RouteFinderPort.

Available implementations:
- DepthFirstRouteFinder: Exhaustive bounded depth-first enumeration
- BestFirstRouteFinder: Heap-ordered enumeration that stops early
"""

from __future__ import annotations

from typing import Callable, Dict, Optional

from ...config import RoutingConfig, get_config
from ...domain.errors import ConfigurationError
from ...ports.routing import RouteFinderPort
from .best_first import BestFirstRouteFinder
from .depth_first import DepthFirstRouteFinder, find_routes
from .route_builder import SearchLimits, build_route, order_edges, rank_routes

ROUTE_FINDERS: Dict[str, Callable[[SearchLimits], RouteFinderPort]] = {
    "depth_first": lambda limits: DepthFirstRouteFinder(limits=limits),
    "best_first": lambda limits: BestFirstRouteFinder(limits=limits),
}


def create_route_finder(config: Optional[RoutingConfig] = None) -> RouteFinderPort:
    """Instantiate the route finder selected in the routing configuration.

    Raises:
        ConfigurationError: If the strategy name is unknown.
    """
    config = config or get_config().routing
    factory = ROUTE_FINDERS.get(config.strategy)
    if factory is None:
        raise ConfigurationError(
            f"Unknown route finder strategy: {config.strategy!r}",
            setting_name="routing.strategy",
            expected_type=" | ".join(sorted(ROUTE_FINDERS)),
        )
    limits = SearchLimits(
        max_path_length=config.max_path_length,
        max_transfers=config.max_transfers,
    )
    return factory(limits)


__all__ = [
    "BestFirstRouteFinder",
    "DepthFirstRouteFinder",
    "ROUTE_FINDERS",
    "SearchLimits",
    "build_route",
    "create_route_finder",
    "find_routes",
    "order_edges",
    "rank_routes",
]
