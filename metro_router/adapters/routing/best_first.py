"""Best-first route finder.

Enumerates simple paths in order of (transfers, stations) using a heap,
in the spirit of Dijkstra's algorithm but over partial paths instead of
stations. Both cost terms can only grow when a path is extended, so
complete routes come off the heap already ranked and the search stops
as soon as enough unique routes are collected.

Same contract and same pruning limits as DepthFirstRouteFinder. When
parallel edges give one station sequence several line assignments, the
cheapest assignment is kept, whereas the depth-first finder keeps the
one it discovers first.
"""

from __future__ import annotations

import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Set, Tuple

from ...domain.models import RouteResult, TransitNetwork
from .route_builder import SearchLimits, build_route, order_edges, rank_routes

# (station, path, edge lines, distinct lines, visited, current line, line changes)
_Frame = Tuple[
    str, Tuple[str, ...], Tuple[str, ...], Tuple[str, ...], FrozenSet[str], str, int
]


@dataclass
class BestFirstRouteFinder:
    """Route finder popping partial routes cheapest first.

    This adapter implements RouteFinderPort.

    Attributes:
        limits: Path length and line change bounds
    """

    limits: SearchLimits = field(default_factory=SearchLimits)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def find_routes(
        self,
        network: TransitNetwork,
        origin_id: str,
        destination_id: str,
        max_routes: int = 5,
    ) -> List[RouteResult]:
        """Find ranked candidate routes between two stations.

        Args:
            network: The static transit network.
            origin_id: Origin station id.
            destination_id: Destination station id.
            max_routes: Maximum number of routes to return.

        Returns:
            Up to ``max_routes`` routes, fewest transfers first, then
            fewest stations. Empty when origin equals destination or no
            route fits the limits.
        """
        if origin_id == destination_id or max_routes <= 0:
            return []

        origin = network.station(origin_id)
        initial_line = origin.lines[0] if origin and origin.lines else ""

        counter = itertools.count()
        start: _Frame = (
            origin_id,
            (origin_id,),
            (),
            (),
            frozenset((origin_id,)),
            initial_line,
            0,
        )
        heap: List[Tuple[int, int, int, _Frame]] = [(0, 1, next(counter), start)]

        found: List[RouteResult] = []
        seen: Set[Tuple[str, ...]] = set()
        expanded = 0

        while heap and len(found) < max_routes:
            _, _, _, frame = heapq.heappop(heap)
            station_id, path, edge_lines, lines, visited, current_line, transfers = frame

            if station_id == destination_id:
                route = build_route(path, edge_lines, initial_line)
                if route.path_key not in seen:
                    seen.add(route.path_key)
                    found.append(route)
                continue

            if self.limits.exceeded(len(path), transfers):
                continue

            expanded += 1
            for edge in order_edges(network.edges_from(station_id), current_line):
                nxt = edge.to_station
                if nxt in visited or nxt not in network.stations:
                    continue
                changes_line = bool(current_line) and edge.line != current_line
                next_lines = lines if edge.line in lines else lines + (edge.line,)
                child: _Frame = (
                    nxt,
                    path + (nxt,),
                    edge_lines + (edge.line,),
                    next_lines,
                    visited | {nxt},
                    edge.line,
                    transfers + 1 if changes_line else transfers,
                )
                heapq.heappush(
                    heap,
                    (max(len(next_lines) - 1, 0), len(path) + 1, next(counter), child),
                )

        routes = rank_routes(found, max_routes)
        self._logger.debug(
            "Best-first search finished",
            extra={
                "origin": origin_id,
                "destination": destination_id,
                "expanded": expanded,
                "returned": len(routes),
            },
        )
        return routes
