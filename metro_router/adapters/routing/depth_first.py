"""Depth-first route finder.

Exhaustive, depth-bounded enumeration of simple paths. Edges that keep
the rider on the current line are explored before line changes, which
surfaces low-transfer routes early without excluding the others.

The search runs on an explicit stack of immutable frames: every frame
owns its path, edge lines and visited set, so no state is shared
between branches.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Tuple

from ...domain.models import RouteResult, TransitNetwork
from .route_builder import SearchLimits, build_route, order_edges, rank_routes

# (station, path, edge lines, visited, current line, line changes)
_Frame = Tuple[str, Tuple[str, ...], Tuple[str, ...], FrozenSet[str], str, int]


@dataclass
class DepthFirstRouteFinder:
    """Route finder enumerating every simple path within the search limits.

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
        if origin_id == destination_id:
            return []

        origin = network.station(origin_id)
        initial_line = origin.lines[0] if origin and origin.lines else ""

        candidates: List[RouteResult] = []
        stack: List[_Frame] = [
            (origin_id, (origin_id,), (), frozenset((origin_id,)), initial_line, 0)
        ]

        while stack:
            station_id, path, edge_lines, visited, current_line, transfers = stack.pop()

            if station_id == destination_id:
                candidates.append(build_route(path, edge_lines, initial_line))
                continue

            if self.limits.exceeded(len(path), transfers):
                continue

            children: List[_Frame] = []
            for edge in order_edges(network.edges_from(station_id), current_line):
                nxt = edge.to_station
                if nxt in visited or nxt not in network.stations:
                    continue
                changes_line = bool(current_line) and edge.line != current_line
                children.append(
                    (
                        nxt,
                        path + (nxt,),
                        edge_lines + (edge.line,),
                        visited | {nxt},
                        edge.line,
                        transfers + 1 if changes_line else transfers,
                    )
                )
            # Reversed so the first child is explored first
            stack.extend(reversed(children))

        routes = rank_routes(candidates, max_routes)
        self._logger.debug(
            "Depth-first search finished",
            extra={
                "origin": origin_id,
                "destination": destination_id,
                "candidates": len(candidates),
                "returned": len(routes),
            },
        )
        return routes


def find_routes(
    network: TransitNetwork,
    origin_id: str,
    destination_id: str,
    max_routes: int = 5,
    limits: Optional[SearchLimits] = None,
) -> List[RouteResult]:
    """Find ranked routes with the depth-first finder.

    Functional entry point for callers that do not go through the
    container.
    """
    finder = DepthFirstRouteFinder(limits=limits or SearchLimits())
    return finder.find_routes(network, origin_id, destination_id, max_routes)
