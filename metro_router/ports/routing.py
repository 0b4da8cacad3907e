"""Routing port - Abstraction for route enumeration.

Route finders enumerate simple paths between two stations and return
them deduplicated, ranked by transfers then stations, and capped.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol

if TYPE_CHECKING:
    from ..domain.models import RouteResult, TransitNetwork


class RouteFinderPort(Protocol):
    """Port for route search.

    Implementations:
    - adapters/routing/depth_first.py (DepthFirstRouteFinder)
    - adapters/routing/best_first.py (BestFirstRouteFinder)

    Finders are pure: no I/O, no shared mutable state, and they never
    raise for unknown station ids.
    """

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
            Routes sorted by ascending transfers, then ascending stations.
            Empty when origin equals destination or nothing is reachable.
        """
        ...
