"""Route planner service - Main orchestrator.

Ties the dataset repository, the route finder, the recent routes
history and the map renderer together for the presentation layers.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Tuple

from ..domain.errors import NoRouteFoundError, RenderingError, StationNotFoundError
from ..domain.models import (
    Language,
    RecentRoute,
    RouteOption,
    RouteOptionKind,
    RouteResult,
    TransitNetwork,
)
from ..ports.network import NetworkRepositoryPort
from ..ports.rendering import RouteRendererPort
from ..ports.routing import RouteFinderPort
from ..ports.storage import RecentRoutesStorePort
from .guidance import describe_route, route_guides


@dataclass
class RoutePlannerService:
    """Main service for planning metro trips.

    Attributes:
        repository: Provides the static transit network
        route_finder: Enumerates and ranks candidate routes
        recent_routes: Optional history of selected routes
        renderer: Optional route map renderer
        max_routes: Default number of candidates returned
    """

    repository: NetworkRepositoryPort
    route_finder: RouteFinderPort
    recent_routes: Optional[RecentRoutesStorePort] = None
    renderer: Optional[RouteRendererPort] = None
    max_routes: int = 5

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    @property
    def network(self) -> TransitNetwork:
        return self.repository.load()

    def plan(
        self,
        origin_id: str,
        destination_id: str,
        max_routes: Optional[int] = None,
    ) -> List[RouteResult]:
        """Find ranked routes between two stations.

        Never raises for unknown or identical ids: the result is simply
        empty.

        Args:
            origin_id: Origin station id.
            destination_id: Destination station id.
            max_routes: Override of the default candidate count.

        Returns:
            Ranked candidate routes.
        """
        limit = self.max_routes if max_routes is None else max_routes
        start = time.perf_counter()

        routes = self.route_finder.find_routes(
            self.network, origin_id, destination_id, limit
        )

        self._logger.info(
            "Routes computed",
            extra={
                "origin": origin_id,
                "destination": destination_id,
                "routes": len(routes),
                "elapsed_ms": round((time.perf_counter() - start) * 1000, 2),
            },
        )
        return routes

    def plan_strict(
        self,
        origin_id: str,
        destination_id: str,
        max_routes: Optional[int] = None,
    ) -> List[RouteResult]:
        """Find ranked routes, raising when the request cannot be served.

        Raises:
            StationNotFoundError: If either station is not in the dataset.
            NoRouteFoundError: If no route fits the search limits, or
                origin and destination are the same station.
        """
        network = self.network
        for station_id in (origin_id, destination_id):
            if network.station(station_id) is None:
                raise StationNotFoundError(
                    f"Station not found: {station_id}",
                    station_id=station_id,
                )

        routes = self.plan(origin_id, destination_id, max_routes)
        if not routes:
            self._logger.warning(
                "No route found",
                extra={"origin": origin_id, "destination": destination_id},
            )
            raise NoRouteFoundError(
                f"No route from {origin_id} to {destination_id}",
                origin=origin_id,
                destination=destination_id,
            )
        return routes

    @staticmethod
    def route_options(routes: List[RouteResult]) -> List[RouteOption]:
        """Pick the routes worth offering as distinct choices.

        The fastest route has the fewest stations; the lowest-transfers
        route the fewest transfers. Ties keep the earliest route. The
        second option is only offered when it differs from the first.
        """
        if not routes:
            return []

        fastest = min(range(len(routes)), key=lambda i: routes[i].total_stations)
        lowest = min(range(len(routes)), key=lambda i: routes[i].total_transfers)

        options = [RouteOption(RouteOptionKind.FASTEST, routes[fastest], fastest)]
        if lowest != fastest:
            options.append(
                RouteOption(RouteOptionKind.LOWEST_TRANSFERS, routes[lowest], lowest)
            )
        return options

    def select_route(
        self,
        origin_id: str,
        destination_id: str,
        routes: List[RouteResult],
        index: int = 0,
    ) -> RouteResult:
        """Pick one of the candidates and record it in the history.

        Raises:
            IndexError: If ``index`` does not designate a candidate.
        """
        if not 0 <= index < len(routes):
            raise IndexError(f"Route index out of range: {index}")

        route = routes[index]
        if self.recent_routes is not None:
            self.recent_routes.add_route(origin_id, destination_id, route)
        return route

    def recent(self) -> List[RecentRoute]:
        if self.recent_routes is None:
            return []
        return self.recent_routes.list_routes()

    def guides(self, route: RouteResult, lang: Language) -> List[Tuple[int, str]]:
        return route_guides(route, self.network, lang)

    def summary(self, route: RouteResult, lang: Language) -> str:
        return describe_route(route, lang)

    def export_map(
        self, route: RouteResult, output_path: Path, lang: Language = "fa"
    ) -> Path:
        """Render a route to a shareable map file.

        Raises:
            RenderingError: If no renderer is configured or rendering fails.
        """
        if self.renderer is None:
            raise RenderingError(
                "No route renderer configured",
                output_path=str(output_path),
            )
        return self.renderer.render(route, self.network, output_path, lang)
