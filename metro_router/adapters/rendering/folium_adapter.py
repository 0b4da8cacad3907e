"""Folium route renderer adapter.

Exports a route as a shareable interactive HTML map:
- One polyline per line leg, drawn in the line's color
- Markers for origin, destination and transfer stations
- Localized station names and guide text in popups
"""

from __future__ import annotations

import html
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Tuple

from ...domain.errors import RenderingError
from ...domain.models import Language, RouteResult, TransitNetwork
from ...services.guidance import line_display, route_guides, station_display


@dataclass
class FoliumRouteRenderer:
    """Folium-based route map renderer.

    This adapter implements RouteRendererPort using Folium for
    generating interactive HTML maps.

    Attributes:
        zoom_start: Initial zoom level of the map
        line_weight: Stroke width of the line legs
    """

    zoom_start: int = 12
    line_weight: int = 6
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def render(
        self,
        route: RouteResult,
        network: TransitNetwork,
        output_path: Path,
        lang: Language = "fa",
    ) -> Path:
        """Render a route on a map and save to file.

        Args:
            route: The route to render.
            network: Network providing station and line display data.
            output_path: Where to save the rendered map.
            lang: Display language.

        Returns:
            Path to the generated map file.

        Raises:
            RenderingError: If rendering fails.
        """
        if route.is_empty:
            raise RenderingError(
                "Cannot render empty route",
                output_path=str(output_path),
                renderer_type="folium",
            )

        missing = [sid for sid in route.station_ids if network.station(sid) is None]
        if missing:
            raise RenderingError(
                f"Stations missing from network: {missing!r}",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering route map",
            extra={
                "stations": route.total_stations,
                "output_path": str(output_path),
            },
        )

        try:
            import folium

            display = station_display(network, lang)
            guides: Dict[int, str] = dict(route_guides(route, network, lang, display))
            coords = self._coordinates(route, network)

            center_lat = sum(lat for lat, _ in coords) / len(coords)
            center_lon = sum(lon for _, lon in coords) / len(coords)
            m = folium.Map(
                location=[center_lat, center_lon],
                zoom_start=self.zoom_start,
                control_scale=True,
            )

            for line_id, leg in self._legs(route, coords):
                line = network.line(line_id)
                folium.PolyLine(
                    leg,
                    weight=self.line_weight,
                    color=line.color if line else "#888888",
                    opacity=0.9,
                    tooltip=line_display(network, line_id, lang),
                ).add_to(m)

            last = len(route.steps) - 1
            for i, step in enumerate(route.steps):
                if i == 0:
                    icon_color = "green"
                elif i == last:
                    icon_color = "red"
                elif step.is_transfer:
                    icon_color = "orange"
                else:
                    icon_color = "blue"

                popup = f"{i + 1}. {html.escape(display(step.station_id))}"
                if i in guides:
                    popup += f"<br>{html.escape(guides[i])}"

                folium.Marker(
                    location=list(coords[i]),
                    popup=folium.Popup(popup, max_width=300),
                    tooltip=display(step.station_id),
                    icon=folium.Icon(color=icon_color),
                ).add_to(m)

            if len(coords) >= 2:
                m.fit_bounds([list(c) for c in coords])

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))

            self._logger.info(
                "Map rendered successfully",
                extra={"output_path": str(output_path)},
            )

            return output_path

        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )

    @staticmethod
    def _coordinates(
        route: RouteResult, network: TransitNetwork
    ) -> List[Tuple[float, float]]:
        coords: List[Tuple[float, float]] = []
        for station_id in route.station_ids:
            location = network.stations[station_id].location
            coords.append((location.latitude, location.longitude))
        return coords

    @staticmethod
    def _legs(
        route: RouteResult, coords: List[Tuple[float, float]]
    ) -> List[Tuple[str, List[Tuple[float, float]]]]:
        """Split the route into contiguous same-line legs.

        A leg ends at the transfer station so consecutive legs touch.
        """
        legs: List[Tuple[str, List[Tuple[float, float]]]] = []
        for i in range(1, len(route.steps)):
            line_id = route.steps[i].line
            if not legs or legs[-1][0] != line_id:
                legs.append((line_id, [coords[i - 1]]))
            legs[-1][1].append(coords[i])
        return legs
