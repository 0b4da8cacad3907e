"""Rendering port - Abstraction for route export.

This protocol defines the contract for producing a shareable visual
summary of a route, allowing different implementations to be used.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..domain.models import Language, RouteResult, TransitNetwork


class RouteRendererPort(Protocol):
    """Port for route rendering.

    Implementation: adapters/rendering/folium_adapter.py

    Renderers consume a route plus the line and station display data of
    the network; they hold no routing logic.
    """

    def render(
        self,
        route: RouteResult,
        network: TransitNetwork,
        output_path: Path,
        lang: Language = "fa",
    ) -> Path:
        """Render a route and save it to file.

        Args:
            route: The route to render.
            network: Network providing station and line display data.
            output_path: Where to save the rendered output.
            lang: Display language.

        Returns:
            Path to the generated file.
        """
        ...
