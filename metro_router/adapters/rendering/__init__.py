"""Rendering adapters - Implementations of RouteRendererPort.

Available implementations:
- FoliumRouteRenderer: Folium-based interactive route map
"""

from .folium_adapter import FoliumRouteRenderer

__all__ = ["FoliumRouteRenderer"]
