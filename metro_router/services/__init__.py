"""Services layer - Application orchestration.

This module contains the application services that orchestrate the
flow of data through adapters to fulfill use cases.

Available services:
- RoutePlannerService: Route search, choice, history and export
- guidance: Line terminal lookup and rider guidance text
"""

from .guidance import (
    describe_route,
    get_first_step_guide,
    get_line_terminal,
    get_transfer_guide,
    route_guides,
    station_display,
)
from .route_planner import RoutePlannerService

__all__ = [
    "RoutePlannerService",
    "describe_route",
    "get_first_step_guide",
    "get_line_terminal",
    "get_transfer_guide",
    "route_guides",
    "station_display",
]
