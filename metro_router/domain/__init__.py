"""Domain layer - Core business models and errors.

This module contains immutable domain models and typed errors
used throughout the application. No external dependencies.
"""

from .errors import (
    ConfigurationError,
    DatasetError,
    MetroRouterError,
    NoRouteFoundError,
    RenderingError,
    StationNotFoundError,
    StorageError,
)
from .models import (
    FACILITY_KEYS,
    GeoLocation,
    GraphEdge,
    Language,
    Line,
    LinePath,
    LocalizedName,
    RecentRoute,
    RouteOption,
    RouteOptionKind,
    RouteResult,
    RouteStep,
    Station,
    StationDisplay,
    TransitNetwork,
)

__all__ = [
    # Models
    "FACILITY_KEYS",
    "GeoLocation",
    "GraphEdge",
    "Language",
    "Line",
    "LinePath",
    "LocalizedName",
    "RecentRoute",
    "RouteOption",
    "RouteOptionKind",
    "RouteResult",
    "RouteStep",
    "Station",
    "StationDisplay",
    "TransitNetwork",
    # Errors
    "MetroRouterError",
    "DatasetError",
    "StationNotFoundError",
    "NoRouteFoundError",
    "ConfigurationError",
    "StorageError",
    "RenderingError",
]
