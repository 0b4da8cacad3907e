"""Typed domain errors for the metro route planner.

The route search itself never raises: an impossible or degenerate
request yields an empty candidate list. These errors cover the layers
around it (dataset loading, history storage, map export, strict
planning requests from the command line).

All errors inherit from MetroRouterError and can optionally wrap a
root cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class MetroRouterError(Exception):
    """Base error for the metro route planner.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class DatasetError(MetroRouterError):
    """Static dataset loading or integrity error.

    Attributes:
        file_path: Path to the dataset file if relevant
    """

    file_path: Optional[str] = None


@dataclass
class StationNotFoundError(MetroRouterError):
    """Station id not present in the dataset.

    Attributes:
        station_id: The station id that was not found
    """

    station_id: str = ""


@dataclass
class NoRouteFoundError(MetroRouterError):
    """No route satisfies the search bounds between two stations.

    Attributes:
        origin: Origin station id
        destination: Destination station id
    """

    origin: str = ""
    destination: str = ""


@dataclass
class ConfigurationError(MetroRouterError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class StorageError(MetroRouterError):
    """Recent routes history could not be persisted.

    Attributes:
        file_path: Path of the history file
    """

    file_path: Optional[str] = None


@dataclass
class RenderingError(MetroRouterError):
    """Route map rendering failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
