"""Immutable domain models for the metro route planner.

All models are frozen dataclasses with slots. They have no external
dependencies and describe the static transit dataset (stations, lines,
line paths, adjacency graph) as well as the transient results produced
by a route search.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from types import MappingProxyType
from typing import Any, Callable, Dict, Literal, Mapping, Optional, Sequence, Tuple

Language = Literal["en", "fa"]

# Maps a station id to the text shown to the user.
StationDisplay = Callable[[str], str]

FACILITY_KEYS: Tuple[str, ...] = (
    "wc",
    "coffeeShop",
    "groceryStore",
    "fastFood",
    "atm",
    "elevator",
    "bicycleParking",
    "waterCooler",
    "cleanFood",
    "blindPath",
    "fireSuppressionSystem",
    "fireExtinguisher",
    "metroPolice",
    "creditTicketSales",
    "waitingChair",
    "camera",
    "trashCan",
    "smoking",
    "petsAllowed",
    "freeWifi",
    "prayerRoom",
)


@dataclass(frozen=True, slots=True)
class GeoLocation:
    """GPS coordinates representing a geographic location."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        """Validate coordinate ranges."""
        if not -90 <= self.latitude <= 90:
            raise ValueError(
                f"Latitude must be between -90 and 90, got {self.latitude}"
            )
        if not -180 <= self.longitude <= 180:
            raise ValueError(
                f"Longitude must be between -180 and 180, got {self.longitude}"
            )


@dataclass(frozen=True, slots=True)
class LocalizedName:
    """A display name in English and Persian."""

    en: str
    fa: str = ""

    def get(self, lang: Language) -> str:
        if lang == "fa" and self.fa:
            return self.fa
        return self.en


@dataclass(frozen=True, slots=True)
class Station:
    """A metro station.

    Attributes:
        id: Unique station identifier (e.g., 'shahid_beheshti')
        name: English and Persian display names
        location: GPS coordinates of the station
        lines: Ids of the lines serving the station, in dataset order
        address: Optional street address
        colors: Display colors of the serving lines
        disabled: Whether the station is out of service
        facilities: Facility keys flagged as available
        relations: Ids of related stations (interchange neighbours)
    """

    id: str
    name: LocalizedName
    location: GeoLocation
    lines: Tuple[str, ...] = ()
    address: Optional[str] = None
    colors: Tuple[str, ...] = ()
    disabled: bool = False
    facilities: frozenset[str] = field(default_factory=frozenset)
    relations: Tuple[str, ...] = ()

    def display_name(self, lang: Language) -> str:
        return self.name.get(lang)

    def has_facility(self, key: str) -> bool:
        return key in self.facilities


@dataclass(frozen=True, slots=True)
class Line:
    """A metro line with its localized name and display color."""

    id: str
    name: LocalizedName
    color: str = "#888888"


@dataclass(frozen=True, slots=True)
class LinePath:
    """One directional traversal of a line (or one of its branches).

    Attributes:
        id: Path identifier
        from_station: Terminal station at the start of the path
        to_station: Terminal station at the end of the path
        stations: Ordered station ids from ``from_station`` to ``to_station``
    """

    id: str
    from_station: str
    to_station: str
    stations: Tuple[str, ...]

    def index_of(self, station_id: str) -> int:
        """Return the position of a station on the path, or -1."""
        try:
            return self.stations.index(station_id)
        except ValueError:
            return -1


@dataclass(frozen=True, slots=True)
class GraphEdge:
    """A directed, line-tagged connection between two adjacent stations."""

    from_station: str
    to_station: str
    line: str
    weight: float = 1.0


@dataclass(frozen=True, slots=True)
class RouteStep:
    """One station visited along a route.

    Attributes:
        station_id: The visited station
        line: Line used to arrive at the station (departing line for the origin)
        is_transfer: Whether the rider changes lines at this station
        transfer_to: Line boarded at this station when ``is_transfer`` is set
    """

    station_id: str
    line: str
    is_transfer: bool = False
    transfer_to: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RouteResult:
    """A candidate route from origin to destination, both inclusive.

    Attributes:
        steps: Ordered route steps
        total_stations: Number of steps
        total_transfers: Number of distinct lines used, minus one
        lines: Distinct line ids in order of first use
    """

    steps: Tuple[RouteStep, ...]
    total_stations: int
    total_transfers: int
    lines: Tuple[str, ...]

    @property
    def station_ids(self) -> Tuple[str, ...]:
        return tuple(step.station_id for step in self.steps)

    @property
    def path_key(self) -> Tuple[str, ...]:
        """Ordered station sequence used to detect duplicate routes."""
        return self.station_ids

    @property
    def is_empty(self) -> bool:
        return len(self.steps) == 0

    @property
    def origin(self) -> Optional[str]:
        return self.steps[0].station_id if self.steps else None

    @property
    def destination(self) -> Optional[str]:
        return self.steps[-1].station_id if self.steps else None

    def transfer_steps(self) -> Tuple[int, ...]:
        """Return the indices of the steps flagged as transfers."""
        return tuple(i for i, step in enumerate(self.steps) if step.is_transfer)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "steps": [
                {
                    "stationId": step.station_id,
                    "line": step.line,
                    "isTransfer": step.is_transfer,
                    "transferTo": step.transfer_to,
                }
                for step in self.steps
            ],
            "totalStations": self.total_stations,
            "totalTransfers": self.total_transfers,
            "lines": list(self.lines),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RouteResult:
        steps = tuple(
            RouteStep(
                station_id=raw["stationId"],
                line=raw.get("line", ""),
                is_transfer=bool(raw.get("isTransfer", False)),
                transfer_to=raw.get("transferTo"),
            )
            for raw in data.get("steps", [])
        )
        return cls(
            steps=steps,
            total_stations=int(data.get("totalStations", len(steps))),
            total_transfers=int(data.get("totalTransfers", 0)),
            lines=tuple(data.get("lines", [])),
        )


@dataclass(frozen=True, slots=True)
class TransitNetwork:
    """The immutable static dataset a route search runs against.

    Mappings are wrapped in read-only proxies on construction; the
    network is shared between concurrent searches and never mutated.
    """

    stations: Mapping[str, Station]
    lines: Mapping[str, Line]
    paths: Mapping[str, Tuple[LinePath, ...]]
    graph: Mapping[str, Tuple[GraphEdge, ...]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "stations", MappingProxyType(dict(self.stations)))
        object.__setattr__(self, "lines", MappingProxyType(dict(self.lines)))
        object.__setattr__(
            self,
            "paths",
            MappingProxyType({k: tuple(v) for k, v in self.paths.items()}),
        )
        object.__setattr__(
            self,
            "graph",
            MappingProxyType({k: tuple(v) for k, v in self.graph.items()}),
        )

    @classmethod
    def from_edges(
        cls,
        stations: Mapping[str, Station],
        lines: Mapping[str, Line],
        paths: Mapping[str, Sequence[LinePath]],
        edges: Sequence[GraphEdge],
    ) -> TransitNetwork:
        """Build a network from a flat edge list, keeping edge order per station."""
        graph: Dict[str, list[GraphEdge]] = {}
        for edge in edges:
            graph.setdefault(edge.from_station, []).append(edge)
        return cls(
            stations=stations,
            lines=lines,
            paths={k: tuple(v) for k, v in paths.items()},
            graph={k: tuple(v) for k, v in graph.items()},
        )

    def station(self, station_id: str) -> Optional[Station]:
        return self.stations.get(station_id)

    def line(self, line_id: str) -> Optional[Line]:
        return self.lines.get(line_id)

    def paths_for(self, line_id: str) -> Tuple[LinePath, ...]:
        return self.paths.get(line_id, ())

    def edges_from(self, station_id: str) -> Tuple[GraphEdge, ...]:
        return self.graph.get(station_id, ())


class RouteOptionKind(Enum):
    """Route choices offered to the rider when candidates differ."""

    FASTEST = auto()
    LOWEST_TRANSFERS = auto()


@dataclass(frozen=True, slots=True)
class RouteOption:
    """A highlighted candidate and its position in the ranked list."""

    kind: RouteOptionKind
    route: RouteResult
    index: int


@dataclass(frozen=True, slots=True)
class RecentRoute:
    """A route the rider picked, as kept in the recent routes history.

    Attributes:
        id: Entry identifier, ``"{from}-{to}-{timestamp_ms}"``
        from_station: Origin station id
        to_station: Destination station id
        route: The selected route
        timestamp: Last use, in milliseconds since the epoch
        count: Number of times the pair was used
    """

    id: str
    from_station: str
    to_station: str
    route: RouteResult
    timestamp: int
    count: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "from": self.from_station,
            "to": self.to_station,
            "route": self.route.to_dict(),
            "timestamp": self.timestamp,
            "count": self.count,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> RecentRoute:
        return cls(
            id=data["id"],
            from_station=data["from"],
            to_station=data["to"],
            route=RouteResult.from_dict(data["route"]),
            timestamp=int(data["timestamp"]),
            count=int(data.get("count", 1)),
        )
