"""JSON Network Repository adapter.

This adapter loads the bundled metro dataset and adds:
- Configuration injection (paths from config)
- Caching of the loaded network
- Graph derivation from line paths when no graph file is shipped
- Typed error handling
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from ...config import DatasetConfig, get_config
from ...domain.errors import DatasetError, StationNotFoundError
from ...domain.models import (
    FACILITY_KEYS,
    GeoLocation,
    GraphEdge,
    Line,
    LinePath,
    LocalizedName,
    Station,
    TransitNetwork,
)


def build_graph_from_paths(
    paths: Mapping[str, Sequence[LinePath]],
) -> Dict[str, Tuple[GraphEdge, ...]]:
    """Derive a bidirectional adjacency graph from line paths.

    Every consecutive station pair on every path yields one edge in each
    direction. Duplicates (same from, to and line) are dropped so that
    reversed paths and shared branch trunks do not double the edges.
    Edge order per station follows first appearance in the dataset.
    """
    graph: Dict[str, List[GraphEdge]] = {}
    seen: set[Tuple[str, str, str]] = set()

    for line_id, line_paths in paths.items():
        for path in line_paths:
            for a, b in zip(path.stations, path.stations[1:]):
                for src, dst in ((a, b), (b, a)):
                    key = (src, dst, line_id)
                    if key in seen:
                        continue
                    seen.add(key)
                    graph.setdefault(src, []).append(
                        GraphEdge(from_station=src, to_station=dst, line=line_id)
                    )

    return {station_id: tuple(edges) for station_id, edges in graph.items()}


@dataclass
class JSONNetworkRepository:
    """Network repository that loads the JSON dataset bundle.

    This adapter implements NetworkRepositoryPort. Files:
    stations.json, lines.json, paths.json and an optional graph.json.

    Attributes:
        config: Dataset configuration (paths, file names)
    """

    config: DatasetConfig = field(default_factory=lambda: get_config().dataset)
    _logger: logging.Logger = field(init=False, repr=False)

    # Cached data
    _network: Optional[TransitNetwork] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self) -> TransitNetwork:
        """Load the transit network from the JSON bundle.

        Returns:
            The immutable transit network.

        Raises:
            DatasetError: If a dataset file is missing or malformed.
        """
        if self._network is not None:
            return self._network

        self._logger.debug(
            "Loading network",
            extra={"data_dir": str(self.config.data_dir)},
        )

        stations = self._parse_stations(self._read_json(self.config.stations_path))
        lines = self._parse_lines(self._read_json(self.config.lines_path))
        paths = self._parse_paths(self._read_json(self.config.paths_path))

        if self.config.graph_path.exists():
            graph = self._parse_graph(self._read_json(self.config.graph_path))
        else:
            self._logger.info(
                "No graph file, deriving graph from line paths",
                extra={"graph_path": str(self.config.graph_path)},
            )
            graph = build_graph_from_paths(paths)

        network = TransitNetwork(
            stations=stations, lines=lines, paths=paths, graph=graph
        )
        self._network = network
        self._logger.info(
            "Network loaded",
            extra={
                "stations": len(stations),
                "lines": len(lines),
                "edges": sum(len(edges) for edges in graph.values()),
            },
        )
        return network

    def _read_json(self, path: Path) -> Any:
        try:
            with path.open(encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise DatasetError(
                f"Failed to read dataset file {path.name}",
                file_path=str(path),
                cause=e,
            )

    def _parse_stations(self, raw: Any) -> Dict[str, Station]:
        path = str(self.config.stations_path)
        if not isinstance(raw, dict):
            raise DatasetError("Stations file must hold an object", file_path=path)

        stations: Dict[str, Station] = {}
        for key, row in raw.items():
            if not isinstance(row, dict):
                raise DatasetError(f"Invalid station entry: {key}", file_path=path)

            station_id = str(row.get("id") or key).strip()
            name = str(row.get("name") or station_id)

            # Coordinates are strings in the bundle; degrade to 0.0 when unusable
            try:
                location = GeoLocation(
                    latitude=float(row.get("latitude") or 0.0),
                    longitude=float(row.get("longitude") or 0.0),
                )
            except (TypeError, ValueError):
                self._logger.warning(
                    "Invalid station coordinates",
                    extra={"station_id": station_id},
                )
                location = GeoLocation(latitude=0.0, longitude=0.0)

            try:
                translations = row.get("translations") or {}
                stations[station_id] = Station(
                    id=station_id,
                    name=LocalizedName(en=name, fa=str(translations.get("fa") or "")),
                    location=location,
                    lines=tuple(row.get("lines") or ()),
                    address=row.get("address") or None,
                    colors=tuple(row.get("colors") or ()),
                    disabled=bool(row.get("disabled", False)),
                    facilities=frozenset(k for k in FACILITY_KEYS if row.get(k) is True),
                    relations=tuple(row.get("relations") or ()),
                )
            except (AttributeError, TypeError) as e:
                raise DatasetError(
                    f"Invalid station entry: {key}", file_path=path, cause=e
                )

        return stations

    def _parse_lines(self, raw: Any) -> Dict[str, Line]:
        path = str(self.config.lines_path)
        if not isinstance(raw, dict):
            raise DatasetError("Lines file must hold an object", file_path=path)

        lines: Dict[str, Line] = {}
        try:
            for key, row in raw.items():
                line_id = str(row.get("id") or key)
                names = row.get("name") or {}
                lines[line_id] = Line(
                    id=line_id,
                    name=LocalizedName(
                        en=str(names.get("en") or line_id),
                        fa=str(names.get("fa") or ""),
                    ),
                    color=str(row.get("color") or "#888888"),
                )
        except (AttributeError, TypeError) as e:
            raise DatasetError("Invalid line entry", file_path=path, cause=e)

        return lines

    def _parse_paths(self, raw: Any) -> Dict[str, Tuple[LinePath, ...]]:
        path = str(self.config.paths_path)
        if not isinstance(raw, dict):
            raise DatasetError("Paths file must hold an object", file_path=path)

        paths: Dict[str, Tuple[LinePath, ...]] = {}
        try:
            for line_id, entry in raw.items():
                paths[line_id] = tuple(
                    LinePath(
                        id=str(item.get("id", f"{line_id}_{i}")),
                        from_station=item["from"],
                        to_station=item["to"],
                        stations=tuple(item["stations"]),
                    )
                    for i, item in enumerate(entry.get("paths", []))
                )
        except (AttributeError, KeyError, TypeError) as e:
            raise DatasetError("Invalid line path entry", file_path=path, cause=e)

        return paths

    def _parse_graph(self, raw: Any) -> Dict[str, Tuple[GraphEdge, ...]]:
        path = str(self.config.graph_path)
        if not isinstance(raw, dict):
            raise DatasetError("Graph file must hold an object", file_path=path)

        graph: Dict[str, Tuple[GraphEdge, ...]] = {}
        try:
            for station_id, edges in raw.items():
                graph[station_id] = tuple(
                    GraphEdge(
                        from_station=edge.get("from", station_id),
                        to_station=edge["to"],
                        line=edge["line"],
                        weight=float(edge.get("weight", 1.0)),
                    )
                    for edge in edges
                )
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            raise DatasetError("Invalid graph edge", file_path=path, cause=e)

        return graph

    def get_station(self, station_id: str) -> Optional[Station]:
        """Get station details by id.

        Args:
            station_id: The station id to look up.

        Returns:
            The station, or None if not found.
        """
        return self.load().station(station_id)

    def get_station_or_raise(self, station_id: str) -> Station:
        """Get station details by id, raising if not found.

        Args:
            station_id: The station id to look up.

        Returns:
            The station.

        Raises:
            StationNotFoundError: If the station is not found.
        """
        station = self.get_station(station_id)
        if station is None:
            raise StationNotFoundError(
                f"Station not found: {station_id}",
                station_id=station_id,
            )
        return station

    def list_stations(self) -> Sequence[Station]:
        """List all stations.

        Returns:
            Sequence of all stations, in dataset order.
        """
        return list(self.load().stations.values())

    def clear_cache(self) -> None:
        """Drop the cached network."""
        self._network = None
        self._logger.debug("Network cache cleared")
