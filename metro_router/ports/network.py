"""Network port - Abstraction for loading the static transit dataset.

The repository is the single provider of the immutable TransitNetwork
consumed by route finders, guidance and rendering.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, Sequence

if TYPE_CHECKING:
    from ..domain.models import Station, TransitNetwork


class NetworkRepositoryPort(Protocol):
    """Port for loading the transit network.

    Implementation: adapters/dataset/json_repository.py

    The repository loads stations, lines, line paths and the adjacency
    graph once and hands out the same immutable network afterwards.
    """

    def load(self) -> TransitNetwork:
        """Load the transit network.

        Returns:
            The immutable network (stations, lines, paths, graph).
        """
        ...

    def get_station(self, station_id: str) -> Optional[Station]:
        """Get station details by id.

        Args:
            station_id: The station id to look up (e.g., 'tajrish').

        Returns:
            The station, or None if not found.
        """
        ...

    def list_stations(self) -> Sequence[Station]:
        """List all stations in the network.

        Returns:
            Sequence of all stations, in dataset order.
        """
        ...
