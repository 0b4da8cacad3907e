"""Storage port - Abstraction for the recent routes history."""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Protocol

if TYPE_CHECKING:
    from ..domain.models import RecentRoute, RouteResult


class RecentRoutesStorePort(Protocol):
    """Port for the recent routes history.

    Implementations:
    - adapters/storage/recent_routes.py (InMemoryRecentRoutesStore)
    - adapters/storage/recent_routes.py (JSONFileRecentRoutesStore)

    Entries are keyed by the (from, to) station pair and kept most
    recently used first.
    """

    def add_route(self, from_id: str, to_id: str, route: RouteResult) -> RecentRoute:
        """Record a route for a station pair, bumping it if already known."""
        ...

    def increment_count(self, from_id: str, to_id: str) -> bool:
        """Bump the use count of a known pair. Returns False if unknown."""
        ...

    def remove_route(self, route_id: str) -> bool:
        """Remove an entry by id. Returns False if no entry matched."""
        ...

    def clear(self) -> int:
        """Remove every entry. Returns the number of entries removed."""
        ...

    def list_routes(self) -> List[RecentRoute]:
        """Return the entries, most recently used first."""
        ...
