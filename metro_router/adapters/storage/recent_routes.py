"""Recent routes history.

Keeps the routes a rider picked, keyed by the (from, to) station pair,
most recently used first and capped in size:
- Thread-safe with RLock
- Injectable clock
- Optional JSON file persistence
"""

from __future__ import annotations

import json
import logging
import os
import threading
import time
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, List, Optional

from ...domain.errors import StorageError
from ...domain.models import RecentRoute, RouteResult


def _now_ms() -> int:
    return int(time.time() * 1000)


@dataclass
class InMemoryRecentRoutesStore:
    """Recent routes history held in memory.

    This store implements RecentRoutesStorePort.

    Attributes:
        capacity: Maximum number of entries kept
        clock: Returns the current time in milliseconds

    Example:
        store = InMemoryRecentRoutesStore(capacity=10)
        store.add_route("tajrish", "shush", route)
    """

    capacity: int = 10
    clock: Callable[[], int] = field(default=_now_ms, repr=False)

    _routes: List[RecentRoute] = field(default_factory=list, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def add_route(self, from_id: str, to_id: str, route: RouteResult) -> RecentRoute:
        """Record a route for a station pair.

        A known pair has its count bumped, its timestamp refreshed and its
        route replaced, then moves to the front. A new pair is inserted at
        the front and the oldest entry is dropped past ``capacity``.

        Args:
            from_id: Origin station id.
            to_id: Destination station id.
            route: The selected route.

        Returns:
            The stored entry.
        """
        with self._lock:
            now = self.clock()
            index = self._find(from_id, to_id)
            if index is not None:
                existing = self._routes[index]
                entry = replace(
                    existing, count=existing.count + 1, timestamp=now, route=route
                )
                rest = self._routes[:index] + self._routes[index + 1 :]
                self._commit([entry] + rest)
                self._logger.debug(
                    "Recent route updated",
                    extra={"route_id": entry.id, "count": entry.count},
                )
            else:
                entry = RecentRoute(
                    id=f"{from_id}-{to_id}-{now}",
                    from_station=from_id,
                    to_station=to_id,
                    route=route,
                    timestamp=now,
                    count=1,
                )
                self._commit([entry] + self._routes[: self.capacity - 1])
                self._logger.debug("Recent route added", extra={"route_id": entry.id})

            return entry

    def increment_count(self, from_id: str, to_id: str) -> bool:
        """Bump the count of a known pair and move it to the front.

        Returns:
            True if the pair was known, False otherwise (no change).
        """
        with self._lock:
            index = self._find(from_id, to_id)
            if index is None:
                return False
            existing = self._routes[index]
            bumped = replace(existing, count=existing.count + 1, timestamp=self.clock())
            self._commit([bumped] + self._routes[:index] + self._routes[index + 1 :])
            return True

    def remove_route(self, route_id: str) -> bool:
        """Remove an entry by id.

        Returns:
            True if an entry was removed.
        """
        with self._lock:
            remaining = [r for r in self._routes if r.id != route_id]
            if len(remaining) == len(self._routes):
                return False
            self._commit(remaining)
            return True

    def clear(self) -> int:
        """Remove every entry.

        Returns:
            Number of entries that were removed.
        """
        with self._lock:
            count = len(self._routes)
            self._commit([])
            self._logger.info("Recent routes cleared", extra={"entries_cleared": count})
            return count

    def list_routes(self) -> List[RecentRoute]:
        """Return the entries, most recently used first."""
        with self._lock:
            return list(self._routes)

    def _find(self, from_id: str, to_id: str) -> Optional[int]:
        for i, entry in enumerate(self._routes):
            if entry.from_station == from_id and entry.to_station == to_id:
                return i
        return None

    def _commit(self, routes: List[RecentRoute]) -> None:
        # Saved first so a failed write leaves the held entries untouched
        self._persist(routes)
        self._routes = routes

    def _persist(self, routes: List[RecentRoute]) -> None:
        """Hook for persistent subclasses; called before a mutation is applied."""


@dataclass
class JSONFileRecentRoutesStore(InMemoryRecentRoutesStore):
    """Recent routes history persisted to a JSON file.

    The file is read once on construction and rewritten on every
    mutation; the held entries only change once the write succeeded. A missing file starts an empty history; an unreadable one
    is logged and ignored.

    Attributes:
        path: Location of the history file
    """

    path: Path = field(default_factory=lambda: Path("recent-routes.json"))

    def __post_init__(self) -> None:
        super().__post_init__()
        self.path = Path(self.path).expanduser()
        self._routes = self._read()

    def _read(self) -> List[RecentRoute]:
        if not self.path.exists():
            return []
        try:
            with self.path.open(encoding="utf-8") as f:
                raw = json.load(f)
            routes = [RecentRoute.from_dict(item) for item in raw.get("routes", [])]
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            self._logger.warning(
                "Ignoring unreadable recent routes file",
                extra={"path": str(self.path), "error": str(e)},
            )
            return []
        return routes[: self.capacity]

    def _persist(self, routes: List[RecentRoute]) -> None:
        payload = {"routes": [entry.to_dict() for entry in routes]}
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as f:
                json.dump(payload, f, ensure_ascii=False, indent=2)
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            raise StorageError(
                "Failed to save recent routes",
                file_path=str(self.path),
                cause=e,
            )
