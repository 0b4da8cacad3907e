"""Wiring of the metro router adapters.

Each port is bound to a factory that builds its adapter from the
application configuration. Adapters are built on first resolve and
shared afterwards, so the planner, the CLI and the map export all see
the same loaded network and the same history store.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from .config import AppConfig, get_config


@dataclass
class Container:
    """Port to adapter bindings for one configuration.

    Usage:
        planner = Container.create_default(config).resolve(RoutePlannerService)

    Tests bind a port to a stand-in with ``register`` before resolving.

    Attributes:
        config: Configuration the default adapters are built from
    """

    config: AppConfig = field(default_factory=get_config)

    _factories: Dict[type[Any], Callable[[], Any]] = field(
        default_factory=dict, repr=False
    )
    _instances: Dict[type[Any], Any] = field(default_factory=dict, repr=False)
    _lock: threading.RLock = field(default_factory=threading.RLock, repr=False)

    def register(self, port_type: type[Any], factory: Callable[[], Any]) -> None:
        """Bind ``port_type`` to ``factory``, dropping any adapter already built."""
        with self._lock:
            self._factories[port_type] = factory
            self._instances.pop(port_type, None)

    def resolve(self, port_type: type[Any]) -> Any:
        """Return the shared adapter bound to ``port_type``.

        Raises:
            KeyError: If nothing is bound to the port.
        """
        with self._lock:
            if port_type not in self._instances:
                factory = self._factories.get(port_type)
                if factory is None:
                    raise KeyError(f"No adapter bound to {port_type.__name__}")
                self._instances[port_type] = factory()
            return self._instances[port_type]

    @classmethod
    def create_default(cls, config: Optional[AppConfig] = None) -> Container:
        """Bind every port to its production adapter.

        The route finder follows ``routing.strategy``; history goes to a
        JSON file when ``history.file`` is set and stays in memory
        otherwise.
        """
        from .adapters.dataset import JSONNetworkRepository
        from .adapters.rendering import FoliumRouteRenderer
        from .adapters.routing import create_route_finder
        from .adapters.storage import (
            InMemoryRecentRoutesStore,
            JSONFileRecentRoutesStore,
        )
        from .ports.network import NetworkRepositoryPort
        from .ports.rendering import RouteRendererPort
        from .ports.routing import RouteFinderPort
        from .ports.storage import RecentRoutesStorePort
        from .services import RoutePlannerService

        config = config or get_config()
        container = cls(config=config)

        def recent_routes_store() -> RecentRoutesStorePort:
            history = config.history
            if history.file is not None:
                return JSONFileRecentRoutesStore(
                    capacity=history.capacity, path=history.file
                )
            return InMemoryRecentRoutesStore(capacity=history.capacity)

        container.register(
            NetworkRepositoryPort, lambda: JSONNetworkRepository(config.dataset)
        )
        container.register(RouteFinderPort, lambda: create_route_finder(config.routing))
        container.register(RecentRoutesStorePort, recent_routes_store)
        container.register(RouteRendererPort, FoliumRouteRenderer)
        container.register(
            RoutePlannerService,
            lambda: RoutePlannerService(
                repository=container.resolve(NetworkRepositoryPort),
                route_finder=container.resolve(RouteFinderPort),
                recent_routes=container.resolve(RecentRoutesStorePort),
                renderer=container.resolve(RouteRendererPort),
                max_routes=config.routing.max_routes,
            ),
        )
        return container
