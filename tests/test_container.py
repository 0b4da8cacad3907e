"""Tests for the adapter wiring container."""

from unittest.mock import MagicMock

import pytest

from metro_router.adapters.dataset import JSONNetworkRepository
from metro_router.adapters.rendering import FoliumRouteRenderer
from metro_router.adapters.routing import BestFirstRouteFinder, DepthFirstRouteFinder
from metro_router.adapters.storage import (
    InMemoryRecentRoutesStore,
    JSONFileRecentRoutesStore,
)
from metro_router.config import AppConfig, DatasetConfig, HistoryConfig, RoutingConfig
from metro_router.container import Container
from metro_router.ports import (
    NetworkRepositoryPort,
    RecentRoutesStorePort,
    RouteFinderPort,
    RouteRendererPort,
)
from metro_router.services import RoutePlannerService

from .conftest import DATA_DIR


@pytest.fixture
def config():
    return AppConfig(dataset=DatasetConfig(data_dir=DATA_DIR))


class TestContainer:
    def test_resolve_unregistered(self, config):
        with pytest.raises(KeyError, match="RouteFinderPort"):
            Container(config=config).resolve(RouteFinderPort)

    def test_adapter_is_built_once(self, config):
        factory = MagicMock(side_effect=BestFirstRouteFinder)
        container = Container(config=config)
        container.register(RouteFinderPort, factory)

        assert container.resolve(RouteFinderPort) is container.resolve(RouteFinderPort)
        factory.assert_called_once_with()

    def test_reregistering_replaces_built_adapter(self, config):
        container = Container(config=config)
        container.register(RouteFinderPort, BestFirstRouteFinder)
        container.resolve(RouteFinderPort)

        fake = MagicMock()
        container.register(RouteFinderPort, lambda: fake)

        assert container.resolve(RouteFinderPort) is fake


class TestCreateDefault:
    def test_wires_default_adapters(self, config):
        container = Container.create_default(config)

        assert isinstance(container.resolve(NetworkRepositoryPort), JSONNetworkRepository)
        assert isinstance(container.resolve(RouteFinderPort), DepthFirstRouteFinder)
        assert isinstance(container.resolve(RecentRoutesStorePort), InMemoryRecentRoutesStore)
        assert isinstance(container.resolve(RouteRendererPort), FoliumRouteRenderer)

        planner = container.resolve(RoutePlannerService)
        assert planner.max_routes == 5
        assert planner.repository is container.resolve(NetworkRepositoryPort)

    def test_routing_config_selects_strategy_and_limits(self, config):
        config.routing = RoutingConfig(
            strategy="best_first", max_routes=2, max_path_length=12, max_transfers=1
        )
        container = Container.create_default(config)

        finder = container.resolve(RouteFinderPort)
        assert isinstance(finder, BestFirstRouteFinder)
        assert finder.limits.max_path_length == 12
        assert finder.limits.max_transfers == 1
        assert container.resolve(RoutePlannerService).max_routes == 2

    def test_history_file_selects_json_store(self, config, tmp_path):
        config.history = HistoryConfig(file=tmp_path / "recent.json", capacity=3)
        container = Container.create_default(config)

        store = container.resolve(RecentRoutesStorePort)
        assert isinstance(store, JSONFileRecentRoutesStore)
        assert store.capacity == 3

    def test_planner_runs_on_sample_dataset(self, config):
        planner = Container.create_default(config).resolve(RoutePlannerService)

        routes = planner.plan("aghdasiyeh", "shahid_mahallati")

        assert routes[0].lines == ("line_3",)
