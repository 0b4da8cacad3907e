"""Tests for the Folium route renderer."""

import pytest

from metro_router.adapters.rendering import FoliumRouteRenderer
from metro_router.adapters.routing import BestFirstRouteFinder, build_route
from metro_router.domain.errors import RenderingError
from metro_router.domain.models import RouteResult


class TestFoliumRouteRenderer:
    def test_render_writes_html(self, sample_network, tmp_path):
        route = BestFirstRouteFinder().find_routes(sample_network, "mosalla", "sohrevardi")[0]
        output = tmp_path / "maps" / "route.html"

        result = FoliumRouteRenderer().render(route, sample_network, output, lang="en")

        assert result == output
        content = output.read_text(encoding="utf-8")
        assert "Shahid Beheshti" in content
        assert "#E0001F" in content
        assert "#67C5F5" in content

    def test_empty_route(self, sample_network, tmp_path):
        empty = RouteResult(steps=(), total_stations=0, total_transfers=0, lines=())

        with pytest.raises(RenderingError) as exc_info:
            FoliumRouteRenderer().render(empty, sample_network, tmp_path / "x.html")
        assert exc_info.value.renderer_type == "folium"

    def test_unknown_station(self, sample_network, tmp_path):
        route = build_route(["tajrish", "atlantis"], ["line_1"])

        with pytest.raises(RenderingError, match="atlantis"):
            FoliumRouteRenderer().render(route, sample_network, tmp_path / "x.html")

    def test_legs_split_on_line_change(self):
        route = build_route(["a", "b", "c", "d"], ["l1", "l1", "l2"])
        coords = [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0), (3.0, 3.0)]

        legs = FoliumRouteRenderer._legs(route, coords)

        assert legs == [
            ("l1", [(0.0, 0.0), (1.0, 1.0), (2.0, 2.0)]),
            ("l2", [(2.0, 2.0), (3.0, 3.0)]),
        ]
