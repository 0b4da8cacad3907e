import pytest

from metro_router.adapters.routing import build_route
from metro_router.domain.models import (
    GeoLocation,
    LinePath,
    LocalizedName,
    RecentRoute,
    RouteResult,
)


def test_geo_location_validates_ranges():
    with pytest.raises(ValueError):
        GeoLocation(latitude=91.0, longitude=0.0)
    with pytest.raises(ValueError):
        GeoLocation(latitude=0.0, longitude=-181.0)


def test_localized_name_falls_back_to_english():
    assert LocalizedName(en="Tajrish", fa="تجریش").get("fa") == "تجریش"
    assert LocalizedName(en="Tajrish").get("fa") == "Tajrish"


def test_line_path_index_of():
    path = LinePath(id="p", from_station="a", to_station="c", stations=("a", "b", "c"))
    assert path.index_of("b") == 1
    assert path.index_of("z") == -1


def test_route_result_serialization():
    route = build_route(["a1", "hub", "b2"], ["line_a", "line_b"])

    data = route.to_dict()

    assert data["totalStations"] == 3
    assert data["lines"] == ["line_a", "line_b"]
    assert data["steps"][1]["transferTo"] == "line_b"
    assert RouteResult.from_dict(data) == route


def test_route_result_accessors():
    route = build_route(["a1", "hub", "b2"], ["line_a", "line_b"])
    empty = RouteResult(steps=(), total_stations=0, total_transfers=0, lines=())

    assert route.origin == "a1"
    assert route.destination == "b2"
    assert route.path_key == ("a1", "hub", "b2")
    assert empty.is_empty
    assert empty.origin is None


def test_recent_route_round_trip_defaults_count():
    route = build_route(["a1", "a2"], ["line_a"])
    data = RecentRoute(
        id="a1-a2-5", from_station="a1", to_station="a2", route=route, timestamp=5
    ).to_dict()
    del data["count"]

    assert RecentRoute.from_dict(data).count == 1
