from metro_router.adapters.routing import build_route, order_edges, rank_routes
from metro_router.domain.models import GraphEdge


def test_order_edges_keeps_current_line_first():
    edges = [
        GraphEdge("x", "a", "line_2"),
        GraphEdge("x", "b", "line_1"),
        GraphEdge("x", "c", "line_3"),
        GraphEdge("x", "d", "line_1"),
    ]

    ordered = order_edges(edges, "line_1")

    assert [e.to_station for e in ordered] == ["b", "d", "a", "c"]


def test_order_edges_without_current_line_keeps_order():
    edges = [GraphEdge("x", "a", "line_2"), GraphEdge("x", "b", "line_1")]
    assert order_edges(edges, "") == edges


def test_build_route_marks_transfer_station():
    route = build_route(
        ["a", "b", "c", "d", "e"],
        ["line_1", "line_1", "line_2", "line_2"],
    )

    assert [s.line for s in route.steps] == ["line_1", "line_1", "line_1", "line_2", "line_2"]
    assert route.transfer_steps() == (2,)
    assert route.steps[2].transfer_to == "line_2"
    assert route.steps[3].transfer_to is None
    assert route.total_stations == 5
    assert route.total_transfers == 1
    assert route.lines == ("line_1", "line_2")


def test_build_route_counts_distinct_lines_only():
    # Coming back to line_1 adds a change but no new line
    route = build_route(
        ["a", "b", "c", "d"],
        ["line_1", "line_2", "line_1"],
    )

    assert route.transfer_steps() == (1, 2)
    assert route.lines == ("line_1", "line_2")
    assert route.total_transfers == 1


def test_build_route_single_station_uses_fallback_line():
    route = build_route(["a"], [], fallback_line="line_9")

    assert route.total_stations == 1
    assert route.steps[0].line == "line_9"
    assert not route.steps[0].is_transfer


def test_rank_routes_dedups_sorts_and_caps():
    slow = build_route(["a", "b", "c", "d"], ["l1", "l1", "l1"])
    transfer = build_route(["a", "x", "d"], ["l1", "l2"])
    fast = build_route(["a", "y", "d"], ["l3", "l3"])
    fast_again = build_route(["a", "y", "d"], ["l4", "l4"])

    ranked = rank_routes([slow, transfer, fast, fast_again], max_routes=5)

    assert ranked == [fast, slow, transfer]
    assert ranked[0].lines == ("l3",)

    assert rank_routes([slow, transfer, fast], max_routes=1) == [fast]
    assert rank_routes([slow], max_routes=0) == []


def test_rank_routes_is_stable_on_ties():
    first = build_route(["a", "b", "d"], ["l1", "l1"])
    second = build_route(["a", "c", "d"], ["l2", "l2"])

    assert rank_routes([first, second], 5) == [first, second]
    assert rank_routes([second, first], 5) == [second, first]


def test_build_route_transfers_follow_line_count():
    for route in (
        build_route(["a", "b"], ["l1"]),
        build_route(["a", "b", "c"], ["l1", "l2"]),
        build_route(["a", "b", "c", "d"], ["l1", "l2", "l3"]),
    ):
        assert route.total_transfers == len(route.lines) - 1


def test_build_route_without_any_line_reports_no_transfers():
    route = build_route(["a"], [])

    assert route.lines == ()
    assert route.total_transfers == 0
    assert route.steps[0].line == ""
