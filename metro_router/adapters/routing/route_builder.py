"""Helpers shared by the route finders.

- SearchLimits: pruning bounds of the path enumeration
- order_edges: same-line-first edge ordering
- build_route: turns a station path into a RouteResult
- rank_routes: dedup, sort and cap of the candidate set
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Sequence, Tuple

from ...domain.models import GraphEdge, RouteResult, RouteStep


@dataclass(frozen=True, slots=True)
class SearchLimits:
    """Bounds that keep exhaustive path enumeration tractable.

    A branch is abandoned once its path holds more than
    ``max_path_length`` stations or its line-change counter exceeds
    ``max_transfers``.
    """

    max_path_length: int = 30
    max_transfers: int = 4

    def exceeded(self, path_length: int, transfers: int) -> bool:
        return path_length > self.max_path_length or transfers > self.max_transfers


def order_edges(edges: Iterable[GraphEdge], current_line: str) -> List[GraphEdge]:
    """Stable partition putting edges that stay on ``current_line`` first."""
    edges = list(edges)
    same_line = [edge for edge in edges if edge.line == current_line]
    other_lines = [edge for edge in edges if edge.line != current_line]
    return same_line + other_lines


def build_route(
    path: Sequence[str],
    edge_lines: Sequence[str],
    fallback_line: str = "",
) -> RouteResult:
    """Materialize a route from a station path.

    Args:
        path: Visited station ids, origin first.
        edge_lines: Line of the edge taken into ``path[i + 1]``, so one
            entry fewer than ``path``.
        fallback_line: Line reported for the origin when the path has no
            edge (the origin's first line membership).

    Returns:
        The RouteResult. The origin reports its departing line; every other
        step the line it was reached on. A step is a transfer when the next
        step is reached on a different line.
        ``total_transfers`` is ``len(lines) - 1``; a route whose steps carry
        no line at all has empty ``lines`` and reports 0 rather than -1.
    """
    step_lines: List[str] = []
    for i in range(len(path)):
        if i == 0:
            step_lines.append(edge_lines[0] if edge_lines else fallback_line)
        else:
            step_lines.append(edge_lines[i - 1])

    steps: List[RouteStep] = []
    last = len(path) - 1
    for i, station_id in enumerate(path):
        line = step_lines[i]
        next_line = step_lines[i + 1] if i < last else line
        is_transfer = 0 < i < last and next_line != line
        steps.append(
            RouteStep(
                station_id=station_id,
                line=line,
                is_transfer=is_transfer,
                transfer_to=next_line if is_transfer else None,
            )
        )

    lines: List[str] = []
    for line in step_lines:
        if line and line not in lines:
            lines.append(line)

    return RouteResult(
        steps=tuple(steps),
        total_stations=len(steps),
        total_transfers=max(len(lines) - 1, 0),
        lines=tuple(lines),
    )


def rank_routes(candidates: Iterable[RouteResult], max_routes: int) -> List[RouteResult]:
    """Deduplicate, sort and cap candidate routes.

    Routes with an identical station sequence keep their first
    occurrence. The sort is stable, so equal-cost routes stay in
    discovery order.
    """
    seen: set[Tuple[str, ...]] = set()
    unique: List[RouteResult] = []
    for route in candidates:
        key = route.path_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(route)

    unique.sort(key=lambda r: (r.total_transfers, r.total_stations))
    return unique[: max(max_routes, 0)]
