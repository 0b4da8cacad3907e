"""Line terminal lookup and rider guidance text.

Pure functions over a computed RouteResult and the line paths of the
network. A failed terminal lookup never raises: it yields an empty
string, and so does every guide built on top of it.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, Tuple

from ..domain.models import Language, LinePath, RouteResult, StationDisplay, TransitNetwork

_FIRST_STEP_TEMPLATES = {
    "fa": "از ایستگاه {station} سوار {line} به سمت {terminal} شوید",
    "en": "Board {line} at {station} station towards {terminal}",
}

_TRANSFER_TEMPLATES = {
    "fa": "در ایستگاه {station} پیاده شوید و به سمت {line} {terminal} بروید",
    "en": "At {station} station, transfer to {line} towards {terminal}",
}

_SUMMARY_TEMPLATES = {
    "fa": "{stations} ایستگاه، {transfers} تعویض",
    "en": "{stations} stations, {transfers} transfers",
}


def get_line_terminal(
    paths: Mapping[str, Sequence[LinePath]],
    line_id: str,
    from_station_id: str,
    via_station_id: str,
) -> str:
    """Return the terminal a rider heads to on a line.

    The line's paths are scanned in order; the first one holding both
    stations decides. Travelling along the path's station order leads to
    its ``to`` terminal, travelling against it to its ``from`` terminal.

    Args:
        paths: Line id to its directional paths.
        line_id: The line being ridden.
        from_station_id: Boarding station.
        via_station_id: A later station on the same line.

    Returns:
        The terminal station id, or ``""`` when no path holds both
        stations in a usable order.
    """
    for path in paths.get(line_id, ()):
        start = path.index_of(from_station_id)
        via = path.index_of(via_station_id)
        if start == -1 or via == -1 or start == via:
            continue
        return path.to_station if via > start else path.from_station
    return ""


def station_display(network: TransitNetwork, lang: Language) -> StationDisplay:
    """Build a display function: localized station name, or the id itself."""

    def display(station_id: str) -> str:
        station = network.station(station_id)
        if station is None:
            return station_id
        return station.display_name(lang)

    return display


def line_display(network: TransitNetwork, line_id: str, lang: Language) -> str:
    line = network.line(line_id)
    if line is None:
        return line_id
    return line.name.get(lang) or line_id


def get_first_step_guide(
    route: RouteResult,
    network: TransitNetwork,
    lang: Language,
    display: Optional[StationDisplay] = None,
) -> str:
    """Describe how to board the first leg of a route.

    The first leg runs up to the last station of the route's opening
    stretch on the first step's line; the terminal is looked up towards
    that station.

    Returns:
        The localized instruction, or ``""`` for an empty route or when no
        terminal can be determined.
    """
    if route.is_empty:
        return ""

    display = display or station_display(network, lang)
    first = route.steps[0]

    last_on_line = first.station_id
    for step in route.steps:
        if step.line != first.line:
            break
        last_on_line = step.station_id

    terminal = get_line_terminal(
        network.paths, first.line, first.station_id, last_on_line
    )
    if not terminal:
        return ""

    return _FIRST_STEP_TEMPLATES[lang].format(
        station=display(first.station_id),
        line=line_display(network, first.line, lang),
        terminal=display(terminal),
    )


def get_transfer_guide(
    route: RouteResult,
    step_index: int,
    network: TransitNetwork,
    lang: Language,
    display: Optional[StationDisplay] = None,
) -> str:
    """Describe the line change at a transfer step.

    Returns:
        The localized instruction, or ``""`` when the step is not a
        transfer, is the last step, or no terminal can be determined.
    """
    if step_index < 0 or step_index >= len(route.steps) - 1:
        return ""

    current = route.steps[step_index]
    following = route.steps[step_index + 1]
    if not current.transfer_to:
        return ""

    terminal = get_line_terminal(
        network.paths, current.transfer_to, current.station_id, following.station_id
    )
    if not terminal:
        return ""

    display = display or station_display(network, lang)
    return _TRANSFER_TEMPLATES[lang].format(
        station=display(current.station_id),
        line=line_display(network, current.transfer_to, lang),
        terminal=display(terminal),
    )


def route_guides(
    route: RouteResult,
    network: TransitNetwork,
    lang: Language,
    display: Optional[StationDisplay] = None,
) -> List[Tuple[int, str]]:
    """Collect every non-empty guide of a route as ``(step_index, text)``."""
    display = display or station_display(network, lang)
    guides: List[Tuple[int, str]] = []

    first = get_first_step_guide(route, network, lang, display)
    if first:
        guides.append((0, first))

    for index in route.transfer_steps():
        text = get_transfer_guide(route, index, network, lang, display)
        if text:
            guides.append((index, text))

    return guides


def describe_route(route: RouteResult, lang: Language) -> str:
    """One-line summary such as ``"12 stations, 1 transfers"``."""
    return _SUMMARY_TEMPLATES[lang].format(
        stations=route.total_stations, transfers=route.total_transfers
    )
