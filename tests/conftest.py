"""Shared fixtures: synthetic networks and the bundled sample dataset."""

from pathlib import Path
from typing import Dict, List, Sequence

import pytest

from metro_router.adapters.dataset import JSONNetworkRepository, build_graph_from_paths
from metro_router.config import DatasetConfig, reset_config
from metro_router.domain.models import (
    GeoLocation,
    Line,
    LinePath,
    LocalizedName,
    Station,
    TransitNetwork,
)

DATA_DIR = Path(__file__).resolve().parents[1] / "metro_router" / "data"


def make_network(lines: Dict[str, List[Sequence[str]]]) -> TransitNetwork:
    """Build a network from ``{line_id: [station sequence, ...]}``.

    Each sequence becomes one path of the line, running from its first
    to its last station. Station ids double as English names; the
    Persian name is the id upper-cased so display lookups are visible.
    """
    memberships: Dict[str, List[str]] = {}
    paths: Dict[str, List[LinePath]] = {}

    for line_id, sequences in lines.items():
        for i, sequence in enumerate(sequences):
            paths.setdefault(line_id, []).append(
                LinePath(
                    id=f"{line_id}_{i}",
                    from_station=sequence[0],
                    to_station=sequence[-1],
                    stations=tuple(sequence),
                )
            )
            for station_id in sequence:
                served = memberships.setdefault(station_id, [])
                if line_id not in served:
                    served.append(line_id)

    stations = {
        station_id: Station(
            id=station_id,
            name=LocalizedName(en=station_id, fa=station_id.upper()),
            location=GeoLocation(latitude=35.7, longitude=51.4),
            lines=tuple(served),
        )
        for station_id, served in memberships.items()
    }
    line_table = {
        line_id: Line(
            id=line_id,
            name=LocalizedName(en=line_id.replace("_", " ").title(), fa=line_id),
        )
        for line_id in lines
    }
    frozen_paths = {k: tuple(v) for k, v in paths.items()}

    return TransitNetwork(
        stations=stations,
        lines=line_table,
        paths=frozen_paths,
        graph=build_graph_from_paths(frozen_paths),
    )


@pytest.fixture(autouse=True)
def _fresh_config():
    """Drop cached configuration around every test."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def cross_network() -> TransitNetwork:
    """Two lines crossing at ``hub``."""
    return make_network(
        {
            "line_a": [["a1", "a2", "hub", "a3"]],
            "line_b": [["b1", "hub", "b2"]],
        }
    )


@pytest.fixture
def loop_network() -> TransitNetwork:
    """Two lines joining ``s`` and ``v`` by different stretches."""
    return make_network(
        {
            "line_a": [["s", "t", "u", "v"]],
            "line_b": [["s", "w", "v"]],
        }
    )


@pytest.fixture
def parallel_network() -> TransitNetwork:
    """Two lines sharing the ``p``-``q`` segment."""
    return make_network(
        {
            "line_a": [["p", "q", "r"]],
            "line_b": [["p", "q", "x"]],
        }
    )


@pytest.fixture(scope="session")
def sample_network() -> TransitNetwork:
    """The bundled Tehran metro sample dataset."""
    return JSONNetworkRepository(DatasetConfig(data_dir=DATA_DIR)).load()
