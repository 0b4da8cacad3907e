"""Tests for the JSON network repository."""

import json
from pathlib import Path

import pytest

from metro_router.adapters.dataset import JSONNetworkRepository
from metro_router.config import DatasetConfig
from metro_router.domain.errors import DatasetError, StationNotFoundError

STATIONS = {
    "a": {
        "id": "a",
        "name": "Alpha",
        "translations": {"fa": "آلفا"},
        "lines": ["line_1"],
        "colors": ["#E0001F"],
        "latitude": "35.70",
        "longitude": "51.40",
        "disabled": False,
        "relations": [],
        "wc": True,
        "atm": False,
    },
    "b": {
        "name": "Beta",
        "lines": ["line_1", "line_2"],
        "latitude": "not-a-number",
        "longitude": "51.41",
        "address": "Beta Square",
    },
    "c": {"name": "Gamma", "lines": ["line_2"], "latitude": "35.72", "longitude": "51.42"},
}

LINES = {
    "line_1": {"id": "line_1", "name": {"en": "Line 1", "fa": "خط 1"}, "color": "#E0001F"},
    "line_2": {"name": {"en": "Line 2"}},
}

PATHS = {
    "line_1": {"paths": [{"id": "p1", "from": "a", "to": "b", "stations": ["a", "b"]}]},
    "line_2": {
        "paths": [
            {"from": "b", "to": "c", "stations": ["b", "c"]},
            {"from": "c", "to": "b", "stations": ["c", "b"]},
        ]
    },
}


def _write(directory, name, payload):
    (directory / name).write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")


@pytest.fixture
def data_dir(tmp_path):
    _write(tmp_path, "stations.json", STATIONS)
    _write(tmp_path, "lines.json", LINES)
    _write(tmp_path, "paths.json", PATHS)
    return tmp_path


@pytest.fixture
def repository(data_dir):
    return JSONNetworkRepository(DatasetConfig(data_dir=data_dir))


class TestLoad:
    def test_stations_parsed(self, repository):
        network = repository.load()

        alpha = network.station("a")
        assert alpha.display_name("fa") == "آلفا"
        assert alpha.display_name("en") == "Alpha"
        assert alpha.lines == ("line_1",)
        assert alpha.location.latitude == pytest.approx(35.70)
        assert alpha.has_facility("wc")
        assert not alpha.has_facility("atm")

        beta = network.station("b")
        assert beta.id == "b"
        assert beta.address == "Beta Square"
        # Persian name falls back to English
        assert beta.display_name("fa") == "Beta"

    def test_invalid_coordinates_degrade_to_zero(self, repository):
        beta = repository.load().station("b")
        assert beta.location.latitude == 0.0
        assert beta.location.longitude == 0.0

    def test_lines_parsed_with_defaults(self, repository):
        network = repository.load()

        assert network.line("line_1").name.get("fa") == "خط 1"
        assert network.line("line_1").color == "#E0001F"
        assert network.line("line_2").color == "#888888"
        assert network.line("line_2").name.get("fa") == "Line 2"

    def test_paths_parsed(self, repository):
        network = repository.load()

        assert [p.id for p in network.paths_for("line_1")] == ["p1"]
        assert [p.id for p in network.paths_for("line_2")] == ["line_2_0", "line_2_1"]
        assert network.paths_for("line_2")[1].stations == ("c", "b")

    def test_graph_derived_from_paths(self, repository):
        network = repository.load()

        assert [(e.to_station, e.line) for e in network.edges_from("b")] == [
            ("a", "line_1"),
            ("c", "line_2"),
        ]
        # The reversed line_2 path adds no duplicate edges
        assert [(e.to_station, e.line) for e in network.edges_from("c")] == [
            ("b", "line_2")
        ]

    def test_graph_file_preferred_when_present(self, data_dir):
        _write(
            data_dir,
            "graph.json",
            {"a": [{"to": "c", "line": "line_9", "weight": 2}]},
        )
        network = JSONNetworkRepository(DatasetConfig(data_dir=data_dir)).load()

        edges = network.edges_from("a")
        assert len(edges) == 1
        assert edges[0].from_station == "a"
        assert edges[0].line == "line_9"
        assert edges[0].weight == 2.0
        assert network.edges_from("b") == ()

    def test_network_is_cached(self, repository):
        first = repository.load()
        assert repository.load() is first

        repository.clear_cache()
        assert repository.load() is not first

    def test_network_is_read_only(self, repository):
        network = repository.load()
        with pytest.raises(TypeError):
            network.stations["z"] = network.station("a")


class TestErrors:
    def test_missing_file(self, data_dir):
        (data_dir / "lines.json").unlink()
        repository = JSONNetworkRepository(DatasetConfig(data_dir=data_dir))

        with pytest.raises(DatasetError) as exc_info:
            repository.load()
        assert exc_info.value.file_path.endswith("lines.json")
        assert exc_info.value.cause is not None

    def test_malformed_json(self, data_dir):
        (data_dir / "stations.json").write_text("{not json", encoding="utf-8")

        with pytest.raises(DatasetError):
            JSONNetworkRepository(DatasetConfig(data_dir=data_dir)).load()

    def test_stations_must_be_object(self, data_dir):
        _write(data_dir, "stations.json", [1, 2, 3])

        with pytest.raises(DatasetError, match="Stations file"):
            JSONNetworkRepository(DatasetConfig(data_dir=data_dir)).load()

    @pytest.mark.parametrize(
        "field, value",
        [("translations", "آلفا"), ("lines", 7), ("relations", 3)],
    )
    def test_malformed_station_field(self, data_dir, field, value):
        stations = {"a": {**STATIONS["a"], field: value}}
        _write(data_dir, "stations.json", stations)

        with pytest.raises(DatasetError, match="Invalid station entry: a") as exc_info:
            JSONNetworkRepository(DatasetConfig(data_dir=data_dir)).load()
        assert exc_info.value.file_path.endswith("stations.json")

    def test_path_without_stations(self, data_dir):
        _write(data_dir, "paths.json", {"line_1": {"paths": [{"from": "a", "to": "b"}]}})

        with pytest.raises(DatasetError, match="line path"):
            JSONNetworkRepository(DatasetConfig(data_dir=data_dir)).load()


class TestLookups:
    def test_get_station(self, repository):
        assert repository.get_station("c").name.en == "Gamma"
        assert repository.get_station("zzz") is None

    def test_get_station_or_raise(self, repository):
        with pytest.raises(StationNotFoundError) as exc_info:
            repository.get_station_or_raise("zzz")
        assert exc_info.value.station_id == "zzz"

    def test_list_stations_in_dataset_order(self, repository):
        assert [s.id for s in repository.list_stations()] == ["a", "b", "c"]


def test_bundled_dataset_is_consistent(sample_network):
    for line_id, paths in sample_network.paths.items():
        assert sample_network.line(line_id) is not None
        for path in paths:
            assert path.stations[0] == path.from_station
            assert path.stations[-1] == path.to_station
            for station_id in path.stations:
                assert line_id in sample_network.station(station_id).lines


def test_default_dataset_ships_inside_package():
    import metro_router

    config = DatasetConfig()

    assert config.data_dir.parent == Path(metro_router.__file__).resolve().parent
    network = JSONNetworkRepository(config).load()
    assert network.station("tajrish") is not None
