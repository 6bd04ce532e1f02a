"""
Cache 모듈 테스트
"""

import json
import logging

import pytest

from metroguide.core.config import BASE_DIR
from metroguide.core.exceptions import DatasetException
from metroguide.db import cache as cache_module
from metroguide.db.cache import (
    build_network,
    clear_cache,
    get_lines_dict,
    get_cache_generation,
    get_station_by_id,
    get_station_id_by_name,
    get_station_name_by_id,
    get_stations_dict,
    initialize_cache,
    is_cache_initialized,
    load_network,
    normalize_string,
    reload_cache,
    search_stations_by_name,
)


@pytest.fixture
def data_dir(tmp_path, raw_lines, raw_stations):
    """테스트 노선도를 JSON 파일로 저장"""
    (tmp_path / "lines.json").write_text(json.dumps(raw_lines), encoding="utf-8")
    (tmp_path / "stations.json").write_text(json.dumps(raw_stations), encoding="utf-8")
    yield tmp_path
    clear_cache()


class TestNormalizeString:
    """검색용 문자열 정규화"""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Berri-UQAM", "berriuqam"),
            ("Côte-des-Neiges", "cotedesneiges"),
            ("Place-d'Armes", "placedarmes"),
            ("St. Michel", "stmichel"),
            ("  Peel ", "peel"),
        ],
    )
    def test_normalize(self, value, expected):
        assert normalize_string(value) == expected


class TestBuildNetwork:
    """데이터 검증 및 상호 참조 연결"""

    def test_cross_references(self, network):
        lines, stations = network
        red = next(line for line in lines if line.id == "red")
        central = next(s for s in stations if s.id == "C")

        assert [s.id for s in red.stations] == ["A", "B", "C", "D"]
        assert central.line_ids == ["red", "blue"]
        assert central.lines[0] is red
        assert red.stations[2] is central

    def test_exit_references(self, stations_by_id):
        central = stations_by_id["C"]
        assert central.exits[0].line.id == "red"
        assert central.exits[0].optimal_boarding == "D"
        assert stations_by_id["D"].exits[0].optimal_boarding == "middle"

    def test_pathfinding_transfers(self, stations_by_id):
        transfer = stations_by_id["C"].find_pathfinding_transfer("red", "blue", "D", "G")

        assert transfer is not None
        assert transfer.opposite_doors is True
        assert transfer.boarding["middle"].car == 4
        assert transfer.single_boarding is None
        assert stations_by_id["C"].find_pathfinding_transfer("red", "blue", "A", "G") is None

    def test_display_transfers(self, stations_by_id):
        transfer = stations_by_id["C"].transfers[0]
        assert transfer.to_direction.id == "G"
        assert transfer.from_direction is None

    def test_unknown_line_reference(self, raw_lines, raw_stations):
        raw_stations[0]["lines"] = ["purple"]
        with pytest.raises(DatasetException) as exc_info:
            build_network(raw_lines, raw_stations)
        assert exc_info.value.code == "INVALID_DATASET"

    def test_unknown_station_reference(self, raw_lines, raw_stations):
        raw_lines[0]["stations"].append("nowhere")
        with pytest.raises(DatasetException):
            build_network(raw_lines, raw_stations)

    def test_unknown_optimal_boarding(self, raw_lines, raw_stations):
        bravo = next(s for s in raw_stations if s["id"] == "B")
        bravo["exits"][0]["optimalBoarding"] = "nowhere"
        with pytest.raises(DatasetException):
            build_network(raw_lines, raw_stations)

    def test_duplicate_station(self, raw_lines, raw_stations):
        raw_stations.append({"id": "A", "name": "Alpha 2", "lines": ["red"]})
        with pytest.raises(DatasetException):
            build_network(raw_lines, raw_stations)

    def test_schema_error(self, raw_lines, raw_stations):
        """잘못된 탑승 위치 값"""
        foxtrot = next(s for s in raw_stations if s["id"] == "F")
        foxtrot["exits"][0]["boarding"]["G"]["position"] = "roof"
        with pytest.raises(DatasetException):
            build_network(raw_lines, raw_stations)

    def test_door_out_of_range(self, raw_lines, raw_stations):
        foxtrot = next(s for s in raw_stations if s["id"] == "F")
        foxtrot["exits"][0]["boarding"]["G"]["door"] = 5
        with pytest.raises(DatasetException):
            build_network(raw_lines, raw_stations)

    def test_station_without_lines(self, raw_lines, raw_stations):
        raw_stations[0]["lines"] = []
        with pytest.raises(DatasetException):
            build_network(raw_lines, raw_stations)


class TestDataCache:
    """전역 캐시 테스트"""

    def test_initialize_from_files(self, data_dir):
        initialize_cache(str(data_dir))

        assert is_cache_initialized()
        assert len(get_stations_dict()) == 10
        assert set(get_lines_dict()) == {"red", "blue", "yellow", "grey"}

    def test_initialize_only_once(self, data_dir, tmp_path_factory):
        initialize_cache(str(data_dir))
        # 이미 초기화 => 다른 경로는 무시
        initialize_cache(str(tmp_path_factory.mktemp("empty")))

        assert get_station_by_id("A").name == "Alpha"

    def test_missing_file(self, tmp_path):
        with pytest.raises(DatasetException):
            initialize_cache(str(tmp_path))
        assert not is_cache_initialized()

    def test_invalid_json(self, data_dir):
        (data_dir / "stations.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(DatasetException):
            initialize_cache(str(data_dir))

    def test_not_a_list(self, data_dir):
        (data_dir / "lines.json").write_text('{"id": "red"}', encoding="utf-8")
        with pytest.raises(DatasetException):
            initialize_cache(str(data_dir))

    def test_reload_cache(self, data_dir, raw_stations):
        initialize_cache(str(data_dir))
        raw_stations[0]["name"] = "Alpha Renamed"
        (data_dir / "stations.json").write_text(json.dumps(raw_stations), encoding="utf-8")

        reload_cache(str(data_dir))

        assert get_station_by_id("A").name == "Alpha Renamed"

    def test_clear_cache(self, loaded_cache):
        clear_cache()
        assert not is_cache_initialized()
        assert cache_module._stations_cache == {}

    def test_bundled_dataset(self):
        """저장소에 포함된 data/ 노선도"""
        try:
            initialize_cache(str(BASE_DIR / "data"))
            assert get_station_by_id("berri-uqam") is not None
            assert "green" in get_lines_dict()
        finally:
            clear_cache()


class TestStationLookup:
    """역 이름 / id 조회"""

    def test_station_name_by_id(self, loaded_cache):
        assert get_station_name_by_id("C") == "Central"
        # 없는 id => 그대로 반환
        assert get_station_name_by_id("nowhere") == "nowhere"

    @pytest.mark.parametrize(
        "query,expected",
        [
            ("C", "C"),
            ("Central", "C"),
            ("central", "C"),
            (" x-ray ", "X"),
            ("Xray", "X"),
            ("Fox", "F"),
        ],
    )
    def test_station_id_by_name(self, loaded_cache, query, expected):
        assert get_station_id_by_name(query) == expected

    def test_station_id_by_name_not_found(self, loaded_cache):
        assert get_station_id_by_name("Zulu") is None
        assert get_station_id_by_name("---") is None

    def test_search_ranking(self, loaded_cache):
        """정확 일치 > 접두 일치 > 부분 일치"""
        results = search_stations_by_name("a")
        names = [s.name for s in results]

        # Alpha (접두) 먼저, 나머지는 부분 일치 이름순
        assert names[0] == "Alpha"
        assert names[1:] == sorted(names[1:])

    def test_search_exact_first(self, loaded_cache):
        results = search_stations_by_name("golf")
        assert [s.id for s in results] == ["G"]

    def test_search_limit(self, loaded_cache):
        assert len(search_stations_by_name("a", limit=2)) == 2

    def test_search_empty_keyword(self, loaded_cache):
        assert search_stations_by_name("  ") == []


class TestDuplicateNames:
    """정규화 이름이 같은 역 => 이름 검색 모호"""

    @pytest.fixture
    def duplicated(self, raw_lines, raw_stations, caplog):
        caplog.set_level(logging.WARNING, logger="metroguide.db.cache")
        raw_lines[3]["stations"].append("C2")
        raw_stations.append({"id": "C2", "name": "Central.", "lines": ["grey"]})
        load_network(*build_network(raw_lines, raw_stations))
        yield
        clear_cache()

    def test_collision_logged(self, duplicated, caplog):
        assert any(
            r.levelno == logging.WARNING and "C2" in r.message for r in caplog.records
        )

    def test_exact_name_is_ambiguous(self, duplicated):
        assert get_station_id_by_name("Central") is None
        assert get_station_id_by_name("central") is None

    def test_prefix_is_ambiguous(self, duplicated):
        assert get_station_id_by_name("Cent") is None

    def test_id_lookup_still_works(self, duplicated):
        assert get_station_id_by_name("C") == "C"
        assert get_station_id_by_name("C2") == "C2"

    def test_search_lists_both(self, duplicated):
        ids = {s.id for s in search_stations_by_name("central")}
        assert ids == {"C", "C2"}


class TestCacheGeneration:
    """데이터 교체 시 세대 증가"""

    def test_generation_changes_on_reload_and_clear(self, data_dir):
        initialize_cache(str(data_dir))
        loaded = get_cache_generation()

        reload_cache(str(data_dir))
        reloaded = get_cache_generation()
        clear_cache()

        assert reloaded > loaded
        assert get_cache_generation() > reloaded
