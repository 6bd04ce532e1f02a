"""
singleton caching 전략 사용
Thread Lock으로 서버 시작 시 한 번만 로드하여 메모리에 유지
전역 상태
모든 서비스가 동일한 캐시 인스턴스 참조
=> 노선/역 데이터는 정적 데이터이므로 유리
"""

import json
import logging
import re
import unicodedata
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple
from threading import Lock

from pydantic import ValidationError

from metroguide.core.config import settings
from metroguide.core.exceptions import DatasetException
from metroguide.models.dataset import (
    BoardingInfoRecord,
    LineRecord,
    StationRecord,
)
from metroguide.models.domain import (
    BoardingInfo,
    Exit,
    Line,
    PathfindingTransfer,
    Station,
    StationPathfinding,
    Transfer,
)

logger = logging.getLogger(__name__)

_cache_lock = Lock()
_cache_init = False
_cache_generation = 0  # 데이터 교체 시 증가 => 경로 엔진 재구축 기준

# cache data
_lines_list_cache: List[Line] = []
_stations_list_cache: List[Station] = []
_stations_cache: Dict[str, Station] = {}  # {station_id: station}
_lines_cache: Dict[str, Line] = {}  # {line_id: line}
_station_search_cache: Dict[str, List[str]] = {}  # {normalized name: [station_id]}

# 악센트, 마침표, 하이픈, 아포스트로피, 공백 제거
_STRIP_PATTERN = re.compile(r"[\u0300-\u036f.\-'\s]")


def normalize_string(value: str) -> str:
    """
    검색용 문자열 정규화

    "Berri-UQAM" -> "berriuqam", "Côte-Vertu" -> "cotevertu"
    """
    return _STRIP_PATTERN.sub("", unicodedata.normalize("NFKD", value)).lower()


def _to_boarding_info(record: Optional[BoardingInfoRecord]) -> Optional[BoardingInfo]:
    if record is None:
        return None
    return BoardingInfo(
        position=record.position,
        car=record.car,
        door=record.door,
        opposite_doors=bool(record.opposite_doors),
    )


def build_network(
    raw_lines: List[Dict[str, Any]], raw_stations: List[Dict[str, Any]]
) -> Tuple[List[Line], List[Station]]:
    """
    원본 레코드 검증 후 상호 참조가 연결된 Line/Station 목록 생성

    Args:
        raw_lines: lines.json 레코드 리스트
        raw_stations: stations.json 레코드 리스트

    Returns:
        (lines, stations) => Line.stations / Station.lines 연결 완료

    Raises:
        DatasetException: 스키마 오류 또는 존재하지 않는 id 참조
    """
    try:
        line_records = [LineRecord.model_validate(raw) for raw in raw_lines]
        station_records = [StationRecord.model_validate(raw) for raw in raw_stations]
    except ValidationError as e:
        raise DatasetException(f"노선 데이터 스키마 오류: {e}") from e

    lines_by_id: Dict[str, Line] = {}
    for record in line_records:
        if record.id in lines_by_id:
            raise DatasetException(f"중복된 노선 id: {record.id}")
        lines_by_id[record.id] = Line(
            id=record.id,
            code=record.code,
            name=record.name,
            color=record.color,
            text_color=record.text_color,
        )

    stations_by_id: Dict[str, Station] = {}
    for record in station_records:
        if record.id in stations_by_id:
            raise DatasetException(f"중복된 역 id: {record.id}")
        stations_by_id[record.id] = Station(
            id=record.id,
            name=record.name,
            stm_id=record.stm_id,
            accessible=record.accessible,
            parking=record.parking,
        )

    def line_ref(line_id: str, owner: str) -> Line:
        line = lines_by_id.get(line_id)
        if line is None:
            raise DatasetException(f"{owner}: 존재하지 않는 노선 참조 {line_id}")
        return line

    def station_ref(station_id: str, owner: str) -> Station:
        station = stations_by_id.get(station_id)
        if station is None:
            raise DatasetException(f"{owner}: 존재하지 않는 역 참조 {station_id}")
        return station

    def direction_ref(direction_id: Optional[str], owner: str) -> Optional[str]:
        # optimalBoarding => 역 id 또는 열차 중간 sentinel
        if direction_id is None or direction_id == settings.MIDDLE_OF_TRAIN_ID:
            return direction_id
        return station_ref(direction_id, owner).id

    # 노선 -> 역 순서
    for record in line_records:
        line = lines_by_id[record.id]
        line.stations = [station_ref(sid, f"노선 {record.id}") for sid in record.stations]

    for record in station_records:
        station = stations_by_id[record.id]
        owner = f"역 {record.id}"
        station.lines = [line_ref(lid, owner) for lid in record.lines]

        if record.exits is not None:
            station.exits = [
                Exit(
                    id=e.id,
                    name=e.name,
                    line=line_ref(e.line, owner) if e.line else None,
                    address=e.address,
                    optimal_boarding=direction_ref(e.optimal_boarding, owner),
                    description=e.description,
                    boarding=(
                        {
                            station_ref(direction_id, owner).id: _to_boarding_info(info)
                            for direction_id, info in e.boarding.items()
                        }
                        if e.boarding is not None
                        else None
                    ),
                )
                for e in record.exits
            ]

        if record.transfers is not None:
            station.transfers = [
                Transfer(
                    from_line=line_ref(t.from_line, owner),
                    to_line=line_ref(t.to_line, owner),
                    from_direction=(
                        station_ref(t.from_direction, owner) if t.from_direction else None
                    ),
                    to_direction=(
                        station_ref(t.to_direction, owner) if t.to_direction else None
                    ),
                    optimal_boarding=direction_ref(t.optimal_boarding, owner),
                    description=t.description,
                )
                for t in record.transfers
            ]

        if record.pathfinding is not None:
            station.pathfinding = StationPathfinding(
                transfers=[
                    PathfindingTransfer(
                        from_line=line_ref(t.from_line, owner),
                        to_line=line_ref(t.to_line, owner),
                        from_direction=station_ref(t.from_direction, owner),
                        to_direction=station_ref(t.to_direction, owner),
                        boarding=(
                            {
                                position: _to_boarding_info(info)
                                for position, info in t.boarding.items()
                            }
                            if t.boarding is not None
                            else None
                        ),
                        single_boarding=_to_boarding_info(t.single_boarding),
                        opposite_doors=t.opposite_doors,
                    )
                    for t in record.pathfinding.transfers
                ]
            )

    return list(lines_by_id.values()), list(stations_by_id.values())


def _read_json_list(path: Path) -> List[Dict[str, Any]]:
    if not path.exists():
        raise DatasetException(f"데이터 파일이 없습니다: {path}")

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise DatasetException(f"JSON 형식 오류 {path}: {e}") from e

    if not isinstance(data, list):
        raise DatasetException(f"JSON 데이터가 리스트 형식이 아닙니다: {path}")
    return data


def initialize_cache(data_dir: Optional[str] = None):
    """
    서버 시작 시 노선/역 데이터를 메모리에 로드
    Thread-safe singleton pattern

    Args:
        data_dir: lines.json, stations.json 위치 (기본값 settings.DATA_DIR)
    """
    global _cache_init
    global _lines_list_cache, _stations_list_cache
    global _stations_cache, _lines_cache, _station_search_cache

    with _cache_lock:
        if _cache_init:
            logger.info("캐시가 이미 초기화되었습니다.")
            return

        base = Path(data_dir or settings.DATA_DIR)
        logger.info(f"데이터 캐시 초기화 시작: {base}")

        raw_lines = _read_json_list(base / "lines.json")
        raw_stations = _read_json_list(base / "stations.json")

        lines, stations = build_network(raw_lines, raw_stations)
        _populate(lines, stations)

        logger.info(f"✓ 노선 데이터 로드 완료: {len(_lines_cache)}개 노선")
        logger.info(f"✓ 역 데이터 로드 완료: {len(_stations_cache)}개")

        _cache_init = True
        logger.info("데이터 캐시 초기화 완료")


def load_network(lines: List[Line], stations: List[Station]):
    """이미 구성된 네트워크로 캐시 설정 (테스트, 임베딩 용도)"""
    global _cache_init

    with _cache_lock:
        _populate(lines, stations)
        _cache_init = True
        logger.info(f"네트워크 직접 로드: 노선 {len(lines)}개, 역 {len(stations)}개")


def _populate(lines: List[Line], stations: List[Station]):
    global _lines_list_cache, _stations_list_cache, _cache_generation
    global _stations_cache, _lines_cache, _station_search_cache

    _cache_generation += 1

    _lines_list_cache = list(lines)
    _stations_list_cache = list(stations)
    _lines_cache = {line.id: line for line in lines}
    _stations_cache = {station.id: station for station in stations}
    _station_search_cache = {}
    for station in stations:
        key = normalize_string(station.name)
        ids = _station_search_cache.setdefault(key, [])
        if ids:
            logger.warning(
                f"정규화 이름 중복: {station.name} ({station.id}) <-> {ids} => 이름 검색 시 모호함"
            )
        ids.append(station.id)


def get_lines_list() -> List[Line]:
    if not _cache_init:
        initialize_cache()
    return _lines_list_cache


def get_stations_list() -> List[Station]:
    if not _cache_init:
        initialize_cache()
    return _stations_list_cache


def get_stations_dict() -> Dict[str, Station]:
    if not _cache_init:
        initialize_cache()
    return _stations_cache


def get_lines_dict() -> Dict[str, Line]:
    if not _cache_init:
        initialize_cache()
    return _lines_cache


def get_station_by_id(station_id: str) -> Optional[Station]:
    if not _cache_init:
        initialize_cache()
    return _stations_cache.get(station_id)


def get_station_name_by_id(station_id: str) -> str:
    station = get_station_by_id(station_id)
    return station.name if station else station_id


def get_station_id_by_name(station_name: str) -> Optional[str]:
    if not _cache_init:
        initialize_cache()

    station_name = station_name.strip()

    # 1단계: id 그대로
    if station_name in _stations_cache:
        return station_name

    keyword = normalize_string(station_name)
    if not keyword:
        return None

    # 2단계: 정규화 이름 정확 일치 => 같은 이름의 역이 여럿이면 모호함
    if keyword in _station_search_cache:
        ids = _station_search_cache[keyword]
        if len(ids) == 1:
            return ids[0]
        logger.debug(f"역 이름이 모호합니다: {station_name} ({len(ids)}개 후보)")
        return None

    # 3단계: 접두 일치 => 유일할 때만
    candidates = [
        sid
        for name, ids in _station_search_cache.items()
        if name.startswith(keyword)
        for sid in ids
    ]
    if len(candidates) == 1:
        logger.debug(f"접두 일치: {station_name} → {candidates[0]}")
        return candidates[0]

    if candidates:
        logger.debug(f"역 이름이 모호합니다: {station_name} ({len(candidates)}개 후보)")
    return None


def search_stations_by_name(keyword: str, limit: int = 10) -> List[Station]:
    if not _cache_init:
        initialize_cache()

    keyword = normalize_string(keyword)
    if not keyword:
        return []

    results = []
    for station in _stations_list_cache:
        name = normalize_string(station.name)
        if keyword not in name and keyword not in normalize_string(station.id):
            continue
        if name == keyword:
            priority = 1
        elif name.startswith(keyword):
            priority = 2
        else:
            priority = 3
        results.append((priority, station))

    results.sort(key=lambda x: (x[0], x[1].name))
    return [station for _, station in results[:limit]]


def is_cache_initialized() -> bool:
    return _cache_init


def get_cache_generation() -> int:
    return _cache_generation


def clear_cache():
    global _cache_init, _cache_generation
    global _lines_list_cache, _stations_list_cache
    global _stations_cache, _lines_cache, _station_search_cache

    with _cache_lock:
        _lines_list_cache = []
        _stations_list_cache = []
        _stations_cache = {}
        _lines_cache = {}
        _station_search_cache = {}

        _cache_init = False
        _cache_generation += 1
        logger.info("캐시 초기화됨")


def reload_cache(data_dir: Optional[str] = None):
    clear_cache()
    initialize_cache(data_dir)
