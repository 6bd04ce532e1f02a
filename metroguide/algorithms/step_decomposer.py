# 역 경로 -> 승차 / 환승 / 하차 단계

import logging
from typing import List, Optional, Tuple

from metroguide.core.exceptions import InvalidPathException
from metroguide.models.domain import (
    ExitStep,
    Line,
    StartStep,
    Station,
    Step,
    TransferStep,
)

logger = logging.getLogger(__name__)


def find_connecting_line(station: Station, next_station: Station) -> Optional[Line]:
    """현재 역의 노선 중 다음 역을 지나는 첫 번째 노선"""
    return next(
        (line for line in station.lines if line.has_station(next_station.id)), None
    )


def get_towards_station(
    line: Line, current: Station, next_station: Station
) -> Optional[Station]:
    """
    노선 위 진행 방향의 종착역

    index 증가 => 마지막 역, 감소 => 첫 번째 역
    """
    current_index = line.index_of(current.id)
    next_index = line.index_of(next_station.id)

    if current_index == -1 or next_index == -1:
        return None

    if next_index > current_index:
        return line.last_station
    return line.first_station


def _next_leg(station: Station, next_station: Station) -> Tuple[Line, Station]:
    line = find_connecting_line(station, next_station)
    if line is None:
        raise InvalidPathException(
            f"유효하지 않은 경로: {station.id} → {next_station.id} 연결 노선 없음"
        )

    towards = get_towards_station(line, station, next_station)
    if towards is None:
        raise InvalidPathException(
            f"유효하지 않은 경로: {station.id} → {next_station.id} 진행 방향을 알 수 없음"
        )
    return line, towards


def path_to_steps(path: List[Station]) -> List[Step]:
    """
    최단 경로를 안내 단계로 변환

    - 첫 역: StartStep
    - 다음 역이 현재 노선에 없을 때: TransferStep
    - 마지막 역: ExitStep

    Args:
        path: find_path 결과

    Returns:
        단계 리스트 (boarding/exiting 미포함)

    Raises:
        InvalidPathException: 인접한 두 역을 잇는 노선이 없을 때
    """
    if not path:
        return []

    steps: List[Step] = []
    current_line: Optional[Line] = None
    towards: Optional[Station] = None
    last_index = len(path) - 1

    for index, station in enumerate(path):
        if index == last_index:
            steps.append(ExitStep(station=station, towards=towards))
            break

        next_station = path[index + 1]

        if index == 0:
            current_line, towards = _next_leg(station, next_station)
            steps.append(StartStep(station=station, line=current_line, towards=towards))
            continue

        # 같은 노선으로 계속 이동
        if current_line.has_station(next_station.id):
            continue

        new_line, new_towards = _next_leg(station, next_station)
        steps.append(
            TransferStep(
                station=station,
                from_line=current_line,
                to_line=new_line,
                from_direction=towards,
                to_direction=new_towards,
            )
        )
        current_line, towards = new_line, new_towards

    logger.debug(f"경로 단계 변환: 역 {len(path)}개 → 단계 {len(steps)}개")
    return steps
