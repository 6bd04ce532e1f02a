# 탑승 / 하차 위치 계산
#
# 각 단계의 탑승 위치는 다음 단계의 하차 위치로 결정됨
# => 마지막 단계부터 역순으로 한 번 순회

import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from metroguide.core.config import settings
from metroguide.core.exceptions import BoardingResolutionException
from metroguide.models.domain import (
    NO_BOARDING,
    BoardingInfo,
    Exit,
    ExitStep,
    StartStep,
    Step,
    TransferStep,
)

logger = logging.getLogger(__name__)


def infer_exit_position(optimal_boarding: str, towards_id: str) -> BoardingInfo:
    """
    출구의 optimalBoarding 참조로 하차 위치 추론

    - 진행 방향 종착역과 같음 => front
    - 열차 중간 sentinel => middle
    - 그 외 => OPPOSITE_DIRECTION_POSITION (기본 back, 현장 검증 안 됨)
    """
    if optimal_boarding == towards_id:
        return BoardingInfo(position="front")
    if optimal_boarding == settings.MIDDLE_OF_TRAIN_ID:
        return BoardingInfo(position="middle")
    return BoardingInfo(position=settings.OPPOSITE_DIRECTION_POSITION)


def _arrival_direction_id(step: Step) -> Optional[str]:
    if isinstance(step, StartStep):
        return step.towards.id
    if isinstance(step, TransferStep):
        return step.to_direction.id
    return None


def _select_exit(step: ExitStep, previous: Step) -> Optional[Exit]:
    exits = step.station.exits
    if len(step.station.lines) > 1:
        # 환승역 => 도착 방향과 optimalBoarding이 같은 출구
        direction_id = _arrival_direction_id(previous)
        return next(
            (
                e
                for e in exits
                if direction_id is not None and e.optimal_boarding == direction_id
            ),
            None,
        )
    return exits[0] if exits else None


def _resolve_exit(steps: List[Step], index: int) -> BoardingInfo:
    step = steps[index]

    if len(steps) == 1:
        # 출발역 == 도착역 => 안내 불가
        return NO_BOARDING
    if index != len(steps) - 1:
        raise BoardingResolutionException("하차 단계는 마지막 단계여야 합니다")

    if not step.station.exits or step.towards is None:
        return NO_BOARDING

    exit_info = _select_exit(step, steps[index - 1])
    if exit_info is None or (
        exit_info.boarding is None and exit_info.optimal_boarding is None
    ):
        return NO_BOARDING

    if exit_info.boarding is None:
        return infer_exit_position(exit_info.optimal_boarding, step.towards.id)

    # 해당 방향 데이터 누락 => 오류 아님
    return exit_info.boarding.get(step.towards.id, NO_BOARDING)


def _resolve_transfer_exit(step: TransferStep, next_exiting: BoardingInfo) -> BoardingInfo:
    transfer = step.station.find_pathfinding_transfer(
        step.from_line.id,
        step.to_line.id,
        step.from_direction.id,
        step.to_direction.id,
    )
    if transfer is None:
        return NO_BOARDING

    opposite_doors = transfer.opposite_doors

    if transfer.single_boarding is not None:
        return transfer.single_boarding.with_opposite_doors(opposite_doors)

    if transfer.boarding is None:
        return NO_BOARDING.with_opposite_doors(opposite_doors)

    # 다음 단계 하차 위치가 none이면 키가 없음
    info = transfer.boarding.get(next_exiting.position)
    if info is None:
        return NO_BOARDING.with_opposite_doors(opposite_doors)
    return info.with_opposite_doors(opposite_doors)


def _successor_exiting(steps: List[Step], index: int) -> BoardingInfo:
    if index + 1 >= len(steps):
        raise BoardingResolutionException("다음 단계가 없습니다")

    next_step = steps[index + 1]
    if isinstance(next_step, StartStep):
        raise BoardingResolutionException("승차 단계는 첫 번째 단계여야 합니다")
    if next_step.exiting is None:
        raise BoardingResolutionException("다음 단계의 하차 위치가 먼저 계산되어야 합니다")
    return next_step.exiting


def add_boarding_info(steps: Sequence[Step]) -> List[Step]:
    """
    모든 단계에 탑승(boarding) / 하차(exiting) 위치 추가

    - ExitStep.exiting: 출구 데이터
    - TransferStep.boarding: 다음 단계의 exiting
    - TransferStep.exiting: 역의 pathfinding 환승 데이터
    - StartStep.boarding: 다음 단계의 exiting

    Args:
        steps: path_to_steps 결과

    Returns:
        새 단계 리스트 (입력은 변경하지 않음)

    Raises:
        BoardingResolutionException: 단계 순서가 올바르지 않을 때
    """
    resolved: List[Step] = list(steps)
    last_index = len(resolved) - 1

    for index in range(last_index, -1, -1):
        step = resolved[index]

        if isinstance(step, ExitStep):
            resolved[index] = replace(step, exiting=_resolve_exit(resolved, index))

        elif isinstance(step, TransferStep):
            if index == 0 or index == last_index:
                raise BoardingResolutionException(
                    "환승 단계는 첫 번째 또는 마지막 단계일 수 없습니다"
                )
            next_exiting = _successor_exiting(resolved, index)
            resolved[index] = replace(
                step,
                boarding=next_exiting,
                exiting=_resolve_transfer_exit(step, next_exiting),
            )

        elif isinstance(step, StartStep):
            if index != 0:
                raise BoardingResolutionException("승차 단계는 첫 번째 단계여야 합니다")
            resolved[index] = replace(step, boarding=_successor_exiting(resolved, index))

        else:
            raise TypeError(f"알 수 없는 단계 타입: {type(step).__name__}")

    return resolved
