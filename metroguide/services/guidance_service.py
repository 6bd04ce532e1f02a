import logging
from typing import List, Optional

from metroguide.models.domain import (
    BoardingInfo,
    ExitStep,
    StartStep,
    Step,
    TransferStep,
)

logger = logging.getLogger(__name__)


class GuidanceService:
    """경로 단계 -> 사용자 안내 문구 (영문)"""

    POSITION_LABELS = {
        "front": "front",
        "middle": "middle",
        "back": "back",
    }

    def describe_steps(self, steps: List[Step]) -> List[str]:
        """
        단계별 안내 문구 생성

        Args:
            steps: add_boarding_info 결과 (boarding 없는 단계도 허용)

        Returns:
            단계와 같은 길이의 문구 리스트
        """
        messages = [self.describe_step(step) for step in steps]
        logger.debug(f"안내 문구 생성: {len(messages)}개")
        return messages

    def describe_step(self, step: Step) -> str:
        if isinstance(step, StartStep):
            message = (
                f"Start at {step.station.name} on the {step.line.name} line "
                f"towards {step.towards.name}."
            )
            return self._append_hint(message, self.describe_boarding(step.boarding))

        if isinstance(step, TransferStep):
            exit_hint = self.describe_position(step.exiting)
            if exit_hint:
                message = (
                    f"At {step.station.name}, get off at the {exit_hint} of the train "
                    f"and transfer to the {step.to_line.name} line towards "
                    f"{step.to_direction.name}."
                )
            else:
                message = (
                    f"Transfer to the {step.to_line.name} line towards "
                    f"{step.to_direction.name} at {step.station.name}."
                )
            return self._append_hint(message, self.describe_boarding(step.boarding))

        if isinstance(step, ExitStep):
            message = f"Exit at {step.station.name}."
            position = self.describe_position(step.exiting)
            if position:
                message += f" The exit is closest to the {position} of the train."
            return message

        raise TypeError(f"알 수 없는 단계 타입: {type(step).__name__}")

    def describe_position(self, info: Optional[BoardingInfo]) -> Optional[str]:
        if info is None or not info.is_known:
            return None
        return self.POSITION_LABELS.get(info.position, info.position)

    def describe_boarding(self, info: Optional[BoardingInfo]) -> Optional[str]:
        """
        탑승 위치 문구

        "Board at the front of the train, car 2, door 3 (doors open on the opposite side)"
        position이 none이면 None
        """
        position = self.describe_position(info)
        if position is None:
            return None

        parts = [f"Board at the {position} of the train"]
        if info.car is not None:
            parts.append(self._describe_car(info.car))
        if info.door is not None:
            parts.append(f"door {info.door}")

        hint = ", ".join(parts)
        if info.opposite_doors:
            hint += " (doors open on the opposite side)"
        return hint + "."

    @staticmethod
    def _describe_car(car: int) -> str:
        if car < 0:
            count = -car
            return "last car" if count == 1 else f"car {count} from the back"
        return f"car {car}"

    @staticmethod
    def _append_hint(message: str, hint: Optional[str]) -> str:
        return f"{message} {hint}" if hint else message
