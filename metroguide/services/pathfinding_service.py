# 경로 찾기 서비스

import logging
import time
import json
from typing import Optional, Dict, Any, List

from metroguide.db.cache import (
    get_lines_list,
    get_stations_list,
    get_station_id_by_name,
)
from metroguide.algorithms.path_finder import MetroPathFinder
from metroguide.services.guidance_service import GuidanceService
from metroguide.models.domain import Station, Step, TransferStep
from metroguide.core.exceptions import (
    BoardingResolutionException,
    InvalidPathException,
    RouteNotFoundException,
    StationNotFoundException,
)
from metroguide.core.config import settings

logger = logging.getLogger(__name__)


class PathfindingService:

    def __init__(self):
        # cache에서 직접 가져오기
        self.finder = MetroPathFinder(get_lines_list(), get_stations_list())
        self.guidance = GuidanceService()
        logger.info(f"PathfindingService 초기화 완료: {self.finder.graph_info()}")

    # 엔진 연산 그대로 노출 => 화면에서 경로만 필요할 때 사용
    def find_path(self, start_id: str, end_id: str) -> Optional[List[Station]]:
        return self.finder.find_shortest_path(start_id, end_id)

    def path_to_steps(self, path: List[Station]) -> List[Step]:
        return self.finder.path_to_steps(path)

    def add_boarding_info(self, steps: List[Step]) -> List[Step]:
        return self.finder.add_boarding_info(steps)

    def calculate_route(
        self, origin: str, destination: str, include_boarding: bool = True
    ) -> Dict[str, Any]:
        """
        경로 계산 + 단계별 안내

        Args:
            origin: 출발역 id 또는 이름
            destination: 도착역 id 또는 이름
            include_boarding: 탑승 위치 계산 여부

        Returns:
            경로 데이터 딕셔너리

        Raises:
            StationNotFoundException: 역을 찾을 수 없을 때
            RouteNotFoundException: 경로를 찾을 수 없을 때
            InvalidPathException, BoardingResolutionException: 경로 데이터 오류
        """
        start_time = time.time()

        try:
            origin_id = get_station_id_by_name(origin)
            destination_id = get_station_id_by_name(destination)

            if not origin_id:
                raise StationNotFoundException(f"출발역을 찾을 수 없습니다: {origin}")

            if not destination_id:
                raise StationNotFoundException(f"도착역을 찾을 수 없습니다: {destination}")

            logger.info(f"경로 계산 요청: {origin}({origin_id}) → {destination}({destination_id})")

            path = self.find_path(origin_id, destination_id)
            if path is None:
                raise RouteNotFoundException(
                    f"{origin}에서 {destination}까지 경로를 찾을 수 없습니다"
                )

            steps = self.path_to_steps(path)
            if include_boarding:
                steps = self.add_boarding_info(steps)

            transfers = sum(1 for step in steps if isinstance(step, TransferStep))

            result = {
                "origin": path[0].name,
                "origin_id": origin_id,
                "destination": path[-1].name,
                "destination_id": destination_id,
                "path": [station.id for station in path],
                "path_names": [station.name for station in path],
                "steps": [step.to_dict() for step in steps],
                "instructions": self.guidance.describe_steps(steps),
                "transfers": transfers,
            }

            elapsed_time = time.time() - start_time
            self._log_route_metrics(
                response_time_ms=elapsed_time * 1000,
                origin=origin_id,
                destination=destination_id,
                stations=len(path),
                transfers=transfers,
            )
            return result

        except (StationNotFoundException, RouteNotFoundException) as e:
            logger.error(f"경로 계산 실패: {e.message}")
            raise
        except (InvalidPathException, BoardingResolutionException) as e:
            # 데이터 또는 경로 구성 버그 => 해당 쿼리만 중단
            logger.error(f"경로 단계 계산 오류 [{e.code}]: {e.message}", exc_info=True)
            raise

    def _log_route_metrics(
        self,
        response_time_ms: float,
        origin: str,
        destination: str,
        stations: int,
        transfers: int,
    ) -> None:
        """
        경로 계산 메트릭 로깅 => 로그 수집기에서 분석하기
        """
        if not settings.ENABLE_ROUTE_METRICS:
            return

        metrics = {
            "event": "route_calculation",
            "response_time_ms": round(response_time_ms, 2),
            "origin": origin,
            "destination": destination,
            "stations": stations,
            "transfers": transfers,
        }

        logger.info(f"METRICS: {json.dumps(metrics, ensure_ascii=False)}")
