"""
REST API 경로 계산 엔드포인트
"""

from fastapi import APIRouter, HTTPException, Depends, Request
import logging
from functools import lru_cache
from metroguide.models.requests import RouteCalculateRequest
from metroguide.models.responses import RouteCalculatedResponse
from metroguide.services.pathfinding_service import PathfindingService
from metroguide.db.cache import (
    get_cache_generation,
    initialize_cache,
    is_cache_initialized,
)
from metroguide.core.exceptions import (
    BoardingResolutionException,
    InvalidPathException,
    MetroGuideException,
    RouteNotFoundException,
    StationNotFoundException,
)
import uuid


router = APIRouter()
logger = logging.getLogger(__name__)


# lru_cache 사용하여 싱글톤 패턴과 유사한 효과, 의존성 주입
# 그래프는 캐시 세대마다 한 번만 구축 => 모든 요청이 읽기 전용으로 공유
# reload_cache / clear_cache 이후에는 세대가 바뀌어 새로 구축
@lru_cache(maxsize=1)
def _build_pathfinding_service(generation: int) -> PathfindingService:
    logger.info(f"경로 탐색 엔진 구축: cache generation={generation}")
    return PathfindingService()


def get_pathfinding_service() -> PathfindingService:
    if not is_cache_initialized():
        initialize_cache()
    return _build_pathfinding_service(get_cache_generation())


@router.post("/calculate", response_model=RouteCalculatedResponse)
async def calculate_route(
    request: RouteCalculateRequest,
    http_request: Request,
    service: PathfindingService = Depends(get_pathfinding_service),
):
    """
    경로 계산 (REST API)

    - **origin**: 출발역 id 또는 이름
    - **destination**: 도착역 id 또는 이름
    - **include_boarding**: 탑승 위치 안내 포함 여부 (기본 true)

    Returns:
        역 순서, 단계별 탑승/하차 위치, 안내 문구

    Example:
        POST /v1/navigation/calculate
        {
            "origin": "Snowdon",
            "destination": "Berri-UQAM"
        }
    """
    # 성능 모니터링 로그에 출발/도착 포함
    http_request.state.route = {
        "origin": request.origin,
        "destination": request.destination,
    }

    try:
        logger.info(f"REST 경로 계산: {request.origin} → {request.destination}")

        result = service.calculate_route(
            origin=request.origin,
            destination=request.destination,
            include_boarding=request.include_boarding,
        )

        route_id = str(uuid.uuid4())
        result["route_id"] = route_id

        logger.info(f"REST 경로 계산 완료: {route_id}")

        return result

    except (StationNotFoundException, RouteNotFoundException) as e:
        logger.warning(f"경로 계산 실패: {e.message}")
        raise HTTPException(
            status_code=404, detail={"message": e.message, "code": e.code}
        )
    except (InvalidPathException, BoardingResolutionException) as e:
        # 사용자 오류 아님 => 일반 메시지로 응답
        logger.error(f"경로 안내 계산 오류: {e.message}")
        raise HTTPException(
            status_code=500,
            detail={"message": "could not compute directions", "code": e.code},
        )
    except MetroGuideException as e:
        logger.error(f"경로 계산 실패: {e.message}")
        raise HTTPException(
            status_code=400, detail={"message": e.message, "code": e.code}
        )
    except Exception as e:
        logger.error(f"예상치 못한 오류: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"경로 계산 중 오류 발생: {str(e)}")
