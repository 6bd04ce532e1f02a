"""
역 검색 REST API 엔드포인트
"""

from fastapi import APIRouter, Query, HTTPException
import logging

from metroguide.db.cache import (
    search_stations_by_name,
    get_station_by_id,
    get_lines_list,
)
from metroguide.models.domain import Line, Station, Transfer
from metroguide.models.responses import StationSearchResponse, StationDetailResponse

router = APIRouter()
logger = logging.getLogger(__name__)


def _line_summary(line: Line) -> dict:
    return {
        "id": line.id,
        "code": line.code,
        "name": line.name,
        "color": line.color,
        "text_color": line.text_color,
    }


def _transfer_summary(transfer: Transfer) -> dict:
    return {
        "from_line": transfer.from_line.id,
        "to_line": transfer.to_line.id,
        "from_direction": transfer.from_direction.id if transfer.from_direction else None,
        "to_direction": transfer.to_direction.id if transfer.to_direction else None,
        "to_direction_name": transfer.to_direction.name if transfer.to_direction else None,
        "optimal_boarding": transfer.optimal_boarding,
        "description": transfer.description,
    }


def _station_summary(station: Station) -> dict:
    return {
        "id": station.id,
        "name": station.name,
        "lines": station.line_ids,
    }


@router.get("/search", response_model=StationSearchResponse)
async def search_stations(
    q: str = Query(..., description="검색 키워드", min_length=1, max_length=50),
    limit: int = Query(10, ge=1, le=50, description="최대 결과 수")
):
    """
    역 검색 (자동완성용)

    - **q**: 검색 키워드 (1-50자, 악센트/하이픈/공백 무시)
    - **limit**: 최대 결과 수 (1-50, 기본값 10)

    Example:
        GET /v1/stations/search?q=cote&limit=5
    """
    try:
        logger.info(f"역 검색: keyword={q}, limit={limit}")
        results = [_station_summary(s) for s in search_stations_by_name(q, limit)]

        return {
            "keyword": q,
            "count": len(results),
            "results": results
        }
    except Exception as e:
        logger.error(f"역 검색 오류: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"검색 중 오류 발생: {str(e)}")


@router.get("/lines")
async def get_all_lines():
    """
    전체 노선 목록 조회 (운행 순서대로 역 id)

    Returns:
        {
            "lines": [{"id": "green", ..., "stations": ["angrignon", ...]}, ...],
            "total_lines": 4
        }
    """
    try:
        lines = [
            {**_line_summary(line), "stations": [s.id for s in line.stations]}
            for line in get_lines_list()
        ]
        return {
            "lines": lines,
            "total_lines": len(lines)
        }
    except Exception as e:
        logger.error(f"노선 목록 조회 오류: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=f"조회 중 오류 발생: {str(e)}")


@router.get("/{station_id}", response_model=StationDetailResponse)
async def get_station(station_id: str):
    """
    역 상세 조회 (노선, 출구, 환승 안내)

    Example:
        GET /v1/stations/berri-uqam
    """
    station = get_station_by_id(station_id)
    if station is None:
        raise HTTPException(
            status_code=404,
            detail={"message": f"역을 찾을 수 없습니다: {station_id}", "code": "STATION_NOT_FOUND"},
        )

    return {
        "id": station.id,
        "name": station.name,
        "lines": [_line_summary(line) for line in station.lines],
        "exits": [
            {
                "id": e.id,
                "name": e.name,
                "line": e.line.id if e.line else None,
                "address": e.address,
                "optimal_boarding": e.optimal_boarding,
                "description": e.description,
            }
            for e in station.exits or []
        ],
        "transfers": [_transfer_summary(t) for t in station.transfers or []],
        "accessible": station.accessible,
        "parking": station.parking,
    }
