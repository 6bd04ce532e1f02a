"""
pydantic models for 요청, 응답, 데이터 레코드 + dataclass 도메인 객체
"""


from metroguide.models.requests import RouteCalculateRequest
from metroguide.models.responses import (
    RouteCalculatedResponse,
    RouteStepResponse,
    BoardingInfoResponse,
    StationSearchResponse,
    StationDetailResponse,
)
from metroguide.models.domain import (
    BoardingInfo,
    NO_BOARDING,
    Line,
    Station,
    Exit,
    Transfer,
    PathfindingTransfer,
    StationPathfinding,
    StartStep,
    TransferStep,
    ExitStep,
    Step,
)

__all__ = [
    "RouteCalculateRequest",
    "RouteCalculatedResponse",
    "RouteStepResponse",
    "BoardingInfoResponse",
    "StationSearchResponse",
    "StationDetailResponse",
    "BoardingInfo",
    "NO_BOARDING",
    "Line",
    "Station",
    "Exit",
    "Transfer",
    "PathfindingTransfer",
    "StationPathfinding",
    "StartStep",
    "TransferStep",
    "ExitStep",
    "Step",
]
