from typing import List, Optional, Dict
from pydantic import BaseModel, Field

# service 별 응답 구조 정의


class BoardingInfoResponse(BaseModel):
    position: str = Field(..., description="front / middle / back / none")
    car: Optional[int] = Field(None, description="칸 번호 (음수: 뒤에서부터)")
    door: Optional[int] = Field(None, description="문 번호 (1-4)")
    opposite_doors: bool = Field(default=False, description="반대편 문 사용")


# 경로 단계 (start / transfer / exit 공통 필드)
class RouteStepResponse(BaseModel):
    type: str = Field(..., description="start / transfer / exit")
    station: str = Field(..., description="역 id")
    station_name: str = Field(..., description="역 이름")
    line: Optional[str] = Field(None, description="승차 노선 (start)")
    towards: Optional[str] = Field(None, description="진행 방향 종착역 id")
    towards_name: Optional[str] = Field(None, description="진행 방향 종착역 이름")
    from_line: Optional[str] = Field(None, description="환승 전 노선")
    to_line: Optional[str] = Field(None, description="환승 후 노선")
    from_direction: Optional[str] = Field(None, description="환승 전 방향")
    to_direction: Optional[str] = Field(None, description="환승 후 방향")
    to_direction_name: Optional[str] = Field(None, description="환승 후 방향 이름")
    boarding: Optional[BoardingInfoResponse] = Field(None, description="탑승 위치")
    exiting: Optional[BoardingInfoResponse] = Field(None, description="하차 위치")


# 경로 계산 응답
class RouteCalculatedResponse(BaseModel):
    route_id: Optional[str] = Field(None, description="경로 ID")
    origin: str = Field(..., description="출발역 이름")
    origin_id: str = Field(..., description="출발역 id")
    destination: str = Field(..., description="도착역 이름")
    destination_id: str = Field(..., description="도착역 id")
    path: List[str] = Field(..., description="역 id 순서")
    path_names: List[str] = Field(..., description="역 이름 순서")
    steps: List[RouteStepResponse] = Field(..., description="승차 / 환승 / 하차 단계")
    instructions: List[str] = Field(..., description="단계별 안내 문구")
    transfers: int = Field(..., description="환승 횟수")


class LineSummary(BaseModel):
    id: str
    code: str
    name: str
    color: str
    text_color: str


class ExitSummary(BaseModel):
    id: str
    name: str
    line: Optional[str] = None
    address: Optional[str] = None
    optimal_boarding: Optional[str] = Field(None, description="진행 방향 역 id 또는 middle")
    description: Optional[str] = None


# 환승 안내 (화면 표시용)
class TransferSummary(BaseModel):
    from_line: str = Field(..., description="환승 전 노선 id")
    to_line: str = Field(..., description="환승 후 노선 id")
    from_direction: Optional[str] = Field(None, description="환승 전 방향 역 id")
    to_direction: Optional[str] = Field(None, description="환승 후 방향 역 id")
    to_direction_name: Optional[str] = Field(None, description="환승 후 방향 역 이름")
    optimal_boarding: Optional[str] = Field(None, description="진행 방향 역 id 또는 middle")
    description: Optional[str] = None


# 역 검색 응답 (자동완성)
class StationSearchResponse(BaseModel):
    keyword: str = Field(..., description="검색 키워드")
    count: int = Field(..., description="검색 결과 수")
    results: List[Dict] = Field(default_factory=list, description="역 정보 리스트")


# 역 상세 응답
class StationDetailResponse(BaseModel):
    id: str = Field(..., description="역 id")
    name: str = Field(..., description="역 이름")
    lines: List[LineSummary] = Field(..., description="노선 리스트")
    exits: List[ExitSummary] = Field(default_factory=list, description="출구 리스트")
    transfers: List[TransferSummary] = Field(default_factory=list, description="환승 안내 리스트")
    accessible: Optional[bool] = Field(None, description="엘리베이터 접근 가능 여부")
    parking: Optional[bool] = Field(None, description="주차장 여부")
