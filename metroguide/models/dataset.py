from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from metroguide.core.config import CAR_RANGE, DOOR_RANGE

# lines.json / stations.json 레코드 구조 정의
# 파일의 camelCase 키 => alias, 참조는 id 문자열


class DatasetRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class BoardingInfoRecord(DatasetRecord):
    position: Literal["front", "middle", "back", "none"]
    car: Optional[int] = Field(None, ge=CAR_RANGE[0], le=CAR_RANGE[1], description="칸 번호 (음수: 뒤에서부터)")
    door: Optional[int] = Field(None, ge=DOOR_RANGE[0], le=DOOR_RANGE[1], description="문 번호")
    opposite_doors: Optional[bool] = Field(None, alias="oppositeDoors")


class ExitRecord(DatasetRecord):
    id: str = Field(..., min_length=1)
    line: Optional[str] = Field(None, description="환승역의 노선 id")
    name: str = Field(..., min_length=1)
    address: Optional[str] = Field(None, min_length=1)
    optimal_boarding: Optional[str] = Field(
        None, alias="optimalBoarding", description="진행 방향 역 id 또는 middle"
    )
    description: Optional[str] = None
    # 도착 방향 역 id -> 하차 위치
    boarding: Optional[Dict[str, BoardingInfoRecord]] = None


class TransferRecord(DatasetRecord):
    from_line: str = Field(..., alias="from")
    to_line: str = Field(..., alias="to")
    from_direction: Optional[str] = Field(None, alias="fromDirection")
    to_direction: Optional[str] = Field(None, alias="toDirection")
    optimal_boarding: Optional[str] = Field(None, alias="optimalBoarding")
    description: Optional[str] = None


class PathfindingTransferRecord(DatasetRecord):
    from_line: str = Field(..., alias="fromLine")
    to_line: str = Field(..., alias="toLine")
    from_direction: str = Field(..., alias="fromDirection")
    to_direction: str = Field(..., alias="toDirection")
    boarding: Optional[Dict[Literal["front", "middle", "back"], BoardingInfoRecord]] = None
    single_boarding: Optional[BoardingInfoRecord] = Field(None, alias="singleBoarding")
    opposite_doors: bool = Field(False, alias="oppositeDoors")


class PathfindingRecord(DatasetRecord):
    transfers: List[PathfindingTransferRecord] = Field(default_factory=list)


class StationRecord(DatasetRecord):
    id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    lines: List[str] = Field(..., min_length=1, description="노선 id 리스트")
    exits: Optional[List[ExitRecord]] = None
    transfers: Optional[List[TransferRecord]] = None
    pathfinding: Optional[PathfindingRecord] = None
    stm_id: Optional[str] = Field(None, alias="stmId")
    accessible: Optional[bool] = None
    parking: Optional[bool] = None


class LineRecord(DatasetRecord):
    id: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1, max_length=2)
    name: str = Field(..., min_length=1)
    color: str = Field(..., min_length=1)
    text_color: str = Field(..., min_length=1, alias="textColor")
    stations: List[str] = Field(..., min_length=1, description="운행 순서대로 역 id")
