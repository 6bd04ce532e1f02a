from typing import ClassVar, Dict, List, Optional, Union
from dataclasses import dataclass, field, replace

# domain 정의
# 데이터 로드 시 한 번 생성 => 이후 읽기 전용
# Station <-> Line 상호 참조 => eq=False (id 기준 비교, 재귀 repr 방지)


@dataclass(frozen=True)
class BoardingInfo:
    position: str = "none"  # front / middle / back / none
    car: Optional[int] = None  # 음수 => 열차 뒤에서부터
    door: Optional[int] = None  # 1 ~ 4
    opposite_doors: bool = False  # 반대편 문 사용

    @property
    def is_known(self) -> bool:
        return self.position != "none"

    def with_opposite_doors(self, opposite_doors: bool) -> "BoardingInfo":
        return replace(self, opposite_doors=opposite_doors)

    def to_dict(self) -> Dict:
        data = {"position": self.position}
        if self.car is not None:
            data["car"] = self.car
        if self.door is not None:
            data["door"] = self.door
        if self.opposite_doors:
            data["opposite_doors"] = True
        return data


# 안내 불가 (데이터 없음)
NO_BOARDING = BoardingInfo()


@dataclass(eq=False)
class Line:
    id: str
    code: str  # "1", "2", "A" ...
    name: str
    color: str
    text_color: str
    # index 순서 = 실제 운행 순서
    stations: List["Station"] = field(default_factory=list, repr=False)

    def index_of(self, station_id: str) -> int:
        for index, station in enumerate(self.stations):
            if station.id == station_id:
                return index
        return -1

    def has_station(self, station_id: str) -> bool:
        return self.index_of(station_id) != -1

    @property
    def first_station(self) -> "Station":
        return self.stations[0]

    @property
    def last_station(self) -> "Station":
        return self.stations[-1]


@dataclass(eq=False)
class Exit:
    id: str
    name: str
    line: Optional[Line] = None  # 환승역의 노선별 출구
    address: Optional[str] = None
    # 진행 방향 역 id 또는 열차 중간 sentinel ("middle")
    optimal_boarding: Optional[str] = None
    description: Optional[str] = None
    # 도착 방향 역 id -> 하차 위치
    boarding: Optional[Dict[str, BoardingInfo]] = None


@dataclass(eq=False)
class Transfer:
    """화면 표시용 환승 정보 (경로 계산에는 사용하지 않음)"""

    from_line: Line
    to_line: Line
    from_direction: Optional["Station"] = None
    to_direction: Optional["Station"] = None
    optimal_boarding: Optional[str] = None
    description: Optional[str] = None


@dataclass(eq=False)
class PathfindingTransfer:
    from_line: Line
    to_line: Line
    from_direction: "Station"
    to_direction: "Station"
    # 다음 단계의 하차 위치(front/middle/back) -> 이번 하차 위치
    boarding: Optional[Dict[str, BoardingInfo]] = None
    # 다음 단계와 무관하게 항상 같은 위치
    single_boarding: Optional[BoardingInfo] = None
    opposite_doors: bool = False

    def matches(
        self,
        from_line_id: str,
        to_line_id: str,
        from_direction_id: str,
        to_direction_id: str,
    ) -> bool:
        return (
            self.from_line.id == from_line_id
            and self.to_line.id == to_line_id
            and self.from_direction.id == from_direction_id
            and self.to_direction.id == to_direction_id
        )


@dataclass(eq=False)
class StationPathfinding:
    transfers: List[PathfindingTransfer] = field(default_factory=list)


@dataclass(eq=False)
class Station:
    id: str
    name: str
    lines: List[Line] = field(default_factory=list, repr=False)
    exits: Optional[List[Exit]] = None
    transfers: Optional[List[Transfer]] = None
    pathfinding: Optional[StationPathfinding] = None
    stm_id: Optional[str] = None
    accessible: Optional[bool] = None
    parking: Optional[bool] = None

    @property
    def line_ids(self) -> List[str]:
        return [line.id for line in self.lines]

    def find_pathfinding_transfer(
        self,
        from_line_id: str,
        to_line_id: str,
        from_direction_id: str,
        to_direction_id: str,
    ) -> Optional[PathfindingTransfer]:
        if not self.pathfinding or not self.pathfinding.transfers:
            return None
        return next(
            (
                t
                for t in self.pathfinding.transfers
                if t.matches(
                    from_line_id, to_line_id, from_direction_id, to_direction_id
                )
            ),
            None,
        )


# ========== 경로 안내 단계 ==========
# boarding: 이번 구간에서 탑승할 위치 (다음 단계의 exiting)
# exiting: 이번 역에 도착할 때 있어야 할 위치


@dataclass(frozen=True)
class StartStep:
    type: ClassVar[str] = "start"

    station: Station
    line: Line
    towards: Station
    boarding: Optional[BoardingInfo] = None

    def to_dict(self) -> Dict:
        return {
            "type": self.type,
            "station": self.station.id,
            "station_name": self.station.name,
            "line": self.line.id,
            "towards": self.towards.id,
            "towards_name": self.towards.name,
            "boarding": self.boarding.to_dict() if self.boarding else None,
        }


@dataclass(frozen=True)
class TransferStep:
    type: ClassVar[str] = "transfer"

    station: Station
    from_line: Line
    to_line: Line
    from_direction: Station
    to_direction: Station
    boarding: Optional[BoardingInfo] = None
    exiting: Optional[BoardingInfo] = None

    def to_dict(self) -> Dict:
        return {
            "type": self.type,
            "station": self.station.id,
            "station_name": self.station.name,
            "from_line": self.from_line.id,
            "to_line": self.to_line.id,
            "from_direction": self.from_direction.id,
            "to_direction": self.to_direction.id,
            "to_direction_name": self.to_direction.name,
            "boarding": self.boarding.to_dict() if self.boarding else None,
            "exiting": self.exiting.to_dict() if self.exiting else None,
        }


@dataclass(frozen=True)
class ExitStep:
    type: ClassVar[str] = "exit"

    station: Station
    towards: Optional[Station] = None  # 출발역 == 도착역이면 None
    exiting: Optional[BoardingInfo] = None

    def to_dict(self) -> Dict:
        return {
            "type": self.type,
            "station": self.station.id,
            "station_name": self.station.name,
            "towards": self.towards.id if self.towards else None,
            "exiting": self.exiting.to_dict() if self.exiting else None,
        }


Step = Union[StartStep, TransferStep, ExitStep]
