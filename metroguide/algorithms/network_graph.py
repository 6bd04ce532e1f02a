# 노선/역 데이터 => 가중치 그래프

import logging
from typing import Hashable, List, Optional, Tuple, Union

import networkx as nx

from metroguide.core.config import settings
from metroguide.models.domain import Line, Station

logger = logging.getLogger(__name__)

# 노드 키
# (station_id, line_id) => 해당 노선을 타고 해당 역에 있는 상태
# station_id          => 노선과 무관한 역 (승하차, 환승 경유용)
LineNode = Tuple[str, str]
Node = Union[str, LineNode]


def line_node(station_id: str, line_id: str) -> LineNode:
    return (station_id, line_id)


def node_station_id(node: Hashable) -> str:
    """노드 키 -> 역 id"""
    if isinstance(node, tuple):
        return node[0]
    return node


class NetworkGraphBuilder:
    """
    Line/Station 목록으로 경로 탐색용 무방향 가중치 그래프 생성

    - 같은 노선 인접역: RIDE_WEIGHT
    - (역, 노선) <-> 역: STATION_ACCESS_WEIGHT
    - 같은 역의 노선 쌍: TRANSFER_WEIGHT (환승 억제)

    생성 후 nx.freeze => 쿼리 간 공유 시 변경 불가
    """

    def __init__(
        self,
        ride_weight: Optional[float] = None,
        station_access_weight: Optional[float] = None,
        transfer_weight: Optional[float] = None,
    ):
        self.ride_weight = (
            settings.RIDE_WEIGHT if ride_weight is None else ride_weight
        )
        self.station_access_weight = (
            settings.STATION_ACCESS_WEIGHT
            if station_access_weight is None
            else station_access_weight
        )
        self.transfer_weight = (
            settings.TRANSFER_WEIGHT if transfer_weight is None else transfer_weight
        )
        # 데이터 무결성 오류로 추가된 노드
        self.missing_nodes: List[LineNode] = []

    def build(self, lines: List[Line], stations: List[Station]) -> nx.Graph:
        graph = nx.Graph()
        self.missing_nodes = []

        # 1. 노선별 인접역 연결
        for line in lines:
            for station_a, station_b in zip(line.stations, line.stations[1:]):
                a_id = line_node(station_a.id, line.id)
                b_id = line_node(station_b.id, line.id)

                if not graph.has_node(a_id):
                    graph.add_node(a_id, station_id=station_a.id)
                if not graph.has_node(b_id):
                    graph.add_node(b_id, station_id=station_b.id)

                if not graph.has_edge(a_id, b_id):
                    graph.add_edge(a_id, b_id, weight=self.ride_weight, kind="ride")

        for station in stations:
            # 2. 모든 (역, 노선) 노드를 역 노드와 연결
            for line in station.lines:
                node_id = self._ensure_line_node(graph, station, line)

                if not graph.has_node(station.id):
                    graph.add_node(station.id, station_id=station.id)

                if not graph.has_edge(node_id, station.id):
                    graph.add_edge(
                        node_id,
                        station.id,
                        weight=self.station_access_weight,
                        kind="access",
                    )

            if len(station.lines) < 2:
                continue

            # 3. 환승역 => 노선 쌍마다 직접 환승 간선
            for i, line_a in enumerate(station.lines):
                for line_b in station.lines[i + 1 :]:
                    a_id = self._ensure_line_node(graph, station, line_a)
                    b_id = self._ensure_line_node(graph, station, line_b)

                    if not graph.has_edge(a_id, b_id):
                        graph.add_edge(
                            a_id, b_id, weight=self.transfer_weight, kind="transfer"
                        )

        logger.info(
            f"네트워크 그래프 구축 완료: 노드 {graph.number_of_nodes()}개, "
            f"간선 {graph.number_of_edges()}개"
        )
        if self.missing_nodes:
            logger.warning(f"누락 노드 {len(self.missing_nodes)}개를 임시로 추가했습니다")

        return nx.freeze(graph)

    def _ensure_line_node(self, graph: nx.Graph, station: Station, line: Line) -> LineNode:
        node_id = line_node(station.id, line.id)
        if not graph.has_node(node_id):
            # 역은 노선을 참조하지만 노선의 역 목록에 없음
            logger.warning(f"누락 노드 추가: station={station.id}, line={line.id}")
            graph.add_node(node_id, station_id=station.id)
            self.missing_nodes.append(node_id)
        return node_id


def build_network_graph(lines: List[Line], stations: List[Station], **weights) -> nx.Graph:
    return NetworkGraphBuilder(**weights).build(lines, stations)
