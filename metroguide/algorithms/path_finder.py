import logging
from typing import Dict, List, Optional, Sequence

import networkx as nx

from metroguide.algorithms.boarding_resolver import add_boarding_info
from metroguide.algorithms.network_graph import NetworkGraphBuilder
from metroguide.algorithms.path_search import find_path, path_cost
from metroguide.algorithms.step_decomposer import path_to_steps
from metroguide.models.domain import Line, Station, Step

logger = logging.getLogger(__name__)


class MetroPathFinder:
    """
    최단 경로 + 탑승 위치 안내 엔진

    그래프는 생성 시 한 번만 구축, 이후 읽기 전용
    => 쿼리마다 상태를 만들지 않으므로 여러 요청에서 공유 가능

    사용 순서:
        path = finder.find_shortest_path(start_id, end_id)
        steps = finder.path_to_steps(path)
        steps = finder.add_boarding_info(steps)
    """

    def __init__(
        self,
        lines: List[Line],
        stations: List[Station],
        ride_weight: Optional[float] = None,
        station_access_weight: Optional[float] = None,
        transfer_weight: Optional[float] = None,
    ):
        self.lines = lines
        self.stations = stations
        self.stations_by_id: Dict[str, Station] = {s.id: s for s in stations}

        builder = NetworkGraphBuilder(
            ride_weight=ride_weight,
            station_access_weight=station_access_weight,
            transfer_weight=transfer_weight,
        )
        self.graph: nx.Graph = builder.build(lines, stations)
        self.missing_nodes = list(builder.missing_nodes)

    def has_station(self, station_id: str) -> bool:
        return self.graph.has_node(station_id)

    def find_shortest_path(self, start_id: str, end_id: str) -> Optional[List[Station]]:
        return find_path(self.graph, self.stations_by_id, start_id, end_id)

    def shortest_path_cost(self, start_id: str, end_id: str) -> Optional[float]:
        return path_cost(self.graph, start_id, end_id)

    def path_to_steps(self, path: List[Station]) -> List[Step]:
        return path_to_steps(path)

    def add_boarding_info(self, steps: Sequence[Step]) -> List[Step]:
        return add_boarding_info(steps)

    def graph_info(self) -> Dict[str, int]:
        return {
            "nodes": self.graph.number_of_nodes(),
            "edges": self.graph.number_of_edges(),
            "lines": len(self.lines),
            "stations": len(self.stations),
            "missing_nodes": len(self.missing_nodes),
        }
