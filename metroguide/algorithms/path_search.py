# 최단 경로 탐색 (양방향 Dijkstra)

import logging
from typing import Dict, Hashable, List, Optional, Tuple

import networkx as nx

from metroguide.algorithms.network_graph import node_station_id
from metroguide.models.domain import Station

logger = logging.getLogger(__name__)


def search_nodes(
    graph: nx.Graph, start_id: str, end_id: str
) -> Optional[Tuple[float, List[Hashable]]]:
    """
    역 노드 간 최소 가중치 경로

    Returns:
        (총 가중치, 노드 리스트), 역이 없거나 연결되지 않으면 None
    """
    if not graph.has_node(start_id) or not graph.has_node(end_id):
        return None

    try:
        return nx.bidirectional_dijkstra(graph, start_id, end_id, weight="weight")
    except nx.NetworkXNoPath:
        logger.debug(f"연결된 경로 없음: {start_id} → {end_id}")
        return None


def collapse_nodes(nodes: List[Hashable]) -> List[str]:
    """
    노드 경로 -> 역 id 경로

    역 노드 경유(승하차, 환승)로 생기는 연속 중복 역 제거
    => 앞뒤 끝의 역 노드 hop 포함
    """
    station_ids: List[str] = []
    for node in nodes:
        station_id = node_station_id(node)
        if station_ids and station_ids[-1] == station_id:
            continue
        station_ids.append(station_id)
    return station_ids


def find_path(
    graph: nx.Graph,
    stations_by_id: Dict[str, Station],
    start_id: str,
    end_id: str,
) -> Optional[List[Station]]:
    """
    출발역 -> 도착역 최단 경로

    Args:
        graph: NetworkGraphBuilder로 만든 그래프
        stations_by_id: 역 id -> Station
        start_id: 출발역 id
        end_id: 도착역 id

    Returns:
        Station 리스트 (출발역 == 도착역이면 길이 1), 경로가 없으면 None
    """
    result = search_nodes(graph, start_id, end_id)
    if result is None:
        return None

    _, nodes = result
    return [stations_by_id[station_id] for station_id in collapse_nodes(nodes)]


def path_cost(graph: nx.Graph, start_id: str, end_id: str) -> Optional[float]:
    result = search_nodes(graph, start_id, end_id)
    return result[0] if result else None
