"""
그래프 구축, 최단 경로, 단계 변환, 탑승 위치 계산
"""

from metroguide.algorithms.network_graph import NetworkGraphBuilder, build_network_graph
from metroguide.algorithms.path_search import find_path, path_cost
from metroguide.algorithms.step_decomposer import path_to_steps, get_towards_station
from metroguide.algorithms.boarding_resolver import add_boarding_info, infer_exit_position
from metroguide.algorithms.path_finder import MetroPathFinder

__all__ = [
    "NetworkGraphBuilder",
    "build_network_graph",
    "find_path",
    "path_cost",
    "path_to_steps",
    "get_towards_station",
    "add_boarding_info",
    "infer_exit_position",
    "MetroPathFinder",
]
