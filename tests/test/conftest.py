"""
Pytest 설정 및 공통 Fixture
"""

import os
import pytest
import sys
from pathlib import Path

# 환경 변수 설정 (모듈 임포트 전에 설정해야 함)
os.environ.setdefault('ENABLE_PERFORMANCE_MONITORING', 'false')

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from metroguide.algorithms.path_finder import MetroPathFinder  # noqa: E402
from metroguide.db.cache import build_network, clear_cache, load_network  # noqa: E402

# 테스트 노선도
#
#   red    : A - B - C - D
#   blue   : E - C - F - G
#   yellow : G - H
#   grey   : X - Y          (다른 노선과 연결 없음)
#
# 환승역: C (red, blue), G (blue, yellow)


@pytest.fixture
def raw_lines():
    """테스트용 lines.json 레코드"""
    return [
        {"id": "red", "code": "1", "name": "Red", "color": "#E00000",
         "textColor": "#FFFFFF", "stations": ["A", "B", "C", "D"]},
        {"id": "blue", "code": "2", "name": "Blue", "color": "#0050E0",
         "textColor": "#FFFFFF", "stations": ["E", "C", "F", "G"]},
        {"id": "yellow", "code": "3", "name": "Yellow", "color": "#FFE400",
         "textColor": "#000000", "stations": ["G", "H"]},
        {"id": "grey", "code": "4", "name": "Grey", "color": "#808080",
         "textColor": "#FFFFFF", "stations": ["X", "Y"]},
    ]


@pytest.fixture
def raw_stations():
    """테스트용 stations.json 레코드"""
    return [
        {"id": "A", "name": "Alpha", "lines": ["red"]},
        {
            "id": "B",
            "name": "Bravo",
            "lines": ["red"],
            "exits": [{"id": "B-1", "name": "Bravo Main", "optimalBoarding": "D"}],
        },
        {
            "id": "C",
            "name": "Central",
            "lines": ["red", "blue"],
            "exits": [
                {"id": "C-red", "name": "Red side", "line": "red", "optimalBoarding": "D"},
                {"id": "C-blue", "name": "Blue side", "line": "blue", "optimalBoarding": "E"},
            ],
            "transfers": [
                {"from": "red", "to": "blue", "toDirection": "G",
                 "description": "Follow the blue signs"},
            ],
            "pathfinding": {
                "transfers": [
                    {
                        "fromLine": "red",
                        "toLine": "blue",
                        "fromDirection": "D",
                        "toDirection": "G",
                        "boarding": {
                            "front": {"position": "back"},
                            "middle": {"position": "middle", "car": 4},
                        },
                        "oppositeDoors": True,
                    },
                    {
                        "fromLine": "blue",
                        "toLine": "red",
                        "fromDirection": "G",
                        "toDirection": "A",
                        "singleBoarding": {"position": "front", "car": 1, "door": 1},
                    },
                ]
            },
        },
        {
            "id": "D",
            "name": "Delta",
            "lines": ["red"],
            "exits": [{"id": "D-1", "name": "Delta Exit", "optimalBoarding": "middle"}],
        },
        {"id": "E", "name": "Echo", "lines": ["blue"]},
        {
            "id": "F",
            "name": "Foxtrot",
            "lines": ["blue"],
            "exits": [
                {
                    "id": "F-1",
                    "name": "Foxtrot Exit",
                    "boarding": {
                        "G": {"position": "front", "car": 2, "door": 3},
                        "E": {"position": "back", "car": -2},
                    },
                }
            ],
        },
        {"id": "G", "name": "Golf", "lines": ["blue", "yellow"]},
        {
            "id": "H",
            "name": "Hotel",
            "lines": ["yellow"],
            "exits": [{"id": "H-1", "name": "Hotel Exit"}],
        },
        {"id": "X", "name": "X-ray", "lines": ["grey"]},
        {"id": "Y", "name": "Yankee", "lines": ["grey"]},
    ]


@pytest.fixture
def network(raw_lines, raw_stations):
    """(lines, stations) => 상호 참조 연결 완료"""
    return build_network(raw_lines, raw_stations)


@pytest.fixture
def stations_by_id(network):
    _, stations = network
    return {s.id: s for s in stations}


@pytest.fixture
def lines_by_id(network):
    lines, _ = network
    return {line.id: line for line in lines}


@pytest.fixture
def finder(network):
    """MetroPathFinder 인스턴스"""
    lines, stations = network
    return MetroPathFinder(lines, stations)


@pytest.fixture
def loaded_cache(network):
    """테스트 노선도를 전역 캐시에 로드, 종료 시 초기화"""
    lines, stations = network
    load_network(lines, stations)
    yield network
    clear_cache()
