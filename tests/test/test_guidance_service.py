"""
GuidanceService 테스트
"""

import pytest

from metroguide.algorithms.boarding_resolver import add_boarding_info
from metroguide.models.domain import BoardingInfo, ExitStep
from metroguide.services.guidance_service import GuidanceService


class TestGuidanceService:
    """GuidanceService 테스트 클래스"""

    @pytest.fixture
    def service(self):
        return GuidanceService()

    @pytest.fixture
    def route(self, finder):
        def _route(start_id, end_id):
            path = finder.find_shortest_path(start_id, end_id)
            return add_boarding_info(finder.path_to_steps(path))

        return _route

    def test_one_transfer_route(self, service, route):
        """A -> F 전체 안내 문구"""
        messages = service.describe_steps(route("A", "F"))

        assert messages == [
            "Start at Alpha on the Red line towards Delta. "
            "Board at the back of the train (doors open on the opposite side).",
            "At Central, get off at the back of the train and transfer to the "
            "Blue line towards Golf. Board at the front of the train, car 2, door 3.",
            "Exit at Foxtrot. The exit is closest to the front of the train.",
        ]

    def test_unknown_positions(self, service, route):
        """위치 정보 없음 => 힌트 생략"""
        messages = service.describe_steps(route("A", "H"))

        assert messages[0] == "Start at Alpha on the Red line towards Delta."
        assert messages[2] == "Transfer to the Yellow line towards Hotel at Golf."
        assert messages[3] == "Exit at Hotel."

    def test_steps_without_boarding(self, service, finder):
        """add_boarding_info 이전 단계도 안내 가능"""
        steps = finder.path_to_steps(finder.find_shortest_path("A", "D"))
        messages = service.describe_steps(steps)

        assert messages == [
            "Start at Alpha on the Red line towards Delta.",
            "Exit at Delta.",
        ]

    def test_same_station(self, service, stations_by_id):
        messages = service.describe_steps([ExitStep(station=stations_by_id["A"])])
        assert messages == ["Exit at Alpha."]

    def test_unknown_step_type(self, service):
        with pytest.raises(TypeError):
            service.describe_step("not a step")

    @pytest.mark.parametrize(
        "info,expected",
        [
            (BoardingInfo(position="middle"), "Board at the middle of the train."),
            (BoardingInfo(position="front", car=3), "Board at the front of the train, car 3."),
            (BoardingInfo(position="back", car=-1), "Board at the back of the train, last car."),
            (
                BoardingInfo(position="back", car=-2, door=4),
                "Board at the back of the train, car 2 from the back, door 4.",
            ),
            (BoardingInfo(position="none"), None),
            (BoardingInfo(position="none", opposite_doors=True), None),
            (None, None),
        ],
    )
    def test_describe_boarding(self, service, info, expected):
        assert service.describe_boarding(info) == expected
