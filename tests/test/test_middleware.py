"""
성능 모니터링 미들웨어 테스트
"""

import json
import logging

import pytest
from fastapi import FastAPI, Request
from fastapi.testclient import TestClient

from metroguide.core.config import settings
from metroguide.middleware.performance_monitoring import PerformanceMonitoringMiddleware

LOGGER_NAME = "metroguide.middleware.performance_monitoring"


def _make_app():
    app = FastAPI()
    app.add_middleware(PerformanceMonitoringMiddleware)

    @app.get("/ping")
    async def ping():
        return {"ok": True}

    @app.post("/route")
    async def route(request: Request):
        request.state.route = {"origin": "Alpha", "destination": "Foxtrot"}
        return {"ok": True}

    return app


def _performance_metrics(caplog):
    lines = [r.message for r in caplog.records if r.message.startswith("PERFORMANCE: ")]
    return [json.loads(line[len("PERFORMANCE: "):]) for line in lines]


@pytest.fixture
def client():
    return TestClient(_make_app())


class TestPerformanceMonitoringMiddleware:
    """응답 시간 측정 + 요청 로깅"""

    def test_process_time_header(self, client):
        response = client.get("/ping")

        assert response.status_code == 200
        assert float(response.headers["X-Process-Time-Ms"]) >= 0

    def test_performance_log(self, client, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        client.get("/ping", params={"q": "peel"})

        metrics = _performance_metrics(caplog)
        assert len(metrics) == 1
        assert metrics[0]["path"] == "/ping"
        assert metrics[0]["status_code"] == 200
        assert metrics[0]["query_params"] == {"q": "peel"}
        assert metrics[0]["slow_request"] is False
        assert "origin" not in metrics[0]

    def test_route_fields_from_request_state(self, client, caplog):
        """엔드포인트가 기록한 출발/도착 => PERFORMANCE 로그에 포함"""
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        client.post("/route")

        metrics = _performance_metrics(caplog)
        assert metrics[0]["origin"] == "Alpha"
        assert metrics[0]["destination"] == "Foxtrot"

    def test_slow_request_warning(self, mocker, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)
        mocker.patch.object(settings, "SLOW_REQUEST_THRESHOLD_MS", -1.0)

        TestClient(_make_app()).get("/ping")

        assert any(r.levelno == logging.WARNING for r in caplog.records)
        assert _performance_metrics(caplog)[0]["slow_request"] is True

    def test_request_and_response_logged(self, client, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        client.get("/ping")

        messages = [r.message for r in caplog.records]
        assert any(m.startswith("→ GET /ping") for m in messages)
        assert any(m == "← GET /ping status=200" for m in messages)

    def test_error_status_logged_as_error(self, client, caplog):
        caplog.set_level(logging.INFO, logger=LOGGER_NAME)

        response = client.get("/missing")

        assert response.status_code == 404
        assert any(
            r.levelno == logging.ERROR and "status=404" in r.message
            for r in caplog.records
        )
