# 성능 모니터링 미들웨어

import time
import logging
import json
from typing import Any, Callable, Dict
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from metroguide.core.config import settings

logger = logging.getLogger(__name__)


class PerformanceMonitoringMiddleware(BaseHTTPMiddleware):
    """
    요청 로깅 + 응답 시간 측정

    - 요청 수신 / 응답 상태 로그 (4xx, 5xx 는 ERROR)
    - X-Process-Time-Ms 헤더
    - PERFORMANCE 로그 한 줄 (경로 계산 요청이면 출발/도착 포함)
    - SLOW_REQUEST_THRESHOLD_MS 초과 시 경고
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)
        self.slow_threshold_ms = settings.SLOW_REQUEST_THRESHOLD_MS

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        client = request.client.host if request.client else "unknown"
        logger.info(f"→ {request.method} {request.url.path} from {client}")

        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception as e:
            elapsed_time_ms = (time.perf_counter() - start_time) * 1000
            logger.error(
                f"요청 처리 중 예외 발생: {request.method} {request.url.path}, "
                f"소요시간={elapsed_time_ms:.2f}ms, 예외={e}",
                exc_info=True,
            )
            raise
        elapsed_time_ms = (time.perf_counter() - start_time) * 1000

        response.headers["X-Process-Time-Ms"] = f"{elapsed_time_ms:.2f}"

        logger.log(
            logging.INFO if response.status_code < 400 else logging.ERROR,
            f"← {request.method} {request.url.path} status={response.status_code}",
        )
        self._log_performance_metrics(request, response, elapsed_time_ms)
        return response

    def _build_metrics(
        self, request: Request, response: Response, elapsed_time_ms: float
    ) -> Dict[str, Any]:
        metrics = {
            "event": "http_request",
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "elapsed_time_ms": round(elapsed_time_ms, 2),
            "slow_request": elapsed_time_ms > self.slow_threshold_ms,
        }

        if request.query_params:
            metrics["query_params"] = dict(request.query_params)

        # navigation 엔드포인트가 request.state 에 기록
        route = getattr(request.state, "route", None)
        if route:
            metrics.update(route)

        return metrics

    def _log_performance_metrics(
        self, request: Request, response: Response, elapsed_time_ms: float
    ) -> None:
        metrics = self._build_metrics(request, response, elapsed_time_ms)

        if metrics["slow_request"]:
            logger.warning(
                f"⚠️ 느린 요청 감지: {request.method} {request.url.path}, "
                f"소요시간={elapsed_time_ms:.2f}ms (기준: {self.slow_threshold_ms}ms)"
            )

        logger.info(f"PERFORMANCE: {json.dumps(metrics, ensure_ascii=False)}")
