"""
MetroGuide Backend - FastAPI Application

지하철 최단 경로 안내 시스템
승차 / 환승 / 하차 단계별 탑승 위치 안내
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from metroguide.core.config import settings
from metroguide.db.cache import initialize_cache, is_cache_initialized
from metroguide.api.v1.router import api_router
from metroguide.api.v1.endpoints.navigation import get_pathfinding_service

# 성능 모니터링
from metroguide.middleware.performance_monitoring import PerformanceMonitoringMiddleware

# 로깅 설정
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    애플리케이션 생명주기 관리

    서버 시작 시 실행:
    - 노선/역 데이터 캐시 초기화
    - 경로 탐색 그래프 구축 (이후 읽기 전용)
    """
    # ========== Startup ==========
    logger.info("=" * 60)
    logger.info("MetroGuide Backend 시작 중...")
    logger.info("=" * 60)

    try:
        logger.info("1/2 노선/역 데이터 캐시 초기화 중...")
        initialize_cache()

        logger.info("2/2 경로 탐색 그래프 구축 중...")
        get_pathfinding_service()

        logger.info("=" * 60)
        logger.info("MetroGuide Backend 시작 완료!")
        logger.info("=" * 60)

    except Exception as e:
        logger.error(f"❌ 초기화 실패: {e}", exc_info=True)
        raise

    # application 실행 <- yield로 제어 반환
    yield

    # ========== Shutdown ==========
    logger.info("✓ MetroGuide Backend 종료 완료")


# FastAPI 애플리케이션 생성
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    description="""
    ## 지하철 최단 경로 및 탑승 위치 안내

    ### 주요 기능
    - 🚇 두 역 사이 최단 경로 (환승 최소화)
    - 🔄 승차 / 환승 / 하차 단계 안내
    - 🚪 다음 환승 또는 출구에 가장 가까운 탑승 위치 (앞/중간/뒤, 칸, 문)
    - 🔍 역 이름 검색 (악센트, 하이픈 무시)
    """,
    lifespan=lifespan,  # 생명주기 관리자 등록
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)

# CORS 설정
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 성능 모니터링 미들웨어 추가
if settings.ENABLE_PERFORMANCE_MONITORING:
    app.add_middleware(PerformanceMonitoringMiddleware)
    logger.info("✓ 성능 모니터링 미들웨어 활성화")

# API 라우터 등록
app.include_router(api_router, prefix="/v1")


# ========== Health Check Endpoints ==========


@app.get("/")
async def root():
    """
    루트 엔드포인트

    서비스 기본 정보 반환
    """
    return {
        "service": settings.PROJECT_NAME,
        "version": settings.VERSION,
        "status": "running",
        "features": [
            "최단 경로",
            "환승 안내",
            "탑승 위치 안내",
            "역 검색",
        ],
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """
    헬스 체크 엔드포인트

    - 데이터 캐시 로드 여부
    - 경로 탐색 그래프 크기
    """
    dataset_status = "healthy" if is_cache_initialized() else "unhealthy"

    try:
        engine_info = get_pathfinding_service().finder.graph_info()
        engine_status = "healthy"
    except Exception as e:
        logger.error(f"엔진 헬스 체크 실패: {e}")
        engine_info = {"error": str(e)}
        engine_status = "unhealthy"

    overall_status = (
        "healthy"
        if dataset_status == "healthy" and engine_status == "healthy"
        else "unhealthy"
    )

    return JSONResponse(
        status_code=200 if overall_status == "healthy" else 503,
        content={
            "status": overall_status,
            "version": settings.VERSION,
            "components": {
                "dataset": dataset_status,
                "pathfinding_engine": engine_status,
            },
            "engine": engine_info,
        },
    )


# ========== Exception Handlers ==========


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """
    전역 예외 핸들러

    예상치 못한 오류 처리
    """
    logger.error(f"예상치 못한 오류: {exc}", exc_info=True)

    return JSONResponse(
        status_code=500,
        content={
            "message": "서버 내부 오류가 발생했습니다",
            "detail": str(exc) if settings.DEBUG else "Internal Server Error",
        },
    )


# ========== Development Server ==========

if __name__ == "__main__":
    import uvicorn

    logger.info("개발 서버 시작...")

    uvicorn.run(
        "metroguide.main:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info",
        access_log=True,
    )
