import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()  # 환경변수 읽어오기

BASE_DIR = Path(__file__).resolve().parent.parent.parent


class Settings:
    PROJECT_NAME: str = "MetroGuide Backend"
    VERSION: str = "1.2.0"  # 탑승 위치 안내 추가

    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"
    PORT: int = int(os.getenv("PORT", 8001))

    # 노선/역 데이터 (lines.json, stations.json)
    DATA_DIR: str = os.getenv("DATA_DIR", str(BASE_DIR / "data"))

    # 그래프 가중치
    # 같은 노선의 인접역 구간
    RIDE_WEIGHT: float = float(os.getenv("RIDE_WEIGHT", 1))
    # (역, 노선) 노드 <-> 역 노드 => 승하차
    STATION_ACCESS_WEIGHT: float = float(os.getenv("STATION_ACCESS_WEIGHT", 1))
    # 같은 역의 노선 간 직접 환승 => 환승 억제용 높은 값
    # TODO: 실제 환승 거리 데이터로 역별 가중치 산정 (현재 전 역 동일)
    TRANSFER_WEIGHT: float = float(os.getenv("TRANSFER_WEIGHT", 100))

    # 하차 위치 추론 규칙
    # optimalBoarding 참조가 이 값이면 열차 중간
    MIDDLE_OF_TRAIN_ID: str = os.getenv("MIDDLE_OF_TRAIN_ID", "middle")
    # 진행 방향도 중간도 아닌 경우 => 반대 방향으로 간주 (현장 검증 필요)
    OPPOSITE_DIRECTION_POSITION: str = os.getenv(
        "OPPOSITE_DIRECTION_POSITION", "back"
    )

    # 경로 계산 메트릭 로깅 활성화 플래그
    ENABLE_ROUTE_METRICS: bool = (
        os.getenv("ENABLE_ROUTE_METRICS", "true").lower() == "true"
    )

    # 성능 모니터링
    ENABLE_PERFORMANCE_MONITORING: bool = (
        os.getenv("ENABLE_PERFORMANCE_MONITORING", "true").lower() == "true"
    )
    SLOW_REQUEST_THRESHOLD_MS: float = float(
        os.getenv("SLOW_REQUEST_THRESHOLD_MS", 500)
    )

    # CORS 설정
    ALLOWED_ORIGINS: list[str] = os.getenv(
        "ALLOWED_ORIGINS",
        "http://localhost:3000,http://localhost:4321,http://127.0.0.1:4321",
    ).split(",")


settings = Settings()  # 모듈화


# 칸 번호: 음수는 열차 뒤에서부터 센 값
CAR_RANGE = (-9, 9)

# 문 번호 (칸 당 4개)
DOOR_RANGE = (1, 4)
