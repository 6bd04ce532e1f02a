from pydantic import BaseModel, Field

# service별 requests 구조 정의


# 경로 계산 요청 => 역 id 또는 이름
class RouteCalculateRequest(BaseModel):
    origin: str = Field(..., min_length=1, description="출발역 id 또는 이름")
    destination: str = Field(..., min_length=1, description="도착역 id 또는 이름")
    include_boarding: bool = Field(default=True, description="탑승 위치 안내 포함 여부")
