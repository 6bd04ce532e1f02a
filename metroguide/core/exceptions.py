# custom exception 정의 및 관리


class MetroGuideException(Exception):  # 예외 구조 정의
    def __init__(self, message: str, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class RouteNotFoundException(MetroGuideException):
    def __init__(self, message: str = "경로를 찾을 수 없습니다"):
        super().__init__(message, code="ROUTE_NOT_FOUND")


class StationNotFoundException(MetroGuideException):
    def __init__(self, message: str = "역을 찾을 수 없습니다"):
        super().__init__(message, code="STATION_NOT_FOUND")


# 아래 두 예외는 사용자 오류가 아님 => 경로 구성 버그 또는 잘못된 데이터
class InvalidPathException(MetroGuideException):
    def __init__(self, message: str = "유효하지 않은 경로입니다"):
        super().__init__(message, code="INVALID_PATH")


class BoardingResolutionException(MetroGuideException):
    def __init__(self, message: str = "탑승 위치를 계산할 수 없습니다"):
        super().__init__(message, code="BOARDING_RESOLUTION_ERROR")


class DatasetException(MetroGuideException):
    def __init__(self, message: str = "노선 데이터가 올바르지 않습니다"):
        super().__init__(message, code="INVALID_DATASET")
