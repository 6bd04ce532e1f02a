"""
Core 설정 및 utilities, 커스텀 예외
"""

from metroguide.core.config import settings

from metroguide.core.exceptions import (
    MetroGuideException,
    RouteNotFoundException,
    StationNotFoundException,
    InvalidPathException,
    BoardingResolutionException,
    DatasetException,
)

__all__ = [
    "settings",
    "MetroGuideException",
    "RouteNotFoundException",
    "StationNotFoundException",
    "InvalidPathException",
    "BoardingResolutionException",
    "DatasetException",
]
