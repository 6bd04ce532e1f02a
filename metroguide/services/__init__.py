"""
Business logic services
"""

from metroguide.services.pathfinding_service import PathfindingService
from metroguide.services.guidance_service import GuidanceService

__all__ = [
    "PathfindingService",
    "GuidanceService",
]
