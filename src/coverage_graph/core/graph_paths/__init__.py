"""Graph path finding functionality."""

from .algorithms import AStarFinder, DijkstraFinder
from .base import PathFinder
from .models import PathResult, PerformanceMetrics
from .utils import PriorityQueue, reconstruct_solution

__all__ = [
    "AStarFinder",
    "DijkstraFinder",
    "PathFinder",
    "PathResult",
    "PerformanceMetrics",
    "PriorityQueue",
    "reconstruct_solution",
]
