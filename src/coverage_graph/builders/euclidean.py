"""
Visibility-style graph over points in the plane or in space.

Every inserted point is connected in both directions to each existing point
that lies within ``max_distance`` and passes the optional line-of-sight
predicate. Edge cost and edge property are the Euclidean distance, and the
straight-line distance to the goal is an admissible A* heuristic.

Example:
    >>> graph = EuclideanGraph([(0.0, 0.0), (1.0, 0.0), (2.0, 0.0)], max_distance=1.5)
    >>> graph.create()
    True
    >>> graph.solve_astar(0, 2).solution
    [0, 1, 2]
"""

import logging
import math
from typing import Callable, Iterable, List, Optional, Tuple

from ..core.exceptions import ConfigurationError, GraphOperationError, HeuristicError
from ..core.graph import GraphBase
from ..core.types import Heuristic

logger = logging.getLogger(__name__)

Point = Tuple[float, ...]
VisibilityFunc = Callable[[Point, Point], bool]


class EuclideanGraph(GraphBase[Point, float]):
    """
    Graph of points connected by straight segments.

    Attributes:
        points (List[Point]): Points inserted by ``create``
        max_distance (Optional[float]): Longest segment that becomes an edge
        is_visible (Optional[VisibilityFunc]): Line-of-sight predicate between two points
    """

    def __init__(
        self,
        points: Optional[Iterable[Point]] = None,
        max_distance: Optional[float] = None,
        is_visible: Optional[VisibilityFunc] = None,
    ):
        super().__init__()
        if max_distance is not None and not max_distance > 0:
            raise ConfigurationError("max_distance must be positive")
        self.points: List[Point] = [tuple(p) for p in points] if points is not None else []
        self.max_distance = max_distance
        self.is_visible = is_visible

    def create(self) -> bool:
        """Rebuild the graph from ``points``."""
        self.clear()
        for point in self.points:
            if not self.add_node(point):
                logger.error(f"Failed adding point {point}.")
                return False
        self.is_created = True
        return True

    def _connects(self, a: Point, b: Point, distance: float) -> bool:
        if self.max_distance is not None and distance > self.max_distance:
            return False
        if self.is_visible is not None and not self.is_visible(a, b):
            return False
        return True

    def add_edges(self) -> bool:
        new_idx = self.size() - 1
        point = self.get_node_property(new_idx)
        if point is None or not all(math.isfinite(c) for c in point):
            raise GraphOperationError(f"Node {new_idx} has no valid point: {point}")

        for other_idx in range(new_idx):
            other = self.get_node_property(other_idx)
            if len(other) != len(point):
                raise GraphOperationError(
                    f"Point {point} has dimension {len(point)}, expected {len(other)}"
                )
            distance = math.dist(point, other)
            if not self._connects(point, other, distance):
                continue
            if not (
                self.add_edge((new_idx, other_idx), distance, distance)
                and self.add_edge((other_idx, new_idx), distance, distance)
            ):
                return False
        return True

    def calculate_heuristic(self, goal: int) -> Optional[Heuristic]:
        if not self.node_property_exists(goal):
            raise HeuristicError(f"Goal {goal} has no point")
        goal_point = self.get_node_property(goal)
        return {
            idx: math.dist(point, goal_point)
            for idx, point in enumerate(self.get_node_properties())
        }
