"""
A* search guided by a builder-supplied heuristic.

The heuristic is computed once per search through the graph's
``calculate_heuristic`` hook. Any missing heuristic entry that the search
needs is a hard failure of the whole search rather than a zero estimate.
Optimality requires an admissible heuristic, which is not verified here.
"""

import logging
import math
from typing import Dict, Optional, Set

from ...exceptions import GraphOperationError
from ...types import Heuristic
from ..base import PathFinder
from ..models import PathResult, PerformanceMetrics
from ..utils import PriorityQueue, is_better_cost, reconstruct_solution

logger = logging.getLogger(__name__)


class AStarFinder(PathFinder):
    """Best-first search ordered by cost plus heuristic."""

    operation = "astar"

    def _heuristic_for(self, goal: int) -> Optional[Heuristic]:
        try:
            return self.graph.calculate_heuristic(goal)
        except GraphOperationError as e:
            logger.error(f"Heuristic calculation failed for goal {goal}: {e}")
            return None

    def find_path(self, start_node: int, end_node: int) -> PathResult:
        """
        Find the cheapest path from start_node to end_node.

        Returns:
            PathResult: ``found`` is False with an empty solution when either
            endpoint is missing, the heuristic cannot be computed or lacks a
            required entry, the goal is unreachable or the memory budget was
            exceeded.
        """
        with self._search_context() as metrics:
            reason = self.validate_nodes(start_node, end_node)
            if reason:
                logger.debug(reason)
                return PathResult.failure(reason, metrics)

            heuristic = self._heuristic_for(end_node)
            if heuristic is None:
                return PathResult.failure(f"No heuristic for goal {end_node}", metrics)

            if start_node not in heuristic:
                reason = f"Heuristic has no entry for start node {start_node}"
                logger.error(reason)
                return PathResult.failure(reason, metrics)

            logger.debug(f"Starting A* from {start_node} to {end_node}")

            try:
                return self._search(start_node, end_node, heuristic, metrics)
            except MemoryError as e:
                logger.error(f"A* search aborted: {e}")
                return PathResult.failure(str(e), metrics)

    def _search(
        self, start_node: int, end_node: int, heuristic: Heuristic, metrics: PerformanceMetrics
    ) -> PathResult:
        open_set = PriorityQueue()
        open_set.add_or_update(start_node, heuristic[start_node])
        closed_set: Set[int] = set()
        came_from: Dict[int, int] = {}
        cost: Dict[int, float] = {i: math.inf for i in range(self.graph.size())}
        cost[start_node] = 0.0

        while not open_set.empty():
            self.memory_manager.check_memory()

            popped = open_set.pop()
            if popped is None:
                break
            _, current = popped
            metrics.nodes_explored += 1

            if current == end_node:
                solution = reconstruct_solution(came_from, current)
                logger.debug(f"Found path {solution} with cost {cost[current]}")
                return PathResult.success(solution, cost[current], metrics)

            closed_set.add(current)

            for neighbor, edge_cost in self.graph.get_neighbors(current).items():
                if neighbor in closed_set:
                    continue

                tentative_cost = cost[current] + edge_cost
                if not is_better_cost(tentative_cost, cost.get(neighbor, math.inf)):
                    continue

                if neighbor not in heuristic:
                    reason = f"Heuristic has no entry for node {neighbor}"
                    logger.error(reason)
                    return PathResult.failure(reason, metrics)

                came_from[neighbor] = current
                cost[neighbor] = tentative_cost
                open_set.add_or_update(neighbor, tentative_cost + heuristic[neighbor])

        reason = f"No path exists between {start_node} and {end_node}"
        logger.debug(reason)
        return PathResult.failure(reason, metrics)
