"""
Dijkstra's shortest path algorithm over non-negative edge costs.
"""

import logging
import math
from typing import Dict, Set

from ..base import PathFinder
from ..models import PathResult, PerformanceMetrics
from ..utils import PriorityQueue, is_better_cost, reconstruct_solution

logger = logging.getLogger(__name__)


class DijkstraFinder(PathFinder):
    """Single-source shortest path search with a heap-ordered open set."""

    operation = "dijkstra"

    def find_path(self, start_node: int, end_node: int) -> PathResult:
        """
        Find the cheapest path from start_node to end_node.

        The search stops as soon as the goal is popped from the open set.
        Equal costs are popped lowest index first.

        Returns:
            PathResult: ``found`` is False with an empty solution when either
            endpoint is missing, the goal is unreachable or the memory budget
            was exceeded.
        """
        with self._search_context() as metrics:
            reason = self.validate_nodes(start_node, end_node)
            if reason:
                logger.debug(reason)
                return PathResult.failure(reason, metrics)

            logger.debug(f"Starting Dijkstra's algorithm from {start_node} to {end_node}")

            try:
                return self._search(start_node, end_node, metrics)
            except MemoryError as e:
                logger.error(f"Dijkstra search aborted: {e}")
                return PathResult.failure(str(e), metrics)

    def _search(self, start_node: int, end_node: int, metrics: PerformanceMetrics) -> PathResult:
        open_set = PriorityQueue()
        open_set.add_or_update(start_node, 0.0)
        closed_set: Set[int] = set()
        came_from: Dict[int, int] = {}
        cost: Dict[int, float] = {i: math.inf for i in range(self.graph.size())}
        cost[start_node] = 0.0

        while not open_set.empty():
            self.memory_manager.check_memory()

            popped = open_set.pop()
            if popped is None:
                break
            current_cost, current = popped
            metrics.nodes_explored += 1

            if current == end_node:
                solution = reconstruct_solution(came_from, current)
                logger.debug(f"Found path {solution} with cost {current_cost}")
                return PathResult.success(solution, current_cost, metrics)

            closed_set.add(current)

            for neighbor, edge_cost in self.graph.get_neighbors(current).items():
                if neighbor in closed_set:
                    continue

                tentative_cost = cost[current] + edge_cost
                if is_better_cost(tentative_cost, cost.get(neighbor, math.inf)):
                    came_from[neighbor] = current
                    cost[neighbor] = tentative_cost
                    open_set.add_or_update(neighbor, tentative_cost)

        reason = f"No path exists between {start_node} and {end_node}"
        logger.debug(reason)
        return PathResult.failure(reason, metrics)
