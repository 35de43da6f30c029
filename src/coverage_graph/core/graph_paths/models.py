"""
Data models for graph path finding.

This module provides the result types returned by the search algorithms:
- PathResult: Container for a solution, its cost and the failure reason
- PerformanceMetrics: Container for algorithm performance metrics

Searches never raise for "no path"; they return a PathResult whose ``found``
flag is False and whose solution is empty.

Example:
    >>> result = graph.solve_dijkstra(0, 3)
    >>> if result:
    ...     print(result.solution, result.cost)
    [0, 1, 2, 3] 3.0
"""

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

from ..exceptions import ValidationError
from ..types import Solution


@dataclass
class PerformanceMetrics:
    """
    Container for path finding performance metrics.

    Attributes:
        operation: Name of the path finding operation
        start_time: Operation start timestamp
        end_time: Operation end timestamp (0.0 if not completed)
        path_length: Number of nodes in the found solution
        nodes_explored: Number of nodes popped from the open set
        max_memory_used: Peak process memory during the search (bytes)

    Example:
        >>> metrics = PerformanceMetrics(operation="dijkstra", start_time=time())
        >>> # ... perform search ...
        >>> metrics.end_time = time()
        >>> print(f"Search took {metrics.duration:.2f}ms")
    """

    operation: str
    start_time: float
    end_time: float = 0.0
    path_length: Optional[int] = None
    nodes_explored: int = 0
    max_memory_used: Optional[int] = None

    def __post_init__(self):
        """Validate metrics after initialization."""
        if not isinstance(self.operation, str) or not self.operation.strip():
            raise ValueError("operation must be a non-empty string")

        if not isinstance(self.start_time, (int, float)):
            raise TypeError("start_time must be a numeric value")

        if self.end_time < 0:
            raise ValueError("end_time cannot be negative")

    @property
    def duration(self) -> float:
        """
        Calculate operation duration in milliseconds.

        Returns:
            Duration of the operation in milliseconds
        """
        return (self.end_time - self.start_time) * 1000 if self.end_time else 0.0

    def to_dict(self) -> Dict[str, Union[str, float, int, None]]:
        """Convert metrics to dictionary format."""
        return {
            "operation": self.operation,
            "duration_ms": self.duration,
            "path_length": self.path_length,
            "nodes_explored": self.nodes_explored,
            "max_memory_used": self.max_memory_used,
        }


@dataclass
class PathResult:
    """
    Container for path finding results.

    Attributes:
        solution: Node indices from start to goal inclusive, empty on failure
        cost: Accumulated edge cost of the solution, ``inf`` on failure
        found: Whether a path was found
        reason: Human readable failure reason, None on success
        metrics: Performance metrics of the search that produced this result

    Example:
        >>> result = PathResult.failure("goal unreachable")
        >>> bool(result), result.solution
        (False, [])
    """

    solution: Solution = field(default_factory=list)
    cost: float = math.inf
    found: bool = False
    reason: Optional[str] = None
    metrics: Optional[PerformanceMetrics] = None

    def __post_init__(self):
        """Validate initialization parameters."""
        if not isinstance(self.solution, list):
            raise TypeError("solution must be a list")

        if self.found and not self.solution:
            raise ValidationError("a successful result requires a non-empty solution")

        if not self.found and self.solution:
            raise ValidationError("a failed result cannot carry a partial solution")

    @classmethod
    def success(
        cls, solution: Solution, cost: float, metrics: Optional[PerformanceMetrics] = None
    ) -> "PathResult":
        """Create a successful result."""
        if metrics is not None:
            metrics.path_length = len(solution)
        return cls(solution=solution, cost=cost, found=True, metrics=metrics)

    @classmethod
    def failure(cls, reason: str, metrics: Optional[PerformanceMetrics] = None) -> "PathResult":
        """Create a failed result with an empty solution."""
        return cls(reason=reason, metrics=metrics)

    def __bool__(self) -> bool:
        return self.found

    def __len__(self) -> int:
        """Return the number of nodes in the solution."""
        return len(self.solution)

    def __iter__(self):
        return iter(self.solution)

    def __getitem__(self, index: int) -> int:
        return self.solution[index]

    @property
    def start(self) -> Optional[int]:
        return self.solution[0] if self.solution else None

    @property
    def goal(self) -> Optional[int]:
        return self.solution[-1] if self.solution else None

    @property
    def edges(self) -> List[tuple]:
        """Get the sequence of edge identifiers traversed by the solution."""
        return list(zip(self.solution, self.solution[1:]))
