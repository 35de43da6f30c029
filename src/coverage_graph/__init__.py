"""
Coverage Graph - weighted graph core for coverage path planning

This package provides the graph foundation used by coverage planners:

- A generic weighted directed graph with transactional node insertion
- Dijkstra and A* shortest path search
- Dense milli-unit adjacency-matrix export for combinatorial solvers
- Reference builders for visibility-style point graphs and occupancy grids
"""

__version__ = "0.1.0"
__author__ = "Coverage Graph Team"
__license__ = "See LICENSE file"

# Version compatibility check
import sys

if sys.version_info < (3, 12):
    raise RuntimeError("coverage_graph requires Python 3.12 or higher")

# Import commonly used components for easier access
from .core.graph import GraphBase
from .core.graph_paths import PathResult
from .builders import EuclideanGraph, GridGraph

__all__ = [
    "EuclideanGraph",
    "GraphBase",
    "GridGraph",
    "PathResult",
]
