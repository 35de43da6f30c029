"""Core graph functionality."""

from .exceptions import (
    ConfigurationError,
    EdgeNotFoundError,
    GraphOperationError,
    HeuristicError,
    NodeNotFoundError,
    ResourceNotFoundError,
    ValidationError,
)
from .graph import GraphBase, GraphEvent, GraphEventListener
from .graph_operations import AdjacencyExporter, double_to_milli_int
from .graph_paths import AStarFinder, DijkstraFinder, PathResult
from .types import (
    MILLI_SCALE,
    NO_EDGE_COST,
    UNSET_INDEX,
    EdgeId,
    Heuristic,
    Solution,
)

__all__ = [
    "AStarFinder",
    "AdjacencyExporter",
    "ConfigurationError",
    "DijkstraFinder",
    "EdgeId",
    "EdgeNotFoundError",
    "GraphBase",
    "GraphEvent",
    "GraphEventListener",
    "GraphOperationError",
    "Heuristic",
    "HeuristicError",
    "MILLI_SCALE",
    "NO_EDGE_COST",
    "NodeNotFoundError",
    "PathResult",
    "ResourceNotFoundError",
    "Solution",
    "UNSET_INDEX",
    "ValidationError",
    "double_to_milli_int",
]
