from abc import ABC, abstractmethod
from contextlib import contextmanager
from time import time
from typing import Generator, Optional

from coverage_graph.core.exceptions import ConfigurationError
from coverage_graph.core.graph_paths.models import PathResult, PerformanceMetrics
from coverage_graph.core.graph_paths.utils import MemoryManager
from coverage_graph.core.types import SearchableGraph


class PathFinder(ABC):
    """Abstract base class for path finding algorithms."""

    operation = "path_finder"

    def __init__(self, graph: SearchableGraph, max_memory_mb: Optional[float] = None):
        """Initialize finder with graph and optional memory limit."""
        if max_memory_mb is not None and max_memory_mb <= 0:
            raise ConfigurationError("max_memory_mb must be positive")
        self.graph = graph
        self.memory_manager = MemoryManager(max_memory_mb)

    @abstractmethod
    def find_path(self, start_node: int, end_node: int) -> PathResult:
        """Find path between nodes."""
        pass

    @contextmanager
    def _search_context(self) -> Generator[PerformanceMetrics, None, None]:
        """Context manager providing metrics for a single search."""
        self.memory_manager.reset_peak_memory()
        metrics = PerformanceMetrics(operation=self.operation, start_time=time())
        try:
            yield metrics
        finally:
            metrics.end_time = time()
            metrics.max_memory_used = int(self.memory_manager.peak_memory_mb * 1024 * 1024)

    def validate_nodes(self, start_node: int, end_node: int) -> Optional[str]:
        """Return a failure reason if either endpoint is missing, None otherwise."""
        if not self.graph.node_exists(start_node):
            return f"Start node {start_node} not found"
        if not self.graph.node_exists(end_node):
            return f"End node {end_node} not found"
        return None
