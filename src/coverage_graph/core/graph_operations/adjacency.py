"""Dense adjacency-matrix export.

This module converts a graph into the dense integer cost matrix expected by
combinatorial solvers (TSP and GTSP style) that only accept integer weights:
- Milli-unit quantization of float costs
- ``NO_EDGE_COST`` sentinel for missing edges
- Plain nested lists or a numpy array
"""

import logging
import math
from typing import List

import numpy as np

from ..types import MILLI_SCALE, NO_EDGE_COST, SearchableGraph

logger = logging.getLogger(__name__)


def double_to_milli_int(value: float) -> int:
    """Quantize a cost to milli-units.

    Values whose quantized form would reach the sentinel, including ``inf``,
    are clamped to ``NO_EDGE_COST``. A finite value clamped this way is
    indistinguishable from a missing edge, so it is logged as a warning.

    Raises:
        ValueError: If value is NaN
    """
    if math.isnan(value):
        raise ValueError("Cannot quantize NaN cost")
    if math.isinf(value):
        return NO_EDGE_COST
    milli = round(value * MILLI_SCALE)
    if milli >= NO_EDGE_COST:
        logger.warning(f"Cost {value} exceeds the matrix range and is exported as NO_EDGE_COST")
        return NO_EDGE_COST
    return milli


class AdjacencyExporter:
    """Handles adjacency-matrix export operations."""

    def __init__(self, graph: SearchableGraph):
        """Initialize exporter.

        Args:
            graph: Graph whose edges are exported
        """
        self.graph = graph

    def to_matrix(self) -> List[List[int]]:
        """Build the N x N quantized cost matrix.

        Cell ``(i, j)`` holds ``round(cost * 1000)`` when edge ``(i, j)``
        exists and ``NO_EDGE_COST`` otherwise. Edges whose destination lies
        outside ``[0, N)`` have no cell and are skipped.

        Returns:
            Row-major nested list of integer costs
        """
        size = self.graph.size()
        matrix = [[NO_EDGE_COST] * size for _ in range(size)]

        for i in range(size):
            for j, cost in self.graph.get_neighbors(i).items():
                if 0 <= j < size:
                    matrix[i][j] = double_to_milli_int(cost)
                else:
                    logger.warning(f"Skipping edge ({i}, {j}) to a node outside the graph")

        return matrix

    def to_array(self) -> np.ndarray:
        """Build the quantized cost matrix as an int64 numpy array."""
        size = self.graph.size()
        return np.array(self.to_matrix(), dtype=np.int64).reshape(size, size)
