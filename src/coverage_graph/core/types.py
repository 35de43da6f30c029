"""
Core type definitions, sentinels and protocols.

This module provides the type aliases shared by the graph core, the path
finders and the builders, together with the sentinel values used for unset
markers and missing adjacency-matrix cells.
"""

import sys
from typing import Dict, Iterator, List, Optional, Protocol, Tuple

# Node indices are dense positions in the adjacency list.
NodeIndex = int

# Directed edge identifier (from_index, to_index).
EdgeId = Tuple[int, int]

# Ordered node indices from start to goal inclusive.
Solution = List[int]

# Admissible estimate of the remaining cost to a goal, per node index.
Heuristic = Dict[int, float]

# Marker value for a start or goal index that has not been assigned.
UNSET_INDEX = sys.maxsize

# Adjacency-matrix cell for "no edge", the int32 maximum expected by integer solvers.
NO_EDGE_COST = 2**31 - 1

# Scale factor of the milli-unit quantization.
MILLI_SCALE = 1000.0

# Returned by get_edge_cost for a missing edge.
MISSING_EDGE_COST = -1.0


class SearchableGraph(Protocol):
    """Protocol defining the graph operations the path finders rely on."""

    def node_exists(self, node_id: int) -> bool:
        """Check if a node index is assigned."""
        ...

    def get_neighbors(self, node_id: int) -> Dict[int, float]:
        """Get outgoing neighbors with edge costs."""
        ...

    def size(self) -> int:
        """Get the number of nodes."""
        ...

    def calculate_heuristic(self, goal: int) -> Optional[Heuristic]:
        """Compute the heuristic towards a goal."""
        ...

    def get_edges(self) -> Iterator[Tuple[EdgeId, float]]:
        """Iterate over all edges with their costs."""
        ...
