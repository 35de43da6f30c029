"""
Graph state storage and snapshots.

This module holds the plain storage behind a graph: the adjacency list, the
node and edge property tables and the start/goal markers. Snapshots are
shallow: adjacency rows and tables are copied, property objects are shared.
That is sufficient for rolling back a batch edit because the graph never
mutates a stored property in place.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List

from ..types import UNSET_INDEX, EdgeId


@dataclass
class GraphState:
    """
    Encapsulates the state of a graph.

    Attributes:
        adjacency (List[Dict[int, float]]): One row per node, neighbor index to cost
        node_properties (Dict[int, Any]): Node index to domain property
        edge_properties (Dict[EdgeId, Any]): Edge identifier to domain property
        start_idx (int): Start marker, ``UNSET_INDEX`` until assigned
        goal_idx (int): Goal marker, ``UNSET_INDEX`` until assigned
        is_created (bool): Set by builders once ``create`` completed
    """

    adjacency: List[Dict[int, float]] = field(default_factory=list)
    node_properties: Dict[int, Any] = field(default_factory=dict)
    edge_properties: Dict[EdgeId, Any] = field(default_factory=dict)
    start_idx: int = UNSET_INDEX
    goal_idx: int = UNSET_INDEX
    is_created: bool = False

    def snapshot(self) -> "GraphState":
        """Create a copy that is independent of later structural mutations."""
        return GraphState(
            adjacency=[dict(row) for row in self.adjacency],
            node_properties=dict(self.node_properties),
            edge_properties=dict(self.edge_properties),
            start_idx=self.start_idx,
            goal_idx=self.goal_idx,
            is_created=self.is_created,
        )

    @property
    def node_count(self) -> int:
        return len(self.adjacency)

    @property
    def edge_count(self) -> int:
        return sum(len(row) for row in self.adjacency)
