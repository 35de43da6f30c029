"""
Core graph data structure for coverage planning.

This module provides the GraphBase class: a directed, weighted graph with
dense integer node indices, an adjacency list of neighbor costs and side
tables for arbitrary node and edge properties. Domain-specific planners
(sweep patterns, visibility graphs, grids) subclass it and implement the
three extension hooks:

- ``create``: build the whole graph for the domain
- ``add_edges``: wire the most recently inserted node to the existing ones
- ``calculate_heuristic``: admissible estimate of the remaining cost to a goal

Every node insertion runs ``add_edges`` with an edge undo log open. If the
hook fails the graph is restored to exactly its pre-insertion state, at a
cost proportional to the edges the hook wrote.

Failures are reported as return values (``False``, ``None``, ``(cost, ok)``
or an unsuccessful PathResult). The ``*_safe`` accessors raise instead.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from threading import RLock
from typing import Any, Dict, Generator, Iterator, List, Optional, Tuple

import numpy as np

from ..exceptions import EdgeNotFoundError, GraphOperationError, NodeNotFoundError
from ..graph_operations.adjacency import AdjacencyExporter
from ..graph_paths.algorithms import AStarFinder, DijkstraFinder
from ..graph_paths.models import PathResult
from ..graph_paths.utils import is_valid_cost
from ..types import MISSING_EDGE_COST, UNSET_INDEX, EdgeId, Heuristic, Solution
from .events import GraphEvent, GraphEventListener, GraphEventManager
from .state import GraphState

logger = logging.getLogger(__name__)

# Marks an edge slot that was empty before the current insertion wrote it
_ABSENT = object()


class GraphBase[NodeProperty, EdgeProperty](ABC):
    """
    Weighted directed graph with incremental construction and shortest-path search.

    Type Parameters:
        NodeProperty: Domain payload attached to each node
        EdgeProperty: Domain payload attached to each edge

    Attributes:
        _state (GraphState): Adjacency list, property tables and markers
        _state_lock (RLock): Re-entrant lock so hooks may call ``add_edge``
        _events (GraphEventManager): State change listeners
    """

    def __init__(self):
        self._state = GraphState()
        self._state_lock = RLock()
        self._events = GraphEventManager()
        # Prior (cost, property) of every edge written during an open insertion
        self._edge_undo: Optional[Dict[EdgeId, Tuple[Any, Any]]] = None

    # Extension hooks

    @abstractmethod
    def create(self) -> bool:
        """Build the full graph for the domain. Return False on failure."""

    @abstractmethod
    def add_edges(self) -> bool:
        """
        Add all edges incident to the most recently inserted node.

        Called after every insertion, when the new node already has index
        ``size() - 1`` and its property stored. Must tolerate edges that
        already exist. Return False or raise GraphOperationError to reject
        the node. The hook may call ``add_edge`` and the query methods but
        must not insert nodes or clear the graph.
        """

    @abstractmethod
    def calculate_heuristic(self, goal: int) -> Optional[Heuristic]:
        """
        Estimate the remaining cost from every node to goal.

        Return None or raise GraphOperationError when no heuristic exists.
        """

    # Listeners

    def add_state_listener(self, listener: GraphEventListener) -> None:
        """Add a listener for state changes."""
        self._events.add_listener(listener)

    def remove_state_listener(self, listener: GraphEventListener) -> None:
        """Remove a state change listener."""
        self._events.remove_listener(listener)

    def _notify_state_change(self, event: GraphEvent, details: Dict[str, Any]) -> None:
        self._events.notify(event, details)

    # Construction and mutation

    @contextmanager
    def transaction(self) -> Generator[None, None, None]:
        """Context manager for atomic batch edits.

        Any exception raised inside the block restores the state captured on
        entry and is re-raised. The snapshot copies every adjacency row, so
        node insertion uses its own edge undo log instead.
        """
        with self._state_lock:
            state_backup = self._state.snapshot()
            try:
                yield
            except Exception:
                self._state = state_backup
                raise

    def _insert_node(self, node_property: NodeProperty, role: Optional[str] = None) -> bool:
        with self._state_lock:
            state = self._state
            idx = state.node_count
            markers = (state.start_idx, state.goal_idx, state.is_created)
            outer_undo, self._edge_undo = self._edge_undo, {}
            try:
                state.adjacency.append({})
                state.node_properties[idx] = node_property
                # Markers are visible to the hook and rolled back with the node.
                if role == "start":
                    state.start_idx = idx
                elif role == "goal":
                    state.goal_idx = idx
                if not self.add_edges():
                    raise GraphOperationError(f"Edge generation failed for node {idx}")
            except GraphOperationError as e:
                undone = self._rollback_insertion(idx, markers)
                logger.warning(f"Rolled back node {idx}: {e}")
                self._notify_state_change(
                    GraphEvent.NODE_ROLLED_BACK, {"node": idx, "undone_edges": undone}
                )
                return False
            except Exception:
                self._rollback_insertion(idx, markers)
                raise
            finally:
                self._edge_undo = outer_undo

        self._notify_state_change(GraphEvent.NODE_ADDED, {"node": idx, "role": role})
        return True

    def _rollback_insertion(self, idx: int, markers: Tuple[int, int, bool]) -> List[EdgeId]:
        """Undo the insertion of node idx using the edge undo log.

        Only the edges written by the hook are touched, so the cost is
        proportional to the work the hook did rather than to the graph size.
        Returns the edges whose write was undone.
        """
        state = self._state
        for (from_idx, to_idx), (prior_cost, prior_property) in self._edge_undo.items():
            row = state.adjacency[from_idx]
            if prior_cost is _ABSENT:
                row.pop(to_idx, None)
            else:
                row[to_idx] = prior_cost
            if prior_property is _ABSENT:
                state.edge_properties.pop((from_idx, to_idx), None)
            else:
                state.edge_properties[(from_idx, to_idx)] = prior_property

        del state.adjacency[idx:]
        state.node_properties.pop(idx, None)
        state.start_idx, state.goal_idx, state.is_created = markers
        return list(self._edge_undo)

    def add_node(self, node_property: NodeProperty) -> bool:
        """
        Append a node and let ``add_edges`` connect it.

        Args:
            node_property (NodeProperty): Domain payload of the node

        Returns:
            bool: True on success; False if edge generation failed, in which
            case the graph is unchanged
        """
        return self._insert_node(node_property)

    def add_start_node(self, node_property: NodeProperty) -> bool:
        """Add a node and mark it as the search start."""
        if self._insert_node(node_property, role="start"):
            return True
        logger.error("Failed adding start node.")
        return False

    def add_goal_node(self, node_property: NodeProperty) -> bool:
        """Add a node and mark it as the search goal."""
        if self._insert_node(node_property, role="goal"):
            return True
        logger.error("Failed adding goal node.")
        return False

    def add_edge(self, edge_id: EdgeId, edge_property: EdgeProperty, cost: float) -> bool:
        """
        Add or overwrite a directed edge.

        The destination index is not validated, so an edge may point at a node
        that is inserted later in the same build.

        Args:
            edge_id (EdgeId): (from_index, to_index)
            edge_property (EdgeProperty): Domain payload of the edge
            cost (float): Non-negative traversal cost

        Returns:
            bool: False without mutation if the cost is negative or NaN, or
            the source node does not exist
        """
        from_idx, to_idx = edge_id
        if not is_valid_cost(cost) or not self.node_exists(from_idx):
            return False

        edge_key = (from_idx, to_idx)
        with self._state_lock:
            row = self._state.adjacency[from_idx]
            if self._edge_undo is not None and edge_key not in self._edge_undo:
                self._edge_undo[edge_key] = (
                    row.get(to_idx, _ABSENT),
                    self._state.edge_properties.get(edge_key, _ABSENT),
                )
            row[to_idx] = float(cost)
            self._state.edge_properties[edge_key] = edge_property

        self._notify_state_change(
            GraphEvent.EDGE_ADDED,
            {"from_node": from_idx, "to_node": to_idx, "cost": float(cost)},
        )
        return True

    def clear(self) -> None:
        """Remove all nodes, edges and properties and unset both markers."""
        with self._state_lock:
            self._state = GraphState()
        self._notify_state_change(GraphEvent.GRAPH_CLEARED, {})

    def clear_edges(self) -> None:
        """Remove all edges, keeping nodes, node properties and markers."""
        with self._state_lock:
            self._state.edge_properties.clear()
            for neighbors in self._state.adjacency:
                neighbors.clear()
        self._notify_state_change(GraphEvent.EDGES_CLEARED, {})

    # Queries

    @property
    def start_idx(self) -> int:
        return self._state.start_idx

    @property
    def goal_idx(self) -> int:
        return self._state.goal_idx

    @property
    def is_created(self) -> bool:
        return self._state.is_created

    @is_created.setter
    def is_created(self, value: bool) -> None:
        self._state.is_created = value

    def size(self) -> int:
        """Get the number of nodes."""
        return self._state.node_count

    def __len__(self) -> int:
        return self.size()

    def node_exists(self, node_id: int) -> bool:
        return 0 <= node_id < self._state.node_count

    def node_property_exists(self, node_id: int) -> bool:
        return node_id in self._state.node_properties

    def edge_exists(self, edge_id: EdgeId) -> bool:
        from_idx, to_idx = edge_id
        return self.node_exists(from_idx) and to_idx in self._state.adjacency[from_idx]

    def edge_property_exists(self, edge_id: EdgeId) -> bool:
        return tuple(edge_id) in self._state.edge_properties

    def get_edge_cost(self, edge_id: EdgeId) -> Tuple[float, bool]:
        """
        Get the cost of an edge.

        Returns:
            Tuple[float, bool]: (cost, True) if the edge exists, otherwise
            (MISSING_EDGE_COST, False)
        """
        if self.edge_exists(edge_id):
            return self._state.adjacency[edge_id[0]][edge_id[1]], True
        logger.error(f"Edge from {edge_id[0]} to {edge_id[1]} does not exist.")
        return MISSING_EDGE_COST, False

    def get_edge_cost_safe(self, edge_id: EdgeId) -> float:
        """Get the cost of an edge, raising EdgeNotFoundError if it doesn't exist."""
        if not self.edge_exists(edge_id):
            raise EdgeNotFoundError(f"No edge exists from {edge_id[0]} to {edge_id[1]}")
        return self._state.adjacency[edge_id[0]][edge_id[1]]

    def get_node_property(self, node_id: int) -> Optional[NodeProperty]:
        """
        Get the stored property of a node.

        The returned object aliases internal storage and must not be retained
        across mutations.
        """
        if self.node_property_exists(node_id):
            return self._state.node_properties[node_id]
        logger.error(f"Cannot access node property {node_id}.")
        return None

    def get_node_property_safe(self, node_id: int) -> NodeProperty:
        """Get a node property, raising NodeNotFoundError if it doesn't exist."""
        if not self.node_property_exists(node_id):
            raise NodeNotFoundError(f"Node {node_id} has no property")
        return self._state.node_properties[node_id]

    def get_edge_property(self, edge_id: EdgeId) -> Optional[EdgeProperty]:
        """Get the stored property of an edge, or None if it doesn't exist."""
        if self.edge_property_exists(edge_id):
            return self._state.edge_properties[tuple(edge_id)]
        logger.error(f"Cannot access edge property from {edge_id[0]} to {edge_id[1]}.")
        return None

    def get_neighbors(self, node_id: int) -> Dict[int, float]:
        """Get outgoing neighbors of a node mapped to edge costs."""
        if not self.node_exists(node_id):
            return {}
        return dict(self._state.adjacency[node_id])

    def get_edges(self) -> Iterator[Tuple[EdgeId, float]]:
        """Get all edges in the graph with their costs."""
        with self._state_lock:
            edges = [
                ((from_idx, to_idx), cost)
                for from_idx, neighbors in enumerate(self._state.adjacency)
                for to_idx, cost in neighbors.items()
            ]
        yield from edges

    def get_edge_count(self) -> int:
        return self._state.edge_count

    def get_node_properties(self) -> List[NodeProperty]:
        """Get node properties ordered by node index."""
        return [self._state.node_properties[i] for i in sorted(self._state.node_properties)]

    def calculate_solution_cost(self, solution: Solution) -> Tuple[float, bool]:
        """
        Sum the edge costs along a solution.

        Returns:
            Tuple[float, bool]: (cost, True), or (MISSING_EDGE_COST, False) if
            the solution is empty, starts at a missing node or uses a missing edge
        """
        if not solution or not self.node_exists(solution[0]):
            return MISSING_EDGE_COST, False

        total = 0.0
        for edge_id in zip(solution, solution[1:]):
            if not self.edge_exists(edge_id):
                return MISSING_EDGE_COST, False
            total += self._state.adjacency[edge_id[0]][edge_id[1]]
        return total, True

    # Search

    def _resolve_endpoints(self, start: Optional[int], goal: Optional[int]) -> Tuple[int, int]:
        return (
            self._state.start_idx if start is None else start,
            self._state.goal_idx if goal is None else goal,
        )

    def solve_dijkstra(
        self,
        start: Optional[int] = None,
        goal: Optional[int] = None,
        max_memory_mb: Optional[float] = None,
    ) -> PathResult:
        """
        Find the cheapest path with Dijkstra's algorithm.

        Args:
            start (Optional[int]): Start index, defaults to the start marker
            goal (Optional[int]): Goal index, defaults to the goal marker
            max_memory_mb (Optional[float]): Fail the search past this budget

        Returns:
            PathResult: Solution and cost, or an unsuccessful result
        """
        start, goal = self._resolve_endpoints(start, goal)
        with self._state_lock:
            return DijkstraFinder(self, max_memory_mb).find_path(start, goal)

    def solve_astar(
        self,
        start: Optional[int] = None,
        goal: Optional[int] = None,
        max_memory_mb: Optional[float] = None,
    ) -> PathResult:
        """
        Find the cheapest path with A* using ``calculate_heuristic``.

        Args:
            start (Optional[int]): Start index, defaults to the start marker
            goal (Optional[int]): Goal index, defaults to the goal marker
            max_memory_mb (Optional[float]): Fail the search past this budget

        Returns:
            PathResult: Solution and cost, or an unsuccessful result
        """
        start, goal = self._resolve_endpoints(start, goal)
        with self._state_lock:
            return AStarFinder(self, max_memory_mb).find_path(start, goal)

    # Export

    def get_adjacency_matrix(self) -> List[List[int]]:
        """Get the dense cost matrix in milli-units, NO_EDGE_COST where no edge exists."""
        with self._state_lock:
            return AdjacencyExporter(self).to_matrix()

    def get_adjacency_array(self) -> np.ndarray:
        """Get the dense milli-unit cost matrix as an int64 numpy array."""
        with self._state_lock:
            return AdjacencyExporter(self).to_array()
