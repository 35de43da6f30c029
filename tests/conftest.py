"""Shared test fixtures."""

from typing import Callable, Dict, Iterable, Optional, Tuple, Union

import pytest

from coverage_graph.core.graph import GraphBase
from coverage_graph.core.types import Heuristic

HeuristicSource = Union[Heuristic, Callable[[int], Optional[Heuristic]], None]


class ManualGraph(GraphBase[str, str]):
    """Graph whose extension hooks are driven by the test."""

    def __init__(
        self,
        edge_hook: Optional[Callable[["ManualGraph"], bool]] = None,
        heuristic: HeuristicSource = None,
    ):
        super().__init__()
        self.edge_hook = edge_hook
        self.heuristic = heuristic
        self.add_edges_calls = 0
        self.heuristic_calls = 0

    def create(self) -> bool:
        return False

    def add_edges(self) -> bool:
        self.add_edges_calls += 1
        if self.edge_hook is None:
            return True
        return self.edge_hook(self)

    def calculate_heuristic(self, goal: int) -> Optional[Heuristic]:
        self.heuristic_calls += 1
        if callable(self.heuristic):
            return self.heuristic(goal)
        if self.heuristic is None:
            return None
        return dict(self.heuristic)


def zero_heuristic(graph: GraphBase) -> Callable[[int], Heuristic]:
    """Heuristic source that estimates zero for every node of graph."""
    return lambda goal: {i: 0.0 for i in range(graph.size())}


@pytest.fixture
def manual_graph() -> ManualGraph:
    """Fixture providing an empty graph with no-op hooks."""
    return ManualGraph()


@pytest.fixture
def build_graph() -> Callable[..., ManualGraph]:
    """
    Fixture providing a factory for graphs with explicit edges.

    Nodes are named "n0", "n1", ...; edge properties are "i->j".
    """

    def _build(
        num_nodes: int,
        edges: Iterable[Tuple[int, int, float]],
        heuristic: HeuristicSource = None,
    ) -> ManualGraph:
        graph = ManualGraph(heuristic=heuristic)
        for i in range(num_nodes):
            assert graph.add_node(f"n{i}")
        for from_idx, to_idx, cost in edges:
            assert graph.add_edge((from_idx, to_idx), f"{from_idx}->{to_idx}", cost)
        if heuristic is None:
            graph.heuristic = zero_heuristic(graph)
        return graph

    return _build


@pytest.fixture
def chain_graph(build_graph) -> ManualGraph:
    """
    Fixture providing a graph where the direct edge is not the cheapest:
    0 -> 1 -> 2 -> 3 costs 3.0, 0 -> 2 -> 3 costs 4.0
    """
    return build_graph(4, [(0, 1, 1.0), (1, 2, 1.0), (0, 2, 3.0), (2, 3, 1.0)])


@pytest.fixture
def exact_heuristic() -> Dict[int, float]:
    """Fixture providing the true remaining cost to node 3 in chain_graph."""
    return {0: 3.0, 1: 2.0, 2: 1.0, 3: 0.0}
