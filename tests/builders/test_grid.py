"""
Tests for the occupancy grid graph builder.
"""

import math

import numpy as np
import pytest

from coverage_graph.builders import GridGraph
from coverage_graph.core.exceptions import ConfigurationError

# 0 = free, 1 = blocked
U_TURN = [
    [0, 0, 0],
    [1, 1, 0],
    [0, 0, 0],
]


@pytest.fixture
def u_turn_graph() -> GridGraph:
    """Fixture providing an 8-connected grid with a wall forcing a detour."""
    graph = GridGraph(U_TURN)
    assert graph.create()
    return graph


def test_create_adds_free_cells(u_turn_graph):
    """Test that only free cells become nodes."""
    assert u_turn_graph.is_created
    assert u_turn_graph.size() == 7
    assert u_turn_graph.node_index((1, 0)) is None
    assert u_turn_graph.node_index((1, 2)) == 3
    assert u_turn_graph.get_node_property(3) == (1, 2)


def test_no_corner_cutting(u_turn_graph):
    """Test that diagonals past a blocked cell are not connected."""
    upper_middle = u_turn_graph.node_index((0, 1))
    right_middle = u_turn_graph.node_index((1, 2))
    lower_middle = u_turn_graph.node_index((2, 1))

    assert not u_turn_graph.edge_exists((upper_middle, right_middle))
    assert not u_turn_graph.edge_exists((right_middle, lower_middle))


@pytest.mark.parametrize("solver", ["solve_dijkstra", "solve_astar"])
def test_detour_around_wall(u_turn_graph, solver):
    """Test the path around the wall."""
    start = u_turn_graph.node_index((0, 0))
    goal = u_turn_graph.node_index((2, 0))

    result = getattr(u_turn_graph, solver)(start, goal)

    assert result.cost == pytest.approx(6.0)
    assert u_turn_graph.cells(result.solution) == [
        (0, 0),
        (0, 1),
        (0, 2),
        (1, 2),
        (2, 2),
        (2, 1),
        (2, 0),
    ]


def test_diagonal_steps_on_open_grid():
    """Test diagonal costs and A*/Dijkstra parity on an open grid."""
    graph = GridGraph(np.zeros((5, 5), dtype=int), cell_size=0.5)
    graph.create()
    start = graph.node_index((0, 0))
    goal = graph.node_index((4, 3))

    dijkstra = graph.solve_dijkstra(start, goal)
    astar = graph.solve_astar(start, goal)

    expected = (3 * math.sqrt(2) + 1) * 0.5
    assert dijkstra.cost == pytest.approx(expected)
    assert astar.cost == pytest.approx(expected)
    assert astar.metrics.nodes_explored <= dijkstra.metrics.nodes_explored


def test_four_connectivity():
    """Test Manhattan moves and heuristic."""
    graph = GridGraph(np.zeros((3, 3), dtype=int), connectivity=4)
    graph.create()

    assert graph.get_edge_count() == 24
    goal = graph.node_index((2, 2))
    heuristic = graph.calculate_heuristic(goal)
    assert heuristic[graph.node_index((0, 0))] == pytest.approx(4.0)
    assert graph.solve_astar(graph.node_index((0, 0)), goal).cost == pytest.approx(4.0)


def test_octile_heuristic(u_turn_graph):
    """Test the octile distance heuristic."""
    goal = u_turn_graph.node_index((2, 2))
    heuristic = u_turn_graph.calculate_heuristic(goal)

    assert heuristic[u_turn_graph.node_index((0, 0))] == pytest.approx(2 * math.sqrt(2))
    assert heuristic[u_turn_graph.node_index((2, 0))] == pytest.approx(2.0)
    assert heuristic[goal] == 0.0


@pytest.mark.parametrize("cell", [(1, 0), (5, 5), (-1, 0), (0, 0)])
def test_rejected_cells_are_rolled_back(u_turn_graph, cell):
    """Test that blocked, outside and duplicate cells leave the graph untouched."""
    edges_before = sorted(u_turn_graph.get_edges())

    assert not u_turn_graph.add_node(cell)
    assert u_turn_graph.size() == 7
    assert sorted(u_turn_graph.get_edges()) == edges_before
    assert u_turn_graph.node_index((0, 0)) == 0


def test_incremental_insertion_with_markers():
    """Test building a grid graph cell by cell with start and goal markers."""
    graph = GridGraph(np.zeros((1, 3), dtype=int))

    assert graph.add_start_node((0, 0))
    assert graph.add_node((0, 1))
    assert graph.add_goal_node((0, 2))

    result = graph.solve_astar()
    assert result.solution == [0, 1, 2]
    assert result.cost == pytest.approx(2.0)


def test_clear_resets_cell_index(u_turn_graph):
    """Test that clear forgets cell assignments."""
    u_turn_graph.clear()

    assert u_turn_graph.node_index((0, 0)) is None
    assert u_turn_graph.add_node((0, 0))
    assert u_turn_graph.node_index((0, 0)) == 0


def test_clear_edges_then_rewire(u_turn_graph):
    """Test that connectivity can be rebuilt without rediscovering cells."""
    u_turn_graph.clear_edges()
    assert u_turn_graph.get_edge_count() == 0
    assert u_turn_graph.node_index((2, 2)) is not None

    assert not u_turn_graph.solve_dijkstra(0, 6).found


@pytest.mark.parametrize(
    "kwargs",
    [
        {"occupancy": [0, 0, 0]},
        {"occupancy": U_TURN, "cell_size": 0.0},
        {"occupancy": U_TURN, "connectivity": 6},
    ],
)
def test_invalid_configuration(kwargs):
    """Test configuration validation."""
    with pytest.raises(ConfigurationError):
        GridGraph(**kwargs)
