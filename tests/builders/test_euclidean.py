"""
Tests for the Euclidean point graph builder.
"""

import math

import pytest

from coverage_graph.builders import EuclideanGraph
from coverage_graph.core.exceptions import ConfigurationError, HeuristicError

SQUARE = [(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)]


def crosses_wall(a, b) -> bool:
    """True if segment a-b crosses the vertical wall x = 0.5, 0 <= y <= 0.8."""
    if (a[0] - 0.5) * (b[0] - 0.5) >= 0:
        return False
    t = (0.5 - a[0]) / (b[0] - a[0])
    y = a[1] + t * (b[1] - a[1])
    return 0.0 <= y <= 0.8


@pytest.fixture
def square_graph() -> EuclideanGraph:
    """Fixture providing a fully connected unit square."""
    graph = EuclideanGraph(SQUARE)
    assert graph.create()
    return graph


def test_create_connects_all_points(square_graph):
    """Test that every pair of points is connected both ways."""
    assert square_graph.is_created
    assert square_graph.size() == 4
    assert square_graph.get_edge_count() == 12
    assert square_graph.get_edge_cost((0, 2)) == (pytest.approx(math.sqrt(2)), True)
    assert square_graph.get_edge_property((2, 0)) == pytest.approx(math.sqrt(2))


def test_create_is_repeatable(square_graph):
    """Test that create rebuilds instead of appending."""
    assert square_graph.create()
    assert square_graph.size() == 4


def test_max_distance_prunes_long_edges():
    """Test that segments longer than max_distance are not added."""
    graph = EuclideanGraph(SQUARE, max_distance=1.2)
    graph.create()

    assert not graph.edge_exists((0, 2))
    assert graph.edge_exists((0, 1))
    result = graph.solve_dijkstra(0, 2)
    assert result.cost == pytest.approx(2.0)
    assert len(result.solution) == 3


def test_visibility_predicate():
    """Test that blocked lines of sight are not connected."""
    graph = EuclideanGraph(is_visible=lambda a, b: not crosses_wall(a, b))
    graph.add_start_node((0.0, 0.0))
    graph.add_node((0.5, 1.0))
    graph.add_goal_node((1.0, 0.0))

    assert not graph.edge_exists((0, 2))
    result = graph.solve_astar()
    assert result.solution == [0, 1, 2]
    assert result.cost == pytest.approx(2 * math.hypot(0.5, 1.0))


def test_astar_matches_dijkstra_on_points():
    """Test A* with the straight-line heuristic on a sparse point set."""
    points = [(float(x), float((x * 7) % 5)) for x in range(10)]
    graph = EuclideanGraph(points, max_distance=3.0)
    graph.create()

    for goal in range(graph.size()):
        dijkstra = graph.solve_dijkstra(0, goal)
        astar = graph.solve_astar(0, goal)
        assert astar.found == dijkstra.found
        if dijkstra.found:
            assert astar.cost == pytest.approx(dijkstra.cost)


def test_heuristic_is_straight_line(square_graph):
    """Test the heuristic values towards a goal."""
    heuristic = square_graph.calculate_heuristic(2)

    assert heuristic == {
        0: pytest.approx(math.sqrt(2)),
        1: pytest.approx(1.0),
        2: 0.0,
        3: pytest.approx(1.0),
    }


def test_heuristic_for_missing_goal(square_graph):
    """Test that a goal without a point raises HeuristicError."""
    with pytest.raises(HeuristicError):
        square_graph.calculate_heuristic(10)


@pytest.mark.parametrize("point", [(math.nan, 0.0), (0.0, math.inf), (1.0, 2.0, 3.0)])
def test_invalid_point_is_rolled_back(square_graph, point):
    """Test that a rejected point leaves the graph untouched."""
    edges_before = sorted(square_graph.get_edges())

    assert not square_graph.add_node(point)
    assert square_graph.size() == 4
    assert sorted(square_graph.get_edges()) == edges_before


def test_create_fails_on_invalid_point():
    """Test that create reports failure for an invalid point set."""
    graph = EuclideanGraph([(0.0, 0.0), (1.0,)])

    assert not graph.create()
    assert not graph.is_created
    assert graph.size() == 1


def test_three_dimensional_points():
    """Test that points in space are supported."""
    graph = EuclideanGraph([(0.0, 0.0, 0.0), (1.0, 2.0, 2.0)])
    graph.create()

    assert graph.get_edge_cost((0, 1)) == (pytest.approx(3.0), True)


def test_invalid_max_distance():
    """Test configuration validation."""
    with pytest.raises(ConfigurationError):
        EuclideanGraph(SQUARE, max_distance=0.0)


def test_adjacency_matrix_in_millimeters(square_graph):
    """Test the quantized export of the square."""
    matrix = square_graph.get_adjacency_matrix()

    assert matrix[0][1] == 1000
    assert matrix[0][2] == 1414
