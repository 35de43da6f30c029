"""Search algorithms operating on a graph core."""

from .astar import AStarFinder
from .dijkstra import DijkstraFinder

__all__ = ["AStarFinder", "DijkstraFinder"]
