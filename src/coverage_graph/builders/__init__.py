"""Reference graph builders implementing the GraphBase extension hooks."""

from .euclidean import EuclideanGraph, Point
from .grid import Cell, GridGraph

__all__ = ["Cell", "EuclideanGraph", "GridGraph", "Point"]
