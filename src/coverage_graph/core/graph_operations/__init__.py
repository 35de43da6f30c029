"""Operations that derive data from a built graph."""

from .adjacency import AdjacencyExporter, double_to_milli_int

__all__ = ["AdjacencyExporter", "double_to_milli_int"]
