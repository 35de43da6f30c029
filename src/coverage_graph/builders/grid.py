"""
Occupancy-grid graph.

Free cells become nodes; adjacent free cells are connected in both
directions with the step length scaled by ``cell_size``. Diagonal steps are
only added when both orthogonal cells they cut past are free.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..core.exceptions import ConfigurationError, GraphOperationError, HeuristicError
from ..core.graph import GraphBase
from ..core.types import Heuristic, Solution

logger = logging.getLogger(__name__)

Cell = Tuple[int, int]

ORTHOGONAL_MOVES = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIAGONAL_MOVES = [(1, 1), (1, -1), (-1, 1), (-1, -1)]


class GridGraph(GraphBase[Cell, None]):
    """
    Graph over the free cells of a 2D occupancy grid.

    Attributes:
        occupancy (np.ndarray): Boolean grid, True marks a blocked cell
        cell_size (float): Edge length of one cell
        connectivity (int): 4 or 8
    """

    def __init__(
        self,
        occupancy: Sequence[Sequence[int]],
        cell_size: float = 1.0,
        connectivity: int = 8,
    ):
        super().__init__()
        self.occupancy = np.asarray(occupancy, dtype=bool)
        if self.occupancy.ndim != 2:
            raise ConfigurationError("occupancy must be a 2D grid")
        if not cell_size > 0:
            raise ConfigurationError("cell_size must be positive")
        if connectivity not in (4, 8):
            raise ConfigurationError(f"Unsupported connectivity {connectivity}")
        self.cell_size = float(cell_size)
        self.connectivity = connectivity
        self._cell_index: Dict[Cell, int] = {}

    @property
    def moves(self) -> List[Cell]:
        if self.connectivity == 8:
            return ORTHOGONAL_MOVES + DIAGONAL_MOVES
        return ORTHOGONAL_MOVES

    def is_free(self, cell: Cell) -> bool:
        row, col = cell
        rows, cols = self.occupancy.shape
        return 0 <= row < rows and 0 <= col < cols and not self.occupancy[row, col]

    def node_index(self, cell: Cell) -> Optional[int]:
        """Get the node index of a cell, or None if the cell is not in the graph."""
        return self._cell_index.get(tuple(cell))

    def cells(self, solution: Solution) -> List[Cell]:
        """Map a solution to its grid cells."""
        return [self.get_node_property(idx) for idx in solution]

    def clear(self) -> None:
        super().clear()
        self._cell_index = {}

    def create(self) -> bool:
        """Insert every free cell in row-major order."""
        self.clear()
        for row, col in zip(*np.nonzero(~self.occupancy)):
            if not self.add_node((int(row), int(col))):
                logger.error(f"Failed adding cell ({row}, {col}).")
                return False
        self.is_created = True
        return True

    def _step_allowed(self, cell: Cell, move: Cell) -> bool:
        d_row, d_col = move
        if d_row and d_col:
            return self.is_free((cell[0] + d_row, cell[1])) and self.is_free(
                (cell[0], cell[1] + d_col)
            )
        return True

    def add_edges(self) -> bool:
        new_idx = self.size() - 1
        cell = self.get_node_property(new_idx)
        if cell is None or not self.is_free(cell):
            raise GraphOperationError(f"Cell {cell} is blocked or outside the grid")
        cell = tuple(cell)
        if cell in self._cell_index:
            raise GraphOperationError(f"Cell {cell} already has node {self._cell_index[cell]}")

        for move in self.moves:
            neighbor = (cell[0] + move[0], cell[1] + move[1])
            neighbor_idx = self._cell_index.get(neighbor)
            if neighbor_idx is None or not self._step_allowed(cell, move):
                continue
            cost = math.hypot(*move) * self.cell_size
            if not (
                self.add_edge((new_idx, neighbor_idx), None, cost)
                and self.add_edge((neighbor_idx, new_idx), None, cost)
            ):
                return False

        # Registered last so a failed insertion never leaves a stale entry.
        self._cell_index[cell] = new_idx
        return True

    def calculate_heuristic(self, goal: int) -> Optional[Heuristic]:
        """Octile distance for 8-connectivity, Manhattan distance for 4."""
        if not self.node_property_exists(goal):
            raise HeuristicError(f"Goal {goal} has no cell")
        goal_row, goal_col = self.get_node_property(goal)

        heuristic: Heuristic = {}
        for idx, (row, col) in enumerate(self.get_node_properties()):
            d_row, d_col = abs(row - goal_row), abs(col - goal_col)
            if self.connectivity == 8:
                steps = max(d_row, d_col) + (math.sqrt(2) - 1) * min(d_row, d_col)
            else:
                steps = d_row + d_col
            heuristic[idx] = steps * self.cell_size
        return heuristic
