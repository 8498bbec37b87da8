"""
2D Occupancy Grid
Row/column occupancy and traversal-cost model shared by every planner.
Cells are stored as two numpy arrays: a boolean occupancy mask and a float cost map.
"""

import math
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from dataclasses import dataclass

import numpy as np
from scipy.ndimage import binary_dilation

from pathplanner.planning.exceptions import InvalidInputError

Coordinate = Tuple[int, int]  # (row, col)

# Axis-aligned moves first, diagonals after; neighbor order is fixed so runs stay deterministic
DIRECTIONS_4: List[Tuple[int, int]] = [(1, 0), (-1, 0), (0, 1), (0, -1)]
DIRECTIONS_8: List[Tuple[int, int]] = DIRECTIONS_4 + [(1, 1), (1, -1), (-1, 1), (-1, -1)]

MIN_CELL_COST = 1.0


def _validate_cost(cost: Any) -> float:
    try:
        value = float(cost)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Cell cost must be a number, got {cost!r}")

    if not math.isfinite(value) or value < MIN_CELL_COST:
        raise InvalidInputError(f"Cell cost must be finite and >= {MIN_CELL_COST}, got {cost!r}")

    return value


@dataclass
class Cell:
    """Single grid cell. Occupied cells are never traversable, whatever their cost."""
    occupied: bool = False
    cost: float = 1.0

    def __post_init__(self):
        self.occupied = bool(self.occupied)
        self.cost = _validate_cost(self.cost)

    def to_dict(self) -> Dict[str, Any]:
        return {'occupied': self.occupied, 'cost': self.cost}


@dataclass
class GridInfo:
    """Summary counts for a grid."""
    dimensions: Tuple[int, int]
    total_cells: int
    occupied_cells: int
    free_cells: int
    weighted_cells: int
    max_cost: float


class OccupancyGrid:
    """
    Rows x cols occupancy/cost grid.
    Read-only while a planner runs; callers hand planners a stable snapshot (see copy()).
    """

    def __init__(self, rows: int, cols: int,
                 occupied: Optional[np.ndarray] = None,
                 cost: Optional[np.ndarray] = None):
        if not self._is_int(rows) or not self._is_int(cols) or rows < 1 or cols < 1:
            raise InvalidInputError(f"Grid dimensions must be positive integers, got {rows}x{cols}")

        self.rows = int(rows)
        self.cols = int(cols)
        self.logger = logging.getLogger(__name__)

        if occupied is None:
            self.occupied = np.zeros((self.rows, self.cols), dtype=bool)
        else:
            self.occupied = np.array(occupied, dtype=bool)

        if cost is None:
            self.cost = np.ones((self.rows, self.cols), dtype=np.float64)
        else:
            self.cost = np.array(cost, dtype=np.float64)

        if self.occupied.shape != self.shape or self.cost.shape != self.shape:
            raise InvalidInputError(
                f"Grid array shape mismatch: occupied {self.occupied.shape}, "
                f"cost {self.cost.shape}, expected {self.shape}"
            )

        if not np.all(np.isfinite(self.cost)) or np.any(self.cost < MIN_CELL_COST):
            raise InvalidInputError(f"All cell costs must be finite and >= {MIN_CELL_COST}")

        self.logger.debug(f"Occupancy grid created: {self.rows}x{self.cols}")

    @staticmethod
    def _is_int(value: Any) -> bool:
        return isinstance(value, (int, np.integer)) and not isinstance(value, bool)

    @classmethod
    def from_cells(cls, cells: Sequence[Sequence[Union[Cell, Mapping[str, Any]]]]) -> 'OccupancyGrid':
        """
        Build a grid from a row-major matrix of Cells or {occupied, cost} mappings.

        Args:
            cells: Non-empty rectangular matrix

        Returns:
            New occupancy grid
        """
        if not cells or not cells[0]:
            raise InvalidInputError("Cell matrix must have at least one row and one column")

        rows, cols = len(cells), len(cells[0])
        grid = cls(rows, cols)

        for r, row in enumerate(cells):
            if len(row) != cols:
                raise InvalidInputError(f"Row {r} has {len(row)} cells, expected {cols}")

            for c, cell in enumerate(row):
                if not isinstance(cell, Cell):
                    cell = Cell(occupied=cell.get('occupied', False), cost=cell.get('cost', 1.0))
                grid.occupied[r, c] = cell.occupied
                grid.cost[r, c] = cell.cost

        return grid

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.rows, self.cols)

    def to_cells(self) -> List[List[Cell]]:
        return [[self.get_cell((r, c)) for c in range(self.cols)] for r in range(self.rows)]

    def in_bounds(self, coord: Coordinate) -> bool:
        row, col = coord
        return 0 <= row < self.rows and 0 <= col < self.cols

    def is_occupied(self, coord: Coordinate) -> bool:
        """Out-of-bounds coordinates count as occupied."""
        if not self.in_bounds(coord):
            return True
        return bool(self.occupied[coord[0], coord[1]])

    def is_free(self, coord: Coordinate) -> bool:
        return self.in_bounds(coord) and not self.occupied[coord[0], coord[1]]

    def cost_at(self, coord: Coordinate) -> float:
        return float(self.cost[coord[0], coord[1]])

    def get_cell(self, coord: Coordinate) -> Cell:
        return Cell(occupied=self.is_occupied(coord), cost=self.cost_at(coord))

    def set_occupied(self, coord: Coordinate, occupied: bool = True):
        self.validate_coordinate(coord)
        self.occupied[coord[0], coord[1]] = bool(occupied)

    def set_cost(self, coord: Coordinate, cost: float):
        self.validate_coordinate(coord)
        self.cost[coord[0], coord[1]] = _validate_cost(cost)

    def clear(self):
        """Remove all walls and reset every cost to 1."""
        self.occupied.fill(False)
        self.cost.fill(1.0)

    def neighbors(self, coord: Coordinate, diagonal: bool = False) -> List[Coordinate]:
        """
        In-bounds neighbors of a cell. Occupied neighbors are included;
        searches skip them explicitly.

        Args:
            coord: Cell to expand
            diagonal: Use 8-connectivity instead of 4-connectivity

        Returns:
            Neighbor coordinates in fixed direction order
        """
        row, col = coord
        directions = DIRECTIONS_8 if diagonal else DIRECTIONS_4

        result = []
        for dr, dc in directions:
            nr, nc = row + dr, col + dc
            if 0 <= nr < self.rows and 0 <= nc < self.cols:
                result.append((nr, nc))

        return result

    def step_cost(self, from_coord: Coordinate, to_coord: Coordinate) -> float:
        """Cost of entering to_coord from from_coord: destination cost x move length."""
        distance = math.hypot(to_coord[0] - from_coord[0], to_coord[1] - from_coord[1])
        return self.cost_at(to_coord) * distance

    def path_cost(self, path: Sequence[Coordinate]) -> float:
        """Total traversal cost of a path; entering the first cell is free."""
        total = 0.0
        for prev, curr in zip(path, path[1:]):
            total += self.step_cost(prev, curr)
        return total

    def validate_coordinate(self, coord: Any, name: str = "coordinate") -> Coordinate:
        """Check coord is an in-bounds (row, col) integer pair and return it normalized."""
        try:
            row, col = coord
        except (TypeError, ValueError):
            raise InvalidInputError(f"{name} must be a (row, col) pair, got {coord!r}")

        if not self._is_int(row) or not self._is_int(col):
            raise InvalidInputError(f"{name} must have integer components, got {coord!r}")

        normalized = (int(row), int(col))
        if not self.in_bounds(normalized):
            raise InvalidInputError(
                f"{name} {normalized} is outside the {self.rows}x{self.cols} grid"
            )

        return normalized

    def validate_endpoint(self, coord: Any, name: str) -> Coordinate:
        """Start/goal must be in bounds and on a free cell."""
        normalized = self.validate_coordinate(coord, name)

        if self.occupied[normalized]:
            raise InvalidInputError(f"{name} {normalized} is on an occupied cell")

        return normalized

    def copy(self) -> 'OccupancyGrid':
        return OccupancyGrid(self.rows, self.cols, self.occupied.copy(), self.cost.copy())

    def inflated(self, radius: float) -> 'OccupancyGrid':
        """
        Copy of the grid with walls grown by radius cells (disk kernel).

        Args:
            radius: Inflation radius in cells; 0 returns a plain copy

        Returns:
            New, inflated grid
        """
        if radius < 0:
            raise InvalidInputError(f"Inflation radius must be >= 0, got {radius}")

        inflated = self.copy()
        cells = int(math.floor(radius))
        if cells == 0 or not self.occupied.any():
            return inflated

        offsets = np.arange(-cells, cells + 1)
        kernel = (offsets[:, None] ** 2 + offsets[None, :] ** 2) <= radius ** 2

        inflated.occupied = binary_dilation(self.occupied, structure=kernel)

        self.logger.debug(
            f"Inflated grid by {radius} cells: {int(self.occupied.sum())} -> "
            f"{int(inflated.occupied.sum())} occupied"
        )
        return inflated

    def get_info(self) -> GridInfo:
        occupied_cells = int(self.occupied.sum())
        total_cells = self.rows * self.cols

        return GridInfo(
            dimensions=self.shape,
            total_cells=total_cells,
            occupied_cells=occupied_cells,
            free_cells=total_cells - occupied_cells,
            weighted_cells=int(np.sum((self.cost > MIN_CELL_COST) & ~self.occupied)),
            max_cost=float(self.cost.max()),
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OccupancyGrid):
            return NotImplemented
        return (self.shape == other.shape
                and np.array_equal(self.occupied, other.occupied)
                and np.array_equal(self.cost, other.cost))

    def __repr__(self) -> str:
        return f"OccupancyGrid(rows={self.rows}, cols={self.cols}, occupied={int(self.occupied.sum())})"
