import logging
from typing import Any, Dict, Iterable, Optional

import numpy as np

from pathplanner.planning.exceptions import InvalidInputError
from pathplanner.planning.global_planner.occupancy_grid import Coordinate, OccupancyGrid
from pathplanner.scene.scene_io import Scene


class SceneGenerator:
    """
    Random scene builder: empty scenes, random maze walls and random weighted cells.
    Start and goal cells are always left free and unweighted.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None,
                 rng: Optional[np.random.Generator] = None):
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.rows = self.config.get('rows', 24)
        self.cols = self.config.get('cols', 38)
        self.wall_density = self.config.get('wall_density', 0.28)
        self.weight_probability = self.config.get('weight_probability', 0.25)
        self.weight_range = tuple(self.config.get('weight_range', (6, 13)))

        self.rng = rng if rng is not None else np.random.default_rng(self.config.get('seed'))

        self.logger.debug(
            f"Scene generator: {self.rows}x{self.cols}, density={self.wall_density}, "
            f"weights={self.weight_probability} in {self.weight_range}"
        )

    def empty_scene(self, rows: Optional[int] = None, cols: Optional[int] = None) -> Scene:
        """Wall-free scene with start two cells in from the top-left and goal two in from the bottom-right."""
        rows = rows or self.rows
        cols = cols or self.cols
        grid = OccupancyGrid(rows, cols)

        start = (min(2, rows - 1), min(2, cols - 1))
        goal = (max(rows - 3, 0), max(cols - 3, 0))

        return Scene(grid=grid, start=start, goal=goal)

    def random_maze(self, grid: OccupancyGrid, density: Optional[float] = None,
                    keep_free: Iterable[Coordinate] = ()) -> OccupancyGrid:
        """Replace all walls with random ones and reset costs to 1, in place."""
        density = self.wall_density if density is None else density
        if not 0.0 <= density <= 1.0:
            raise InvalidInputError(f"Wall density must be within [0, 1], got {density}")

        grid.clear()
        grid.occupied[:] = self.rng.random(grid.shape) < density

        for coord in keep_free:
            grid.occupied[coord[0], coord[1]] = False

        self.logger.debug(f"Random maze: {int(grid.occupied.sum())} walls at density {density}")
        return grid

    def random_weights(self, grid: OccupancyGrid, probability: Optional[float] = None,
                       keep_free: Iterable[Coordinate] = ()) -> OccupancyGrid:
        """Give a random share of free cells a random cost from weight_range; walls keep cost 1."""
        probability = self.weight_probability if probability is None else probability
        if not 0.0 <= probability <= 1.0:
            raise InvalidInputError(f"Weight probability must be within [0, 1], got {probability}")

        low, high = self.weight_range
        weighted = (self.rng.random(grid.shape) < probability) & ~grid.occupied
        costs = self.rng.integers(low, high + 1, size=grid.shape).astype(np.float64)

        grid.cost[:] = np.where(weighted, costs, 1.0)

        for coord in keep_free:
            grid.cost[coord[0], coord[1]] = 1.0

        self.logger.debug(f"Random weights: {int(weighted.sum())} weighted cells")
        return grid

    def generate(self, rows: Optional[int] = None, cols: Optional[int] = None,
                 walls: bool = True, weights: bool = True) -> Scene:
        scene = self.empty_scene(rows, cols)
        endpoints = (scene.start, scene.goal)

        if walls:
            self.random_maze(scene.grid, keep_free=endpoints)
        if weights:
            self.random_weights(scene.grid, keep_free=endpoints)

        return scene
