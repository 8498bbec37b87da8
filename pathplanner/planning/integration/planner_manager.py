"""
Planner Manager
Single entry point that dispatches a planning request to Dijkstra, A* or RRT*.
"""

import logging
import threading
import dataclasses
from typing import Any, Dict, Mapping, Optional, Sequence, Union
from dataclasses import dataclass
from enum import Enum

import numpy as np

from pathplanner.planning.exceptions import InvalidInputError, UnknownAlgorithmError
from pathplanner.planning.global_planner.astar_planner import AStarPlanner
from pathplanner.planning.global_planner.dijkstra_planner import DijkstraPlanner
from pathplanner.planning.global_planner.occupancy_grid import Coordinate, OccupancyGrid
from pathplanner.planning.planning_result import PlanningResult
from pathplanner.planning.sampling_planner.rrt_star_planner import RRTStarPlanner


class Algorithm(Enum):
    """Supported planning algorithms."""
    DIJKSTRA = "dijkstra"
    ASTAR = "astar"
    RRT_STAR = "rrt_star"

    @classmethod
    def parse(cls, value: Union['Algorithm', str]) -> 'Algorithm':
        if isinstance(value, cls):
            return value

        key = str(value).strip().lower().replace('-', '_').replace(' ', '_')
        aliases = {
            'dijkstra': cls.DIJKSTRA,
            'astar': cls.ASTAR,
            'a*': cls.ASTAR,
            'a_star': cls.ASTAR,
            'rrt_star': cls.RRT_STAR,
            'rrt*': cls.RRT_STAR,
            'rrtstar': cls.RRT_STAR,
        }

        if key not in aliases:
            raise UnknownAlgorithmError(
                f"Unknown algorithm: {value!r}, expected one of {[a.value for a in cls]}"
            )

        return aliases[key]


# camelCase keys used by legacy scene files
_OPTION_ALIASES = {
    'diagonalConnectivity': 'diagonal_connectivity',
    'diagonal': 'diagonal_connectivity',
    'goalBias': 'goal_bias',
    'interpolatePath': 'interpolate_path',
    'heuristic_type': 'heuristic',
}


@dataclass
class PlanningOptions:
    """Per-run planner parameters."""
    diagonal_connectivity: bool = False  # Dijkstra/A*
    heuristic: str = "auto"              # A*: auto | manhattan | euclidean | octile | zero
    iterations: int = 2500               # RRT* sampling budget
    radius: float = 4.0                  # RRT* rewiring radius (cells)
    step: float = 2.0                    # RRT* maximum steer distance (cells)
    goal_bias: float = 0.08              # RRT* probability of sampling the goal
    seed: Optional[int] = None           # RRT* random seed
    interpolate_path: bool = False       # RRT*: expand waypoints into adjacent cells

    @classmethod
    def from_config(cls, config: Optional[Mapping[str, Any]] = None,
                    base: Optional['PlanningOptions'] = None) -> 'PlanningOptions':
        """
        Build options from a mapping, layered over base (or the defaults).

        Args:
            config: Option mapping; snake_case or legacy camelCase keys
            base: Options that unspecified keys fall back to

        Returns:
            Planning options
        """
        base = base or cls()
        if not config:
            return dataclasses.replace(base)

        known = {f.name for f in dataclasses.fields(cls)}
        updates = {}

        for key, value in config.items():
            name = _OPTION_ALIASES.get(key, key)
            if name not in known:
                raise InvalidInputError(f"Unknown planning option: {key}")
            updates[name] = value

        return dataclasses.replace(base, **updates)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


class PlannerManager:
    """
    Creates planners per request and keeps running statistics.
    Each run gets its own planner state, so runs on different grids can proceed in parallel.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self.config = config or {}
        self.logger = logging.getLogger(__name__)

        self.default_algorithm = Algorithm.parse(self.config.get('default_algorithm', 'astar'))
        self.default_options = PlanningOptions.from_config(self.config.get('options', {}))

        # Grid handling
        self.snapshot_grid = self.config.get('snapshot_grid', True)
        self.inflation_radius = float(self.config.get('inflation_radius', 0.0))

        self.statistics_lock = threading.Lock()
        self.planning_statistics = {
            'total_plans': 0,
            'successful_plans': 0,
            'total_planning_time': 0.0,
            'average_planning_time': 0.0,
            'plans_by_algorithm': {algorithm.value: 0 for algorithm in Algorithm}
        }

        self.logger.debug(
            f"Planner Manager initialized: default={self.default_algorithm.value}, "
            f"snapshot={self.snapshot_grid}, inflation={self.inflation_radius}"
        )

    def create_planner(self, algorithm: Algorithm, options: PlanningOptions,
                       rng: Optional[np.random.Generator] = None):
        if algorithm is Algorithm.DIJKSTRA:
            return DijkstraPlanner({'diagonal_connectivity': options.diagonal_connectivity})

        if algorithm is Algorithm.ASTAR:
            return AStarPlanner({
                'diagonal_connectivity': options.diagonal_connectivity,
                'heuristic': options.heuristic,
            })

        return RRTStarPlanner({
            'iterations': options.iterations,
            'radius': options.radius,
            'step': options.step,
            'goal_bias': options.goal_bias,
            'seed': options.seed,
            'interpolate_path': options.interpolate_path,
        }, rng=rng)

    def plan(self, grid: Union[OccupancyGrid, Sequence[Sequence[Any]]],
             start: Coordinate, goal: Coordinate,
             algorithm: Union[Algorithm, str, None] = None,
             options: Union[PlanningOptions, Mapping[str, Any], None] = None,
             rng: Optional[np.random.Generator] = None) -> PlanningResult:
        """
        Run one planning request to completion.

        Args:
            grid: Occupancy grid or a rows x cols matrix of cells
            start: Start cell (row, col)
            goal: Goal cell (row, col)
            algorithm: Planner selector; defaults to the configured algorithm
            options: Planner parameters layered over the configured defaults
            rng: Random generator for RRT*; overrides options.seed

        Returns:
            Planning result with visited order and path
        """
        algorithm = self.default_algorithm if algorithm is None else Algorithm.parse(algorithm)

        if not isinstance(options, PlanningOptions):
            options = PlanningOptions.from_config(options, base=self.default_options)

        if not isinstance(grid, OccupancyGrid):
            grid = OccupancyGrid.from_cells(grid)
        elif self.snapshot_grid:
            grid = grid.copy()

        if self.inflation_radius > 0:
            grid = grid.inflated(self.inflation_radius)

        self.logger.info(f"Planning {algorithm.value}: {start} -> {goal}")

        planner = self.create_planner(algorithm, options, rng)
        result = planner.plan_path(grid, start, goal)

        self._update_statistics(algorithm, result)
        return result

    def plan_scene(self, scene, algorithm: Union[Algorithm, str, None] = None,
                   options: Union[PlanningOptions, Mapping[str, Any], None] = None,
                   rng: Optional[np.random.Generator] = None) -> PlanningResult:
        """Plan between a scene's start and goal."""
        return self.plan(scene.grid, scene.start, scene.goal, algorithm, options, rng)

    def _update_statistics(self, algorithm: Algorithm, result: PlanningResult):
        with self.statistics_lock:
            stats = self.planning_statistics
            stats['total_plans'] += 1
            stats['plans_by_algorithm'][algorithm.value] += 1
            stats['total_planning_time'] += result.planning_time
            stats['average_planning_time'] = stats['total_planning_time'] / stats['total_plans']

            if result.success:
                stats['successful_plans'] += 1

    def get_planning_statistics(self) -> Dict[str, Any]:
        with self.statistics_lock:
            stats = dict(self.planning_statistics)
            stats['plans_by_algorithm'] = dict(self.planning_statistics['plans_by_algorithm'])

        if stats['total_plans'] > 0:
            stats['success_rate'] = stats['successful_plans'] / stats['total_plans']
        else:
            stats['success_rate'] = 0.0

        return stats

    def reset(self):
        with self.statistics_lock:
            self.planning_statistics.update({
                'total_plans': 0,
                'successful_plans': 0,
                'total_planning_time': 0.0,
                'average_planning_time': 0.0,
                'plans_by_algorithm': {algorithm.value: 0 for algorithm in Algorithm}
            })

        self.logger.info("Planner Manager reset")


def plan(grid: Union[OccupancyGrid, Sequence[Sequence[Any]]],
         start: Coordinate, goal: Coordinate,
         algorithm: Union[Algorithm, str],
         options: Union[PlanningOptions, Mapping[str, Any], None] = None,
         rng: Optional[np.random.Generator] = None) -> PlanningResult:
    """
    Plan a route from start to goal with the selected algorithm.

    Raises InvalidInputError for out-of-bounds or occupied endpoints and bad options.
    An unreachable goal is not an error: the result has an empty path.
    """
    return PlannerManager().plan(grid, start, goal, algorithm, options, rng)
