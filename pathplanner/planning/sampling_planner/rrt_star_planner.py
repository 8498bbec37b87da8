"""
RRT* Planner
Discretized RRT* on an occupancy grid: goal-biased sampling, steering to integer cells,
Bresenham collision checks, radius rewiring and direct goal connection.
"""

import math
import time
import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

import numpy as np

from pathplanner.planning.exceptions import InvalidInputError
from pathplanner.planning.global_planner.occupancy_grid import Coordinate, OccupancyGrid
from pathplanner.planning.planning_result import PlanningResult
from pathplanner.planning.sampling_planner.collision_checker import CollisionChecker, rasterize_line

NO_PARENT = -1


@dataclass
class TreeNode:
    """Node in the RRT* tree; parent is an index into the owning tree."""
    position: Coordinate
    parent: int = NO_PARENT
    cost: float = 0.0


class RRTStarTree:
    """
    Append-only arena of TreeNodes.
    Rewiring changes a parent index and costs in place; nodes are never removed.
    """

    def __init__(self, root: Coordinate, capacity: int = 256):
        self.nodes: List[TreeNode] = []
        self.children: List[List[int]] = []
        self._positions = np.zeros((max(capacity, 1), 2), dtype=np.float64)

        self.add(root, NO_PARENT, 0.0)

    def __len__(self) -> int:
        return len(self.nodes)

    def add(self, position: Coordinate, parent: int, cost: float) -> int:
        index = len(self.nodes)

        if index >= len(self._positions):
            grown = np.zeros((len(self._positions) * 2, 2), dtype=np.float64)
            grown[:index] = self._positions[:index]
            self._positions = grown

        self._positions[index] = position
        self.nodes.append(TreeNode(position=position, parent=parent, cost=cost))
        self.children.append([])

        if parent != NO_PARENT:
            self.children[parent].append(index)

        return index

    def _distances(self, point: Coordinate) -> np.ndarray:
        count = len(self.nodes)
        deltas = self._positions[:count] - np.asarray(point, dtype=np.float64)
        return np.hypot(deltas[:, 0], deltas[:, 1])

    def nearest(self, point: Coordinate) -> int:
        """Index of the node closest to point; earliest node wins ties."""
        return int(np.argmin(self._distances(point)))

    def near(self, point: Coordinate, radius: float) -> List[int]:
        """Indices of nodes within radius of point, in insertion order."""
        return [int(i) for i in np.flatnonzero(self._distances(point) <= radius)]

    def reparent(self, index: int, new_parent: int, new_cost: float):
        """Attach index under new_parent and shift the cost of its whole subtree."""
        node = self.nodes[index]

        if node.parent != NO_PARENT:
            self.children[node.parent].remove(index)
        self.children[new_parent].append(index)
        node.parent = new_parent

        delta = new_cost - node.cost
        stack = [index]
        while stack:
            current = stack.pop()
            self.nodes[current].cost += delta
            stack.extend(self.children[current])

    def path_to(self, index: int) -> List[Coordinate]:
        path = []
        current = index

        while current != NO_PARENT:
            node = self.nodes[current]
            path.append(node.position)
            current = node.parent

        path.reverse()
        return path


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _distance(a: Coordinate, b: Coordinate) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


class RRTStarPlanner:
    """
    Sampling-based RRT* planner on a grid.
    Randomness comes from an injectable numpy Generator so runs can be reproduced.
    """

    def __init__(self, config: Dict[str, Any], rng: Optional[np.random.Generator] = None):
        self.config = config
        self.logger = logging.getLogger(__name__)

        # RRT* parameters
        self.max_iterations = config.get('iterations', 2500)
        self.rewire_radius = float(config.get('radius', 4.0))        # cells
        self.step_size = float(config.get('step', 2.0))              # cells
        self.goal_bias = float(config.get('goal_bias', 0.08))        # probability of sampling the goal
        self.interpolate_path = bool(config.get('interpolate_path', False))
        self.seed = config.get('seed')

        self._validate_parameters()

        self.rng = rng if rng is not None else np.random.default_rng(self.seed)

        # Statistics
        self.planning_stats = {
            'total_plans': 0,
            'successful_plans': 0,
            'samples_rejected': 0,
            'extensions_rejected': 0,
            'rewires': 0,
            'average_planning_time': 0.0,
            'average_tree_size': 0.0
        }

        self.logger.debug(
            f"RRT* planner initialized: iterations={self.max_iterations}, "
            f"step={self.step_size}, radius={self.rewire_radius}, goal_bias={self.goal_bias}"
        )

    def _validate_parameters(self):
        if (not isinstance(self.max_iterations, (int, np.integer))
                or isinstance(self.max_iterations, bool) or self.max_iterations < 0):
            raise InvalidInputError(f"iterations must be a non-negative integer, got {self.max_iterations!r}")
        if not math.isfinite(self.step_size) or self.step_size <= 0:
            raise InvalidInputError(f"step must be > 0, got {self.step_size}")
        if not math.isfinite(self.rewire_radius) or self.rewire_radius < 0:
            raise InvalidInputError(f"radius must be >= 0, got {self.rewire_radius}")
        if not 0.0 <= self.goal_bias <= 1.0:
            raise InvalidInputError(f"goal_bias must be within [0, 1], got {self.goal_bias}")

    def plan_path(self, grid: OccupancyGrid, start: Coordinate, goal: Coordinate) -> PlanningResult:
        """
        Grow a tree from start until it connects to goal or the sampling budget runs out.

        Args:
            grid: Occupancy grid, left untouched during the run
            start: Root cell
            goal: Goal cell

        Returns:
            Planning result; visited lists tree nodes in insertion order
        """
        start = grid.validate_endpoint(start, "start")
        goal = grid.validate_endpoint(goal, "goal")

        planning_start = time.perf_counter()

        tree = RRTStarTree(start, capacity=min(self.max_iterations, 4096) + 2)
        checker = CollisionChecker(grid)
        visited: List[Coordinate] = [start]
        goal_index = 0 if start == goal else NO_PARENT

        iteration = 0
        while goal_index == NO_PARENT and iteration < self.max_iterations:
            iteration += 1

            # Sample
            sample = self._sample(grid, goal)
            if grid.is_occupied(sample):
                self.planning_stats['samples_rejected'] += 1
                continue

            # Nearest + steer
            nearest_index = tree.nearest(sample)
            nearest_position = tree.nodes[nearest_index].position
            new_position = self._steer(nearest_position, sample)

            if new_position == nearest_position:
                continue

            # Collision check
            if not checker.is_point_free(new_position) or \
                    not checker.is_segment_free(nearest_position, new_position):
                self.planning_stats['extensions_rejected'] += 1
                continue

            # Insert
            new_cost = tree.nodes[nearest_index].cost + grid.step_cost(nearest_position, new_position)
            new_index = tree.add(new_position, nearest_index, new_cost)
            visited.append(new_position)

            self._rewire(tree, new_index, grid, checker)

            # Goal connection
            if new_position == goal:
                goal_index = new_index
            elif (_distance(new_position, goal) <= self.step_size
                  and checker.is_segment_free(new_position, goal)):
                goal_cost = tree.nodes[new_index].cost + grid.step_cost(new_position, goal)
                goal_index = tree.add(goal, new_index, goal_cost)

        planning_time = time.perf_counter() - planning_start

        if goal_index != NO_PARENT:
            path = tree.path_to(goal_index)
            total_cost = tree.nodes[goal_index].cost
            if self.interpolate_path:
                path = self._interpolate(path)
                total_cost = grid.path_cost(path)
            success = True

            self.logger.info(
                f"RRT* reached goal after {iteration} iterations: {len(path)} waypoints, "
                f"cost {total_cost:.2f}, tree size {len(tree)}"
            )
        else:
            path = []
            total_cost = float('inf')
            success = False

            self.logger.warning(
                f"RRT* exhausted {self.max_iterations} iterations without reaching {goal}; "
                f"tree size {len(tree)}"
            )

        result = PlanningResult(
            visited=visited,
            path=path,
            algorithm="rrt_star",
            success=success,
            total_cost=total_cost,
            nodes_expanded=len(tree),
            planning_time=planning_time
        )

        self._update_statistics(result)
        return result

    def _sample(self, grid: OccupancyGrid, goal: Coordinate) -> Coordinate:
        """Goal with probability goal_bias, otherwise a uniform in-bounds cell."""
        if self.rng.random() < self.goal_bias:
            return goal

        return (int(self.rng.integers(grid.rows)), int(self.rng.integers(grid.cols)))

    def _steer(self, from_pos: Coordinate, to_pos: Coordinate) -> Coordinate:
        """Move at most step_size from from_pos towards to_pos, snapped to a cell."""
        distance = _distance(from_pos, to_pos)

        if distance <= self.step_size:
            return to_pos

        t = self.step_size / distance
        return (
            _round_half_up(from_pos[0] + (to_pos[0] - from_pos[0]) * t),
            _round_half_up(from_pos[1] + (to_pos[1] - from_pos[1]) * t),
        )

    def _rewire(self, tree: RRTStarTree, new_index: int,
                grid: OccupancyGrid, checker: CollisionChecker):
        """Re-parent nearby nodes through the new node when that lowers their cost."""
        new_node = tree.nodes[new_index]

        for index in tree.near(new_node.position, self.rewire_radius):
            if index == new_index or index == new_node.parent:
                continue

            nearby = tree.nodes[index]
            potential_cost = new_node.cost + grid.step_cost(new_node.position, nearby.position)

            if potential_cost < nearby.cost and checker.is_segment_free(new_node.position, nearby.position):
                tree.reparent(index, new_index, potential_cost)
                self.planning_stats['rewires'] += 1

    def _interpolate(self, waypoints: List[Coordinate]) -> List[Coordinate]:
        """Expand waypoint segments into the 8-adjacent cells they were checked against."""
        if len(waypoints) < 2:
            return list(waypoints)

        cells = [waypoints[0]]
        for a, b in zip(waypoints, waypoints[1:]):
            cells.extend(rasterize_line(a, b)[1:])

        return cells

    def _update_statistics(self, result: PlanningResult):
        self.planning_stats['total_plans'] += 1

        if result.success:
            self.planning_stats['successful_plans'] += 1

        n = self.planning_stats['total_plans']
        self.planning_stats['average_planning_time'] = (
            (n - 1) * self.planning_stats['average_planning_time'] + result.planning_time
        ) / n
        self.planning_stats['average_tree_size'] = (
            (n - 1) * self.planning_stats['average_tree_size'] + result.nodes_expanded
        ) / n

    def get_statistics(self) -> Dict[str, Any]:
        stats = self.planning_stats.copy()

        if stats['total_plans'] > 0:
            stats['success_rate'] = stats['successful_plans'] / stats['total_plans']
        else:
            stats['success_rate'] = 0.0

        return stats
