"""
Best-first grid search shared by the Dijkstra and A* planners.
Priority = g + h; Dijkstra is the h = 0 case.
"""

import time
import logging
from typing import Any, Dict, List, Optional
from dataclasses import dataclass

from pathplanner.planning.global_planner.occupancy_grid import Coordinate, OccupancyGrid
from pathplanner.planning.global_planner.priority_queue import PriorityQueue
from pathplanner.planning.planning_result import PlanningResult


@dataclass
class SearchNode:
    """Best-known record for one cell during a single search."""
    g_cost: float                        # Cost from start
    f_cost: float                        # Queue priority g + h
    parent: Optional[Coordinate] = None  # Predecessor cell


class GridSearchPlanner:
    """
    Lazy-deletion best-first search over an occupancy grid.
    Subclasses choose the heuristic term.
    """

    algorithm_name = "grid_search"

    def __init__(self, config: Dict[str, Any]):
        self.config = config
        self.logger = logging.getLogger(__name__)

        self.diagonal = bool(config.get('diagonal_connectivity', False))

        # Statistics
        self.planning_statistics = {
            'total_plans': 0,
            'successful_plans': 0,
            'average_planning_time': 0.0,
            'average_nodes_expanded': 0.0,
            'average_path_length': 0.0,
            'stale_entries_discarded': 0
        }

    def _heuristic_cost(self, coord: Coordinate, goal: Coordinate) -> float:
        return 0.0

    def plan_path(self, grid: OccupancyGrid, start: Coordinate, goal: Coordinate) -> PlanningResult:
        """
        Plan a path on the grid.

        Args:
            grid: Occupancy grid, left untouched during the run
            start: Start cell
            goal: Goal cell

        Returns:
            Planning result with visited order and path
        """
        start = grid.validate_endpoint(start, "start")
        goal = grid.validate_endpoint(goal, "goal")

        planning_start = time.perf_counter()
        self.logger.debug(f"{self.algorithm_name} planning: {start} -> {goal}")

        result = self._search(grid, start, goal)
        result.planning_time = time.perf_counter() - planning_start

        self._update_statistics(result)

        if result.success:
            self.logger.info(
                f"{self.algorithm_name}: path of {len(result.path)} cells, "
                f"cost {result.total_cost:.2f}, {result.nodes_expanded} expanded "
                f"in {result.planning_time * 1000:.1f}ms"
            )
        else:
            self.logger.warning(
                f"{self.algorithm_name}: goal {goal} unreachable from {start} "
                f"after {result.nodes_expanded} expansions"
            )

        return result

    def _search(self, grid: OccupancyGrid, start: Coordinate, goal: Coordinate) -> PlanningResult:
        open_set: PriorityQueue[Coordinate] = PriorityQueue()
        nodes: Dict[Coordinate, SearchNode] = {}
        closed_set = set()
        visited: List[Coordinate] = []
        stale_entries = 0

        start_priority = self._heuristic_cost(start, goal)
        nodes[start] = SearchNode(g_cost=0.0, f_cost=start_priority)
        open_set.push(start_priority, start)

        while True:
            entry = open_set.pop()
            if entry is None:
                break

            priority, current = entry
            current_node = nodes[current]

            # Superseded by a cheaper push, or already finalized
            if priority != current_node.f_cost or current in closed_set:
                stale_entries += 1
                continue

            closed_set.add(current)
            visited.append(current)

            if current == goal:
                self.planning_statistics['stale_entries_discarded'] += stale_entries
                return PlanningResult(
                    visited=visited,
                    path=self._reconstruct_path(nodes, goal),
                    algorithm=self.algorithm_name,
                    success=True,
                    total_cost=current_node.g_cost,
                    nodes_expanded=len(visited)
                )

            for neighbor in grid.neighbors(current, self.diagonal):
                if neighbor in closed_set or grid.is_occupied(neighbor):
                    continue

                tentative_g_cost = current_node.g_cost + grid.step_cost(current, neighbor)
                neighbor_node = nodes.get(neighbor)

                if neighbor_node is None or tentative_g_cost < neighbor_node.g_cost:
                    f_cost = tentative_g_cost + self._heuristic_cost(neighbor, goal)
                    nodes[neighbor] = SearchNode(
                        g_cost=tentative_g_cost, f_cost=f_cost, parent=current
                    )
                    open_set.push(f_cost, neighbor)

        self.planning_statistics['stale_entries_discarded'] += stale_entries

        return PlanningResult(
            visited=visited,
            path=[],
            algorithm=self.algorithm_name,
            success=False,
            nodes_expanded=len(visited)
        )

    def _reconstruct_path(self, nodes: Dict[Coordinate, SearchNode], goal: Coordinate) -> List[Coordinate]:
        path = []
        current: Optional[Coordinate] = goal

        while current is not None:
            path.append(current)
            current = nodes[current].parent

        path.reverse()
        return path

    def _update_statistics(self, result: PlanningResult):
        """Update planning statistics."""
        self.planning_statistics['total_plans'] += 1

        if result.success:
            self.planning_statistics['successful_plans'] += 1

            # Running averages
            n = self.planning_statistics['successful_plans']

            self.planning_statistics['average_planning_time'] = (
                (n - 1) * self.planning_statistics['average_planning_time'] + result.planning_time
            ) / n

            self.planning_statistics['average_nodes_expanded'] = (
                (n - 1) * self.planning_statistics['average_nodes_expanded'] + result.nodes_expanded
            ) / n

            self.planning_statistics['average_path_length'] = (
                (n - 1) * self.planning_statistics['average_path_length'] + len(result.path)
            ) / n

    def get_statistics(self) -> Dict[str, Any]:
        """Get planning statistics."""
        stats = self.planning_statistics.copy()

        if stats['total_plans'] > 0:
            stats['success_rate'] = stats['successful_plans'] / stats['total_plans']
        else:
            stats['success_rate'] = 0.0

        return stats
