"""
A* Planner
Heuristic-guided shortest path; identical expansion to Dijkstra with priority f = g + h.
"""

import logging
from typing import Any, Dict

from pathplanner.planning.global_planner.grid_search import GridSearchPlanner
from pathplanner.planning.global_planner.heuristics import GridHeuristics
from pathplanner.planning.global_planner.occupancy_grid import Coordinate


class AStarPlanner(GridSearchPlanner):
    """
    A* planner over an occupancy grid.
    Manhattan heuristic under 4-connectivity and Euclidean under 8-connectivity by default.
    """

    algorithm_name = "astar"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)

        heuristic_config = dict(config.get('heuristics', {}))
        heuristic_config.setdefault('heuristic_type', config.get('heuristic', 'auto'))
        heuristic_config['diagonal_connectivity'] = self.diagonal

        self.heuristics = GridHeuristics(heuristic_config)

        self.logger.debug(
            f"A* planner initialized: diagonal={self.diagonal}, "
            f"heuristic={self.heuristics.heuristic_type}"
        )

    def _heuristic_cost(self, coord: Coordinate, goal: Coordinate) -> float:
        return self.heuristics.compute_heuristic(coord, goal)

    def get_statistics(self) -> Dict[str, Any]:
        stats = super().get_statistics()
        stats['heuristic'] = self.heuristics.heuristic_type
        return stats
