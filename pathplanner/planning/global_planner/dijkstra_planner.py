"""
Dijkstra Planner
Uniform-cost search: queue priority is the accumulated cost g alone.
"""

import logging
from typing import Any, Dict

from pathplanner.planning.global_planner.grid_search import GridSearchPlanner


class DijkstraPlanner(GridSearchPlanner):
    """Uniform-cost shortest path on a 4- or 8-connected grid."""

    algorithm_name = "dijkstra"

    def __init__(self, config: Dict[str, Any]):
        super().__init__(config)
        self.logger = logging.getLogger(__name__)

        self.logger.debug(f"Dijkstra planner initialized: diagonal={self.diagonal}")
