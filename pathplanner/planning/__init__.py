"""
Planning engine.
Grid model, Dijkstra/A* search and RRT* behind a single plan() entry point.
"""

from pathplanner.planning.exceptions import (
    InvalidInputError,
    PlanningError,
    SceneFormatError,
    UnknownAlgorithmError,
)
from pathplanner.planning.planning_result import PlanningResult
from pathplanner.planning.global_planner import (
    AStarPlanner,
    Cell,
    Coordinate,
    DijkstraPlanner,
    GridHeuristics,
    OccupancyGrid,
    PriorityQueue,
)
from pathplanner.planning.sampling_planner import CollisionChecker, RRTStarPlanner
from pathplanner.planning.integration import Algorithm, PlannerManager, PlanningOptions, plan

__all__ = [
    'PlanningError',
    'InvalidInputError',
    'UnknownAlgorithmError',
    'SceneFormatError',
    'PlanningResult',
    'Cell',
    'Coordinate',
    'OccupancyGrid',
    'PriorityQueue',
    'GridHeuristics',
    'DijkstraPlanner',
    'AStarPlanner',
    'CollisionChecker',
    'RRTStarPlanner',
    'Algorithm',
    'PlannerManager',
    'PlanningOptions',
    'plan',
]
